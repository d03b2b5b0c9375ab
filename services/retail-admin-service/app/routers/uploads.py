"""
File upload endpoints, proxied to the Functions API.

Uploads have no storage fallback: if the API cannot be reached the request
fails.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from ..dependencies import get_actor, get_resilient_client
from ..services.resilient_client import ResilientClient
from .schemas import UploadResponse

router = APIRouter(prefix="/api/v1/uploads", tags=["uploads"])


async def _read(file: UploadFile) -> bytes:
    content = await file.read()
    if not content:
        raise HTTPException(status_code=422, detail="Please select a file to upload")
    return content


@router.post("", response_model=UploadResponse)
async def upload_file(
    file: UploadFile = File(...),
    container_name: str = Form(..., alias="containerName"),
    client: ResilientClient = Depends(get_resilient_client),
    actor: Optional[str] = Depends(get_actor),
):
    content = await _read(file)
    file_name = await client.upload_file(
        file.filename or "upload",
        content,
        container_name,
        file.content_type or "application/octet-stream",
        actor=actor,
    )
    return UploadResponse(file_name=file_name)


@router.post("/fileshare", response_model=UploadResponse)
async def upload_to_file_share(
    file: UploadFile = File(...),
    share_name: str = Form(..., alias="shareName"),
    directory_name: str = Form("", alias="directoryName"),
    client: ResilientClient = Depends(get_resilient_client),
    actor: Optional[str] = Depends(get_actor),
):
    content = await _read(file)
    file_name = await client.upload_to_file_share(
        file.filename or "upload",
        content,
        share_name,
        directory_name,
        file.content_type or "application/octet-stream",
        actor=actor,
    )
    return UploadResponse(file_name=file_name)
