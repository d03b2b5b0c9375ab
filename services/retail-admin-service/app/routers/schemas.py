"""Request and response models shared by the routers."""

from typing import Dict

from pydantic import BaseModel

from ..domain.entities import CaseInsensitiveModel


class StatusUpdateRequest(CaseInsensitiveModel):
    """Body of ``PATCH /orders/{id}/status``."""

    status: str


class UploadResponse(CaseInsensitiveModel):
    """Stored file name reported by the Functions API."""

    file_name: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    service: str = "retail-admin-service"
    version: str = "1.0.0"


class ReadinessResponse(BaseModel):
    ready: bool
    checks: Dict[str, str]
    timestamp: str

