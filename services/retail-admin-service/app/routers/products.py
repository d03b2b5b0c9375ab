"""
Product CRUD endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..dependencies import get_actor, get_resilient_client
from ..domain.entities import Product
from ..services.resilient_client import ResilientClient

router = APIRouter(prefix="/api/v1/products", tags=["products"])


@router.get("", response_model=List[Product])
async def list_products(client: ResilientClient = Depends(get_resilient_client)):
    return await client.list_products()


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: str,
    client: ResilientClient = Depends(get_resilient_client),
):
    product = await client.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")
    return product


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(
    product: Product,
    client: ResilientClient = Depends(get_resilient_client),
    actor: Optional[str] = Depends(get_actor),
):
    return await client.create_product(product, actor=actor)


@router.put("/{product_id}", response_model=Product)
async def update_product(
    product_id: str,
    product: Product,
    client: ResilientClient = Depends(get_resilient_client),
    actor: Optional[str] = Depends(get_actor),
):
    product = product.model_copy(update={"row_key": product_id})
    return await client.update_product(product, actor=actor)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: str,
    client: ResilientClient = Depends(get_resilient_client),
    actor: Optional[str] = Depends(get_actor),
):
    await client.delete_product(product_id, actor=actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
