"""
Order CRUD endpoints.

Prices are resolved here, not in the access layer: the unit price comes
from the referenced product and the total is ``unit_price * quantity``.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..dependencies import get_actor, get_resilient_client
from ..domain.entities import Order
from ..services.fallback import new_row_key
from ..services.resilient_client import ResilientClient
from .schemas import StatusUpdateRequest

router = APIRouter(prefix="/api/v1/orders", tags=["orders"])


async def _priced(order: Order, client: ResilientClient) -> Order:
    product = await client.get_product(order.product_id)
    if product is None:
        raise HTTPException(status_code=422, detail="Selected product not found.")
    if product.price <= 0:
        raise HTTPException(status_code=422, detail="Selected product has an invalid price.")
    return order.model_copy(
        update={
            "unit_price": product.price,
            "total_price": product.price * order.quantity,
        }
    )


@router.get("", response_model=List[Order])
async def list_orders(
    search: Optional[str] = None,
    client: ResilientClient = Depends(get_resilient_client),
):
    """List orders, optionally filtered by customer, product or status substring."""
    orders = await client.list_orders()
    if search:
        needle = search.lower()
        orders = [
            o
            for o in orders
            if needle in o.customer_id.lower()
            or needle in o.product_id.lower()
            or needle in o.status.lower()
        ]
    return orders


@router.get("/{order_id}", response_model=Order)
async def get_order(
    order_id: str,
    client: ResilientClient = Depends(get_resilient_client),
):
    order = await client.get_order(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")
    return order


@router.post("", response_model=Order, status_code=status.HTTP_201_CREATED)
async def create_order(
    order: Order,
    client: ResilientClient = Depends(get_resilient_client),
    actor: Optional[str] = Depends(get_actor),
):
    order = await _priced(order, client)
    if not order.row_key:
        order = order.model_copy(update={"row_key": new_row_key()})
    return await client.create_order(order, actor=actor)


@router.put("/{order_id}", response_model=Order)
async def update_order(
    order_id: str,
    order: Order,
    client: ResilientClient = Depends(get_resilient_client),
    actor: Optional[str] = Depends(get_actor),
):
    order = await _priced(order.model_copy(update={"row_key": order_id}), client)
    return await client.update_order(order, actor=actor)


@router.patch("/{order_id}/status", response_model=Order)
async def update_order_status(
    order_id: str,
    body: StatusUpdateRequest,
    client: ResilientClient = Depends(get_resilient_client),
    actor: Optional[str] = Depends(get_actor),
):
    return await client.update_order_status(order_id, body.status, actor=actor)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(
    order_id: str,
    client: ResilientClient = Depends(get_resilient_client),
    actor: Optional[str] = Depends(get_actor),
):
    await client.delete_order(order_id, actor=actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
