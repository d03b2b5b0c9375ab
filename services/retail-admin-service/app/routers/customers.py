"""
Customer CRUD endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..dependencies import get_actor, get_resilient_client
from ..domain.entities import Customer
from ..services.resilient_client import ResilientClient

router = APIRouter(prefix="/api/v1/customers", tags=["customers"])


@router.get("", response_model=List[Customer])
async def list_customers(
    search: Optional[str] = None,
    client: ResilientClient = Depends(get_resilient_client),
):
    """List customers, optionally filtered by name or email substring."""
    customers = await client.list_customers()
    if search:
        needle = search.lower()
        customers = [
            c
            for c in customers
            if needle in c.first_name.lower()
            or needle in c.last_name.lower()
            or needle in c.email.lower()
        ]
    return customers


@router.get("/{customer_id}", response_model=Customer)
async def get_customer(
    customer_id: str,
    client: ResilientClient = Depends(get_resilient_client),
):
    customer = await client.get_customer(customer_id)
    if customer is None:
        raise HTTPException(status_code=404, detail=f"Customer {customer_id} not found")
    return customer


@router.post("", response_model=Customer, status_code=status.HTTP_201_CREATED)
async def create_customer(
    customer: Customer,
    client: ResilientClient = Depends(get_resilient_client),
    actor: Optional[str] = Depends(get_actor),
):
    return await client.create_customer(customer, actor=actor)


@router.put("/{customer_id}", response_model=Customer)
async def update_customer(
    customer_id: str,
    customer: Customer,
    client: ResilientClient = Depends(get_resilient_client),
    actor: Optional[str] = Depends(get_actor),
):
    customer = customer.model_copy(update={"row_key": customer_id})
    return await client.update_customer(customer, actor=actor)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: str,
    client: ResilientClient = Depends(get_resilient_client),
    actor: Optional[str] = Depends(get_actor),
):
    await client.delete_customer(customer_id, actor=actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
