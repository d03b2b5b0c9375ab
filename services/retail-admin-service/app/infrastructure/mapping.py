"""
Translation between the Functions API wire format and domain entities.

The wire format uses lower camel case keys and is read case-insensitively.
Customers are the only kind whose remote shape differs from the internal
one: the API calls them ``name``/``surname`` and identifies them by an
opaque ``id`` instead of the row key.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar

from ..domain.entities import CaseInsensitiveModel, Customer, Order, TableEntity

EntityT = TypeVar("EntityT", bound=TableEntity)


class CustomerDto(CaseInsensitiveModel):
    """Customer as returned by the Functions API."""

    id: str = ""
    name: str = ""
    surname: str = ""
    username: str = ""
    email: str = ""
    shipping_address: str = ""


class CustomerWritePayload(CaseInsensitiveModel):
    """Body of ``POST /customers`` and ``PUT /customers/{id}``."""

    name: str
    surname: str
    username: str = ""
    email: str
    shipping_address: str


class OrderStatusUpdate(CaseInsensitiveModel):
    """Body of ``PATCH /orders/{id}/status``."""

    status: str


class UploadResult(CaseInsensitiveModel):
    """Response of the upload endpoints."""

    file_name: str = ""


def customer_from_dto(dto: CustomerDto) -> Customer:
    return Customer(
        row_key=dto.id,
        first_name=dto.name,
        last_name=dto.surname,
        email=dto.email,
        shipping_address=dto.shipping_address,
    )


def customer_to_payload(customer: Customer) -> Dict[str, Any]:
    # The API has always been sent an empty username; kept as observed.
    payload = CustomerWritePayload(
        name=customer.first_name,
        surname=customer.last_name,
        username="",
        email=customer.email,
        shipping_address=customer.shipping_address,
    )
    return payload.model_dump(by_alias=True)


def parse_customer(data: Optional[Dict[str, Any]]) -> Optional[Customer]:
    if not data:
        return None
    return customer_from_dto(CustomerDto.model_validate(data))


def parse_customers(data: Optional[List[Dict[str, Any]]]) -> List[Customer]:
    return [customer_from_dto(CustomerDto.model_validate(item)) for item in data or []]


def parse_entity(entity_type: Type[EntityT], data: Optional[Dict[str, Any]]) -> Optional[EntityT]:
    """Map a Product or Order response body; None for an empty body."""
    if not data:
        return None
    return entity_type.model_validate(data)


def parse_entities(entity_type: Type[EntityT], data: Optional[List[Dict[str, Any]]]) -> List[EntityT]:
    return [entity_type.model_validate(item) for item in data or []]


def entity_to_payload(entity: TableEntity) -> Dict[str, Any]:
    """Request body for Product and Order writes."""
    return entity.to_wire()


def status_payload(status: str) -> Dict[str, Any]:
    return OrderStatusUpdate(status=status).model_dump(by_alias=True)


def parse_status_response(order_id: str, status: str, data: Optional[Dict[str, Any]]) -> Order:
    order = parse_entity(Order, data)
    if order is None:
        return Order(row_key=order_id, status=status)
    return order
