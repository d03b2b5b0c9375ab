"""
Domain entities for the retail admin service.

Customers, products and orders live in a table store addressed by
(partition key, row key). Every kind has a fixed partition key; the row key
is assigned once at creation and never changes.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, ClassVar, Dict, Tuple

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel, to_pascal


class EntityKind(str, Enum):
    """Entity kinds and their fixed partition keys."""

    CUSTOMER = "Customer"
    PRODUCT = "Product"
    ORDER = "Order"


ORDER_STATUSES: Tuple[str, ...] = ("Submitted", "Processing", "Cancel", "Delivered")


def _to_decimal(value: Any) -> Any:
    if isinstance(value, float):
        return Decimal(str(value))
    return value


# Exact decimal amount, written to JSON as a number.
Money = Annotated[
    Decimal,
    BeforeValidator(_to_decimal),
    PlainSerializer(float, return_type=float, when_used="json"),
]


def _fold(key: str) -> str:
    return key.replace("_", "").lower()


class CaseInsensitiveModel(BaseModel):
    """
    Base model that accepts input keys in any casing.

    ``rowKey``, ``RowKey`` and ``row_key`` all populate ``row_key``. A null
    value is treated as missing, so the field default applies. Output uses
    lower camel case when dumped with ``by_alias=True``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _match_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        lookup = {_fold(name): name for name in cls.model_fields}
        matched: Dict[str, Any] = {}
        for key, value in data.items():
            name = lookup.get(_fold(key)) if isinstance(key, str) else None
            if name is not None and value is not None:
                matched[name] = value
        return matched


class TableEntity(CaseInsensitiveModel):
    """
    An entity addressable by partition key and row key.

    Subclasses set ``KIND``; the partition key is always forced to it.
    """

    KIND: ClassVar[EntityKind]

    partition_key: str = Field(default="", validate_default=True)
    row_key: str = Field(default="", frozen=True)

    @field_validator("partition_key", mode="before")
    @classmethod
    def _fixed_partition(cls, value: Any) -> str:
        return cls.KIND.value

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready dict with lower camel case keys."""
        return self.model_dump(mode="json", by_alias=True)

    def to_record(self) -> Dict[str, Any]:
        """JSON-ready dict with table-storage (PascalCase) property names."""
        return {to_pascal(key): value for key, value in self.model_dump(mode="json").items()}


class Customer(TableEntity):
    """A retail customer."""

    KIND: ClassVar[EntityKind] = EntityKind.CUSTOMER

    first_name: str = ""
    last_name: str = ""
    username: str = ""
    email: str = ""
    shipping_address: str = ""


class Product(TableEntity):
    """A product in the catalogue."""

    KIND: ClassVar[EntityKind] = EntityKind.PRODUCT

    product_name: str = ""
    description: str = ""
    price: Money = Decimal("0")
    stock_quantity: int = 0
    image_url: str = ""


def _utc_today() -> datetime:
    now = datetime.now(timezone.utc)
    return datetime(now.year, now.month, now.day, tzinfo=timezone.utc)


class Order(TableEntity):
    """
    A customer order.

    ``customer_id`` and ``product_id`` are soft references. ``total_price``
    is computed by the caller as ``unit_price * quantity``.
    """

    KIND: ClassVar[EntityKind] = EntityKind.ORDER

    customer_id: str = ""
    username: str = ""
    product_id: str = ""
    order_date: datetime = Field(default_factory=_utc_today)
    quantity: int = 0
    unit_price: Money = Decimal("0")
    total_price: Money = Decimal("0")
    status: str = "Submitted"

    @field_validator("order_date")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def order_id(self) -> str:
        return self.row_key

