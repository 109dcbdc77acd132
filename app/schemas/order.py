from typing import Any, List
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict, field_validator, field_serializer
from app.models.order import OrderStatus
from .order_detail import OrderDetailCreate, OrderDetailResponse


def _parse_status(v: Any) -> Any:
    """Acepta el valor entero del estado o su nombre ("Pending", "completed")."""
    if isinstance(v, str):
        if v.isdigit():
            return int(v)
        try:
            return OrderStatus[v.upper()]
        except KeyError:
            raise ValueError("Invalid order status.")
    return v


class OrderBase(BaseModel):
    customer_name: str = Field(..., max_length=255)
    status: OrderStatus = OrderStatus.PENDING

    @field_validator("customer_name")
    @classmethod
    def customer_name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Customer name is required")
        return v

    @field_validator("status", mode="before")
    @classmethod
    def status_by_name_or_value(cls, v: Any) -> Any:
        return _parse_status(v)


class OrderCreate(OrderBase):
    order_details: List[OrderDetailCreate] = Field(..., min_length=1)


class OrderUpdate(OrderBase):
    pass


class OrderResponse(BaseModel):
    id: int
    customer_name: str
    total_amount: Decimal
    status: OrderStatus
    created_at: datetime
    updated_at: datetime
    order_details: List[OrderDetailResponse] = []

    model_config = ConfigDict(from_attributes=True)

    @field_validator("status", mode="before")
    @classmethod
    def status_by_name_or_value(cls, v: Any) -> Any:
        return _parse_status(v)

    @field_serializer("status")
    def serialize_status(self, status: OrderStatus) -> str:
        return status.label


class OrderList(BaseModel):
    orders: List[OrderResponse]
    total: int
    page: int
    page_size: int
