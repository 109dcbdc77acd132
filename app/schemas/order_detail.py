from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict, field_validator

# Columna INTEGER (int32 en PostgreSQL)
MAX_QUANTITY = 2_147_483_647


class OrderDetailCreate(BaseModel):
    product_name: str = Field(..., max_length=255)
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY)
    price: Decimal = Field(..., gt=0, max_digits=18, decimal_places=2)

    @field_validator("product_name")
    @classmethod
    def product_name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Product name is required")
        return v

    @field_validator("price")
    @classmethod
    def price_scale(cls, v: Decimal) -> Decimal:
        # decimal_places ignora ceros finales: "1.000" también se rechaza
        if v.as_tuple().exponent < -2:
            raise ValueError("Price must have at most 2 decimal places")
        return v


class OrderDetailResponse(BaseModel):
    id: int
    order_id: int
    product_name: str
    quantity: int
    price: Decimal

    model_config = ConfigDict(from_attributes=True)
