from pydantic import BaseModel, Field
from typing import Optional, List


class OrderLineCreate(BaseModel):
    """Schema for an order line"""

    name: str = ""
    qty: int = Field(default=1, ge=0)
    free_qty: int = Field(default=0, ge=0)
    unit_price: float = Field(default=0.0, ge=0)
    vat_rate: float = Field(default=0.0, ge=0, le=1)
    discount: float = Field(default=0.0, ge=0, le=1, description="Discount rate")


class OrderLinesUpdate(BaseModel):
    order_lines: List[OrderLineCreate]


class OrderLineResponse(BaseModel):
    id: int
    name: str
    qty: int
    free_qty: int
    unit_price: float
    vat_rate: float
    discount: float
    total: Optional[float] = None
    price: Optional[float] = None
    fare_benefit: Optional[float] = None

    model_config = {"from_attributes": True}


class OrderLineGroupResponse(BaseModel):
    """Order line group with its stored totals"""

    id: int
    name: str
    order: int
    is_extra: bool
    order_id: int
    total: Optional[float] = None
    price: Optional[float] = None
    fare_benefit: Optional[float] = None
    order_lines: List[OrderLineResponse] = []

    model_config = {"from_attributes": True}
