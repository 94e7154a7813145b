from pydantic import BaseModel, Field, EmailStr
from typing import Optional, List
from datetime import date, time

from domain.enums import SojournType, QtyAccountingMethod, DiscountType


class BookingLineCreate(BaseModel):
    """Line to create along with a booking line group"""

    product_id: int = Field(..., ge=1)
    qty: Optional[int] = Field(
        None, ge=0, description="Own quantity (derived from the sojourn when omitted)"
    )
    order: Optional[int] = Field(None, ge=1)


class BookingLineGroupCreate(BaseModel):
    """Schema for creating a booking line group (sojourn)"""

    booking_id: int = Field(..., ge=1)
    name: str = ""
    has_pack: bool = False
    pack_id: Optional[int] = None
    is_locked: bool = False
    date_from: date
    date_to: date
    time_from: Optional[time] = None
    time_to: Optional[time] = None
    sojourn_type: SojournType = SojournType.GG
    nb_pers: int = Field(default=1, ge=1)
    rate_class_id: Optional[int] = Field(
        None, description="Defaults to the rate class of the booking customer"
    )
    booking_lines: List[BookingLineCreate] = Field(default_factory=list)


class BookingLineGroupUpdate(BaseModel):
    """Schema for updating a booking line group; only sent fields are written"""

    name: Optional[str] = None
    has_pack: Optional[bool] = None
    pack_id: Optional[int] = None
    is_locked: Optional[bool] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    time_from: Optional[time] = None
    time_to: Optional[time] = None
    sojourn_type: Optional[SojournType] = None
    nb_pers: Optional[int] = Field(None, ge=1)
    rate_class_id: Optional[int] = None

    model_config = {"extra": "forbid"}


class BookingLineResponse(BaseModel):
    id: int
    product_id: int
    order: int
    qty: int
    has_own_qty: bool
    qty_accounting_method: QtyAccountingMethod
    price_id: Optional[int] = None
    unit_price: float
    vat_rate: float
    total: Optional[float] = None
    price: Optional[float] = None

    model_config = {"from_attributes": True}


class PriceAdapterResponse(BaseModel):
    id: int
    booking_line_id: Optional[int] = None
    discount_id: Optional[int] = None
    discount_list_id: Optional[int] = None
    is_manual_discount: bool
    type: DiscountType
    value: float

    model_config = {"from_attributes": True}


class BookingLineGroupResponse(BaseModel):
    """Schema for booking line group response"""

    id: int
    booking_id: int
    name: Optional[str] = None
    has_pack: bool
    pack_id: Optional[int] = None
    is_locked: bool
    date_from: date
    date_to: date
    time_from: time
    time_to: time
    sojourn_type: SojournType
    nb_pers: int
    nb_nights: Optional[int] = None
    rate_class_id: int
    price_id: Optional[int] = None
    unit_price: float
    vat_rate: float
    total: Optional[float] = None
    price: Optional[float] = None
    booking_lines: List[BookingLineResponse] = []
    price_adapters: List[PriceAdapterResponse] = []

    model_config = {"from_attributes": True}


class CompositionHostData(BaseModel):
    """Details of a host, used to fill in a composition item"""

    firstname: Optional[str] = None
    lastname: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    country: Optional[str] = None

    model_config = {"extra": "ignore"}


class CompositionGenerateRequest(BaseModel):
    booking_id: int = Field(..., ge=1)
    data: Optional[List[CompositionHostData]] = None


class RentalUnitResponse(BaseModel):
    id: int
    name: str
    capacity: int
    order: int
    is_accomodation: bool
