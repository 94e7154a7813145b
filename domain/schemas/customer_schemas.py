from pydantic import BaseModel, Field
from typing import Optional


class CustomerCreate(BaseModel):
    """Schema for creating a customer"""

    name: str = Field(..., min_length=1)
    customer_nature_id: Optional[int] = None
    customer_type_id: Optional[int] = None
    partner_identity_id: Optional[int] = None
    address_street: Optional[str] = None
    address_city: Optional[str] = None
    ref_account: Optional[str] = None
    customer_external_ref: Optional[str] = None
    flag_latepayer: bool = False
    flag_damage: bool = False
    flag_nuisance: bool = False


class CustomerUpdate(BaseModel):
    """Schema for updating a customer (rate class follows the nature and cannot be set)"""

    name: Optional[str] = Field(None, min_length=1)
    customer_nature_id: Optional[int] = None
    customer_type_id: Optional[int] = None
    address_street: Optional[str] = None
    address_city: Optional[str] = None
    customer_external_ref: Optional[str] = None
    flag_latepayer: Optional[bool] = None
    flag_damage: Optional[bool] = None
    flag_nuisance: Optional[bool] = None

    model_config = {"extra": "forbid"}


class CustomerOnchangeRequest(BaseModel):
    """Values changed in a customer form"""

    type_id: Optional[int] = None

    model_config = {"extra": "allow"}


class CustomerResponse(BaseModel):
    id: int
    name: str
    rate_class_id: Optional[int] = None
    customer_nature_id: Optional[int] = None
    customer_type_id: Optional[int] = None
    relationship: str
    partner_identity_id: Optional[int] = None
    address_street: Optional[str] = None
    address_city: Optional[str] = None
    address: str
    ref_account: Optional[str] = None
    customer_external_ref: Optional[str] = None
    flag_latepayer: bool
    flag_damage: bool
    flag_nuisance: bool
    count_booking_24: int = 0
