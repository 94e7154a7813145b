"""Customer routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from api.responses import error_responses
from domain.mappers import CustomerMapper
from domain.models import get_db_session
from domain.schemas.customer_schemas import (
    CustomerCreate,
    CustomerUpdate,
    CustomerOnchangeRequest,
    CustomerResponse,
)
from services.customer_service import CustomerService

router = APIRouter(prefix="/customers", tags=["Customers"])
logger = logging.getLogger("lodging.api.customers")


@router.post(
    "", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED, responses=error_responses(404)
)
def create_customer(payload: CustomerCreate, db: Session = Depends(get_db_session)):
    customer = CustomerService.create_customer(db, payload)
    return CustomerMapper.to_response(customer, CustomerService.count_booking_24(db, customer))


@router.post("/onchange")
def customer_onchange(payload: CustomerOnchangeRequest, db: Session = Depends(get_db_session)):
    """Preview the fields impacted by a change in a customer form"""
    return CustomerService.onchange(db, payload.model_dump())


@router.get("/{customer_id}", response_model=CustomerResponse, responses=error_responses(404))
def get_customer(customer_id: int, db: Session = Depends(get_db_session)):
    customer = CustomerService.get_customer(db, customer_id)
    return CustomerMapper.to_response(customer, CustomerService.count_booking_24(db, customer))


@router.patch("/{customer_id}", response_model=CustomerResponse, responses=error_responses(404))
def update_customer(customer_id: int, payload: CustomerUpdate, db: Session = Depends(get_db_session)):
    customer = CustomerService.update_customer(db, customer_id, payload.model_dump(exclude_unset=True))
    return CustomerMapper.to_response(customer, CustomerService.count_booking_24(db, customer))
