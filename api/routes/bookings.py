"""Booking routes: invoice sending and rental unit lookup"""

import json
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import require_group
from api.responses import error_responses
from app.exceptions import ServiceValidationError
from domain.models import User, get_db_session
from domain.schemas.booking_schemas import RentalUnitResponse
from domain.schemas.invoice_schemas import SendInvoiceRequest
from services.invoice_mail_service import InvoiceMailService
from services.rental_unit_service import RentalUnitService

BOOKING_USERS = "booking.default.user"

router = APIRouter(prefix="/bookings", tags=["Bookings"])
logger = logging.getLogger("lodging.api.bookings")


@router.post(
    "/send-invoice",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=error_responses(401, 403, 404, 503),
)
def send_invoice(
    payload: SendInvoiceRequest,
    db: Session = Depends(get_db_session),
    user: User = Depends(require_group(BOOKING_USERS)),
):
    """Send an invoice by e-mail"""
    InvoiceMailService.send_invoice(db, payload)
    logger.info("User %s sent invoice %s", user.id, payload.invoice_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/rentalunits",
    response_model=List[RentalUnitResponse],
    responses=error_responses(400, 401, 403),
)
def get_rental_units(
    booking_line_group_id: int = Query(..., description="Sojourn the rental units are for"),
    product_model_id: int = Query(..., description="Product model the rental units must match"),
    domain: Optional[str] = Query(None, description="JSON-encoded domain filtering the results"),
    db: Session = Depends(get_db_session),
    user: User = Depends(require_group(BOOKING_USERS)),
):
    """Rental units that can still be assigned to a sojourn for a product model"""
    parsed = []
    if domain:
        try:
            parsed = json.loads(domain)
        except json.JSONDecodeError:
            raise ServiceValidationError("Invalid domain", code="invalid_param")
    return RentalUnitService.search(db, booking_line_group_id, product_model_id, parsed)
