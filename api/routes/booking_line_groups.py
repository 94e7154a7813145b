"""Booking line group (sojourn) routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from api.responses import error_responses
from domain.mappers import BookingGroupMapper
from domain.models import get_db_session
from domain.schemas.booking_schemas import (
    BookingLineGroupCreate,
    BookingLineGroupUpdate,
    BookingLineGroupResponse,
)
from services.booking_group_service import BookingGroupService

router = APIRouter(prefix="/booking-line-groups", tags=["Booking line groups"])
logger = logging.getLogger("lodging.api.booking_line_groups")


@router.post(
    "",
    response_model=BookingLineGroupResponse,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(400, 404),
)
def create_booking_line_group(payload: BookingLineGroupCreate, db: Session = Depends(get_db_session)):
    """Create a sojourn, with its lines, prices and price adapters"""
    group = BookingGroupService.create_group(db, payload)
    return BookingGroupMapper.to_response(group)


@router.get("/{group_id}", response_model=BookingLineGroupResponse, responses=error_responses(404))
def get_booking_line_group(group_id: int, db: Session = Depends(get_db_session)):
    group = BookingGroupService.get_group(db, group_id)
    return BookingGroupMapper.to_response(group)


@router.patch("/{group_id}", response_model=BookingLineGroupResponse, responses=error_responses(400, 404))
def update_booking_line_group(
    group_id: int, payload: BookingLineGroupUpdate, db: Session = Depends(get_db_session)
):
    """Update a sojourn; every changed field triggers its cascade"""
    group = BookingGroupService.update_group(db, group_id, payload.model_dump(exclude_unset=True))
    return BookingGroupMapper.to_response(group)
