"""Composition (hosts listing) routes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from api.responses import error_responses
from domain.models import get_db_session
from domain.schemas.booking_schemas import CompositionGenerateRequest
from services.composition_service import CompositionService

router = APIRouter(prefix="/compositions", tags=["Compositions"])
logger = logging.getLogger("lodging.api.compositions")


@router.post("/generate", responses=error_responses(400))
def generate_composition(payload: CompositionGenerateRequest, db: Session = Depends(get_db_session)):
    """Generate the composition of a booking from its sojourns"""
    data = [host.model_dump(exclude_none=True) for host in payload.data or []]
    CompositionService.generate(db, payload.booking_id, data)
    return []
