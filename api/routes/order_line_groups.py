"""Order line group routes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from api.responses import error_responses
from domain.models import get_db_session
from domain.schemas.order_schemas import OrderLinesUpdate, OrderLineGroupResponse
from services.order_service import OrderService

router = APIRouter(prefix="/order-line-groups", tags=["Orders"])
logger = logging.getLogger("lodging.api.order_line_groups")


@router.get("/{group_id}", response_model=OrderLineGroupResponse, responses=error_responses(404))
def get_order_line_group(group_id: int, db: Session = Depends(get_db_session)):
    """Return an order line group, recomputing the totals that were reset"""
    return OrderService.get_group(db, group_id)


@router.put("/{group_id}/lines", response_model=OrderLineGroupResponse, responses=error_responses(404))
def set_order_lines(group_id: int, payload: OrderLinesUpdate, db: Session = Depends(get_db_session)):
    """Replace the lines of an order line group"""
    OrderService.set_lines(db, group_id, payload.order_lines)
    return OrderService.get_group(db, group_id)


@router.delete("/{group_id}", responses=error_responses(404))
def delete_order_line_group(group_id: int, db: Session = Depends(get_db_session)):
    OrderService.delete_group(db, group_id)
    return {"status": "ok", "deleted": group_id}
