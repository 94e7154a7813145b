"""
Order line groups and their stored computed totals.

Totals of lines, groups and orders are stored. Anything that changes a price
resets the impacted totals to None; they are computed again the next time
they are read.
"""

from typing import List
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from domain.models import Order, OrderLine, OrderLineGroup
from domain.schemas.order_schemas import OrderLineCreate
from repositories import OrderLineGroupRepository
from app.exceptions import NotFoundError

logger = logging.getLogger("lodging.orders")


class OrderService:
    @staticmethod
    def _get(db: Session, group_id: int) -> OrderLineGroup:
        group = OrderLineGroupRepository(db).get_with_lines(group_id)
        if not group:
            raise NotFoundError(f"Order line group not found: {group_id}", code="unknown_order_line_group")
        return group

    @staticmethod
    def compute_line(line: OrderLine):
        """Totals of a line: free units are not charged, the discount rate applies on the rest"""
        if line.total is None:
            line.total = round(line.unit_price * (line.qty - line.free_qty) * (1.0 - line.discount), 4)
        if line.price is None:
            line.price = round(line.total * (1.0 + line.vat_rate), 2)
        if line.fare_benefit is None:
            full_price = line.unit_price * line.qty * (1.0 + line.vat_rate)
            line.fare_benefit = round(full_price - line.price, 2)

    @staticmethod
    def reset_order(order: Order):
        if order is not None:
            order.total = None
            order.price = None

    @staticmethod
    def compute_group(group: OrderLineGroup):
        """Compute the reset totals of a group; computing its total resets the parent order totals"""
        for line in group.order_lines:
            OrderService.compute_line(line)
        if group.total is None:
            group.total = round(sum(line.total for line in group.order_lines), 4)
            OrderService.reset_order(group.order_rel)
        if group.price is None:
            group.price = round(sum(line.price for line in group.order_lines), 2)
        if group.fare_benefit is None:
            group.fare_benefit = round(sum(line.fare_benefit for line in group.order_lines), 2)

    @staticmethod
    def reset_prices(group: OrderLineGroup):
        """Reset the totals of a group, of its order and (unless extra) of its lines"""
        group.total = None
        group.price = None
        group.fare_benefit = None
        OrderService.reset_order(group.order_rel)
        if not group.is_extra:
            for line in group.order_lines:
                line.total = None
                line.price = None
                line.fare_benefit = None

    @staticmethod
    def get_group(db: Session, group_id: int) -> OrderLineGroup:
        """Get a group, computing the totals that were reset"""
        group = OrderService._get(db, group_id)
        if None in (group.total, group.price, group.fare_benefit) or any(
            line.total is None or line.price is None for line in group.order_lines
        ):
            OrderService.compute_group(group)
            db.commit()
            db.refresh(group)
        return group

    @staticmethod
    def set_lines(db: Session, group_id: int, lines: List[OrderLineCreate]) -> OrderLineGroup:
        """Replace the lines of a group"""
        group = OrderService._get(db, group_id)
        try:
            group.order_lines = [OrderLine(**line.model_dump()) for line in lines]
            db.flush()
            OrderService.reset_prices(group)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        db.refresh(group)
        logger.info("Replaced lines of order line group %s (%d lines)", group.id, len(lines))
        return group

    @staticmethod
    def delete_group(db: Session, group_id: int):
        """Delete a group, resetting the totals of its order"""
        group = OrderService._get(db, group_id)
        try:
            OrderService.reset_order(group.order_rel)
            db.delete(group)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        logger.info("Deleted order line group %s", group_id)
