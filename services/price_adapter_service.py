"""
Automatic price adapters (discounts) of booking line groups.

Discounts come from the discount list matching the group's rate class and
sojourn type on its arrival day. A discount applies when every one of its
conditions holds against the operands computed for the group.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime
from sqlalchemy.orm import Session
import logging
import operator

from domain.enums import DiscountType, SojournType
from domain.models import BookingLineGroup, BookingPriceAdapter, Discount
from repositories import (
    CustomerRepository,
    DiscountListRepository,
    PriceAdapterRepository,
    SeasonPeriodRepository,
)

logger = logging.getLogger("lodging.price_adapters")

CONDITION_OPERATORS = {
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
    "=": operator.eq,
}


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        return None


def years_ago(moment: datetime, years: int) -> datetime:
    try:
        return moment.replace(year=moment.year - years)
    except ValueError:
        # 29th of February
        return moment.replace(year=moment.year - years, day=28)


def condition_holds(operand: Any, op: str, value: Any) -> bool:
    """Compare an operand with a condition value, numerically when both sides are numbers"""
    compare = CONDITION_OPERATORS[op]
    left, right = _as_number(operand), _as_number(value)
    if left is not None and right is not None:
        return compare(left, right)
    return compare(str(operand), str(value))


def discount_applies(discount: Discount, operands: Dict[str, Any]) -> bool:
    for condition in discount.conditions:
        if condition.operator not in CONDITION_OPERATORS:
            logger.debug("Ignoring condition %s with unknown operator '%s'", condition.id, condition.operator)
            continue
        if operands.get(condition.operand) is None:
            return False
        if not condition_holds(operands[condition.operand], condition.operator, condition.value):
            return False
    return True


class PriceAdapterService:
    @staticmethod
    def get_operands(db: Session, group: BookingLineGroup) -> Dict[str, Any]:
        """Values the discount conditions of a group are evaluated against"""
        operands: Dict[str, Any] = {
            "duration": (group.date_to - group.date_from).days,
            "nb_pers": group.nb_pers,
        }

        booking = group.booking
        if booking.customer_id:
            since = years_ago(datetime.utcnow(), 2)
            counts = CustomerRepository(db).count_bookings_since([booking.customer_id], since)
            operands["count_booking_24"] = counts.get(booking.customer_id, 0)

        center = booking.center
        if center is not None and center.season_category_id:
            period = SeasonPeriodRepository(db).find_first(center.season_category_id, group.date_from)
            if period is not None and period.season_type is not None:
                operands["season"] = period.season_type.name

        return operands

    @staticmethod
    def get_applicable_discounts(db: Session, group: BookingLineGroup):
        """
        Discounts granted to a group, as (discount_list, [(discount_id, type, value)]).

        When the summed percent discounts do not reach the guaranteed rate of the
        list, they are replaced by a single percent discount of that rate.
        """
        category_id = 1 if group.sojourn_type == SojournType.GA else 2
        discount_list = DiscountListRepository(db).find_first(
            group.rate_class_id, category_id, group.date_from
        )
        if discount_list is None:
            logger.debug("No discount list found for group %s on %s", group.id, group.date_from)
            return None, []

        operands = PriceAdapterService.get_operands(db, group)
        to_apply = []
        rate = 0.0
        for discount in discount_list.discounts:
            if discount_applies(discount, operands):
                to_apply.append((discount.id, discount.type, discount.value))
                if discount.type == DiscountType.PERCENT:
                    rate += discount.value

        if rate < discount_list.rate_min:
            to_apply = [d for d in to_apply if d[1] != DiscountType.PERCENT]
            to_apply.append((None, DiscountType.PERCENT, discount_list.rate_min))

        return discount_list, to_apply

    @staticmethod
    def update_price_adapters(db: Session, group: BookingLineGroup) -> List[BookingPriceAdapter]:
        """Re-create the automatic price adapters of a group and of its lines"""
        removed = PriceAdapterRepository(db).delete_automatic(group)
        logger.debug("Removed %d automatic price adapter(s) of group %s", removed, group.id)

        discount_list, discounts = PriceAdapterService.get_applicable_discounts(db, group)
        created = []
        for discount_id, discount_type, value in discounts:
            targets = [None]
            if not group.is_locked:
                for line in group.booking_lines:
                    if group.sojourn_type == SojournType.GG and line.is_accomodation:
                        targets.append(line.id)
                    elif group.sojourn_type == SojournType.GA and (line.is_accomodation or line.is_meal):
                        targets.append(line.id)
            for line_id in targets:
                adapter = BookingPriceAdapter(
                    booking_id=group.booking_id,
                    booking_line_id=line_id,
                    discount_id=discount_id,
                    discount_list_id=discount_list.id,
                    is_manual_discount=False,
                    type=discount_type,
                    value=value,
                )
                group.price_adapters.append(adapter)
                created.append(adapter)

        db.flush()
        return created
