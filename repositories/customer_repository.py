"""
Customer Repository - Data access layer for customers and their classifications
"""

from datetime import datetime
from typing import Optional, Dict, Iterable
from sqlalchemy import func
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Customer, CustomerNature, CustomerType, RateClass, Booking


class CustomerRepository(BaseRepository[Customer]):
    """Repository for customer data access"""

    def __init__(self, db: Session):
        super().__init__(db, Customer)

    def count_bookings_since(self, customer_ids: Iterable[int], since: datetime) -> Dict[int, int]:
        """Number of bookings created since the given moment, per customer"""
        ids = [cid for cid in customer_ids if cid]
        if not ids:
            return {}
        rows = (
            self.db.query(Booking.customer_id, func.count(Booking.id))
            .filter(Booking.customer_id.in_(ids), Booking.created_at >= since)
            .group_by(Booking.customer_id)
            .all()
        )
        counts = {cid: 0 for cid in ids}
        counts.update({cid: count for cid, count in rows})
        return counts


class CustomerNatureRepository(BaseRepository[CustomerNature]):
    def __init__(self, db: Session):
        super().__init__(db, CustomerNature)


class CustomerTypeRepository(BaseRepository[CustomerType]):
    def __init__(self, db: Session):
        super().__init__(db, CustomerType)


class RateClassRepository(BaseRepository[RateClass]):
    def __init__(self, db: Session):
        super().__init__(db, RateClass)

    def get_default(self) -> Optional[RateClass]:
        return self.db.query(RateClass).order_by(RateClass.id).first()
