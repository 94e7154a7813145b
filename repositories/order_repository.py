"""
Order Repository - Data access layer for order line groups
"""

from typing import Optional
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import OrderLineGroup


class OrderLineGroupRepository(BaseRepository[OrderLineGroup]):
    """Repository for order line groups"""

    def __init__(self, db: Session):
        super().__init__(db, OrderLineGroup)

    def get_with_lines(self, group_id: int) -> Optional[OrderLineGroup]:
        return (
            self.db.query(OrderLineGroup)
            .options(selectinload(OrderLineGroup.order_lines), selectinload(OrderLineGroup.order_rel))
            .filter(OrderLineGroup.id == group_id)
            .first()
        )
