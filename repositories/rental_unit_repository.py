"""
Rental Unit Repository - Data access layer for centers and rental units
"""

from typing import List
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import Center, RentalUnit, ProductModel


class RentalUnitRepository(BaseRepository[RentalUnit]):
    """Repository for rental unit data access"""

    def __init__(self, db: Session):
        super().__init__(db, RentalUnit)

    def get_by_center(self, center_id: int, accomodation_only: bool = False) -> List[RentalUnit]:
        query = (
            self.db.query(RentalUnit)
            .options(selectinload(RentalUnit.children))
            .filter(RentalUnit.center_id == center_id)
        )
        if accomodation_only:
            query = query.filter(RentalUnit.is_accomodation.is_(True))
        return query.order_by(RentalUnit.order, RentalUnit.id).all()

    def get_for_product_model(self, center_id: int, product_model: ProductModel) -> List[RentalUnit]:
        """Units of the center linked to the product model, or all its accomodation units if none are linked"""
        if not product_model.rental_units:
            return self.get_by_center(center_id, accomodation_only=True)
        units = [u for u in product_model.rental_units if u.center_id == center_id]
        return sorted(units, key=lambda u: (u.order, u.id))


class CenterRepository(BaseRepository[Center]):
    def __init__(self, db: Session):
        super().__init__(db, Center)
