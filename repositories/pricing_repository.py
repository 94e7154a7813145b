"""
Pricing Repository - Data access layer for price lists, discounts and seasons
"""

from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import (
    PriceList,
    Price,
    DiscountList,
    Discount,
    SeasonPeriod,
    Product,
    ProductModel,
)


class PriceListRepository(BaseRepository[PriceList]):
    """Repository for price lists"""

    def __init__(self, db: Session):
        super().__init__(db, PriceList)

    def create_price_list(self, price_list: PriceList, commit: bool = True) -> PriceList:
        """Create a price list, storing its duration in days"""
        price_list.duration = (price_list.date_to - price_list.date_from).days
        return self.create(price_list, commit=commit)

    def find_covering(self, price_list_category_id: int, day: date) -> List[PriceList]:
        """Price lists of a category valid on the given day, shortest duration first"""
        return (
            self.db.query(PriceList)
            .filter(
                PriceList.price_list_category_id == price_list_category_id,
                PriceList.date_from <= day,
                PriceList.date_to >= day,
            )
            .order_by(PriceList.duration, PriceList.id)
            .all()
        )


class PriceRepository(BaseRepository[Price]):
    def __init__(self, db: Session):
        super().__init__(db, Price)

    def find(self, price_list_id: int, product_id: int) -> Optional[Price]:
        return (
            self.db.query(Price)
            .filter(Price.price_list_id == price_list_id, Price.product_id == product_id)
            .order_by(Price.id)
            .first()
        )


class DiscountListRepository(BaseRepository[DiscountList]):
    """Repository for discount lists"""

    def __init__(self, db: Session):
        super().__init__(db, DiscountList)

    def find_first(self, rate_class_id: int, category_id: int, day: date) -> Optional[DiscountList]:
        return (
            self.db.query(DiscountList)
            .options(selectinload(DiscountList.discounts).selectinload(Discount.conditions))
            .filter(
                DiscountList.rate_class_id == rate_class_id,
                DiscountList.discount_list_category_id == category_id,
                DiscountList.valid_from <= day,
                DiscountList.valid_until >= day,
            )
            .order_by(DiscountList.id)
            .first()
        )


class SeasonPeriodRepository(BaseRepository[SeasonPeriod]):
    def __init__(self, db: Session):
        super().__init__(db, SeasonPeriod)

    def find_first(self, season_category_id: int, day: date) -> Optional[SeasonPeriod]:
        return (
            self.db.query(SeasonPeriod)
            .options(selectinload(SeasonPeriod.season_type))
            .filter(
                SeasonPeriod.season_category_id == season_category_id,
                SeasonPeriod.date_from <= day,
                SeasonPeriod.date_to >= day,
                SeasonPeriod.year == day.year,
            )
            .order_by(SeasonPeriod.id)
            .first()
        )


class ProductRepository(BaseRepository[Product]):
    def __init__(self, db: Session):
        super().__init__(db, Product)


class ProductModelRepository(BaseRepository[ProductModel]):
    def __init__(self, db: Session):
        super().__init__(db, ProductModel)
