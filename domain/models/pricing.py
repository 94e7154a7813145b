"""
Pricing models: price lists, discounts and seasons.
"""

from sqlalchemy import Column, Integer, Text, Float, Date, ForeignKey
from sqlalchemy.orm import relationship

from domain.enums import DiscountType
from domain.models.database import Base, enum_type, package_args


class PriceList(Base):
    """Set of prices valid for a given period and a category of centers"""

    __tablename__ = "sale_price_list"
    __table_args__ = package_args("sale")

    id = Column(Integer, primary_key=True)
    name = Column(Text)
    price_list_category_id = Column(Integer, nullable=False, index=True)
    date_from = Column(Date, nullable=False)
    date_to = Column(Date, nullable=False)
    # stored at creation, used to prefer the most specific list
    duration = Column(Integer, nullable=False, default=0)

    prices = relationship("Price", back_populates="price_list", cascade="all, delete-orphan")


class Price(Base):
    __tablename__ = "sale_price"
    __table_args__ = package_args("sale")

    id = Column(Integer, primary_key=True)
    price_list_id = Column(Integer, ForeignKey("sale_price_list.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Integer, ForeignKey("sale_product.id"), nullable=False)
    price = Column(Float, nullable=False, default=0.0)
    vat_rate = Column(Float, nullable=False, default=0.0)

    price_list = relationship("PriceList", back_populates="prices")


class DiscountList(Base):
    """Discounts granted to a rate class for a period, with a guaranteed minimal rate"""

    __tablename__ = "sale_discount_list"
    __table_args__ = package_args("sale")

    id = Column(Integer, primary_key=True)
    name = Column(Text)
    rate_class_id = Column(Integer, ForeignKey("sale_rate_class.id"), nullable=False)
    discount_list_category_id = Column(Integer, nullable=False)
    valid_from = Column(Date, nullable=False)
    valid_until = Column(Date, nullable=False)
    rate_min = Column(Float, nullable=False, default=0.0)

    discounts = relationship(
        "Discount", back_populates="discount_list", cascade="all, delete-orphan", order_by="Discount.id"
    )


class Discount(Base):
    __tablename__ = "sale_discount"
    __table_args__ = package_args("sale")

    id = Column(Integer, primary_key=True)
    discount_list_id = Column(Integer, ForeignKey("sale_discount_list.id", ondelete="CASCADE"), nullable=False)
    name = Column(Text)
    value = Column(Float, nullable=False, default=0.0)
    type = Column(enum_type(DiscountType), nullable=False, default=DiscountType.PERCENT.value)

    discount_list = relationship("DiscountList", back_populates="discounts")
    conditions = relationship(
        "DiscountCondition", back_populates="discount", cascade="all, delete-orphan", order_by="DiscountCondition.id"
    )


class DiscountCondition(Base):
    """Condition ``operand operator value`` a discount requires"""

    __tablename__ = "sale_discount_condition"
    __table_args__ = package_args("sale")

    id = Column(Integer, primary_key=True)
    discount_id = Column(Integer, ForeignKey("sale_discount.id", ondelete="CASCADE"), nullable=False)
    operand = Column(Text, nullable=False)
    operator = Column(Text, nullable=False)
    value = Column(Text, nullable=False)

    discount = relationship("Discount", back_populates="conditions")


class SeasonType(Base):
    __tablename__ = "sale_season_type"
    __table_args__ = package_args("sale")

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)


class SeasonPeriod(Base):
    __tablename__ = "sale_season_period"
    __table_args__ = package_args("sale")

    id = Column(Integer, primary_key=True)
    season_category_id = Column(Integer, nullable=False, index=True)
    season_type_id = Column(Integer, ForeignKey("sale_season_type.id"), nullable=False)
    date_from = Column(Date, nullable=False)
    date_to = Column(Date, nullable=False)
    year = Column(Integer, nullable=False)

    season_type = relationship("SeasonType")
