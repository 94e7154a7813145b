"""
Order models. Totals are stored computed fields: they are reset to None when
something they depend on changes, and recomputed on the next read.
"""

from sqlalchemy import Column, Integer, Text, Boolean, Float, ForeignKey
from sqlalchemy.orm import relationship

from domain.models.database import Base, package_args


class Order(Base):
    __tablename__ = "sale_order"
    __table_args__ = package_args("sale")

    id = Column(Integer, primary_key=True)
    name = Column(Text)
    customer_id = Column(Integer, ForeignKey("sale_customer.id"))
    total = Column(Float)
    price = Column(Float)

    order_line_groups = relationship(
        "OrderLineGroup", back_populates="order_rel", cascade="all, delete-orphan", order_by="OrderLineGroup.order"
    )


class OrderLineGroup(Base):
    __tablename__ = "sale_order_line_group"
    __table_args__ = package_args("sale")

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False, default="")
    order = Column(Integer, nullable=False, default=1)
    # sales made off-contract (e.g. point of sale)
    is_extra = Column(Boolean, nullable=False, default=False)
    order_id = Column(Integer, ForeignKey("sale_order.id", ondelete="CASCADE"), nullable=False)
    total = Column(Float)
    price = Column(Float)
    fare_benefit = Column(Float)

    order_rel = relationship("Order", back_populates="order_line_groups")
    order_lines = relationship(
        "OrderLine", back_populates="order_line_group", cascade="all, delete-orphan", order_by="OrderLine.id"
    )


class OrderLine(Base):
    __tablename__ = "sale_order_line"
    __table_args__ = package_args("sale")

    id = Column(Integer, primary_key=True)
    order_line_group_id = Column(
        Integer, ForeignKey("sale_order_line_group.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(Text, nullable=False, default="")
    qty = Column(Integer, nullable=False, default=1)
    free_qty = Column(Integer, nullable=False, default=0)
    unit_price = Column(Float, nullable=False, default=0.0)
    vat_rate = Column(Float, nullable=False, default=0.0)
    discount = Column(Float, nullable=False, default=0.0)
    total = Column(Float)
    price = Column(Float)
    fare_benefit = Column(Float)

    order_line_group = relationship("OrderLineGroup", back_populates="order_lines")
