"""
Catalog models: product models, products and pack compositions.
"""

from sqlalchemy import Column, Integer, Text, Boolean, ForeignKey, Table
from sqlalchemy.orm import relationship

from domain.enums import QtyAccountingMethod
from domain.models.database import Base, enum_type, package_args


product_model_rental_unit = Table(
    "sale_rel_productmodel_rentalunit",
    Base.metadata,
    Column("product_model_id", Integer, ForeignKey("sale_product_model.id", ondelete="CASCADE"), primary_key=True),
    Column("rental_unit_id", Integer, ForeignKey("lodging_rental_unit.id", ondelete="CASCADE"), primary_key=True),
    info={"package": "sale"},
)


class ProductModel(Base):
    """Common settings shared by the variants (products) of a sellable item"""

    __tablename__ = "sale_product_model"
    __table_args__ = package_args("sale")

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    qty_accounting_method = Column(
        enum_type(QtyAccountingMethod),
        nullable=False,
        default=QtyAccountingMethod.UNIT.value,
    )
    has_duration = Column(Boolean, nullable=False, default=False)
    duration = Column(Integer, nullable=False, default=0)
    capacity = Column(Integer, nullable=False, default=0)
    is_meal = Column(Boolean, nullable=False, default=False)
    is_accomodation = Column(Boolean, nullable=False, default=False)
    is_pack = Column(Boolean, nullable=False, default=False)
    has_own_price = Column(Boolean, nullable=False, default=False)

    rental_units = relationship("RentalUnit", secondary=product_model_rental_unit)


class Product(Base):
    __tablename__ = "sale_product"
    __table_args__ = package_args("sale")

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    sku = Column(Text)
    product_model_id = Column(Integer, ForeignKey("sale_product_model.id"), nullable=False)
    is_pack = Column(Boolean, nullable=False, default=False)
    is_locked = Column(Boolean, nullable=False, default=False)

    product_model = relationship("ProductModel")
    pack_lines = relationship(
        "PackLine",
        foreign_keys="PackLine.parent_product_id",
        back_populates="parent_product",
        cascade="all, delete-orphan",
        order_by="PackLine.id",
    )


class PackLine(Base):
    """Product included in a pack, optionally with its own quantity"""

    __tablename__ = "sale_pack_line"
    __table_args__ = package_args("sale")

    id = Column(Integer, primary_key=True)
    parent_product_id = Column(Integer, ForeignKey("sale_product.id", ondelete="CASCADE"), nullable=False)
    child_product_id = Column(Integer, ForeignKey("sale_product.id"), nullable=False)
    has_own_qty = Column(Boolean, nullable=False, default=False)
    own_qty = Column(Integer, nullable=False, default=0)

    parent_product = relationship("Product", foreign_keys=[parent_product_id], back_populates="pack_lines")
    child_product = relationship("Product", foreign_keys=[child_product_id])
