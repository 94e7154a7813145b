"""
Real estate models: centers and the rental units they hold.
"""

from sqlalchemy import Column, Integer, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from domain.models.database import Base, package_args


class Center(Base):
    """Lodging center, with the categories used to pick seasons, discounts and prices"""

    __tablename__ = "lodging_center"
    __table_args__ = package_args("lodging")

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    season_category_id = Column(Integer)
    discount_list_category_id = Column(Integer)
    price_list_category_id = Column(Integer)
    signature = Column(Text)

    rental_units = relationship("RentalUnit", back_populates="center")


class RentalUnit(Base):
    __tablename__ = "lodging_rental_unit"
    __table_args__ = package_args("lodging")

    id = Column(Integer, primary_key=True)
    center_id = Column(Integer, ForeignKey("lodging_center.id"), nullable=False)
    name = Column(Text, nullable=False)
    code = Column(Text)
    capacity = Column(Integer, nullable=False, default=1)
    order = Column(Integer, nullable=False, default=1)
    is_accomodation = Column(Boolean, nullable=False, default=True)
    can_partial_rent = Column(Boolean, nullable=False, default=False)
    parent_id = Column(Integer, ForeignKey("lodging_rental_unit.id"))

    center = relationship("Center", back_populates="rental_units")
    parent = relationship("RentalUnit", remote_side=[id], back_populates="children")
    children = relationship("RentalUnit", back_populates="parent", order_by="RentalUnit.id")

    @property
    def has_children(self) -> bool:
        return len(self.children) > 0

    @property
    def children_ids(self):
        return [c.id for c in self.children]
