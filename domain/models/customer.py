"""
Customer-related models.
"""

from sqlalchemy import Column, Integer, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from domain.models.database import Base, package_args


class RateClass(Base):
    """Fare class used to pick price lists and discount lists"""

    __tablename__ = "sale_rate_class"
    __table_args__ = package_args("sale")

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    description = Column(Text)


class CustomerType(Base):
    __tablename__ = "sale_customer_type"
    __table_args__ = package_args("sale")

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)


class CustomerNature(Base):
    """Nature of a customer, mapped to a rate class and a customer type"""

    __tablename__ = "sale_customer_nature"
    __table_args__ = package_args("sale")

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    rate_class_id = Column(Integer, ForeignKey("sale_rate_class.id"))
    customer_type_id = Column(Integer, ForeignKey("sale_customer_type.id"))


class Customer(Base):
    """A partner with whom the company carries out commercial sales operations"""

    __tablename__ = "sale_customer"
    __table_args__ = package_args("sale")

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    rate_class_id = Column(Integer, ForeignKey("sale_rate_class.id"), default=1)
    customer_nature_id = Column(Integer, ForeignKey("sale_customer_nature.id"))
    customer_type_id = Column(Integer, ForeignKey("sale_customer_type.id"), default=1)
    partner_relationship = Column("relationship", Text, nullable=False, default="customer")
    partner_identity_id = Column(Integer, ForeignKey("identity_identity.id"))
    address_street = Column(Text)
    address_city = Column(Text)
    ref_account = Column(Text)
    customer_external_ref = Column(Text)
    flag_latepayer = Column(Boolean, nullable=False, default=False)
    flag_damage = Column(Boolean, nullable=False, default=False)
    flag_nuisance = Column(Boolean, nullable=False, default=False)

    rate_class = relationship("RateClass")
    customer_nature = relationship("CustomerNature")
    customer_type = relationship("CustomerType")
    partner_identity = relationship("Identity", foreign_keys=[partner_identity_id])
    bookings = relationship("Booking", back_populates="customer")
    receivables = relationship("Receivable", back_populates="customer")
    invoices = relationship("Invoice", back_populates="customer")

    @property
    def address(self) -> str:
        return f"{self.address_street or ''} {self.address_city or ''}"
