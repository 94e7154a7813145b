"""
Booking models: bookings, sojourns (line groups), lines, price adapters,
rental unit assignments, consumptions and compositions.
"""

from datetime import time

from sqlalchemy import Column, Integer, Text, Boolean, Float, Date, Time, TIMESTAMP, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.enums import BookingStatus, SojournType, QtyAccountingMethod, DiscountType
from domain.models.database import Base, enum_type, package_args


class Booking(Base):
    __tablename__ = "lodging_booking"
    __table_args__ = package_args("lodging")

    id = Column(Integer, primary_key=True)
    name = Column(Text)
    status = Column(enum_type(BookingStatus), nullable=False, default=BookingStatus.QUOTE.value)
    customer_id = Column(Integer, ForeignKey("sale_customer.id"))
    center_id = Column(Integer, ForeignKey("lodging_center.id"), nullable=False)
    # one-to-one mirror of Composition.booking_id
    composition_id = Column(Integer)
    total = Column(Float)
    price = Column(Float)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    customer = relationship("Customer", back_populates="bookings")
    center = relationship("Center")
    booking_lines_groups = relationship(
        "BookingLineGroup",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingLineGroup.id",
    )
    consumptions = relationship("Consumption", cascade="all, delete-orphan")
    compositions = relationship("Composition", back_populates="booking", cascade="all, delete-orphan")
    rental_unit_assignments = relationship(
        "SojournProductModelRentalUnitAssignement", viewonly=True
    )


class BookingLineGroup(Base):
    """
    Booking line groups (sojourns) belong to a booking and describe one or
    more stays and their related consumptions.
    """

    __tablename__ = "lodging_booking_line_group"
    __table_args__ = package_args("lodging")

    id = Column(Integer, primary_key=True)
    name = Column(Text, default="")
    booking_id = Column(Integer, ForeignKey("lodging_booking.id", ondelete="CASCADE"), nullable=False)
    has_pack = Column(Boolean, nullable=False, default=False)
    pack_id = Column(Integer, ForeignKey("sale_product.id"))
    is_locked = Column(Boolean, nullable=False, default=False)
    date_from = Column(Date, nullable=False)
    date_to = Column(Date, nullable=False)
    time_from = Column(Time, nullable=False, default=time(14, 0))
    time_to = Column(Time, nullable=False, default=time(10, 0))
    sojourn_type = Column(enum_type(SojournType), nullable=False, default=SojournType.GG.value)
    nb_pers = Column(Integer, nullable=False, default=1)
    nb_nights = Column(Integer)
    rate_class_id = Column(Integer, ForeignKey("sale_rate_class.id"), nullable=False)
    price_id = Column(Integer, ForeignKey("sale_price.id"))
    unit_price = Column(Float, nullable=False, default=0.0)
    vat_rate = Column(Float, nullable=False, default=0.0)
    total = Column(Float)
    price = Column(Float)

    booking = relationship("Booking", back_populates="booking_lines_groups")
    pack = relationship("Product")
    rate_class = relationship("RateClass")
    price_record = relationship("Price")
    booking_lines = relationship(
        "BookingLine",
        back_populates="booking_line_group",
        cascade="all, delete-orphan",
        order_by="BookingLine.order",
    )
    price_adapters = relationship(
        "BookingPriceAdapter",
        back_populates="booking_line_group",
        cascade="all, delete-orphan",
        order_by="BookingPriceAdapter.id",
    )
    sojourn_product_models = relationship(
        "SojournProductModel", back_populates="booking_line_group", cascade="all, delete-orphan"
    )

    @property
    def accomodations(self):
        return [line for line in self.booking_lines if line.is_accomodation]


class BookingLine(Base):
    __tablename__ = "lodging_booking_line"
    __table_args__ = package_args("lodging")

    id = Column(Integer, primary_key=True)
    booking_id = Column(Integer, ForeignKey("lodging_booking.id", ondelete="CASCADE"), nullable=False)
    booking_line_group_id = Column(
        Integer, ForeignKey("lodging_booking_line_group.id", ondelete="CASCADE"), nullable=False
    )
    product_id = Column(Integer, ForeignKey("sale_product.id"), nullable=False)
    order = Column(Integer, nullable=False, default=1)
    qty = Column(Integer, nullable=False, default=1)
    has_own_qty = Column(Boolean, nullable=False, default=False)
    qty_accounting_method = Column(
        enum_type(QtyAccountingMethod), nullable=False, default=QtyAccountingMethod.UNIT.value
    )
    price_id = Column(Integer, ForeignKey("sale_price.id"))
    unit_price = Column(Float, nullable=False, default=0.0)
    vat_rate = Column(Float, nullable=False, default=0.0)
    total = Column(Float)
    price = Column(Float)

    booking_line_group = relationship("BookingLineGroup", back_populates="booking_lines")
    product = relationship("Product")
    price_adapters = relationship("BookingPriceAdapter", viewonly=True, order_by="BookingPriceAdapter.id")
    rental_unit_assignments = relationship("SojournProductModelRentalUnitAssignement", viewonly=True)

    @property
    def is_accomodation(self) -> bool:
        return bool(self.product and self.product.product_model.is_accomodation)

    @property
    def is_meal(self) -> bool:
        return bool(self.product and self.product.product_model.is_meal)


class BookingPriceAdapter(Base):
    """Discount or markup applied to a group (no line) or to one of its lines"""

    __tablename__ = "lodging_booking_price_adapter"
    __table_args__ = package_args("lodging")

    id = Column(Integer, primary_key=True)
    booking_id = Column(Integer, ForeignKey("lodging_booking.id", ondelete="CASCADE"), nullable=False)
    booking_line_group_id = Column(
        Integer, ForeignKey("lodging_booking_line_group.id", ondelete="CASCADE"), nullable=False
    )
    booking_line_id = Column(Integer, ForeignKey("lodging_booking_line.id", ondelete="CASCADE"))
    discount_id = Column(Integer, ForeignKey("sale_discount.id"))
    discount_list_id = Column(Integer, ForeignKey("sale_discount_list.id"))
    is_manual_discount = Column(Boolean, nullable=False, default=False)
    type = Column(enum_type(DiscountType), nullable=False, default=DiscountType.PERCENT.value)
    value = Column(Float, nullable=False, default=0.0)

    booking_line_group = relationship("BookingLineGroup", back_populates="price_adapters")


class SojournProductModel(Base):
    """Product model booked within a sojourn, with its rental unit assignments"""

    __tablename__ = "lodging_sojourn_product_model"
    __table_args__ = package_args("lodging")

    id = Column(Integer, primary_key=True)
    booking_id = Column(Integer, ForeignKey("lodging_booking.id", ondelete="CASCADE"), nullable=False)
    booking_line_group_id = Column(
        Integer, ForeignKey("lodging_booking_line_group.id", ondelete="CASCADE"), nullable=False
    )
    product_model_id = Column(Integer, ForeignKey("sale_product_model.id"), nullable=False)

    booking_line_group = relationship("BookingLineGroup", back_populates="sojourn_product_models")
    product_model = relationship("ProductModel")
    rental_unit_assignments = relationship(
        "SojournProductModelRentalUnitAssignement",
        back_populates="sojourn_product_model",
        cascade="all, delete-orphan",
    )


class SojournProductModelRentalUnitAssignement(Base):
    __tablename__ = "lodging_spm_rental_unit_assignement"
    __table_args__ = package_args("lodging")

    id = Column(Integer, primary_key=True)
    booking_id = Column(Integer, ForeignKey("lodging_booking.id", ondelete="CASCADE"), nullable=False)
    booking_line_group_id = Column(
        Integer, ForeignKey("lodging_booking_line_group.id", ondelete="CASCADE"), nullable=False
    )
    sojourn_product_model_id = Column(
        Integer, ForeignKey("lodging_sojourn_product_model.id", ondelete="CASCADE"), nullable=False
    )
    booking_line_id = Column(Integer, ForeignKey("lodging_booking_line.id", ondelete="SET NULL"))
    rental_unit_id = Column(Integer, ForeignKey("lodging_rental_unit.id"), nullable=False)
    qty = Column(Integer, nullable=False, default=0)

    sojourn_product_model = relationship("SojournProductModel", back_populates="rental_unit_assignments")
    rental_unit = relationship("RentalUnit")


class Consumption(Base):
    """Scheduled use of a rental unit (or a product) on a given day"""

    __tablename__ = "lodging_consumption"
    __table_args__ = package_args("lodging")

    id = Column(Integer, primary_key=True)
    booking_id = Column(Integer, ForeignKey("lodging_booking.id", ondelete="CASCADE"))
    booking_line_group_id = Column(Integer, ForeignKey("lodging_booking_line_group.id", ondelete="CASCADE"))
    center_id = Column(Integer, ForeignKey("lodging_center.id"))
    rental_unit_id = Column(Integer, ForeignKey("lodging_rental_unit.id"))
    date = Column(Date, nullable=False)
    schedule_from = Column(Time, nullable=False, default=time(0, 0))
    schedule_to = Column(Time, nullable=False, default=time(23, 59, 59))
    is_rental_unit = Column(Boolean, nullable=False, default=True)


class Composition(Base):
    """Hosts listing of a booking"""

    __tablename__ = "lodging_composition"
    __table_args__ = package_args("lodging")

    id = Column(Integer, primary_key=True)
    booking_id = Column(Integer, ForeignKey("lodging_booking.id", ondelete="CASCADE"), nullable=False)

    booking = relationship("Booking", back_populates="compositions")
    composition_items = relationship(
        "CompositionItem",
        back_populates="composition",
        cascade="all, delete-orphan",
        order_by="CompositionItem.id",
    )


class CompositionItem(Base):
    __tablename__ = "lodging_composition_item"
    __table_args__ = package_args("lodging")

    id = Column(Integer, primary_key=True)
    composition_id = Column(Integer, ForeignKey("lodging_composition.id", ondelete="CASCADE"), nullable=False)
    rental_unit_id = Column(Integer, ForeignKey("lodging_rental_unit.id"), nullable=False)
    firstname = Column(Text)
    lastname = Column(Text)
    gender = Column(Text)
    date_of_birth = Column(Date)
    email = Column(Text)
    phone = Column(Text)
    address = Column(Text)
    country = Column(Text)

    composition = relationship("Composition", back_populates="composition_items")
