"""
Finance models: invoices, invoice lines and receivables.
"""

from sqlalchemy import Column, Integer, Text, Float, Date, ForeignKey
from sqlalchemy.orm import relationship

from domain.enums import InvoiceStatus, ReceivableStatus
from domain.models.database import Base, enum_type, package_args


class Invoice(Base):
    __tablename__ = "finance_invoice"
    __table_args__ = package_args("finance")

    id = Column(Integer, primary_key=True)
    number = Column(Text)
    status = Column(enum_type(InvoiceStatus), nullable=False, default=InvoiceStatus.PROFORMA.value)
    customer_id = Column(Integer, ForeignKey("sale_customer.id"), nullable=False)
    booking_id = Column(Integer, ForeignKey("lodging_booking.id"))
    date = Column(Date)
    total = Column(Float, nullable=False, default=0.0)
    price = Column(Float, nullable=False, default=0.0)

    customer = relationship("Customer", back_populates="invoices")
    booking = relationship("Booking")
    invoice_lines = relationship(
        "InvoiceLine", back_populates="invoice", cascade="all, delete-orphan", order_by="InvoiceLine.id"
    )


class InvoiceLine(Base):
    __tablename__ = "finance_invoice_line"
    __table_args__ = package_args("finance")

    id = Column(Integer, primary_key=True)
    invoice_id = Column(Integer, ForeignKey("finance_invoice.id", ondelete="CASCADE"), nullable=False)
    name = Column(Text, nullable=False, default="")
    # sojourn the line was invoiced from, used to group lines when rendering
    group_name = Column(Text)
    qty = Column(Float, nullable=False, default=1.0)
    unit_price = Column(Float, nullable=False, default=0.0)
    vat_rate = Column(Float, nullable=False, default=0.0)
    total = Column(Float, nullable=False, default=0.0)
    price = Column(Float, nullable=False, default=0.0)

    invoice = relationship("Invoice", back_populates="invoice_lines")


class Receivable(Base):
    """Amount due by a customer, waiting to be invoiced"""

    __tablename__ = "finance_receivable"
    __table_args__ = package_args("finance")

    id = Column(Integer, primary_key=True)
    name = Column(Text)
    customer_id = Column(Integer, ForeignKey("sale_customer.id"), nullable=False)
    booking_id = Column(Integer, ForeignKey("lodging_booking.id"))
    invoice_id = Column(Integer, ForeignKey("finance_invoice.id"))
    invoice_line_id = Column(Integer, ForeignKey("finance_invoice_line.id"))
    price = Column(Float, nullable=False, default=0.0)
    status = Column(enum_type(ReceivableStatus), nullable=False, default=ReceivableStatus.PENDING.value)

    customer = relationship("Customer", back_populates="receivables")
