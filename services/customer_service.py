from typing import Any, Dict
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

from domain.models import Customer, Identity
from domain.schemas.customer_schemas import CustomerCreate
from repositories import (
    CustomerRepository,
    CustomerNatureRepository,
    CustomerTypeRepository,
    IdentityRepository,
)
from services.price_adapter_service import years_ago
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("lodging.customers")

# Columns that cannot be cleared; a null sent for them is ignored
NON_NULLABLE_FIELDS = ("name", "flag_latepayer", "flag_damage", "flag_nuisance")


class CustomerService:
    @staticmethod
    def get_customer(db: Session, customer_id: int) -> Customer:
        customer = CustomerRepository(db).get_by_id(customer_id)
        if not customer:
            raise NotFoundError(f"Customer not found: {customer_id}", code="unknown_customer")
        return customer

    @staticmethod
    def create_customer(db: Session, payload: CustomerCreate) -> Customer:
        """Create a customer, applying its nature and linking its partner identity"""
        values = payload.model_dump(exclude_none=True)
        customer = Customer(**values)
        try:
            db.add(customer)
            db.flush()
            if customer.customer_nature_id:
                CustomerService._on_customer_nature_id(db, customer)
            CustomerService._on_customer_type_id(db, customer)
            CustomerService._sync_partner_identity(db, customer)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.error(f"customer_create_failed name={payload.name} error={str(e)}")
            raise ServiceValidationError("Database integrity error during customer creation")
        except (SQLAlchemyError, NotFoundError):
            db.rollback()
            raise
        db.refresh(customer)
        logger.info("Created customer %s", customer.id)
        return customer

    @staticmethod
    def update_customer(db: Session, customer_id: int, values: Dict[str, Any]) -> Customer:
        """
        Update a customer.

        A new nature copies its rate class and customer type onto the customer;
        a new customer type is mirrored on the partner identity. After the
        update, the partner identity always points back to the customer.
        """
        customer = CustomerService.get_customer(db, customer_id)
        values = {k: v for k, v in values.items() if v is not None or k not in NON_NULLABLE_FIELDS}
        changed = {field for field, value in values.items() if getattr(customer, field) != value}
        for field, value in values.items():
            setattr(customer, field, value)

        try:
            db.flush()
            if "customer_nature_id" in changed:
                CustomerService._on_customer_nature_id(db, customer)
            if "customer_type_id" in changed:
                CustomerService._on_customer_type_id(db, customer)
            CustomerService._sync_partner_identity(db, customer)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.error(f"customer_update_failed customer_id={customer_id} error={str(e)}")
            raise ServiceValidationError("Database integrity error during customer update")
        except (SQLAlchemyError, NotFoundError):
            db.rollback()
            raise
        db.refresh(customer)
        logger.info("Updated customer %s (%s)", customer.id, ", ".join(sorted(changed)) or "no change")
        return customer

    @staticmethod
    def onchange(db: Session, event: Dict[str, Any]) -> Dict[str, Any]:
        """Preview the fields impacted by a change made in a customer form"""
        result: Dict[str, Any] = {}
        if event.get("type_id") is not None:
            customer_type = CustomerTypeRepository(db).get_by_id(event["type_id"])
            if customer_type is not None:
                result["customer_type_id"] = {"id": customer_type.id, "name": customer_type.name}
            else:
                result["customer_type_id"] = None
        return result

    @staticmethod
    def _on_customer_nature_id(db: Session, customer: Customer):
        if not customer.customer_nature_id:
            return
        nature = CustomerNatureRepository(db).get_by_id(customer.customer_nature_id)
        if nature is None:
            raise NotFoundError(
                f"Customer nature not found: {customer.customer_nature_id}", code="unknown_customer_nature"
            )
        customer.rate_class_id = nature.rate_class_id
        if nature.customer_type_id and nature.customer_type_id != customer.customer_type_id:
            customer.customer_type_id = nature.customer_type_id
            CustomerService._on_customer_type_id(db, customer)

    @staticmethod
    def _on_customer_type_id(db: Session, customer: Customer):
        identity = CustomerService._get_partner_identity(db, customer)
        identity.type_id = customer.customer_type_id

    @staticmethod
    def _get_partner_identity(db: Session, customer: Customer) -> Identity:
        """Partner identity of a customer, created from its name when missing"""
        identity = None
        if customer.partner_identity_id:
            identity = IdentityRepository(db).get_by_id(customer.partner_identity_id)
        if identity is None:
            identity = Identity(
                legal_name=customer.name,
                address_street=customer.address_street,
                address_city=customer.address_city,
                type_id=customer.customer_type_id,
            )
            db.add(identity)
            db.flush()
            customer.partner_identity = identity
            customer.partner_identity_id = identity.id
            logger.debug("Created partner identity %s for customer %s", identity.id, customer.id)
        return identity

    @staticmethod
    def _sync_partner_identity(db: Session, customer: Customer):
        identity = CustomerService._get_partner_identity(db, customer)
        if identity.customer_id != customer.id:
            identity.customer_id = customer.id
        db.flush()

    @staticmethod
    def count_booking_24(db: Session, customer: Customer) -> int:
        """Number of bookings of the customer over the last 24 months"""
        counts = CustomerRepository(db).count_bookings_since([customer.id], years_ago(datetime.utcnow(), 2))
        return counts.get(customer.id, 0)
