#!/usr/bin/env python3
"""
Standalone database initialization script.
Creates the tables, seeds the reference records and optionally a user
member of the booking group (printing an access token for it).

Usage:
    python scripts/init_db.py [--user LOGIN]
"""

import argparse
import sys
import logging
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import ConflictError
from domain.models.database import init_database, engine, SessionLocal
from domain.models import RateClass, CustomerType
from repositories import GroupRepository, UserRepository
from services.auth_service import AuthService

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("lodging.init_db")

BOOKING_GROUP = "booking.default.user"


def init_tables() -> bool:
    """Create the tables of every package"""
    try:
        init_database()
        tables = inspect(engine).get_table_names()
        logger.info(f"Created {len(tables)} tables: {', '.join(tables)}")
        return True
    except SQLAlchemyError as e:
        logger.error(f"Failed to initialize the database: {e}")
        return False


def seed(login: str = None) -> bool:
    """Seed the default rate class, customer type and booking group"""
    db = SessionLocal()
    try:
        if db.get(RateClass, 1) is None:
            db.add(RateClass(id=1, name="default", description="Default rate class"))
        if db.get(CustomerType, 1) is None:
            db.add(CustomerType(id=1, name="individual"))
        group = GroupRepository(db).get_or_create(BOOKING_GROUP)
        db.commit()
        logger.info("Reference records seeded")

        if login:
            user = UserRepository(db).create_user(login, groups=[group])
            token = AuthService.create_access_token(user.id)
            logger.info(f"Created user {login} (id {user.id})")
            print(f"access_token={token}")
        return True
    except (SQLAlchemyError, ConflictError) as e:
        db.rollback()
        logger.error(f"Failed to seed the database: {e}")
        return False
    finally:
        db.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Initialize the lodging database")
    parser.add_argument("--user", help="login of a booking user to create")
    args = parser.parse_args(argv)

    if not init_tables():
        return 1
    if not seed(args.user):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
