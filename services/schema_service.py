"""
SQL schema generation.

Produces the statements needed to bring the live database up to date with the
mapped tables of a package: one ``CREATE TABLE IF NOT EXISTS`` per table
(holding its primary key) followed by one ``ALTER TABLE ... ADD COLUMN`` per
missing column. Association tables come last and get a unique constraint
over their columns, then receive an empty record.
"""

import logging
from typing import Dict, List, Set

from sqlalchemy import inspect, Table
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.schema import CreateColumn

from app.exceptions import ServiceValidationError, ConfigurationError
from domain.models.database import Base

logger = logging.getLogger("lodging.schema")

PACKAGES = ("core", "identity", "sale", "lodging", "finance", "documents")


def _table_package(table: Table) -> str:
    return table.info.get("package", "core")


def _mapped_tables() -> Set[str]:
    return {mapper.local_table.name for mapper in Base.registry.mappers}


class SchemaService:
    @staticmethod
    def get_packages() -> List[str]:
        """Known packages, including those declared by mapped tables"""
        declared = {_table_package(t) for t in Base.metadata.sorted_tables}
        return list(PACKAGES) + sorted(declared - set(PACKAGES))

    @staticmethod
    def _existing_columns(engine: Engine) -> Dict[str, List[str]]:
        """Map each existing table to its column names"""
        try:
            with engine.connect() as conn:
                inspector = inspect(conn)
                return {
                    name: [c["name"] for c in inspector.get_columns(name)]
                    for name in inspector.get_table_names()
                }
        except SQLAlchemyError as e:
            logger.error("Unable to reach the database: %s", e)
            raise ConfigurationError("missing_database", code="missing_database")

    @staticmethod
    def generate(engine: Engine, package: str, full: bool = False) -> str:
        """
        Build the SQL schema of a package.

        Args:
            engine: engine bound to the live database (used for introspection and dialect)
            package: name of the package whose tables are emitted
            full: emit every column, even those already present

        Returns:
            SQL statements joined with newlines

        Raises:
            ServiceValidationError: unknown package
            ConfigurationError: database unreachable
        """
        if package not in SchemaService.get_packages():
            raise ServiceValidationError(f"Unknown package '{package}'", code="invalid_param")

        existing = SchemaService._existing_columns(engine)
        dialect = engine.dialect
        preparer = dialect.identifier_preparer
        mapped = _mapped_tables()

        tables = [t for t in Base.metadata.sorted_tables if _table_package(t) == package]
        entity_tables = [t for t in tables if t.name in mapped]
        m2m_tables = [t for t in tables if t.name not in mapped]

        result: List[str] = []
        processed: Dict[str, Set[str]] = {}

        for table in entity_tables:
            done = processed.setdefault(table.name, set())
            name = preparer.format_table(table)
            columns = existing.get(table.name, [])
            pk_columns = list(table.primary_key.columns)
            pk_sql = ", ".join(str(CreateColumn(c).compile(dialect=dialect)) for c in pk_columns)
            result.append(f"CREATE TABLE IF NOT EXISTS {name} ({pk_sql} PRIMARY KEY);")

            for column in table.columns:
                if column.primary_key or column.name in done:
                    continue
                if not full and column.name in columns:
                    continue
                col_type = column.type.compile(dialect=dialect)
                result.append(
                    f"ALTER TABLE {name} ADD COLUMN {preparer.format_column(column)} {col_type};"
                )
                done.add(column.name)

        for table in m2m_tables:
            done = processed.setdefault(table.name, set())
            name = preparer.format_table(table)
            columns = existing.get(table.name, [])
            wanted = [c.name for c in table.columns]
            result.append(f"CREATE TABLE IF NOT EXISTS {name} ();")
            if not full and columns and all(c in columns for c in wanted):
                continue
            for column in table.columns:
                if column.name in columns or column.name in done:
                    continue
                col_type = column.type.compile(dialect=dialect)
                result.append(
                    f"ALTER TABLE {name} ADD COLUMN {preparer.format_column(column)} {col_type} NOT NULL;"
                )
                done.add(column.name)
            constraint = preparer.quote("_".join([table.name] + wanted))
            quoted = ", ".join(preparer.format_column(c) for c in table.columns)
            result.append(f"ALTER TABLE {name} ADD CONSTRAINT {constraint} UNIQUE ({quoted});")
            # empty record, so that JOIN conditions also hold on empty tables
            zeros = ", ".join("0" for _ in table.columns)
            result.append(f"INSERT INTO {name} ({quoted}) VALUES ({zeros});")

        logger.info("Generated %d statements for package %s", len(result), package)
        return "\n".join(result)
