"""
Tests for the generation of SQL schemas per package.
"""

import pytest
from sqlalchemy.orm import Session

from test_fixtures import client, db_session
from domain.models.database import build_engine
from services.schema_service import SchemaService
from app.exceptions import ServiceValidationError, ConfigurationError


def test_packages():
    packages = SchemaService.get_packages()
    assert packages[:6] == ["core", "identity", "sale", "lodging", "finance", "documents"]


def test_empty_database_gets_every_column():
    engine = build_engine("sqlite://")

    sql = SchemaService.generate(engine, "documents").split("\n")

    assert sql[0] == "CREATE TABLE IF NOT EXISTS documents_document (id INTEGER NOT NULL PRIMARY KEY);"
    assert "ALTER TABLE documents_document ADD COLUMN name TEXT;" in sql
    assert "ALTER TABLE documents_document ADD COLUMN data BLOB;" in sql
    assert "ALTER TABLE documents_document_tag ADD COLUMN description TEXT;" in sql
    # association tables come last, with a unique constraint over their columns
    assert sql[-5] == "CREATE TABLE IF NOT EXISTS documents_rel_document_tag ();"
    assert sql[-4] == "ALTER TABLE documents_rel_document_tag ADD COLUMN document_id INTEGER NOT NULL;"
    assert sql[-2].startswith("ALTER TABLE documents_rel_document_tag ADD CONSTRAINT")
    assert sql[-2].endswith("UNIQUE (document_id, tag_id);")
    # followed by an empty record
    assert sql[-1] == "INSERT INTO documents_rel_document_tag (document_id, tag_id) VALUES (0, 0);"
    assert len(sql) == len(set(sql))


def test_up_to_date_database_only_gets_create_statements(db_session: Session):
    sql = SchemaService.generate(db_session.get_bind(), "finance").split("\n")

    assert sql == [
        "CREATE TABLE IF NOT EXISTS finance_invoice (id INTEGER NOT NULL PRIMARY KEY);",
        "CREATE TABLE IF NOT EXISTS finance_invoice_line (id INTEGER NOT NULL PRIMARY KEY);",
        "CREATE TABLE IF NOT EXISTS finance_receivable (id INTEGER NOT NULL PRIMARY KEY);",
    ]


def test_full_schema_repeats_existing_columns(db_session: Session):
    sql = SchemaService.generate(db_session.get_bind(), "identity", full=True).split("\n")

    assert "ALTER TABLE identity_user ADD COLUMN login TEXT;" in sql
    assert "CREATE TABLE IF NOT EXISTS identity_rel_user_group ();" in sql
    assert sql[-2].endswith("UNIQUE (user_id, group_id);")
    assert sql[-1] == "INSERT INTO identity_rel_user_group (user_id, group_id) VALUES (0, 0);"


def test_unknown_package():
    with pytest.raises(ServiceValidationError):
        SchemaService.generate(build_engine("sqlite://"), "accounting")


def test_unreachable_database():
    engine = build_engine("sqlite:////nonexistent-directory/lodging.db")
    with pytest.raises(ConfigurationError):
        SchemaService.generate(engine, "sale")


def test_api_sql_schema(db_session: Session):
    response = client.get("/sql-schema", params={"package": "documents"})
    assert response.status_code == 200
    assert response.json()["result"].startswith("CREATE TABLE IF NOT EXISTS documents_document")

    response = client.get("/sql-schema", params={"package": "core"})
    assert response.json() == {"result": ""}


def test_api_sql_schema_unknown_package(db_session: Session):
    response = client.get("/sql-schema", params={"package": "accounting"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_param"
