"""SQL schema generation routes"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import logging

from api.responses import error_responses
from domain.models import get_db_session
from domain.schemas.identity_schemas import SchemaResponse
from services.schema_service import SchemaService

router = APIRouter(tags=["Schema"])
logger = logging.getLogger("lodging.api.schema")


@router.get("/sql-schema", response_model=SchemaResponse, responses=error_responses(400, 503))
def get_sql_schema(
    package: str = Query(..., description="Package for which the SQL schema is requested"),
    full: bool = Query(False, description="Emit every column, not only the missing ones"),
    db: Session = Depends(get_db_session),
):
    """Return the SQL statements creating the tables of a package"""
    result = SchemaService.generate(db.get_bind(), package, full)
    return {"result": result}
