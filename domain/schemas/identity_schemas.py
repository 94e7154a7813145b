from pydantic import BaseModel
from typing import Optional, List


class IdentitySummary(BaseModel):
    id: int
    firstname: Optional[str] = None
    lastname: Optional[str] = None


class UserInfoResponse(BaseModel):
    """Descriptor of the current user"""

    id: int
    login: str
    language: str
    groups: List[str] = []
    identity_id: Optional[IdentitySummary] = None
    organisation_id: Optional[int] = None


class SchemaResponse(BaseModel):
    result: str
