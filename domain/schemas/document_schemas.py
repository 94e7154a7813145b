from pydantic import BaseModel, Field
from typing import Optional, List


class DocumentTagCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Name of the tag (used for all variants)")
    description: Optional[str] = None


class DocumentTagDocumentsUpdate(BaseModel):
    documents_ids: List[int] = Field(default_factory=list)


class DocumentSummary(BaseModel):
    id: int
    name: str
    type: str

    model_config = {"from_attributes": True}


class DocumentTagResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    documents: List[DocumentSummary] = []

    model_config = {"from_attributes": True}
