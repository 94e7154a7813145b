"""
Document models: stored documents, their tags and e-mail template attachments.
"""

from sqlalchemy import Column, Integer, Text, LargeBinary, ForeignKey, Table
from sqlalchemy.orm import relationship

from domain.models.database import Base, package_args


document_tag = Table(
    "documents_rel_document_tag",
    Base.metadata,
    Column("document_id", Integer, ForeignKey("documents_document.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("documents_document_tag.id", ondelete="CASCADE"), primary_key=True),
    info={"package": "documents"},
)


class Document(Base):
    __tablename__ = "documents_document"
    __table_args__ = package_args("documents")

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    type = Column(Text, nullable=False, default="application/octet-stream")
    data = Column(LargeBinary)

    tags = relationship("DocumentTag", secondary=document_tag, back_populates="documents")


class DocumentTag(Base):
    __tablename__ = "documents_document_tag"
    __table_args__ = package_args("documents")

    id = Column(Integer, primary_key=True)
    # name of the tag (used for all variants)
    name = Column(Text, nullable=False)
    description = Column(Text)

    documents = relationship(
        "Document", secondary=document_tag, back_populates="tags", order_by="Document.id"
    )


class TemplateAttachment(Base):
    """Document that can be joined to messages sent from a template"""

    __tablename__ = "documents_template_attachment"
    __table_args__ = package_args("documents")

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    document_id = Column(Integer, ForeignKey("documents_document.id"))

    document = relationship("Document")
