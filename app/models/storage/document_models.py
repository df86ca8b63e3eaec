from sqlalchemy import JSON, Column, DateTime, Index, String
from sqlalchemy.sql import func

from app.core.db import Base


class Document(Base):
    """One schemaless record of a collection (inventory, suppliers, categories)."""

    __tablename__ = "documents"

    collection = Column(String(64), primary_key=True)
    doc_id = Column(String(128), primary_key=True)
    data = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (Index("ix_documents_collection", "collection"),)

    def __repr__(self):
        return f"<Document {self.collection}/{self.doc_id}>"
