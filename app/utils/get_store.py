from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.services.storage.document_store import DocumentStore, SqlDocumentStore


async def get_store(db: AsyncSession = Depends(get_db)) -> DocumentStore:
    return SqlDocumentStore(db)
