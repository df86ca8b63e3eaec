# Storage
from app.models.storage.document_models import Document
