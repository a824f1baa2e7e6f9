# agrichain/data/models/document.py
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime

from agrichain.data.database import Base


class DocumentModel(Base):
    """Jeden zserializowany dokument JSON pod jednym kluczem."""

    __tablename__ = "kv_documents"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
