from sqlalchemy import Column, String, DateTime, Text
from datetime import datetime
from safephone.database import Base

class StoredItem(Base):
    """One opaque key-value blob (JSON-encoded report maps live here)"""
    __tablename__ = "stored_items"

    key = Column(String(255), primary_key=True, index=True)
    value = Column(Text, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
