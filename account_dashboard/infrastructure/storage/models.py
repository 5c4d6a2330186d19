"""SQLAlchemy ORM model backing the namespaced key-value store"""

from sqlalchemy import Column, DateTime, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class KeyValueEntry(Base):
    """One JSON-encoded collection stored under a namespaced key"""

    __tablename__ = "kv_store"

    key = Column(Text, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
