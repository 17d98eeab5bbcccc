"""SQLAlchemy ORM models for the record store"""

from sqlalchemy import JSON, Column, DateTime, Integer, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class RecordEntry(Base):
    """One appended record of a domain collection (append-only)"""

    __tablename__ = "record_entry"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    domain = Column(Text, nullable=False, index=True)
    payload = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class KeyValue(Base):
    """Whole-value slot such as the latest analysis or the analysis history"""

    __tablename__ = "kv_value"

    key = Column(Text, primary_key=True)
    value = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
