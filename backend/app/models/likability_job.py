"""Audit log of likability batch runs (status + details such as row count or error)."""
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from app.db.base import Base, JSONType


class LikabilityJob(Base):
    __tablename__ = "likability_jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    status = Column(String(16), nullable=False, index=True)  # completed | failed
    details = Column(JSONType, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
