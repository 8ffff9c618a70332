"""
Per-game engagement counters over the current window, maintained by the session/event
pipeline. Read-only for the likability batch: one row per game.
"""
from sqlalchemy import Column, DateTime, Float, Integer, String
from sqlalchemy.sql import func

from app.db.base import Base


class GameEngagementRollup(Base):
    __tablename__ = "game_engagement_rollup"

    game_id = Column(String(64), primary_key=True)
    genre = Column(String(32), nullable=False, default="other", index=True)

    sessions = Column(Integer, nullable=False, default=0)
    completions = Column(Integer, nullable=False, default=0)
    total_seconds = Column(Float, nullable=False, default=0.0)
    restarts = Column(Integer, nullable=False, default=0)
    shares = Column(Integer, nullable=False, default=0)
    abandons = Column(Integer, nullable=False, default=0)
    favorites = Column(Integer, nullable=True)  # NULL when no favorites were attributed in the window

    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
