"""
Likability score per game from the latest completed batch. Rows are replaced (delete + insert)
on every run, so there is never more than one row per game_id and no history. game_id is unique:
a concurrent run that loses the race fails its insert instead of adding a second row.

components: JSON list of {key, label, weight, genre, observedValue, normalizedValue}.
"""
from sqlalchemy import Column, DateTime, Float, Integer, String
from sqlalchemy.sql import func

from app.db.base import Base, JSONType


class LikabilityScore(Base):
    __tablename__ = "likability_scores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    game_id = Column(String(64), nullable=False, unique=True, index=True)  # one score row per game
    genre = Column(String(32), nullable=False, index=True)
    score = Column(Float, nullable=False)
    components = Column(JSONType, nullable=False, default=list)
    sample_size = Column(Integer, nullable=False, default=0)  # sessions behind the score
    computed_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
