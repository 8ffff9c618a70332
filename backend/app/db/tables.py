"""
Single source of truth for database tables created by migrations.

game_engagement_rollup is written by the event pipeline; this service only reads it.
"""
ALL_TABLE_NAMES = (
    "game_engagement_rollup",
    "likability_scores",
    "likability_jobs",
)
