"""Rollup counters -> per-game behavioral ratios."""
from app.services.likability.types import EngagementRollupRow, GameMetrics, MetricVector


def safe_divide(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0 when the denominator is 0."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def extract_metrics(row: EngagementRollupRow) -> MetricVector:
    """
    Six ratios for one game. Counts are not validated: negative or inconsistent values
    (completions > sessions) pass straight through.

    Restarts are divided by completions with a floor of 1 instead of safe_divide, so a game
    that is restarted a lot but never completed gets a large ratio rather than 0.
    """
    return MetricVector(
        completion_rate=safe_divide(row.completions, row.sessions),
        average_session_seconds=safe_divide(row.total_seconds, row.sessions),
        restart_to_complete_ratio=safe_divide(row.restarts, row.completions or 1),
        share_rate=safe_divide(row.shares, row.sessions),
        favorite_rate=safe_divide(row.favorites, row.sessions),
        abandonment_rate=safe_divide(row.abandons, row.sessions),
    )


def extract_all(rows: list[EngagementRollupRow]) -> list[GameMetrics]:
    return [
        GameMetrics(game_id=r.game_id, genre=r.genre, sessions=r.sessions, stats=extract_metrics(r))
        for r in rows
    ]
