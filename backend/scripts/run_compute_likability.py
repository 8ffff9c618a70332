#!/usr/bin/env python3
"""
Compute likability scores for every game in game_engagement_rollup and replace likability_scores.
Run after migrations so the tables exist.
Run: cd backend && python scripts/run_compute_likability.py
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.db.session import SessionLocal
from app.services.likability import LikabilityError, compute_likability


def main() -> int:
    print("Computing likability scores from game_engagement_rollup...")
    db = SessionLocal()
    try:
        result = compute_likability(db)
    except LikabilityError as e:
        print(f"Failed: {e}")
        return 1
    finally:
        db.close()
    if result.status == "no_data":
        print("No engagement data yet.")
        return 0
    print(f"Done. likability_scores={result.rows}")
    for s in sorted(result.scores, key=lambda s: s.score, reverse=True)[:10]:
        print(f"  {s.score:+.4f}  {s.game_id} ({s.genre.value}, {s.sample_size} sessions)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
