#!/usr/bin/env python3
"""
Cron entrypoint: POST /likability/compute on a running backend and print the result.
Base URL from LIKABILITY_API_URL (default http://127.0.0.1:8000).
Run: cd backend && python scripts/trigger_likability.py
"""
import json
import sys
from pathlib import Path

import httpx

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.config import settings
from app.core.constants import LIKABILITY_TRIGGER_TIMEOUT_SECONDS


def trigger(
    base_url: str,
    timeout: float = LIKABILITY_TRIGGER_TIMEOUT_SECONDS,
    transport: httpx.BaseTransport | None = None,
) -> dict:
    url = f"{base_url.rstrip('/')}/likability/compute"
    with httpx.Client(timeout=timeout, transport=transport) as c:
        r = c.post(url, json={})
    r.raise_for_status()
    return {"success": True, "message": "Likability computation triggered", "result": r.json()}


def main() -> int:
    try:
        out = trigger(settings.likability_api_url)
    except httpx.HTTPError as e:
        print(json.dumps({"error": str(e)}))
        return 1
    print(json.dumps(out, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
