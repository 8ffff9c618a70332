"""
Centralized constants for the scheduler and likability API (Encapsulate What Changes).

Change job IDs or limits here instead of scattering literals across main and routes.
The batch interval and time budget come from settings (env-driven).
"""
from app.config import settings

# Scheduler job IDs (must match ids used in main.py add_job)
LIKABILITY_JOB_ID = "likability_compute"
LIKABILITY_INTERVAL_MINUTES = settings.likability_interval_minutes

# Scalability: hard caps so response size stays bounded
LIKABILITY_SCORES_DEFAULT_LIMIT = 100
LIKABILITY_SCORES_MAX_LIMIT = 1000
LIKABILITY_JOBS_MAX_LIMIT = 200

# Trigger script: HTTP timeout for POST /likability/compute
LIKABILITY_TRIGGER_TIMEOUT_SECONDS = 300.0
