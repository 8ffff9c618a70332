"""
FastAPI app entrypoint.

Likability scoring service: scheduled batch + read API for the game feed.
"""
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from apscheduler.schedulers.background import BackgroundScheduler
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from app.api.routes import likability
from app.config import settings
from app.core.constants import LIKABILITY_INTERVAL_MINUTES, LIKABILITY_JOB_ID
from app.scheduler.likability_job import run_likability_job

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Scheduler: recompute likability scores every LIKABILITY_INTERVAL_MINUTES
_scheduler = BackgroundScheduler()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.likability_job_enabled:
        _scheduler.add_job(
            run_likability_job,
            "interval",
            minutes=LIKABILITY_INTERVAL_MINUTES,
            id=LIKABILITY_JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        _scheduler.start()
        logger.info("Likability job scheduled every %s min", LIKABILITY_INTERVAL_MINUTES)
    else:
        logger.info("Likability job disabled (LIKABILITY_JOB_ENABLED=false)")
    app.state.scheduler = _scheduler
    yield
    if _scheduler.running:
        _scheduler.shutdown(wait=False)


app = FastAPI(title="Likability Scoring", version="0.1.0", lifespan=lifespan)

# CORS: dev origins + optional CORS_ORIGINS env (comma-separated) for the web app and admin dashboard
_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
_cors_extra = os.getenv("CORS_ORIGINS", "")
if _cors_extra:
    _cors_origins.extend(o.strip() for o in _cors_extra.split(",") if o.strip())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(likability.router, prefix="/likability", tags=["likability"])


@app.get("/", include_in_schema=False)
def root():
    """Root: point to API docs and health."""
    return {"message": "Likability API", "docs": "/docs", "health": "/health"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
