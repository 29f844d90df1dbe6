#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SpeakMate – FastAPI + spoken-answer scoring + trend charts
----------------------------------------------------------

• Scoring: fluency / pronunciation / vocabulary range / confidence (0–100) and their truncated mean
• Feedback: tiered narrative, targeted suggestions, local-slang alternatives
• Storage: SQLite, newest-first, capped at 50 results, results older than 6 months expire on load
• Timezone: UTC (created_at stored as ISO datetime with microseconds)

Endpoints (Analysis):
  - POST   /analyse                            → score a transcription without storing it

Endpoints (Results):
  - POST   /results                            → score, generate feedback and store a recording result
  - GET    /results?limit=...                  → most recent results, newest first
  - GET    /results/average?period=...         → average overall score for daily/weekly/monthly
  - GET    /results/chart?period=...           → average plus chart buckets for the period
  - GET    /results/{public_id}                → result details
  - DELETE /results/{public_id}                → delete one result
  - DELETE /results                            → delete every result
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from speakmate import config, time_utils
from speakmate.db import DatabaseManager
from speakmate.repositories import ResultRepository
from speakmate.schemas import (
    AnalysisOut,
    AnalysisRequest,
    AverageOut,
    ChartOut,
    ResultCreate,
    StoredPerformanceResult,
    StoredResultOut,
    TimePeriod,
    TranscriptionPayload,
)
from speakmate.services.analyser import analyse
from speakmate.services.feedback import generate_feedback
from speakmate.services.results_service import ResultsService
from speakmate.services.transcription import payload_from_deepgram

# ---------------------------------
# Configuration (database and results policy)
# ---------------------------------
DB = config.DB_PATH
MAX_STORED_RESULTS: int = config.MAX_STORED_RESULTS
RESULT_RETENTION_MONTHS: int = config.RESULT_RETENTION_MONTHS
DEFAULT_RECENT_LIMIT: int = config.DEFAULT_RECENT_LIMIT

# Time helpers re-exported so tests can freeze the clock
utc_now = time_utils.utc_now

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

db_manager = DatabaseManager(DB)


def init_db() -> None:
    """Initialize database schema using the current database path."""
    db_manager.set_path(DB)
    db_manager.initialize()


def get_result_repository() -> ResultRepository:
    return ResultRepository(db_manager, MAX_STORED_RESULTS)


def get_results_service(
    repo: ResultRepository = Depends(get_result_repository),
) -> ResultsService:
    return ResultsService(repo, utc_now, RESULT_RETENTION_MONTHS)


def _resolve_payload(payload: AnalysisRequest) -> Optional[TranscriptionPayload]:
    """Return the normalized transcription, parsing a raw service response when given."""
    if payload.transcription is not None:
        return payload.transcription
    try:
        return payload_from_deepgram(payload.deepgram_response)
    except (ValidationError, AttributeError, TypeError, ValueError) as exc:
        logger.warning("Unreadable transcription response: %s", exc)
        raise HTTPException(status_code=422, detail="Invalid transcription response")


def _parse_period(period: str) -> TimePeriod:
    try:
        return TimePeriod(period.strip().lower())
    except ValueError:
        allowed = ", ".join(p.value for p in TimePeriod)
        raise HTTPException(status_code=400, detail=f"Unknown period '{period}' (expected one of: {allowed})")


# ---------------
# FastAPI (app)
# ---------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan hook: ensure database is initialized before serving requests."""
    init_db()
    yield


app = FastAPI(
    title="SpeakMate API",
    version="1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ------------------------
# Endpoints – Analysis
# ------------------------
@app.post("/analyse", response_model=AnalysisOut)
def analyse_transcription(payload: AnalysisRequest):
    """Score a transcription and generate feedback without persisting anything."""
    performance = analyse(_resolve_payload(payload))
    return AnalysisOut(performance=performance, feedback=generate_feedback(performance))


# ------------------------
# Endpoints – Results
# ------------------------
@app.post("/results", response_model=StoredResultOut, status_code=201)
def create_result(
    payload: ResultCreate,
    results_service: ResultsService = Depends(get_results_service),
):
    """Score a completed recording, generate feedback and store the result."""
    performance = analyse(_resolve_payload(payload))
    feedback = generate_feedback(performance)
    try:
        stored = results_service.save(payload.prompt, performance, feedback, payload.audio_file_name)
    except Exception:
        logger.exception("Failed to store performance result")
        raise HTTPException(status_code=500, detail="Failed to store performance result")
    return StoredResultOut(result=stored, sentiment=performance.sentiment)


@app.get("/results", response_model=List[StoredPerformanceResult])
def list_results(
    limit: int = Query(DEFAULT_RECENT_LIMIT, ge=1, le=500),
    results_service: ResultsService = Depends(get_results_service),
):
    """Return the most recent results, newest first."""
    return results_service.get_recent(limit)


@app.get("/results/average", response_model=AverageOut)
def period_average(
    period: str = Query(TimePeriod.DAILY.value),
    results_service: ResultsService = Depends(get_results_service),
):
    """Average overall score inside the period's lookback window."""
    time_period = _parse_period(period)
    return AverageOut(period=time_period, average=results_service.average_score(time_period))


@app.get("/results/chart", response_model=ChartOut)
def period_chart(
    period: str = Query(TimePeriod.DAILY.value),
    results_service: ResultsService = Depends(get_results_service),
):
    """Chart buckets (7 days, 4 weeks or 12 months) ending now, with the period average."""
    time_period = _parse_period(period)
    return ChartOut(
        period=time_period,
        average=results_service.average_score(time_period),
        points=results_service.chart_series(time_period),
    )


@app.get("/results/{public_id}", response_model=StoredPerformanceResult)
def get_result(
    public_id: str,
    results_service: ResultsService = Depends(get_results_service),
):
    """Return a stored result by its public UUID."""
    return results_service.get(public_id)


@app.delete("/results/{public_id}", status_code=204)
def delete_result(
    public_id: str,
    results_service: ResultsService = Depends(get_results_service),
):
    """Delete the specified result by its public UUID."""
    results_service.delete(public_id)
    return


@app.delete("/results", status_code=204)
def clear_results(
    results_service: ResultsService = Depends(get_results_service),
):
    """Delete every stored result."""
    results_service.clear()
    return


# ------------------------
# Healthcheck
# ------------------------
@app.get("/health")
def health():
    """Simple health check endpoint with current UTC timestamp."""
    return {"status": "ok", "utc": utc_now().isoformat()}


# ------------------------
# Local execution
# ------------------------
if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api:app", host=config.API_HOST, port=config.API_PORT, reload=config.API_RELOAD)
