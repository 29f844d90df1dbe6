"""Domain service over the stored performance results."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, List, Mapping
from uuid import uuid4

from fastapi import HTTPException

from speakmate import time_utils
from speakmate.repositories import ResultRepository
from speakmate.schemas import (
    ChartDataPoint,
    FeedbackResult,
    PerformanceResult,
    StoredMetrics,
    StoredPerformanceResult,
    TimePeriod,
)
from speakmate.services import aggregation

logger = logging.getLogger(__name__)


class ResultsService:
    """Save, query, expire and aggregate stored performance results."""

    def __init__(
        self,
        repo: ResultRepository,
        utc_now: Callable[[], datetime],
        retention_months: int,
    ):
        """Store dependencies required to manage results."""
        self._repo = repo
        self._utc_now = utc_now
        self._retention_months = retention_months

    def save(
        self,
        prompt: str,
        performance: PerformanceResult,
        feedback: FeedbackResult,
        audio_file_name: str,
    ) -> StoredPerformanceResult:
        """Persist a completed recording's scores and feedback; sentiment detail is not stored."""
        metrics = StoredMetrics.from_performance(performance)
        row = self._repo.save(
            public_id=str(uuid4()),
            created_at_iso=time_utils.to_storage_iso(self._utc_now()),
            prompt=prompt,
            metrics_json=metrics.model_dump_json(),
            feedback_json=feedback.model_dump_json(),
            audio_file_name=audio_file_name,
        )
        logger.info("Saved performance result %s: overall %d%%", row["public_id"], metrics.overall)
        return self._row_to_result(row)

    def expire_old_results(self) -> int:
        """Drop results older than the retention window; runs on every load."""
        cutoff = time_utils.add_months(self._utc_now(), -self._retention_months)
        removed = self._repo.expire_older_than(time_utils.to_storage_iso(cutoff))
        if removed:
            logger.info("Cleaned up %d result(s) older than %d months", removed, self._retention_months)
        return removed

    def load_all(self) -> List[StoredPerformanceResult]:
        self.expire_old_results()
        return [self._row_to_result(row) for row in self._repo.list_all()]

    def get_recent(self, limit: int) -> List[StoredPerformanceResult]:
        """Return up to ``limit`` results, newest first."""
        self.expire_old_results()
        return [self._row_to_result(row) for row in self._repo.get_recent(limit)]

    def get(self, public_id: str) -> StoredPerformanceResult:
        self.expire_old_results()
        row = self._repo.get(public_id.strip())
        if not row:
            raise HTTPException(status_code=404, detail="Result not found")
        return self._row_to_result(row)

    def get_for_period(self, period: TimePeriod) -> List[StoredPerformanceResult]:
        return self._load_period(period, self._utc_now())

    def _load_period(self, period: TimePeriod, now: datetime) -> List[StoredPerformanceResult]:
        self.expire_old_results()
        start = aggregation.period_start(period, now)
        rows = self._repo.get_for_period(time_utils.to_storage_iso(start), time_utils.to_storage_iso(now))
        return [self._row_to_result(row) for row in rows]

    def delete(self, public_id: str) -> None:
        """Delete a result by its public identifier; raise 404 when missing."""
        rowcount = self._repo.delete(public_id.strip())
        if rowcount == 0:
            raise HTTPException(status_code=404, detail="Result not found")
        logger.info("Deleted result with ID: %s", public_id)

    def clear(self) -> None:
        removed = self._repo.clear()
        logger.info("Cleared all stored results (%d removed)", removed)

    def average_score(self, period: TimePeriod) -> float:
        now = self._utc_now()
        return aggregation.average_score(self._load_period(period, now), period, now)

    def chart_series(self, period: TimePeriod) -> List[ChartDataPoint]:
        now = self._utc_now()
        return aggregation.chart_series(self._load_period(period, now), period, now)

    @staticmethod
    def _row_to_result(row: Mapping[str, Any]) -> StoredPerformanceResult:
        """Build a StoredPerformanceResult instance from a repository row."""
        return StoredPerformanceResult(
            public_id=row["public_id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            prompt=row["prompt"],
            metrics=StoredMetrics.model_validate_json(row["metrics"]),
            feedback=FeedbackResult.model_validate_json(row["feedback"]),
            audio_file_name=row["audio_file_name"],
        )
