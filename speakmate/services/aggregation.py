"""Period averages and chart buckets over stored performance results."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, List, Sequence

import numpy as np

from speakmate import time_utils
from speakmate.schemas import ChartDataPoint, StoredPerformanceResult, TimePeriod

WEEKDAY_LABELS = ("M", "T", "W", "T", "F", "S", "S")
MONTH_LABELS = ("J", "F", "M", "A", "M", "J", "J", "A", "S", "O", "N", "D")

DAILY_BUCKETS = 7
WEEKLY_BUCKETS = 4
MONTHLY_BUCKETS = 12


def period_start(period: TimePeriod, now: datetime) -> datetime:
    """Start of the lookback window: 7 days, 1 month or 1 year before now."""
    if period is TimePeriod.DAILY:
        return time_utils.add_days(now, -7)
    if period is TimePeriod.WEEKLY:
        return time_utils.add_months(now, -1)
    return time_utils.add_years(now, -1)


def results_for_period(
    results: Sequence[StoredPerformanceResult], period: TimePeriod, now: datetime
) -> List[StoredPerformanceResult]:
    start = period_start(period, now)
    return [result for result in results if start <= result.created_at <= now]


def _mean_overall(results: Sequence[StoredPerformanceResult]) -> float:
    if not results:
        return 0.0
    return float(np.mean([result.metrics.overall for result in results]))


def average_score(
    results: Sequence[StoredPerformanceResult], period: TimePeriod, now: datetime
) -> float:
    """Mean overall score of the results inside the period window, 0.0 when there are none."""
    return _mean_overall(results_for_period(results, period, now))


def _bucket(
    results: Sequence[StoredPerformanceResult],
    label: str,
    belongs: Callable[[StoredPerformanceResult], bool],
) -> ChartDataPoint:
    return ChartDataPoint(label=label, value=_mean_overall([r for r in results if belongs(r)]))


def _daily_series(results: Sequence[StoredPerformanceResult], now: datetime) -> List[ChartDataPoint]:
    points = []
    for offset in range(DAILY_BUCKETS - 1, -1, -1):
        day = time_utils.add_days(now, -offset)
        label = WEEKDAY_LABELS[day.astimezone(time_utils.TIMEZONE).weekday()]
        points.append(_bucket(results, label, lambda r, day=day: time_utils.same_day(r.created_at, day)))
    return points


def _weekly_series(results: Sequence[StoredPerformanceResult], now: datetime) -> List[ChartDataPoint]:
    points = []
    for offset in range(WEEKLY_BUCKETS - 1, -1, -1):
        end = now - timedelta(weeks=offset)
        start = end - timedelta(weeks=1)
        label = f"W{WEEKLY_BUCKETS - offset}"
        points.append(
            _bucket(results, label, lambda r, start=start, end=end: start < r.created_at <= end)
        )
    return points


def _monthly_series(results: Sequence[StoredPerformanceResult], now: datetime) -> List[ChartDataPoint]:
    points = []
    for offset in range(MONTHLY_BUCKETS - 1, -1, -1):
        month = time_utils.add_months(now, -offset)
        label = MONTH_LABELS[month.astimezone(time_utils.TIMEZONE).month - 1]
        points.append(
            _bucket(results, label, lambda r, month=month: time_utils.same_month(r.created_at, month))
        )
    return points


def chart_series(
    results: Sequence[StoredPerformanceResult], period: TimePeriod, now: datetime
) -> List[ChartDataPoint]:
    """Chronological chart buckets ending at now; empty buckets are valued 0."""
    in_period = results_for_period(results, period, now)
    if period is TimePeriod.DAILY:
        return _daily_series(in_period, now)
    if period is TimePeriod.WEEKLY:
        return _weekly_series(in_period, now)
    return _monthly_series(in_period, now)
