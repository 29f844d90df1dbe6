# tests/test_aggregation.py
from datetime import timedelta
from uuid import uuid4

import pytest

from speakmate.schemas import FeedbackResult, StoredMetrics, StoredPerformanceResult, TimePeriod
from speakmate.services.aggregation import average_score, chart_series, period_start


def _stored(created_at, overall):
    return StoredPerformanceResult(
        public_id=str(uuid4()),
        created_at=created_at,
        prompt="Tell me about your weekend",
        metrics=StoredMetrics(
            fluency=overall, pronunciation=overall, vocabulary_range=overall, confidence=overall
        ),
        feedback=FeedbackResult(narrative_feedback="n", suggestions="s."),
        audio_file_name="recording.m4a",
    )


@pytest.mark.parametrize("period, buckets", [
    (TimePeriod.DAILY, 7),
    (TimePeriod.WEEKLY, 4),
    (TimePeriod.MONTHLY, 12),
])
def test_empty_store_gives_zero_average_and_full_bucket_count(fixed_now, period, buckets):
    assert average_score([], period, fixed_now) == 0.0
    points = chart_series([], period, fixed_now)
    assert len(points) == buckets
    assert all(point.value == 0 for point in points)


def test_period_windows(fixed_now):
    assert period_start(TimePeriod.DAILY, fixed_now) == fixed_now - timedelta(days=7)
    assert period_start(TimePeriod.WEEKLY, fixed_now) == fixed_now.replace(month=9)
    assert period_start(TimePeriod.MONTHLY, fixed_now) == fixed_now.replace(year=2024)


def test_daily_labels_end_today(fixed_now):
    labels = [p.label for p in chart_series([], TimePeriod.DAILY, fixed_now)]
    # 2025-10-14 (Tuesday) .. 2025-10-20 (Monday)
    assert labels == ["T", "W", "T", "F", "S", "S", "M"]


def test_weekly_and_monthly_labels(fixed_now):
    weekly = [p.label for p in chart_series([], TimePeriod.WEEKLY, fixed_now)]
    monthly = [p.label for p in chart_series([], TimePeriod.MONTHLY, fixed_now)]
    assert weekly == ["W1", "W2", "W3", "W4"]
    # November 2024 .. October 2025
    assert monthly == ["N", "D", "J", "F", "M", "A", "M", "J", "J", "A", "S", "O"]


def test_daily_buckets_average_per_day(fixed_now):
    results = [
        _stored(fixed_now - timedelta(hours=1), 80),
        _stored(fixed_now - timedelta(hours=2), 60),
        _stored(fixed_now - timedelta(days=2), 50),
        _stored(fixed_now - timedelta(days=10), 10),
        _stored(fixed_now + timedelta(hours=1), 99),
    ]
    values = [p.value for p in chart_series(results, TimePeriod.DAILY, fixed_now)]
    assert values == [0, 0, 0, 0, 50, 0, 70]
    assert average_score(results, TimePeriod.DAILY, fixed_now) == pytest.approx((80 + 60 + 50) / 3)


def test_weekly_buckets(fixed_now):
    results = [
        _stored(fixed_now - timedelta(days=1), 80),
        _stored(fixed_now - timedelta(days=10), 40),
        _stored(fixed_now - timedelta(days=12), 60),
        _stored(fixed_now - timedelta(days=40), 10),
    ]
    values = [p.value for p in chart_series(results, TimePeriod.WEEKLY, fixed_now)]
    assert values == [0, 0, 50, 80]
    assert average_score(results, TimePeriod.WEEKLY, fixed_now) == pytest.approx(60.0)


def test_monthly_buckets(fixed_now):
    results = [
        _stored(fixed_now.replace(month=7), 30),
        _stored(fixed_now.replace(month=7, day=2), 50),
        _stored(fixed_now - timedelta(days=3), 90),
        _stored(fixed_now.replace(year=2023), 100),
    ]
    values = [p.value for p in chart_series(results, TimePeriod.MONTHLY, fixed_now)]
    assert values == [0, 0, 0, 0, 0, 0, 0, 0, 40, 0, 0, 90]
    assert average_score(results, TimePeriod.MONTHLY, fixed_now) == pytest.approx((30 + 50 + 90) / 3)
