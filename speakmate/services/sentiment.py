"""Reduce sentiment segments to an overall polarity summary."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from speakmate.schemas import SentimentSegment, SentimentSummary

POSITIVE_THRESHOLD = 0.1
NEGATIVE_THRESHOLD = -0.1


def average_sentiment(segments: Optional[Sequence[SentimentSegment]]) -> Optional[float]:
    """Mean segment score, or None when there are no segments."""
    if not segments:
        return None
    return float(np.mean([segment.sentiment_score for segment in segments]))


def sentiment_label(average: float) -> str:
    if average > POSITIVE_THRESHOLD:
        return "positive"
    if average < NEGATIVE_THRESHOLD:
        return "negative"
    return "neutral"


def summarize_sentiment(segments: Optional[Sequence[SentimentSegment]]) -> Optional[SentimentSummary]:
    """Return the overall label and average score, or None for empty/absent segments."""
    average = average_sentiment(segments)
    if average is None:
        return None
    return SentimentSummary(
        label=sentiment_label(average),
        average_score=average,
        segments=list(segments),
    )
