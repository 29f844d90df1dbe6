"""Orchestrate the sub-metric calculators into one PerformanceResult."""

from __future__ import annotations

import logging
from typing import Optional

from speakmate.schemas import PerformanceResult, TranscriptionPayload
from speakmate.services.scoring import (
    calculate_confidence,
    calculate_fluency,
    calculate_pronunciation,
    calculate_vocabulary_range,
)
from speakmate.services.sentiment import summarize_sentiment

logger = logging.getLogger(__name__)

EMPTY_RESULT = PerformanceResult()


def analyse(payload: Optional[TranscriptionPayload]) -> PerformanceResult:
    """Score a transcription payload; payloads without words yield the all-zero result."""
    if payload is None or not payload.words:
        logger.debug("No usable transcription content; returning empty result")
        return EMPTY_RESULT

    result = PerformanceResult(
        fluency=calculate_fluency(payload.words, payload.total_duration_sec, payload.sentiment_segments),
        pronunciation=calculate_pronunciation(payload.words, payload.utterance_confidence),
        vocabulary_range=calculate_vocabulary_range(payload.words),
        confidence=calculate_confidence(payload.sentiment_segments, payload.transcript),
        transcript=payload.transcript,
        sentiment=summarize_sentiment(payload.sentiment_segments),
    )
    logger.debug(
        "Scored transcript: fluency=%d pronunciation=%d vocabulary=%d confidence=%d overall=%d",
        result.fluency,
        result.pronunciation,
        result.vocabulary_range,
        result.confidence,
        result.overall,
    )
    return result
