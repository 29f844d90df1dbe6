"""Pydantic schemas for transcription payloads, scoring results and API bodies."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


SentimentLabel = Literal["positive", "negative", "neutral"]


def overall_score(fluency: int, pronunciation: int, vocabulary_range: int, confidence: int) -> int:
    """Truncated mean of the four sub-scores."""
    return (fluency + pronunciation + vocabulary_range + confidence) // 4


# ------------------------
# Transcription payload (inbound)
# ------------------------
class TranscriptWord(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    start_sec: float
    end_sec: float
    confidence: float = Field(..., ge=0.0, le=1.0)


class SentimentSegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = ""
    start_word_idx: int = 0
    end_word_idx: int = 0
    sentiment_label: str = "neutral"
    sentiment_score: float = Field(..., ge=-1.0, le=1.0)


class TranscriptionPayload(BaseModel):
    """Word-level transcription result produced by the speech-to-text collaborator."""

    model_config = ConfigDict(frozen=True)

    transcript: str = ""
    utterance_confidence: float = Field(0.0, ge=0.0, le=1.0)
    words: List[TranscriptWord] = Field(default_factory=list)
    sentiment_segments: Optional[List[SentimentSegment]] = None
    total_duration_sec: float = Field(0.0, ge=0.0)


# ------------------------
# Scoring results (outbound)
# ------------------------
class SentimentSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: SentimentLabel
    average_score: float = Field(..., ge=-1.0, le=1.0)
    segments: List[SentimentSegment]


class PerformanceResult(BaseModel):
    """Four 0–100 sub-scores, the derived overall score and the sentiment summary."""

    model_config = ConfigDict(frozen=True)

    fluency: int = Field(0, ge=0, le=100)
    pronunciation: int = Field(0, ge=0, le=100)
    vocabulary_range: int = Field(0, ge=0, le=100)
    confidence: int = Field(0, ge=0, le=100)
    transcript: str = ""
    sentiment: Optional[SentimentSummary] = None

    @computed_field
    @property
    def overall(self) -> int:
        return overall_score(self.fluency, self.pronunciation, self.vocabulary_range, self.confidence)


class SlangSuggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    formal: str
    local: str


class FeedbackResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    narrative_feedback: str
    suggestions: str
    slang_suggestions: List[SlangSuggestion] = Field(default_factory=list, max_length=4)


# ------------------------
# Persisted records
# ------------------------
class StoredMetrics(BaseModel):
    """Persisted copy of a PerformanceResult without the live sentiment detail."""

    model_config = ConfigDict(frozen=True)

    fluency: int = Field(..., ge=0, le=100)
    pronunciation: int = Field(..., ge=0, le=100)
    vocabulary_range: int = Field(..., ge=0, le=100)
    confidence: int = Field(..., ge=0, le=100)
    transcript: str = ""

    @computed_field
    @property
    def overall(self) -> int:
        return overall_score(self.fluency, self.pronunciation, self.vocabulary_range, self.confidence)

    @classmethod
    def from_performance(cls, result: PerformanceResult) -> "StoredMetrics":
        return cls(
            fluency=result.fluency,
            pronunciation=result.pronunciation,
            vocabulary_range=result.vocabulary_range,
            confidence=result.confidence,
            transcript=result.transcript,
        )


class StoredPerformanceResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    public_id: str
    created_at: datetime
    prompt: str
    metrics: StoredMetrics
    feedback: FeedbackResult
    audio_file_name: str


# ------------------------
# Trend charts
# ------------------------
class TimePeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ChartDataPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: float = Field(..., ge=0.0, le=100.0)


# ------------------------
# API bodies
# ------------------------
class AnalysisRequest(BaseModel):
    transcription: Optional[TranscriptionPayload] = Field(
        None, description="Normalized transcription payload"
    )
    deepgram_response: Optional[Dict[str, Any]] = Field(
        None, description="Raw speech-to-text service response (results/metadata JSON)"
    )

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "AnalysisRequest":
        if (self.transcription is None) == (self.deepgram_response is None):
            raise ValueError("provide exactly one of 'transcription' or 'deepgram_response'")
        return self


class ResultCreate(AnalysisRequest):
    prompt: str = Field(..., description="Prompt text the learner was answering")
    audio_file_name: str = Field(..., min_length=1, description="File name of the recorded audio")


class AnalysisOut(BaseModel):
    performance: PerformanceResult
    feedback: FeedbackResult


class StoredResultOut(BaseModel):
    result: StoredPerformanceResult
    sentiment: Optional[SentimentSummary]


class AverageOut(BaseModel):
    period: TimePeriod
    average: float


class ChartOut(BaseModel):
    period: TimePeriod
    average: float
    points: List[ChartDataPoint]
