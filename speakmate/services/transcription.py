"""Map the speech-to-text service response onto the transcription payload."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from speakmate.schemas import SentimentSegment, TranscriptionPayload, TranscriptWord

logger = logging.getLogger(__name__)


def _first_alternative(response: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    channels = (response.get("results") or {}).get("channels") or []
    if not channels:
        return None
    alternatives = channels[0].get("alternatives") or []
    if not alternatives:
        return None
    return alternatives[0]


def payload_from_deepgram(response: Dict[str, Any]) -> Optional[TranscriptionPayload]:
    """
    Build a TranscriptionPayload from a Deepgram-style ``listen`` response.

    Only the first alternative of the first channel is used. Returns None when the
    response carries no alternative at all.
    """
    alternative = _first_alternative(response)
    if alternative is None:
        logger.warning("Transcription response has no channel alternatives")
        return None

    words = []
    for w in alternative.get("words") or []:
        words.append(
            TranscriptWord(
                text=(w.get("word") or "").strip(),
                start_sec=float(w.get("start", 0.0)),
                end_sec=float(w.get("end", 0.0)),
                confidence=float(w.get("confidence", 0.0)),
            )
        )

    raw_segments = alternative.get("sentiment_segments")
    segments = None
    if raw_segments is not None:
        segments = [
            SentimentSegment(
                text=seg.get("text", ""),
                start_word_idx=int(seg.get("start_word", 0)),
                end_word_idx=int(seg.get("end_word", 0)),
                sentiment_label=seg.get("sentiment", "neutral"),
                sentiment_score=float(seg.get("sentiment_score", 0.0)),
            )
            for seg in raw_segments
        ]

    duration = (response.get("metadata") or {}).get("duration", 0.0)
    return TranscriptionPayload(
        transcript=alternative.get("transcript", ""),
        utterance_confidence=float(alternative.get("confidence", 0.0)),
        words=words,
        sentiment_segments=segments,
        total_duration_sec=float(duration or 0.0),
    )
