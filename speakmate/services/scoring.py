# -*- coding: utf-8 -*-
"""
Heuristic sub-metric calculators
--------------------------------

Each calculator maps fields of a transcription payload to an integer in
[0, 100]:

• Pronunciation: word confidences blended with the utterance confidence (30/70)
• Fluency: speaking rate around 150 wpm, pause ratio, and a marginal sentiment modifier
• Vocabulary range: lexical diversity, average word length and share of long words
• Confidence: sentiment polarity plus booster/hesitation phrases in the transcript

All raw scores are multiplied by a fixed strictness factor before scaling, so
ceiling scores are deliberately hard to reach. Empty inputs score 0.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

from speakmate.phrases import CONFIDENCE_BOOSTERS, HESITATION_PENALTIES
from speakmate.schemas import SentimentSegment, TranscriptWord
from speakmate.services.sentiment import average_sentiment

STRICTNESS_MULTIPLIER = 0.85

# Pronunciation
UTTERANCE_WEIGHT = 0.7
WORD_WEIGHT = 0.3

# Fluency
OPTIMAL_WPM = 150.0
PAUSE_THRESHOLD_SEC = 0.5
WPM_WEIGHT = 0.55
PAUSE_WEIGHT = 0.35
SENTIMENT_SHARE = 0.1
SENTIMENT_SCALE = 0.1

# Vocabulary
COMPLEX_WORD_MIN_LETTERS = 7

# Confidence
BASE_CONFIDENCE = 0.5


def _to_percentage(raw: float) -> int:
    """Apply the strictness factor, scale to 0–100 and clamp."""
    return min(100, max(0, int(raw * STRICTNESS_MULTIPLIER * 100)))


def calculate_pronunciation(words: Sequence[TranscriptWord], utterance_confidence: float) -> int:
    if not words:
        return 0
    avg_word_confidence = float(np.mean([word.confidence for word in words]))
    weighted = utterance_confidence * UTTERANCE_WEIGHT + avg_word_confidence * WORD_WEIGHT
    return _to_percentage(weighted)


def speech_span(words: Sequence[TranscriptWord]) -> float:
    """Seconds between the first word's start and the last word's end."""
    return words[-1].end_sec - words[0].start_sec


def words_per_minute(words: Sequence[TranscriptWord]) -> float:
    span = speech_span(words)
    if span <= 0:
        return 0.0
    return len(words) / (span / 60.0)


def wpm_score(wpm: float) -> float:
    return max(0.0, 1.0 - abs(wpm - OPTIMAL_WPM) / OPTIMAL_WPM)


def detect_pauses(words: Sequence[TranscriptWord]) -> Tuple[int, float]:
    """Return (pause count, total pause seconds) for gaps longer than the threshold."""
    pause_count = 0
    total_pause = 0.0
    for previous, current in zip(words, words[1:]):
        gap = current.start_sec - previous.end_sec
        if gap > PAUSE_THRESHOLD_SEC:
            pause_count += 1
            total_pause += gap
    return pause_count, total_pause


def calculate_fluency(
    words: Sequence[TranscriptWord],
    total_duration_sec: float,
    sentiment_segments: Optional[Sequence[SentimentSegment]] = None,
) -> int:
    if not words or total_duration_sec <= 0:
        return 0
    span = speech_span(words)
    if span <= 0:
        return 0

    rate_score = wpm_score(words_per_minute(words))

    _, total_pause = detect_pauses(words)
    pause_penalty = min(1.0, (total_pause / span) * 2)
    pause_score = max(0.0, 1.0 - pause_penalty)

    avg_sentiment = average_sentiment(sentiment_segments)
    sentiment_modifier = 1.0 if avg_sentiment is None else 1.0 + avg_sentiment * SENTIMENT_SCALE

    base = rate_score * WPM_WEIGHT + pause_score * PAUSE_WEIGHT
    fluency = base * (1 - SENTIMENT_SHARE) + base * sentiment_modifier * SENTIMENT_SHARE
    return _to_percentage(fluency)


def _letters_only(word: str) -> str:
    return "".join(ch for ch in word if ch.isalpha())


def calculate_vocabulary_range(words: Sequence[TranscriptWord]) -> int:
    if not words:
        return 0
    unique_words = {word.text.lower() for word in words}
    diversity_ratio = len(unique_words) / len(words)

    lengths = [len(_letters_only(word)) for word in unique_words]
    complex_words = sum(1 for length in lengths if length >= COMPLEX_WORD_MIN_LETTERS)
    avg_length = sum(lengths) / len(unique_words)

    diversity_score = min(1.0, diversity_ratio * 2)
    length_score = min(1.0, (avg_length - 3) / 4)
    complexity_score = complex_words / len(unique_words)

    vocabulary = diversity_score * 0.4 + length_score * 0.3 + complexity_score * 0.3
    return _to_percentage(vocabulary)


def phrase_boost(transcript: str) -> float:
    """Sum the deltas of every booster/hesitation phrase found in the transcript (once each)."""
    lowered = transcript.lower()
    boost = 0.0
    for phrase, delta in CONFIDENCE_BOOSTERS + HESITATION_PENALTIES:
        if phrase in lowered:
            boost += delta
    return boost


def calculate_confidence(
    sentiment_segments: Optional[Sequence[SentimentSegment]],
    transcript: str,
) -> int:
    score = BASE_CONFIDENCE
    avg_sentiment = average_sentiment(sentiment_segments)
    if avg_sentiment is not None:
        sentiment_confidence = (avg_sentiment + 1.0) / 2.0
        score = score * 0.3 + sentiment_confidence * 0.7

    score = score * 0.7 + (0.5 + phrase_boost(transcript)) * 0.3
    return _to_percentage(score)
