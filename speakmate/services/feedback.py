"""Templated natural-language feedback for a scored recording."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from speakmate.phrases import DEFAULT_SLANG, SLANG_TABLE
from speakmate.schemas import FeedbackResult, PerformanceResult, SlangSuggestion

IMPROVEMENT_THRESHOLD = 70
EXCELLENT_OVERALL = 80
GOOD_OVERALL = 70
CONFIDENT_THRESHOLD = 60
NEGATIVE_TONE_THRESHOLD = -0.2
MAX_SLANG_SUGGESTIONS = 4

IDIOM_CLOSING = (
    ". To sound more like a native Aussie, consider using local slang and expressions "
    "that make your speech more natural and relatable."
)

# Checked in this order; the first metric equal to the lowest score wins ties.
LOWEST_METRIC_CLAUSES: Tuple[Tuple[str, str], ...] = (
    ("fluency", ". Work on speaking more smoothly with fewer pauses"),
    ("pronunciation", ". Focus on clearer pronunciation of individual words"),
    ("vocabulary_range", ". Try to use a wider range of vocabulary"),
    ("confidence", ". Work on speaking with more confidence and positivity"),
)

METRIC_SUGGESTIONS: Tuple[Tuple[str, Tuple[str, str]], ...] = (
    (
        "fluency",
        (
            "Practice speaking without long pauses - try recording yourself and listening back",
            "Work on connecting your thoughts more smoothly",
        ),
    ),
    (
        "pronunciation",
        (
            "Focus on clearer enunciation of each word",
            "Practice with tongue twisters to improve articulation",
        ),
    ),
    (
        "vocabulary_range",
        (
            "Try using more varied vocabulary to express your ideas",
            "Read more Australian content to learn local expressions",
        ),
    ),
    (
        "confidence",
        (
            "Practice speaking with more assertive language",
            "Avoid filler words like 'um' and 'uh' - pause instead",
        ),
    ),
)

NEGATIVE_TONE_SUGGESTIONS = (
    "Try to maintain a more positive tone when discussing topics",
    "Consider framing your points in a more optimistic way",
)

DEFAULT_SUGGESTIONS = (
    "Getting straight to the point shows confidence and makes it easier for others to follow",
    "Be mindful of your tone - aim for a relaxed, friendly vibe like you're having a yarn with a mate",
)


def narrative_feedback(result: PerformanceResult) -> str:
    feedback = "Your speech was "
    if result.overall >= EXCELLENT_OVERALL:
        feedback += "excellent - confident, clear, and well-paced"
    elif result.overall >= GOOD_OVERALL:
        feedback += "good overall with room for improvement"
    elif result.confidence > CONFIDENT_THRESHOLD:
        feedback += "mostly confident but could benefit from more practice"
    else:
        feedback += "lacking confidence and needs more work on clarity"

    lowest = min(getattr(result, metric) for metric, _ in LOWEST_METRIC_CLAUSES)
    if lowest < IMPROVEMENT_THRESHOLD:
        for metric, clause in LOWEST_METRIC_CLAUSES:
            if getattr(result, metric) == lowest:
                feedback += clause
                break

    return feedback + IDIOM_CLOSING


def suggestions_text(result: PerformanceResult) -> str:
    suggestions: List[str] = []
    for metric, texts in METRIC_SUGGESTIONS:
        if getattr(result, metric) < IMPROVEMENT_THRESHOLD:
            suggestions.extend(texts)

    if result.sentiment is not None and result.sentiment.average_score < NEGATIVE_TONE_THRESHOLD:
        suggestions.extend(NEGATIVE_TONE_SUGGESTIONS)

    if not suggestions:
        suggestions.extend(DEFAULT_SUGGESTIONS)

    return ". ".join(suggestions) + "."


def slang_suggestions(
    transcript: str,
    table: Sequence[Tuple[str, str]] = SLANG_TABLE,
    defaults: Sequence[Tuple[str, str]] = DEFAULT_SLANG,
) -> List[SlangSuggestion]:
    """Local-idiom alternatives for formal phrases found in the transcript, at most four."""
    lowered = transcript.lower()
    matches = [
        SlangSuggestion(formal=formal, local=local)
        for formal, local in table
        if formal.lower() in lowered
    ]
    if not matches:
        matches = [SlangSuggestion(formal=formal, local=local) for formal, local in defaults]
    return matches[:MAX_SLANG_SUGGESTIONS]


def generate_feedback(result: PerformanceResult) -> FeedbackResult:
    return FeedbackResult(
        narrative_feedback=narrative_feedback(result),
        suggestions=suggestions_text(result),
        slang_suggestions=slang_suggestions(result.transcript),
    )
