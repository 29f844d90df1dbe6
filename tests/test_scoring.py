# tests/test_scoring.py
import pytest
from conftest import evenly_spaced_words, make_words

from speakmate.schemas import SentimentSegment
from speakmate.services.scoring import (
    calculate_confidence,
    calculate_fluency,
    calculate_pronunciation,
    calculate_vocabulary_range,
    detect_pauses,
    phrase_boost,
    words_per_minute,
)


def _segments(*scores):
    return [SentimentSegment(text="x", sentiment_score=s) for s in scores]


# ------------------------
# Pronunciation
# ------------------------
def test_pronunciation_empty_words_is_zero():
    assert calculate_pronunciation([], 0.95) == 0


def test_pronunciation_blends_word_and_utterance_confidence():
    words = make_words(("a", 0.0, 0.5, 0.8), ("b", 0.5, 1.0, 0.6))
    # (0.9 * 0.7 + 0.7 * 0.3) * 0.85 * 100 = 71.4
    assert calculate_pronunciation(words, 0.9) == 71


def test_pronunciation_perfect_input_is_capped_by_strictness():
    words = make_words(("a", 0.0, 0.5, 1.0), ("b", 0.5, 1.0, 1.0))
    score = calculate_pronunciation(words, 1.0)
    assert score == 85


# ------------------------
# Fluency
# ------------------------
def test_fluency_guards_empty_and_zero_duration():
    words = evenly_spaced_words(5, 2.0)
    assert calculate_fluency([], 5.0) == 0
    assert calculate_fluency(words, 0.0) == 0


def test_fluency_single_instant_word_does_not_divide_by_zero():
    words = make_words(("hi", 1.0, 1.0, 0.9))
    assert calculate_fluency(words, 3.0) == 0


def test_fluency_peaks_at_150_wpm():
    optimal = evenly_spaced_words(5, 2.0)
    assert words_per_minute(optimal) == pytest.approx(150.0)
    # base = 0.55 + 0.35 = 0.9 → 76.5
    assert calculate_fluency(optimal, 3.0) == 76

    slower = evenly_spaced_words(4, 2.0)
    faster = evenly_spaced_words(6, 2.0)
    assert calculate_fluency(slower, 3.0) < calculate_fluency(optimal, 3.0)
    assert calculate_fluency(faster, 3.0) < calculate_fluency(optimal, 3.0)


def test_fluency_rate_score_bottoms_out_at_300_wpm():
    words = evenly_spaced_words(10, 2.0)  # 300 wpm
    # wpm score 0, pause score 1 → 0.35 * 0.85 * 100 = 29.75
    assert calculate_fluency(words, 2.0) == 29


def test_fluency_long_pause_is_penalised():
    words = make_words(("well", 0.0, 0.5, 0.9), ("yes", 1.5, 2.0, 0.9))
    assert detect_pauses(words) == (1, 1.0)
    # 60 wpm → 0.4 rate score, pause ratio 0.5 → full penalty: 0.22 * 85 = 18.7
    assert calculate_fluency(words, 2.0) == 18


def test_fluency_gap_at_threshold_is_not_a_pause():
    words = make_words(("a", 0.0, 0.5, 0.9), ("b", 1.0, 1.5, 0.9))
    assert detect_pauses(words) == (0, 0.0)


def test_fluency_sentiment_modifier_is_marginal():
    words = evenly_spaced_words(5, 2.0)
    assert calculate_fluency(words, 3.0, _segments(1.0)) == 77
    assert calculate_fluency(words, 3.0, _segments(-1.0)) == 75
    assert calculate_fluency(words, 3.0, []) == 76


# ------------------------
# Vocabulary range
# ------------------------
def test_vocabulary_empty_is_zero():
    assert calculate_vocabulary_range([]) == 0


def test_vocabulary_rewards_long_distinct_words():
    words = make_words(
        ("Extraordinary", 0.0, 0.5, 0.9),
        ("magnificent", 0.5, 1.0, 0.9),
        ("cat", 1.0, 1.5, 0.9),
    )
    # diversity 1.0, length 1.0, complexity 2/3 → 0.9 * 85 = 76.5
    assert calculate_vocabulary_range(words) == 76


def test_vocabulary_is_case_insensitive_and_clamped_at_zero():
    words = make_words(*[("A" if i % 2 else "a", i * 0.3, i * 0.3 + 0.2, 0.9) for i in range(10)])
    # one unique short word repeated: diversity 0.2, length score -0.5 → negative raw score
    assert calculate_vocabulary_range(words) == 0


# ------------------------
# Confidence
# ------------------------
def test_confidence_neutral_baseline():
    assert calculate_confidence(None, "I like cats") == 42


def test_confidence_boosting_phrases():
    assert phrase_boost("Definitely, absolutely.") == 0.2
    assert calculate_confidence(None, "Definitely, absolutely.") == 47


def test_confidence_phrase_counts_once():
    assert calculate_confidence(None, "maybe maybe maybe") == calculate_confidence(None, "maybe")
    assert calculate_confidence(None, "maybe") == 41


def test_confidence_filler_matches_inside_words():
    # "er" is matched by substring, e.g. inside "very"
    assert phrase_boost("very nice") == -0.05


def test_confidence_positive_sentiment_dominates():
    assert calculate_confidence(_segments(1.0), "I like cats") == 63
    assert calculate_confidence(_segments(-1.0), "I like cats") < 42


def test_confidence_stays_in_range_with_every_penalty():
    transcript = "um uh er maybe i guess perhaps i'm not sure i don't know"
    score = calculate_confidence(_segments(-1.0), transcript)
    assert 0 <= score <= 100
