"""Tests for turning usage metrics into suggestions."""

import pytest

from acompana.schemas.profile import UsageMetrics
from acompana.services.suggestions import classify, suggest_for_user
from acompana.services.suggestions.classifier import response_length_for, tone_for


@pytest.mark.parametrize(
    "avg_len, expected",
    [
        (0, "short"),
        (59.9, "short"),
        (60, "medium"),
        (180, "medium"),
        (180.1, "long"),
    ],
)
def test_response_length_boundaries(avg_len, expected):
    assert response_length_for(avg_len) == expected


@pytest.mark.parametrize(
    "avg_len, exclam_avg, expected",
    [
        (100, 0.6, "casual"),
        (159, 2.0, "casual"),
        (160, 2.0, "neutral"),
        (100, 0.59, "neutral"),
        (201, 0.1, "formal"),
        (200, 0.1, "neutral"),
        (201, 0.15, "neutral"),
        (0, 0.0, "neutral"),
    ],
)
def test_tone_rules(avg_len, exclam_avg, expected):
    assert tone_for(avg_len, exclam_avg) == expected


def test_classify_copies_hours():
    metrics = UsageMetrics(
        message_count=4, avg_len=250, exclam_avg=0.0, top_hours=[9, 20], quiet_start=3
    )

    suggestions = classify(metrics)

    assert suggestions.response_length == "long"
    assert suggestions.tone == "formal"
    assert suggestions.top_hours == [9, 20]
    assert suggestions.quiet_hours.start == 3
    assert suggestions.quiet_hours.duration == 6
    assert suggestions.typing_indicators is True


def test_no_history_is_medium():
    suggestions = classify(UsageMetrics())

    assert suggestions.response_length == "medium"
    assert suggestions.tone == "neutral"


def test_classify_serializes_with_camel_case_keys():
    dumped = classify(UsageMetrics()).model_dump(by_alias=True)

    assert dumped == {
        "responseLength": "medium",
        "tone": "neutral",
        "topHours": [],
        "quietHours": {"start": 0, "duration": 6},
        "typingIndicators": True,
    }


def test_suggest_for_user(db_session, test_user, chat_session, add_message):
    add_message(chat_session, "a" * 300)

    suggestions, metrics = suggest_for_user(db_session, test_user.id)

    assert metrics.avg_len == 300.0
    assert suggestions.response_length == "long"
    assert suggestions.tone == "formal"
