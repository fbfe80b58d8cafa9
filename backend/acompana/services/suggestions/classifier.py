"""
Fixed-threshold mapping from usage metrics to suggested settings.
"""

import uuid

from sqlalchemy.orm import Session

from acompana.schemas.profile import QuietHours, SuggestionSet, UsageMetrics
from acompana.services.suggestions.metrics import aggregate_metrics

SHORT_BELOW = 60
LONG_ABOVE = 180

CASUAL_MIN_EXCLAM = 0.6
CASUAL_BELOW_LEN = 160
FORMAL_BELOW_EXCLAM = 0.15
FORMAL_ABOVE_LEN = 200

QUIET_HOURS_DURATION = 6


def response_length_for(avg_len: float) -> str:
    if avg_len < SHORT_BELOW:
        return "short"
    if avg_len > LONG_ABOVE:
        return "long"
    return "medium"


def tone_for(avg_len: float, exclam_avg: float) -> str:
    # casual wins when both rules could apply
    if exclam_avg >= CASUAL_MIN_EXCLAM and avg_len < CASUAL_BELOW_LEN:
        return "casual"
    if exclam_avg < FORMAL_BELOW_EXCLAM and avg_len > FORMAL_ABOVE_LEN:
        return "formal"
    return "neutral"


def classify(metrics: UsageMetrics) -> SuggestionSet:
    """
    Turn usage metrics into a suggestion set. Never fails.

    Without any message history the length falls back to ``medium``.
    """
    if metrics.message_count:
        response_length = response_length_for(metrics.avg_len)
    else:
        response_length = "medium"

    return SuggestionSet(
        response_length=response_length,
        tone=tone_for(metrics.avg_len, metrics.exclam_avg),
        top_hours=list(metrics.top_hours),
        quiet_hours=QuietHours(
            start=metrics.quiet_start, duration=QUIET_HOURS_DURATION
        ),
        typing_indicators=True,
    )


def suggest_for_user(db: Session, user_id: uuid.UUID):
    """Return ``(suggestions, metrics)`` computed from current history."""
    metrics = aggregate_metrics(db, user_id)
    return classify(metrics), metrics
