"""
Usage statistics over the messages a user has written.
"""

import uuid
from typing import Dict

from sqlalchemy import extract, func
from sqlalchemy.orm import Session

from acompana.db.models import ChatSession, Message
from acompana.db.models.message import AUTHOR_USER
from acompana.schemas.profile import UsageMetrics

TOP_HOURS = 3
HOURS_IN_DAY = 24


def _user_messages(query, user_id: uuid.UUID):
    return (
        query.select_from(Message)
        .join(ChatSession, Message.chat_session_id == ChatSession.id)
        .filter(ChatSession.user_id == user_id, Message.author == AUTHOR_USER)
    )


def hourly_counts(db: Session, user_id: uuid.UUID) -> Dict[int, int]:
    """Count the user's messages per hour of day, all 24 hours included."""
    hour = extract("hour", Message.created_at)
    rows = _user_messages(
        db.query(hour, func.count(Message.id)), user_id
    ).group_by(hour).all()

    counts = {h: 0 for h in range(HOURS_IN_DAY)}
    for h, count in rows:
        counts[int(h)] = int(count)
    return counts


def aggregate_metrics(db: Session, user_id: uuid.UUID) -> UsageMetrics:
    """
    Compute usage metrics for a user. Read-only.

    - ``message_count``: number of messages written by the user
    - ``avg_len``: mean content length in characters
    - ``exclam_avg``: mean number of ``!`` per message
    - ``top_hours``: up to three busiest hours, busiest first, ties going to
      the earlier hour; hours without messages are left out
    - ``quiet_start``: least busy hour, ties going to the earlier hour

    A user without messages gets zeros, no top hours and ``quiet_start`` 0.
    """
    length = func.length(Message.content)
    exclamations = length - func.length(func.replace(Message.content, "!", ""))

    message_count, avg_len, exclam_avg = _user_messages(
        db.query(
            func.count(Message.id),
            func.coalesce(func.avg(length), 0),
            func.coalesce(func.avg(exclamations), 0),
        ),
        user_id,
    ).one()

    counts = hourly_counts(db, user_id)
    ranked = sorted(
        (h for h, count in counts.items() if count > 0),
        key=lambda h: (-counts[h], h),
    )
    quiet_start = min(counts, key=lambda h: (counts[h], h))

    return UsageMetrics(
        message_count=int(message_count),
        avg_len=float(avg_len),
        exclam_avg=float(exclam_avg),
        top_hours=ranked[:TOP_HOURS],
        quiet_start=quiet_start,
    )
