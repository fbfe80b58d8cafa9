"""
Free-form per-user history summaries.
"""

import uuid
from typing import Optional

from sqlalchemy.orm import Session

from acompana.db.models import UserHistory
from acompana.services.suggestions.profile_store import execute_upsert


def save_history_summary(
    db: Session, user_id: uuid.UUID, text: Optional[str]
) -> UserHistory:
    """Create or replace the user's history summary."""
    return execute_upsert(db, UserHistory, user_id, {"summary": text}, ("summary",))
