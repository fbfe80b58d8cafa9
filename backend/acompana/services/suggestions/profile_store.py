"""
Storage for user profiles and applied suggestions.

Profiles are written with ``INSERT ... ON CONFLICT (user_id)`` so the
uniqueness of one profile per user is enforced by the database.
"""

import logging
import uuid
from typing import Any, Dict, Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from acompana.core.exceptions import NotFoundError, StorageError
from acompana.db.models import UserProfile
from acompana.schemas.profile import ProfileIn, SuggestionSet
from acompana.utils.datetime_helper import utc_now

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "age",
    "occupation",
    "sleep_notes",
    "stressors",
    "goals",
    "boundaries",
    "data",
)


def dialect_insert(db: Session, model):
    """Return an ``insert`` supporting ``ON CONFLICT`` for the bound engine."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(model)
    if dialect == "sqlite":
        return sqlite.insert(model)
    raise StorageError(f"Upsert is not supported on {dialect}")


def execute_upsert(
    db: Session,
    model,
    user_id: uuid.UUID,
    values: Dict[str, Any],
    update_fields=None,
):
    """
    Insert ``values`` for ``user_id`` or update the existing row.

    ``update_fields`` selects the columns overwritten on conflict; with
    ``None`` an existing row is left untouched. ``updated_at`` is refreshed
    on every update.
    """
    now = utc_now()
    stmt = dialect_insert(db, model).values(
        user_id=user_id, created_at=now, updated_at=now, **values
    )

    if update_fields is None:
        stmt = stmt.on_conflict_do_nothing(index_elements=[model.user_id])
    else:
        set_ = {field: stmt.excluded[field] for field in update_fields}
        set_["updated_at"] = now
        stmt = stmt.on_conflict_do_update(index_elements=[model.user_id], set_=set_)

    try:
        db.execute(stmt)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error writing {model.__tablename__} for user {user_id}: {e}")
        raise StorageError(f"Could not save {model.__tablename__}") from e

    return db.query(model).filter(model.user_id == user_id).populate_existing().one()


def find_profile(db: Session, user_id: uuid.UUID) -> Optional[UserProfile]:
    return db.query(UserProfile).filter(UserProfile.user_id == user_id).first()


def get_profile(db: Session, user_id: uuid.UUID) -> UserProfile:
    """
    Return the user's profile.

    Raises:
        NotFoundError: If the user has no profile yet
    """
    profile = find_profile(db, user_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


def upsert_profile(
    db: Session, user_id: uuid.UUID, profile_in: ProfileIn
) -> UserProfile:
    """Write every profile field, creating the profile if needed."""
    values = profile_in.model_dump(include=set(PROFILE_FIELDS))
    return execute_upsert(db, UserProfile, user_id, values, PROFILE_FIELDS)


def create_initial_profile(
    db: Session, user_id: uuid.UUID, profile_in: ProfileIn
) -> UserProfile:
    """Create a profile at registration time; an existing one is kept."""
    values = profile_in.model_dump(include=set(PROFILE_FIELDS))
    return execute_upsert(db, UserProfile, user_id, values, update_fields=None)


def merge_suggestions(
    db: Session, user_id: uuid.UUID, suggestions: SuggestionSet
) -> UserProfile:
    """
    Shallow-merge suggestions into the profile's ``data`` mapping.

    Suggestion keys overwrite existing ones; other keys are kept. This is a
    read-modify-write without locking, so concurrent merges for the same
    user resolve as last-write-wins.
    """
    profile = find_profile(db, user_id)
    current = dict(profile.data or {}) if profile is not None else {}

    merged = {**current, **suggestions.model_dump(by_alias=True)}
    return execute_upsert(db, UserProfile, user_id, {"data": merged}, ("data",))
