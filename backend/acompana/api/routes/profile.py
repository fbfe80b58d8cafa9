"""
User profile, suggestion and history endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from acompana.db.session import get_db
from acompana.db.models import User
from acompana.dependencies import get_current_user
from acompana.schemas.profile import (
    ApplySuggestionsResponse,
    HistoryResponse,
    HistorySummaryRequest,
    ProfileIn,
    ProfileResponse,
    SuggestionsPreview,
)
from acompana.services.suggestions import (
    get_profile,
    merge_suggestions,
    suggest_for_user,
    upsert_profile,
)
from acompana.services.users import save_history_summary

router = APIRouter(prefix="/api/user", tags=["profile"])


@router.get("/profile", response_model=ProfileResponse)
def read_profile(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Return the current user's profile, 404 if none was saved yet."""
    return get_profile(db, user.id)


@router.put("/profile", response_model=ProfileResponse)
def write_profile(
    payload: ProfileIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create or fully replace the current user's profile."""
    return upsert_profile(db, user.id, payload)


@router.get("/profile/suggestions", response_model=SuggestionsPreview)
def preview_suggestions(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Suggested settings derived from message history, without saving them."""
    suggestions, metrics = suggest_for_user(db, user.id)
    return SuggestionsPreview(suggestions=suggestions, metrics=metrics)


@router.post("/profile/apply-suggestions", response_model=ApplySuggestionsResponse)
def apply_suggestions(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Recompute suggestions and merge them into the profile's data."""
    suggestions, _ = suggest_for_user(db, user.id)
    profile = merge_suggestions(db, user.id, suggestions)
    return ApplySuggestionsResponse(
        profile=ProfileResponse.model_validate(profile), suggestions=suggestions
    )


@router.post("/history/summarize", response_model=HistoryResponse)
def summarize_history(
    payload: HistorySummaryRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Store a free-form summary of the user's history."""
    return save_history_summary(db, user.id, payload.text)
