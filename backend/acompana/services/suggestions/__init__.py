"""
Suggestion derivation: usage metrics -> behavioral settings -> profile.
"""

from acompana.services.suggestions.classifier import classify, suggest_for_user
from acompana.services.suggestions.metrics import aggregate_metrics
from acompana.services.suggestions.profile_store import (
    create_initial_profile,
    get_profile,
    merge_suggestions,
    upsert_profile,
)

__all__ = [
    "aggregate_metrics",
    "classify",
    "suggest_for_user",
    "create_initial_profile",
    "get_profile",
    "merge_suggestions",
    "upsert_profile",
]
