"""
Pydantic models for user profiles, usage metrics and suggestions.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class ProfileIn(BaseModel):
    """Full profile write. Omitted fields are written as null."""

    age: Optional[int] = None
    occupation: Optional[str] = None
    sleep_notes: Optional[str] = None
    stressors: Optional[str] = None
    goals: Optional[str] = None
    boundaries: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("age", mode="before")
    @classmethod
    def blank_age_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("data", mode="before")
    @classmethod
    def null_data_is_empty(cls, value):
        return {} if value is None else value


class ProfileResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    age: Optional[int] = None
    occupation: Optional[str] = None
    sleep_notes: Optional[str] = None
    stressors: Optional[str] = None
    goals: Optional[str] = None
    boundaries: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    @field_validator("data", mode="before")
    @classmethod
    def null_data_is_empty(cls, value):
        return {} if value is None else value


class UsageMetrics(BaseModel):
    """Statistics over every message a user has written."""

    message_count: int = 0
    avg_len: float = 0.0
    exclam_avg: float = 0.0
    top_hours: List[int] = Field(default_factory=list)
    quiet_start: int = 0


class QuietHours(BaseModel):
    start: int = Field(ge=0, le=23)
    duration: int = 6


class SuggestionSet(BaseModel):
    """
    Behavioral configuration derived from usage metrics.

    Serialized with camelCase keys, which are also the keys merged into
    ``UserProfile.data`` when the suggestions are applied.
    """

    response_length: Literal["short", "medium", "long"] = Field(
        alias="responseLength"
    )
    tone: Literal["casual", "neutral", "formal"]
    top_hours: List[int] = Field(alias="topHours", default_factory=list)
    quiet_hours: QuietHours = Field(alias="quietHours")
    typing_indicators: bool = Field(alias="typingIndicators", default=True)

    class Config:
        populate_by_name = True


class SuggestionsPreview(BaseModel):
    suggestions: SuggestionSet
    metrics: UsageMetrics


class ApplySuggestionsResponse(BaseModel):
    profile: ProfileResponse
    suggestions: SuggestionSet


class HistorySummaryRequest(BaseModel):
    text: Optional[str] = None


class HistoryResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    summary: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
