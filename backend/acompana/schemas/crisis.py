from typing import List

from pydantic import BaseModel


class HelpResource(BaseModel):
    name: str
    contact: str
    hours: str


class HelpResources(BaseModel):
    """Regional help lines attached to replies flagged as crisis."""

    country: str
    disclaimer: str
    items: List[HelpResource]
    sources: List[str]
