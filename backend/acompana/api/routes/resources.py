"""
Public crisis help resources.
"""

from typing import Optional

from fastapi import APIRouter

from acompana.schemas.crisis import HelpResources
from acompana.services.crisis import get_help_resources

router = APIRouter(prefix="/api", tags=["resources"])


@router.get("/help-resources", response_model=HelpResources)
def help_resources(region: Optional[str] = None):
    """Help lines for ``region``, or for the configured default region."""
    return get_help_resources(region)
