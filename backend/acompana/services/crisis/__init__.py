from acompana.services.crisis.directory import (
    CRISIS_REGION,
    DEFAULT_REGION,
    HELP_RESOURCES,
    get_help_resources,
    resolve_region,
)

__all__ = [
    "CRISIS_REGION",
    "DEFAULT_REGION",
    "HELP_RESOURCES",
    "get_help_resources",
    "resolve_region",
]
