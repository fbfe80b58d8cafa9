"""
Static directory of regional help lines.

Returned alongside a reply whenever the responder flags a crisis. The data
is read-only; add a region by adding an entry to ``HELP_RESOURCES``.
"""

import logging
import os
from typing import Dict, Optional

from acompana.core.exceptions import NotFoundError
from acompana.schemas.crisis import HelpResource, HelpResources

logger = logging.getLogger(__name__)

DEFAULT_REGION = "CO"

HELP_RESOURCES: Dict[str, HelpResources] = {
    "CO": HelpResources(
        country="CO",
        disclaimer=(
            "Si estás en peligro inmediato, llama a emergencias locales. "
            "Estos recursos son confidenciales y gratuitos según el operador indicado."
        ),
        items=[
            HelpResource(
                name="Línea de la Vida (nacional)",
                contact="(605) 339 9999",
                hours="24/7",
            ),
            HelpResource(
                name="Línea de Salud Mental Distrital (Barranquilla)",
                contact="315 300 2003",
                hours="24/7",
            ),
            HelpResource(
                name="Línea Charlemos (WhatsApp)",
                contact="318 804 4000",
                hours="24/7",
            ),
            HelpResource(
                name="Línea 106 Bogotá (y WhatsApp)",
                contact="106 / 300 754 8933",
                hours="24/7",
            ),
            HelpResource(
                name="Línea Púrpura (violencia contra mujeres)",
                contact="018000 112 137 / WhatsApp 300 755 1846 / ipurpura@sdmujer.gov.co",
                hours="24/7",
            ),
            HelpResource(
                name="Línea Psicoactiva (Bogotá) – Prevención consumo de SPA",
                contact="01 8000 112 439",
                hours="Horarios institucionales",
            ),
            HelpResource(
                name="Línea de Apoyo Emocional (Policía Nacional)",
                contact="018000-910588 (Subsistema de Salud)",
                hours="24/7",
            ),
            HelpResource(
                name="Meta – Línea Amiga",
                contact="312 575 1135",
                hours="Todos los días, 9 a.m. – 9 p.m.",
            ),
        ],
        sources=[
            "iasp.info",
            "Ministerio de Salud",
            "Bogotá.gov.co",
            "Policía Nacional de Colombia",
        ],
    ),
}


def resolve_region(code: Optional[str]) -> str:
    """Return ``code`` if the directory covers it, else ``DEFAULT_REGION``."""
    code = (code or DEFAULT_REGION).upper()
    if code not in HELP_RESOURCES:
        logger.warning(
            f"No help resources for region {code}, using {DEFAULT_REGION}"
        )
        return DEFAULT_REGION
    return code


# Region used for crisis replies; always one the directory covers
CRISIS_REGION = resolve_region(os.getenv("CRISIS_REGION"))


def get_help_resources(region: Optional[str] = None) -> HelpResources:
    """
    Look up the help resources for ``region`` (default: ``CRISIS_REGION``).

    Raises:
        NotFoundError: If no resources are registered for the region
    """
    code = (region or CRISIS_REGION).upper()
    resources = HELP_RESOURCES.get(code)
    if resources is None:
        raise NotFoundError(f"No help resources for region {code}")
    # Hand out a copy so callers cannot mutate the shared table
    return resources.model_copy(deep=True)
