"""
Marker lists used to guess the emotion of a reply.

A lexicon maps an emotion tag to the emoji and keywords that signal it.
Keywords are written without accents because matching happens on
normalized text. Stems such as ``preocup`` or ``deprim`` are intentional.
"""

import json
import logging
import os
from functools import lru_cache
from typing import Dict, List

logger = logging.getLogger(__name__)

Lexicon = Dict[str, List[str]]

EMOTION_LEXICON_PATH = os.getenv("EMOTION_LEXICON_PATH")

DEFAULT_LEXICON: Lexicon = {
    "feliz": [
        # emoji
        "😂", "🤣", "😊", "🙂", "😁", "😄", "😍", "❤", "✨", "🙌", "🎉",
        # keywords
        "me alegra", "felicidade", "excelente", "genial", "maravilloso",
        "que bien", "orgullo", "lograste", "me encanta", "bravo", "gracias",
    ],
    "triste": [
        "😞", "😔", "😢", "😭", "😓", "😩", "😡", "💔",
        "lo siento", "lamento", "triste", "dificil", "complicado", "preocup",
        "ansiedad", "deprim", "fracaso", "mal", "duro", "duele",
    ],
}


def load_lexicon(path: str) -> Lexicon:
    """
    Read a lexicon from a JSON file shaped like ``{"tag": ["marker", ...]}``.

    Raises:
        ValueError: If the file does not hold a mapping of string lists
    """
    with open(path, encoding="utf-8") as handle:
        raw = json.load(handle)

    if not isinstance(raw, dict) or not all(
        isinstance(markers, list) and all(isinstance(m, str) for m in markers)
        for markers in raw.values()
    ):
        raise ValueError(f"Lexicon at {path} must map tags to lists of strings")

    return {str(tag): list(markers) for tag, markers in raw.items()}


@lru_cache(maxsize=1)
def get_lexicon() -> Lexicon:
    """Return the configured lexicon, falling back to the built-in one."""
    if EMOTION_LEXICON_PATH:
        logger.info(f"Loading emotion lexicon from {EMOTION_LEXICON_PATH}")
        return load_lexicon(EMOTION_LEXICON_PATH)
    return DEFAULT_LEXICON
