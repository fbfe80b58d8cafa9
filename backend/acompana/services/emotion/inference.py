"""
Best-effort emotion inference over free text.

This is a keyword heuristic, not a sentiment model: it only looks for
substrings from a lexicon and will misfire on words that merely contain a
marker.
"""

import unicodedata
from typing import Optional

from acompana.services.emotion.lexicon import Lexicon, get_lexicon

FELIZ = "feliz"
TRISTE = "triste"
EMOTIONS = (FELIZ, TRISTE)


def normalize(text: str) -> str:
    """Lower-case ``text`` and strip diacritics (``Difícil`` -> ``dificil``)."""
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def infer_emotion(
    text: Optional[str],
    lexicon: Optional[Lexicon] = None,
    default: str = FELIZ,
) -> str:
    """
    Guess the emotion tag of ``text``.

    Returns the single tag whose markers appear in the text. When no tag
    matches, or more than one does, ``default`` is returned.
    """
    if not text:
        return default

    lexicon = lexicon if lexicon is not None else get_lexicon()
    normalized = normalize(text)

    hits = [
        tag
        for tag, markers in lexicon.items()
        if any(normalize(marker) in normalized for marker in markers)
    ]

    if len(hits) == 1:
        return hits[0]
    return default
