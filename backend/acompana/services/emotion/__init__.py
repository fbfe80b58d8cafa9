"""
Emotion tagging for bot replies.
"""

from acompana.services.emotion.inference import EMOTIONS, infer_emotion, normalize
from acompana.services.emotion.lexicon import DEFAULT_LEXICON, get_lexicon, load_lexicon

__all__ = [
    "EMOTIONS",
    "infer_emotion",
    "normalize",
    "DEFAULT_LEXICON",
    "get_lexicon",
    "load_lexicon",
]
