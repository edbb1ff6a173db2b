"""Text normalization and word-set similarity"""

import re
import string
from typing import Dict, Set

# Applied in insertion order; later entries see text already rewritten by earlier ones
CONTRACTIONS: Dict[str, str] = {
    "don't": "do not",
    "won't": "will not",
    "can't": "cannot",
    "i'm": "i am",
    "you're": "you are",
    "it's": "it is",
    "we're": "we are",
    "they're": "they are",
    "isn't": "is not",
    "aren't": "are not",
    "wasn't": "was not",
    "weren't": "were not",
    "haven't": "have not",
    "hasn't": "has not",
    "hadn't": "had not",
    "doesn't": "does not",
    "didn't": "did not",
}

_WHITESPACE = re.compile(r"\s+")


class TextNormalizer:
    """Lowercase, collapse whitespace and expand contractions"""
    
    def __init__(self, contractions: Dict[str, str] = None):
        self.contractions = dict(contractions if contractions is not None else CONTRACTIONS)
    
    def normalize(self, text: str) -> str:
        """Return the normalized form of text"""
        text = text.lower()
        text = _WHITESPACE.sub(" ", text).strip()
        return self.expand_contractions(text)
    
    def expand_contractions(self, text: str) -> str:
        for contraction, expansion in self.contractions.items():
            text = text.replace(contraction, expansion)
        return text


def word_set(text: str) -> Set[str]:
    """Lowercased whitespace tokens with surrounding punctuation removed"""
    words = set()
    for token in text.lower().split():
        token = token.strip(string.punctuation)
        if token:
            words.add(token)
    return words


def jaccard_similarity(text1: str, text2: str) -> float:
    """Intersection over union of the two word sets, 0.0 when both are empty"""
    words1 = word_set(text1)
    words2 = word_set(text2)
    union = words1 | words2
    if not union:
        return 0.0
    return len(words1 & words2) / len(union)
