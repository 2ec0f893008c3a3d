"""
Text normalization for the scoring engine.

Tokens are lowercase ASCII alphanumerics longer than two characters that are
not in the stopword list. The list includes generic book-domain words
("book", "novel", "story", ...) that would otherwise match every candidate.
"""

import re
from typing import List

STOPWORDS = frozenset([
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "is", "it", "this", "that", "was", "are",
    "be", "has", "had", "have", "will", "would", "could", "should", "can",
    "not", "no", "so", "if", "as", "its", "they", "them", "their", "we",
    "our", "been", "being", "do", "does", "did", "about", "into", "over",
    "after", "before", "between", "under", "above", "than", "more", "most",
    "very", "just", "also", "then", "when", "where", "which", "who", "whom",
    "what", "how", "all", "each", "every", "both", "few", "some", "any",
    "other", "such", "only", "own", "same", "too", "out", "up", "new",
    "now", "way", "may", "even", "back", "well", "still", "one", "two",
    "first", "last", "long", "great", "little", "right", "old", "big",
    "high", "different", "small", "large", "next", "early", "young",
    "important", "world", "through", "while", "she", "her", "his", "him",
    "man", "woman", "find", "here", "thing", "many", "those", "much",
    "must", "life", "story", "book", "novel", "read", "reading",
    "available", "description", "discover", "journey",
])

MIN_TOKEN_LENGTH = 3

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")
_HTML_TAG_RE = re.compile(r"<[^>]*>")


def tokenize(text: str) -> List[str]:
    """Split text into normalized, stopword-filtered tokens."""
    if not text:
        return []
    cleaned = _NON_ALNUM_RE.sub(" ", text.lower())
    return [
        token for token in cleaned.split()
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOPWORDS
    ]


def strip_html(text: str) -> str:
    """Remove HTML tags, leaving the inner text in place."""
    return _HTML_TAG_RE.sub("", text or "")
