"""
Scoring package for personalized book ranking.

Provides the TF-IDF similarity engine, reason generation and diversity
re-ranking. Nothing here touches storage or the network, so it can be reused
by the web layer, batch jobs or tests directly.
"""

from .text import STOPWORDS, tokenize, strip_html
from .tfidf import (
    SparseVector,
    Vocabulary,
    build_vocabulary,
    compute_tfidf,
    cosine_similarity,
)
from .features import build_feature_string, build_user_profile
from .engine import (
    ScoredBook,
    ScoringOptions,
    apply_boosts,
    generate_reasons,
    score_books,
)
from .diversity import (
    DEFAULT_MMR_LAMBDA,
    apply_mmr,
    ensure_genre_diversity,
    pair_similarity,
)

__all__ = [
    "STOPWORDS",
    "tokenize",
    "strip_html",
    "SparseVector",
    "Vocabulary",
    "build_vocabulary",
    "compute_tfidf",
    "cosine_similarity",
    "build_feature_string",
    "build_user_profile",
    "ScoredBook",
    "ScoringOptions",
    "apply_boosts",
    "generate_reasons",
    "score_books",
    "DEFAULT_MMR_LAMBDA",
    "apply_mmr",
    "ensure_genre_diversity",
    "pair_similarity",
]
