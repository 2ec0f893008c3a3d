"""
TF-IDF primitives: vocabulary, sparse vectors and cosine similarity.

A ``Vocabulary`` is built for exactly one scoring call from that call's corpus
(the user profile document followed by one document per candidate) and is
never reused. Vectors are plain ``dict`` objects mapping term to weight.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Sequence

from .text import tokenize

SparseVector = Dict[str, float]


@dataclass(slots=True)
class Vocabulary:
    """Smoothed inverse document frequencies for one corpus."""

    idf: Dict[str, float] = field(default_factory=dict)
    document_count: int = 0

    def get(self, term: str) -> float:
        return self.idf.get(term, 0.0)

    def __len__(self) -> int:
        return len(self.idf)


def build_vocabulary(corpus: Sequence[str]) -> Vocabulary:
    """Compute ``ln((N+1)/(df+1)) + 1`` for every term in the corpus.

    Each document contributes at most once to a term's document frequency.
    """
    doc_freq: Counter = Counter()
    for document in corpus:
        doc_freq.update(set(tokenize(document)))

    n_docs = len(corpus)
    idf = {
        term: math.log((n_docs + 1) / (df + 1)) + 1
        for term, df in doc_freq.items()
    }
    return Vocabulary(idf=idf, document_count=n_docs)


def compute_tfidf(text: str, vocab: Vocabulary) -> SparseVector:
    """Vectorize a document with max-normalized TF times IDF.

    Terms whose IDF is not above 1 occur in every document of the corpus and
    carry no signal; they are left out of the vector.
    """
    tokens = tokenize(text)
    if not tokens:
        return {}

    counts = Counter(tokens)
    max_tf = max(counts.values())

    vector: SparseVector = {}
    for term, count in counts.items():
        idf = vocab.get(term)
        if idf > 1:
            vector[term] = (count / max_tf) * idf
    return vector


def vector_norm(vector: SparseVector) -> float:
    return math.sqrt(sum(weight * weight for weight in vector.values()))


def cosine_similarity(a: SparseVector, b: SparseVector) -> float:
    """Cosine of the angle between two sparse vectors; 0 if either is empty."""
    if len(a) > len(b):
        a, b = b, a
    dot = sum(weight * b[term] for term, weight in a.items() if term in b)
    denom = vector_norm(a) * vector_norm(b)
    return 0.0 if denom == 0 else dot / denom

