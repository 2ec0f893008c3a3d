"""
Re-ranking passes that trade relevance for variety.

``apply_mmr`` approximates the similarity between two candidates from their
genre overlap and authorship rather than their TF-IDF vectors; rankings depend
on that approximation, so it must not be swapped for vector similarity.
"""

from typing import List, Sequence, Set

from .engine import ScoredBook

DEFAULT_MMR_LAMBDA = 0.7
SAME_AUTHOR_SIMILARITY = 0.5


def pair_similarity(a: ScoredBook, b: ScoredBook) -> float:
    """Genre-overlap ratio plus a flat bonus for a shared author."""
    genres_b = set(b.book.genre)
    overlap = sum(1 for genre in a.book.genre if genre in genres_b)
    ratio = overlap / max(len(a.book.genre), len(b.book.genre), 1)
    author_bonus = SAME_AUTHOR_SIMILARITY if a.book.author == b.book.author else 0.0
    return ratio + author_bonus


def apply_mmr(
    scored: Sequence[ScoredBook],
    count: int,
    lambda_: float = DEFAULT_MMR_LAMBDA,
) -> List[ScoredBook]:
    """Greedy Maximal Marginal Relevance selection of ``count`` items."""
    if len(scored) <= count:
        return list(scored)
    if count <= 0:
        return []

    remaining = list(scored)
    best_first = max(range(len(remaining)), key=lambda idx: (remaining[idx].final_score, -idx))
    selected = [remaining.pop(best_first)]

    while len(selected) < count and remaining:
        best_idx = 0
        best_mmr = float("-inf")
        for idx, candidate in enumerate(remaining):
            max_sim = max(pair_similarity(candidate, chosen) for chosen in selected)
            mmr_score = lambda_ * candidate.final_score - (1 - lambda_) * max_sim
            if mmr_score > best_mmr:
                best_mmr = mmr_score
                best_idx = idx
        selected.append(remaining.pop(best_idx))

    return selected


def ensure_genre_diversity(scored: Sequence[ScoredBook], min_genres: int) -> List[ScoredBook]:
    """Front-load items that introduce new genres until ``min_genres`` are covered.

    The first pass keeps input order among the items it promotes; the second
    pass appends every other item in its original order.
    """
    if not scored:
        return []

    selected: List[ScoredBook] = []
    selected_ids: Set[int] = set()
    genres_seen: Set[str] = set()

    for item in scored:
        if len(genres_seen) >= min_genres:
            break
        if any(genre not in genres_seen for genre in item.book.genre):
            selected.append(item)
            selected_ids.add(id(item))
            genres_seen.update(item.book.genre)

    selected.extend(item for item in scored if id(item) not in selected_ids)
    return selected
