"""
Tests for feature documents, the scoring pipeline, boosts and reasons.
"""

import pytest

from recommendation_service.models import ReasonType
from recommendation_service.scoring import (
    ScoringOptions,
    apply_boosts,
    build_feature_string,
    build_user_profile,
    generate_reasons,
    score_books,
    tokenize,
)
from conftest import make_book


def _fantasy_liked():
    return [
        make_book("l1", title="Dragon Crown", author="Mira Vale", genre=["Fantasy"],
                  mood=["Magical", "Epic"], description="Dragons and wizards battle for an ancient throne."),
        make_book("l2", title="Wizard Tower", author="Oren Pike", genre=["Fantasy", "Adventure"],
                  mood=["Magical"], description="A young wizard climbs the enchanted tower of dragons."),
    ]


class TestScoreBooks:
    """Ranking behavior of score_books."""

    def test_empty_inputs_return_empty(self):
        liked = _fantasy_liked()
        assert score_books([], liked) == []
        assert score_books([make_book("c1", genre=["Fantasy"])], []) == []

    def test_everything_excluded_returns_empty(self):
        candidates = [make_book("c1", genre=["Fantasy"]), make_book("c2", genre=["Romance"])]
        options = ScoringOptions(exclude_ids={"c1", "c2"})
        assert score_books(candidates, _fantasy_liked(), options) == []

    def test_excluded_ids_never_returned(self):
        candidates = [make_book("c1", genre=["Fantasy"]), make_book("c2", genre=["Fantasy"])]
        scored = score_books(candidates, _fantasy_liked(), ScoringOptions(exclude_ids={"c1"}))
        assert [item.book.id for item in scored] == ["c2"]

    def test_fantasy_ranks_above_romance_for_fantasy_reader(self):
        fantasy = make_book("c-fantasy", title="Ember Wizard", author="Lio Marsh", genre=["Fantasy"],
                            mood=["Magical"], description="Dragons return to the wizard kingdom.")
        romance = make_book("c-romance", title="Summer Vows", author="Ada Bell", genre=["Romance"],
                            mood=["Romantic"], description="Two rivals plan a seaside wedding.")

        scored = score_books([romance, fantasy], _fantasy_liked())

        assert scored[0].book.id == "c-fantasy"
        assert scored[0].score > scored[1].score
        assert scored[1].score == 0.0

    def test_results_sorted_descending_and_final_score_equals_score(self):
        candidates = [
            make_book("a", genre=["Romance"]),
            make_book("b", genre=["Fantasy"], mood=["Magical"]),
            make_book("c", genre=["Fantasy", "Adventure"], mood=["Epic"]),
        ]
        scored = score_books(candidates, _fantasy_liked())

        finals = [item.final_score for item in scored]
        assert finals == sorted(finals, reverse=True)
        assert all(item.final_score == item.score for item in scored)

    def test_ties_keep_candidate_order(self):
        candidates = [make_book(f"r{i}", genre=["Romance"]) for i in range(4)]
        scored = score_books(candidates, _fantasy_liked())
        assert [item.book.id for item in scored] == ["r0", "r1", "r2", "r3"]

    def test_every_result_has_one_to_three_reasons(self, sample_books):
        liked = sample_books[:3]
        scored = score_books(sample_books[3:], liked)

        assert len(scored) == len(sample_books) - 3
        for item in scored:
            assert 1 <= len(item.reasons) <= 3


class TestBoosts:
    """Popularity and quality multipliers."""

    def test_quality_boost_applies_from_four_stars(self):
        options = ScoringOptions()
        assert apply_boosts(1.0, make_book("x", rating=4.5), options) == pytest.approx(1.05)
        assert apply_boosts(1.0, make_book("x", rating=3.9), options) == pytest.approx(1.0)

    def test_popularity_boost_uses_log_of_readers(self):
        book = make_book("x", rating=3.0, readers=999)
        assert apply_boosts(1.0, book, ScoringOptions()) == pytest.approx(1.09)

    def test_popularity_boost_can_be_disabled(self):
        book = make_book("x", rating=3.0, readers=999)
        assert apply_boosts(1.0, book, ScoringOptions(community_boost=False)) == pytest.approx(1.0)

    def test_zero_readers_do_not_boost(self):
        book = make_book("x", rating=3.0, readers=0)
        assert apply_boosts(2.0, book, ScoringOptions()) == pytest.approx(2.0)


class TestReasons:
    """Reason generation is independent of the score."""

    def test_fallback_is_single_similar_reason(self):
        reasons = generate_reasons(make_book("x", genre=["Poetry"], rating=3.0), _fantasy_liked())
        assert len(reasons) == 1
        assert reasons[0].type == ReasonType.SIMILAR

    def test_reasons_follow_priority_order_and_cap_at_three(self):
        book = make_book("x", author="Mira Vale", genre=["Fantasy"], mood=["Epic"],
                         rating=4.6, readers=50000)
        reasons = generate_reasons(book, _fantasy_liked())

        assert [reason.type for reason in reasons] == [ReasonType.GENRE, ReasonType.AUTHOR, ReasonType.MOOD]

    def test_genre_reason_prefers_most_liked_genre(self):
        book = make_book("x", genre=["Adventure", "Fantasy"])
        reasons = generate_reasons(book, _fantasy_liked())
        assert reasons[0].description == "Matches your favorite genre: Fantasy"

    def test_community_and_rating_reasons(self):
        book = make_book("x", genre=["Poetry"], rating=4.5, readers=1500)
        reasons = generate_reasons(book, _fantasy_liked())

        assert [reason.type for reason in reasons] == [ReasonType.COMMUNITY, ReasonType.RATING]
        assert reasons[0].description == "Popular with 2k readers"
        assert reasons[1].description == "Highly rated (4.5/5)"

    def test_community_reason_needs_more_than_a_thousand_readers(self):
        book = make_book("x", genre=["Poetry"], rating=3.0, readers=1000)
        reasons = generate_reasons(book, _fantasy_liked())
        assert reasons[0].type == ReasonType.SIMILAR


class TestFeatureDocuments:
    """Weighted feature strings and user profiles."""

    def test_genres_weighted_three_times_and_moods_twice(self):
        book = make_book("x", title="Dune", author="Frank Herbert", genre=["Science Fiction"],
                         mood=["Epic"], description="<p>A desert planet saga</p>")
        features = build_feature_string(book)
        tokens = tokenize(features)

        assert features == features.lower()
        assert "<p>" not in features
        assert tokens.count("science") == 3
        assert tokens.count("epic") == 2
        assert tokens.count("desert") == 1

    def test_subjects_and_description_are_truncated(self):
        book = make_book(
            "x",
            subjects=[f"subj{i}" for i in range(20)],
            description=" ".join(f"word{i}" for i in range(60)),
        )
        tokens = tokenize(build_feature_string(book))

        assert "subj14" in tokens
        assert "subj15" not in tokens
        assert "word39" in tokens
        assert "word40" not in tokens

    def test_short_description_words_are_skipped(self):
        book = make_book("x", description="elf orc dwarf")
        tokens = tokenize(build_feature_string(book))
        assert tokens == ["dwarf"]

    def test_user_profile_weights_recent_likes(self):
        liked = [make_book(f"b{i}", title=f"Title{i:02d}") for i in range(12)]
        tokens = tokenize(build_user_profile(liked))

        assert tokens.count("title11") == 3
        assert tokens.count("title07") == 3
        assert tokens.count("title06") == 2
        assert tokens.count("title02") == 2
        assert tokens.count("title01") == 1
        assert tokens.count("title00") == 1

    def test_empty_profile(self):
        assert build_user_profile([]) == ""
