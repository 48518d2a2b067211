from dataclasses import dataclass

import pytest

from song_recommender.clients import VideoCandidate
from song_recommender.errors import NoMatchError
from song_recommender.services import best_match, rank_candidates, score_candidate

QUERY = "Harder Better Faster Stronger Daft Punk Discovery"


@dataclass(frozen=True)
class Listing:
    title: str
    description: str = ""


def test_best_match_prefers_exact_title_over_unrelated_video() -> None:
    unrelated = VideoCandidate(
        video_id="cat", title="Funny cats compilation 2019", description="cats being cats"
    )
    exact = VideoCandidate(
        video_id="gAjR4_CbPpQ",
        title="Daft Punk - Harder, Better, Faster, Stronger (Official Video)",
        description="Official video from the album Discovery",
    )

    assert best_match(QUERY, [unrelated, exact]) is exact


def test_best_match_is_deterministic() -> None:
    candidates = [
        Listing("Harder Better Faster Stronger live"),
        Listing("Stronger - Kanye West"),
        Listing("Discovery full album"),
    ]

    first = best_match(QUERY, candidates)
    second = best_match(QUERY, candidates)

    assert first is second


def test_best_match_breaks_ties_by_position() -> None:
    earlier = Listing("Daft Punk Discovery", "same")
    later = Listing("Daft Punk Discovery", "same")

    assert best_match(QUERY, [earlier, later]) is earlier
    assert best_match(QUERY, [later, earlier]) is later


def test_best_match_raises_on_empty_candidates() -> None:
    with pytest.raises(NoMatchError):
        best_match(QUERY, [])


def test_score_candidate_weights_title_over_description() -> None:
    title_hit = Listing(title=QUERY, description="")
    description_hit = Listing(title="", description=QUERY)

    assert score_candidate(QUERY, title_hit) == pytest.approx(80.0)
    assert score_candidate(QUERY, description_hit) == pytest.approx(20.0)


def test_rank_candidates_orders_by_score_then_position() -> None:
    candidates = [
        Listing("something else entirely"),
        Listing(QUERY),
        Listing("something else entirely"),
    ]

    ranked = rank_candidates(QUERY, candidates)

    assert [item.position for item in ranked] == [1, 0, 2]
    assert ranked[0].candidate is candidates[1]
