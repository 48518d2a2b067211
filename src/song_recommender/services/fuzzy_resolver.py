"""Rank secondary-catalog candidates against a canonical track query.

Each candidate is scored with RapidFuzz's token-set ratio on its title and its
description, weighted 0.8 and 0.2. Candidates with equal scores keep their
original order, so the earliest one wins a tie.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, TypeVar

from rapidfuzz import fuzz, utils

from song_recommender.errors import NoMatchError

TITLE_WEIGHT = 0.8
DESCRIPTION_WEIGHT = 0.2


class MatchCandidate(Protocol):
    @property
    def title(self) -> str: ...

    @property
    def description(self) -> str: ...


CandidateT = TypeVar("CandidateT", bound=MatchCandidate)


@dataclass(slots=True, frozen=True)
class ScoredCandidate:
    candidate: MatchCandidate
    score: float
    position: int


def score_candidate(query: str, candidate: MatchCandidate) -> float:
    """Return the weighted similarity of ``candidate`` to ``query`` (0-100)."""

    title_score = fuzz.token_set_ratio(
        query, candidate.title or "", processor=utils.default_process
    )
    description_score = fuzz.token_set_ratio(
        query, candidate.description or "", processor=utils.default_process
    )
    return TITLE_WEIGHT * title_score + DESCRIPTION_WEIGHT * description_score


def rank_candidates(query: str, candidates: Sequence[MatchCandidate]) -> list[ScoredCandidate]:
    """Return every candidate with its score, best first."""

    scored = [
        ScoredCandidate(candidate=candidate, score=score_candidate(query, candidate), position=index)
        for index, candidate in enumerate(candidates)
    ]
    return sorted(scored, key=lambda item: (-item.score, item.position))


def best_match(query: str, candidates: Sequence[CandidateT]) -> CandidateT:
    """Return the highest scoring candidate or raise :class:`NoMatchError`."""

    ranked = rank_candidates(query, candidates)
    if not ranked:
        raise NoMatchError(f"No candidates available to match {query!r}")

    return ranked[0].candidate  # type: ignore[return-value]
