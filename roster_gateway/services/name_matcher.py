# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Resolve a typed login name to one roster member.

Tiers are tried in order over the whole roster and the first tier with a
hit wins; inside a tier, roster order decides:

    exact ─► prefix ("Joh" → "John Smith") ─► word subset ("Smith John")
"""

from typing import Iterable, Sequence

from roster_gateway.models.domain import MatchResult, MatchTier, Member, NO_MATCH
from roster_gateway.services.normalizer import normalize_strict


def _exact(query: str, name: str) -> bool:
    return name == query


def _prefix(query: str, name: str) -> bool:
    return name.startswith(query)


def _word_subset(query: str, name: str) -> bool:
    return all(token in name for token in query.split())


TIERS = (
    (MatchTier.EXACT, _exact),
    (MatchTier.PREFIX, _prefix),
    (MatchTier.WORD_SUBSET, _word_subset),
)


def resolve(username, roster: Sequence[Member]) -> MatchResult:
    """Pick the member a login name refers to, or ``NO_MATCH``."""
    query = normalize_strict(username)
    if not query:
        # an empty query would prefix-match everyone
        return NO_MATCH

    candidates = [(m, normalize_strict(m.name)) for m in roster]
    candidates = [(m, name) for m, name in candidates if name]

    for tier, predicate in TIERS:
        for member, name in candidates:
            if predicate(query, name):
                return MatchResult(member=member, tier=tier)
    return NO_MATCH


def filter_by_name(query, roster: Iterable[Member]) -> list[Member]:
    """All members whose name contains every word of ``query``; blank query keeps all."""
    normalized = normalize_strict(query)
    if not normalized:
        return list(roster)
    return [m for m in roster if _word_subset(normalized, normalize_strict(m.name))]
