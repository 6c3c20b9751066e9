"""
Graph expansion: turn a fetched feed into newly discovered identifiers.
"""

from profile_crawler.core.frontier import IdentifierSet
from profile_crawler.models import FetchResult
from profile_crawler.utils.handles import normalise_handle


def collect_actors(result: FetchResult) -> set[str]:
    """Every normalised identifier that liked or commented on an item."""
    actors: set[str] = set()
    for item in result.items:
        for raw in item.actors():
            handle = normalise_handle(raw)
            if handle:
                actors.add(handle)
    return actors


def expand(result: FetchResult, remaining_depth: int, identifiers: IdentifierSet) -> set[str]:
    """Return the actors of *result* that were never seen before.

    Each returned identifier has been recorded in *identifiers*; with no
    depth left nothing is discovered and the set is left untouched.
    """
    if remaining_depth <= 0:
        return set()
    return {h for h in collect_actors(result) if identifiers.mark_and_check(h)}
