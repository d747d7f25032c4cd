"""Sort display matches into the live board buckets."""

from collections.abc import Iterable
from typing import NamedTuple

from ..models.match import Bucket, DisplayMatch, MatchState


class Buckets(NamedTuple):
    called: tuple[DisplayMatch, ...]
    playing: tuple[DisplayMatch, ...]
    upcoming: tuple[DisplayMatch, ...]
    excluded: tuple[DisplayMatch, ...]


def classify(match: DisplayMatch) -> Bucket:
    """Pick the bucket for one match.

    Open and pending sets only count as upcoming when both sides can be
    named, at least as "Winner of A vs B". Ready (4) is deliberately left
    out: ready is not open yet.
    """
    if match.state == MatchState.CALLED:
        return Bucket.CALLED
    if match.state == MatchState.PLAYING:
        return Bucket.PLAYING
    if match.state in (MatchState.OPEN, MatchState.PENDING):
        if match.s1_info.is_deep_known and match.s2_info.is_deep_known:
            return Bucket.UPCOMING
    return Bucket.EXCLUDED


def partition(matches: Iterable[DisplayMatch]) -> Buckets:
    """Split matches into buckets, keeping the provider's call order"""
    grouped: dict[Bucket, list[DisplayMatch]] = {bucket: [] for bucket in Bucket}
    for match in matches:
        grouped[classify(match)].append(match)
    return Buckets(
        called=tuple(grouped[Bucket.CALLED]),
        playing=tuple(grouped[Bucket.PLAYING]),
        upcoming=tuple(grouped[Bucket.UPCOMING]),
        excluded=tuple(grouped[Bucket.EXCLUDED]),
    )
