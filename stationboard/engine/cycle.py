"""One fetch-resolve-classify pass, producing an immutable BoardCycle."""

import time

from ..models.match import BoardCycle, DisplayMatch, MatchSnapshot, RawSnapshot
from .classifier import partition
from .occupancy import station_occupancy
from .resolver import resolve_slot
from .set_index import SetIndex, build_set_index

DEFAULT_POOL = "Bracket"


def build_display_match(snapshot: MatchSnapshot, index: SetIndex) -> DisplayMatch:
    """Resolve both slots of an active set and flatten it for display"""
    s1 = resolve_slot(snapshot.slots[0], index)
    s2 = resolve_slot(snapshot.slots[1], index)
    pool = snapshot.pool or DEFAULT_POOL
    station = snapshot.station

    return DisplayMatch(
        id=snapshot.id,
        p1=s1.text,
        p2=s2.text,
        s1_info=s1,
        s2_info=s2,
        round=f"{pool}: {snapshot.round_text}" if snapshot.round_text else pool,
        station=station.number if station else None,
        is_stream=station.is_stream if station else False,
        started_at=snapshot.started_at,
        state=snapshot.state,
    )


def build_cycle(raw: RawSnapshot, fetched_at: float | None = None) -> BoardCycle:
    """Build everything the renderer needs from one raw snapshot.

    Runs in a single synchronous pass; callers publish the returned cycle
    by replacing their reference to the previous one.
    """
    index = build_set_index(raw.completed, raw.active)
    matches = tuple(build_display_match(snapshot, index) for snapshot in raw.active)
    buckets = partition(matches)

    return BoardCycle(
        event_name=raw.event_name,
        tournament_name=raw.tournament_name,
        logo_url=raw.logo_url,
        matches=matches,
        called=buckets.called,
        playing=buckets.playing,
        upcoming=buckets.upcoming,
        occupancy=station_occupancy(buckets.playing, buckets.called),
        fetched_at=time.time() if fetched_at is None else fetched_at,
    )
