"""Which stations are busy, for highlighting on the venue map."""

from collections.abc import Iterable

from ..models.match import DisplayMatch, StationOccupancy


def station_occupancy(
    playing: Iterable[DisplayMatch], called: Iterable[DisplayMatch]
) -> StationOccupancy:
    # Sets without a station contribute nothing
    return StationOccupancy(
        playing=frozenset(m.station for m in playing if m.station is not None),
        called=frozenset(m.station for m in called if m.station is not None),
    )
