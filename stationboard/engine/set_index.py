"""Per-cycle lookup table of sets by id."""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from ..models.match import MatchSnapshot

SetIndex = Mapping[str, MatchSnapshot]


def build_set_index(
    completed: Iterable[MatchSnapshot], active: Iterable[MatchSnapshot]
) -> SetIndex:
    """Map set id -> snapshot for one cycle.

    Completed sets go in first and active sets second, so when the same id
    shows up in both fetches the active snapshot wins. The index is built
    fresh every cycle and handed out read-only.
    """
    index: dict[str, MatchSnapshot] = {}
    for snapshot in completed:
        index[snapshot.id] = snapshot
    for snapshot in active:
        index[snapshot.id] = snapshot
    return MappingProxyType(index)
