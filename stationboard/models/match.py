"""Match data model: provider snapshots and the per-cycle display types."""

from enum import Enum, IntEnum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class FrozenModel(BaseModel):
    """Immutable model shared by every per-cycle engine type"""

    model_config = ConfigDict(frozen=True)


class MatchState(IntEnum):
    """Match state enum based on start.gg API values"""

    OPEN = 1  # Not started
    PLAYING = 2  # In progress
    COMPLETED = 3
    READY = 4
    PENDING = 5  # Waiting on a prerequisite set
    CALLED = 6  # Assigned to a station, players not confirmed yet


ACTIVE_STATES: tuple[int, ...] = (
    MatchState.OPEN,
    MatchState.PLAYING,
    MatchState.READY,
    MatchState.PENDING,
    MatchState.CALLED,
)
COMPLETED_STATES: tuple[int, ...] = (MatchState.COMPLETED,)


class EntrantSlot(FrozenModel):
    """Slot already holding a concrete entrant"""

    kind: Literal["entrant"] = "entrant"
    name: str


class PrereqSlot(FrozenModel):
    """Slot fed by the winner (placement 1) or loser (placement 2) of another set"""

    kind: Literal["prereq"] = "prereq"
    prereq_id: str
    placement: int | None = None


class EmptySlot(FrozenModel):
    """Slot with neither an entrant nor a known prerequisite"""

    kind: Literal["empty"] = "empty"


MatchSlot = Annotated[
    Union[EntrantSlot, PrereqSlot, EmptySlot], Field(discriminator="kind")
]


def make_slot(
    entrant_name: str | None = None,
    prereq_id: str | int | None = None,
    placement: int | None = None,
) -> EntrantSlot | PrereqSlot | EmptySlot:
    """Pick the slot variant from the optional provider fields"""
    if entrant_name:
        return EntrantSlot(name=entrant_name)
    if prereq_id is not None and str(prereq_id) != "":
        return PrereqSlot(prereq_id=str(prereq_id), placement=placement)
    return EmptySlot()


class StationAssignment(FrozenModel):
    """Where a set is being played: a physical setup or a stream"""

    number: str
    is_stream: bool = False
    stream_name: str | None = None


class MatchSnapshot(FrozenModel):
    """One set as reported by a single fetch"""

    id: str
    slots: tuple[MatchSlot, MatchSlot]
    state: int
    started_at: int | None = None
    station: StationAssignment | None = None
    round_text: str | None = None
    pool: str | None = None

    def slot_name(self, position: int) -> str | None:
        """Entrant name in the given slot, if one is known"""
        slot = self.slots[position]
        if isinstance(slot, EntrantSlot):
            return slot.name
        return None


class RawSnapshot(FrozenModel):
    """Everything one fetch returns, before resolution"""

    event_name: str
    tournament_name: str
    logo_url: str | None = None
    active: tuple[MatchSnapshot, ...] = ()
    completed: tuple[MatchSnapshot, ...] = ()


class ResolvedSlotInfo(FrozenModel):
    """Display text for a slot and how much we know about who fills it"""

    text: str
    is_known: bool
    is_deep_known: bool


class Bucket(str, Enum):
    """Live display categories, mutually exclusive"""

    CALLED = "called"
    PLAYING = "playing"
    UPCOMING = "upcoming"
    EXCLUDED = "excluded"


class DisplayMatch(FrozenModel):
    """A set resolved for display in the current cycle"""

    id: str
    p1: str
    p2: str
    s1_info: ResolvedSlotInfo
    s2_info: ResolvedSlotInfo
    round: str
    station: str | None = None
    is_stream: bool = False
    started_at: int | None = None
    state: int

    @property
    def station_label(self) -> str:
        if self.station is None:
            return "-"
        return f"S{self.station}" if self.is_stream else self.station


class StationOccupancy(FrozenModel):
    """Station ids currently playing and currently called"""

    playing: frozenset[str] = frozenset()
    called: frozenset[str] = frozenset()

    def status_for(self, station_id: str) -> str:
        """Playing wins over called when a station is somehow in both"""
        if station_id in self.playing:
            return "playing"
        if station_id in self.called:
            return "called"
        return "idle"

    def unmapped(self, known_ids: set[str] | frozenset[str]) -> list[str]:
        """Occupied station ids that the venue layout does not know about"""
        return sorted((self.playing | self.called) - set(known_ids))


class BoardCycle(FrozenModel):
    """The immutable result of one fetch-resolve-classify pass"""

    event_name: str
    tournament_name: str
    logo_url: str | None = None
    matches: tuple[DisplayMatch, ...] = ()
    called: tuple[DisplayMatch, ...] = ()
    playing: tuple[DisplayMatch, ...] = ()
    upcoming: tuple[DisplayMatch, ...] = ()
    occupancy: StationOccupancy = StationOccupancy()
    fetched_at: float = 0.0

    @property
    def title(self) -> str:
        return f"{self.tournament_name} - {self.event_name}"
