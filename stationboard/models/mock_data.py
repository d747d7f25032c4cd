"""Mock tournament data for testing and demo purposes."""

from .match import (
    EmptySlot,
    EntrantSlot,
    MatchSnapshot,
    MatchState,
    PrereqSlot,
    RawSnapshot,
    StationAssignment,
)

# Fixed timestamp for consistent testing: Jan 1, 2022 00:00:00 UTC
MOCK_BASE_TIME = 1640995200


def build_mock_snapshot(base_time: int = MOCK_BASE_TIME) -> RawSnapshot:
    """A snapshot that lands at least one set in every bucket.

    Start times are offsets from ``base_time`` so demo mode can pass the
    current time and get sensible durations.
    """
    completed = (
        MatchSnapshot(
            id="101",
            slots=(EntrantSlot(name="Alice"), EntrantSlot(name="Bob")),
            state=MatchState.COMPLETED,
            round_text="Winners Round 1",
            pool="A1",
        ),
        MatchSnapshot(
            id="102",
            slots=(EntrantSlot(name="Eve"), EntrantSlot(name="Frank")),
            state=MatchState.COMPLETED,
            round_text="Winners Round 1",
            pool="A1",
        ),
    )
    active = (
        MatchSnapshot(
            id="201",
            slots=(EntrantSlot(name="Heidi"), EntrantSlot(name="Ivan")),
            state=MatchState.CALLED,
            started_at=base_time - 45,
            station=StationAssignment(number="3"),
            round_text="Winners Round 1",
            pool="B2",
        ),
        MatchSnapshot(
            id="202",
            slots=(EntrantSlot(name="Judy"), EntrantSlot(name="Mallory")),
            state=MatchState.PLAYING,
            started_at=base_time - 420,
            station=StationAssignment(number="5"),
            round_text="Winners Quarter-Final",
            pool="B2",
        ),
        MatchSnapshot(
            id="203",
            slots=(EntrantSlot(name="Niaj"), EntrantSlot(name="Olivia")),
            state=MatchState.PLAYING,
            started_at=base_time - 905,
            station=StationAssignment(
                number="1", is_stream=True, stream_name="MainStream"
            ),
            round_text="Winners Semi-Final",
            pool="Top 8",
        ),
        MatchSnapshot(
            id="204",
            slots=(PrereqSlot(prereq_id="101", placement=1), EntrantSlot(name="Carol")),
            state=MatchState.PENDING,
            round_text="Winners Round 2",
            pool="A1",
        ),
        MatchSnapshot(
            id="205",
            slots=(EntrantSlot(name="Dave"), EntrantSlot(name="Grace")),
            state=MatchState.OPEN,
            round_text="Losers Round 1",
            pool="A1",
        ),
        MatchSnapshot(
            id="206",
            slots=(PrereqSlot(prereq_id="102", placement=2), PrereqSlot(prereq_id="204", placement=2)),
            state=MatchState.PENDING,
            round_text="Losers Round 2",
            pool="A1",
        ),
        MatchSnapshot(
            id="207",
            slots=(PrereqSlot(prereq_id="preview_88_7", placement=1), EntrantSlot(name="Peggy")),
            state=MatchState.PENDING,
            round_text="Winners Round 2",
            pool="C3",
        ),
        MatchSnapshot(
            id="208",
            slots=(EntrantSlot(name="Rupert"), EntrantSlot(name="Sybil")),
            state=MatchState.READY,
            round_text="Winners Round 1",
            pool="C3",
        ),
        MatchSnapshot(
            id="209",
            slots=(EmptySlot(), EntrantSlot(name="Trent")),
            state=MatchState.OPEN,
            round_text="Grand Final",
            pool="Top 8",
        ),
    )
    return RawSnapshot(
        event_name="Melee Singles",
        tournament_name="Summer Showdown 2025",
        logo_url=None,
        active=active,
        completed=completed,
    )


MOCK_SNAPSHOT: RawSnapshot = build_mock_snapshot()
