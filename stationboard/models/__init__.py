"""Data models for provider responses, engine cycles and configuration."""

from .match import (
    ACTIVE_STATES,
    COMPLETED_STATES,
    BoardCycle,
    Bucket,
    DisplayMatch,
    EmptySlot,
    EntrantSlot,
    MatchSlot,
    MatchSnapshot,
    MatchState,
    PrereqSlot,
    RawSnapshot,
    ResolvedSlotInfo,
    StationAssignment,
    StationOccupancy,
    make_slot,
)
from .session import SessionContext
from .venue import VenueLabel, VenueLayout, VenueStation, load_layout, save_layout

__all__ = [
    "ACTIVE_STATES",
    "COMPLETED_STATES",
    "BoardCycle",
    "Bucket",
    "DisplayMatch",
    "EmptySlot",
    "EntrantSlot",
    "MatchSlot",
    "MatchSnapshot",
    "MatchState",
    "PrereqSlot",
    "RawSnapshot",
    "ResolvedSlotInfo",
    "SessionContext",
    "StationAssignment",
    "StationOccupancy",
    "VenueLabel",
    "VenueLayout",
    "VenueStation",
    "load_layout",
    "make_slot",
    "save_layout",
]
