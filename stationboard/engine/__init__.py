"""Bracket resolution and live status engine."""

from .classifier import Buckets, classify, partition
from .cycle import build_cycle, build_display_match
from .occupancy import station_occupancy
from .resolver import resolve_slot
from .scheduler import RefreshScheduler, SchedulerStatus
from .set_index import SetIndex, build_set_index
from .timer import ElapsedTimer, ElapsedTimers, format_elapsed

__all__ = [
    "Buckets",
    "ElapsedTimer",
    "ElapsedTimers",
    "RefreshScheduler",
    "SchedulerStatus",
    "SetIndex",
    "build_cycle",
    "build_display_match",
    "build_set_index",
    "classify",
    "format_elapsed",
    "partition",
    "resolve_slot",
    "station_occupancy",
]
