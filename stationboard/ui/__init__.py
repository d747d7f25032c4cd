"""Terminal renderer for the station board."""

from .station_board import StationBoard

__all__ = ["StationBoard"]
