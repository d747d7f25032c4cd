"""Exceptions raised by the station board."""


class StationBoardError(Exception):
    """Base class for all station board errors"""


class TransportError(StationBoardError):
    """Network unreachable, non-2xx response, or request deadline exceeded"""


class ProtocolError(StationBoardError):
    """Response arrived but is unusable: bad JSON, GraphQL errors, no event"""


class LayoutError(StationBoardError):
    """Venue layout document could not be read or validated"""
