"""Station Board - live tournament station status for start.gg events."""

from .api import BracketAPI
from .engine import RefreshScheduler, build_cycle
from .models import BoardCycle, DisplayMatch, SessionContext
from .ui import StationBoard

__version__ = "1.0.0"
__all__ = [
    "BoardCycle",
    "BracketAPI",
    "DisplayMatch",
    "RefreshScheduler",
    "SessionContext",
    "StationBoard",
    "build_cycle",
]
