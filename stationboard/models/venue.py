"""Venue layout document: where each station sits on the floor map."""

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ValidationError

from ..errors import LayoutError
from ..utils.logging import log


class VenueStation(BaseModel):
    """A setup on the map, keyed by the station number start.gg reports"""

    id: str
    x: float = 0.0
    y: float = 0.0
    shape: Literal["diamond", "cube"] = "diamond"
    rotation: float = 0.0


class VenueLabel(BaseModel):
    """Free text drawn on the map (area names, exits, ...)"""

    id: str
    text: str
    x: float = 0.0
    y: float = 0.0
    size: int = 16
    color: str | None = None
    opacity: float | None = None


class VenueLayout(BaseModel):
    """Persisted floor map. The engine only reads station ids from it."""

    width: int = 800
    height: int = 600
    stations: list[VenueStation] = []
    labels: list[VenueLabel] = []
    background: str | None = None
    bgX: float = 0.0
    bgY: float = 0.0
    bgScale: float = 1.0
    bgOpacity: float = 0.4
    stationScale: float = 1.0
    stationFontSize: int | None = None

    @property
    def station_ids(self) -> frozenset[str]:
        return frozenset(station.id for station in self.stations)

    def add_station(self, shape: Literal["diamond", "cube"] = "diamond") -> VenueStation:
        """Append a station centred on the map with the next free numeric id"""
        numeric_ids = [int(s.id) for s in self.stations if s.id.isdigit()]
        next_id = max(numeric_ids, default=0) + 1
        station = VenueStation(
            id=str(next_id), x=self.width / 2, y=self.height / 2, shape=shape
        )
        self.stations.append(station)
        return station


def load_layout(path: str | Path | None) -> VenueLayout:
    """Read a layout file; no path means an empty map"""
    if path is None:
        return VenueLayout()

    layout_path = Path(path)
    if not layout_path.exists():
        log(f"⚠️  Venue layout {layout_path} not found - starting with an empty map")
        return VenueLayout()

    try:
        with open(layout_path, "r") as f:
            raw = json.load(f)
        layout = VenueLayout.model_validate(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise LayoutError(f"Invalid venue layout {layout_path}: {e}") from e

    log(f"🗺️  Loaded venue layout with {len(layout.stations)} stations")
    return layout


def save_layout(layout: VenueLayout, path: str | Path) -> None:
    """Write a layout file, creating parent directories as needed"""
    layout_path = Path(path)
    try:
        layout_path.parent.mkdir(parents=True, exist_ok=True)
        with open(layout_path, "w") as f:
            json.dump(layout.model_dump(), f, indent=2)
    except OSError as e:
        raise LayoutError(f"Could not save venue layout {layout_path}: {e}") from e
    log(f"💾 Saved venue layout to {layout_path}")
