"""Tests for the venue layout document and tournament slug normalization"""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from stationboard.errors import LayoutError
from stationboard.models import VenueLayout, VenueStation, load_layout, save_layout
from stationboard.utils import resolve
from stationboard.utils.resolve import (
    extract_slug_from_url,
    normalize_tournament_slug,
    resolve_short_url,
)

LAYOUT_DOC = {
    "width": 1000,
    "height": 500,
    "stations": [
        {"id": "1", "x": 10, "y": 20, "shape": "diamond", "rotation": 0},
        {"id": "2", "x": 60, "y": 20, "shape": "cube", "rotation": 90},
    ],
    "labels": [{"id": "lbl-1", "text": "STAGE", "x": 500, "y": 30, "size": 24}],
    "background": None,
    "bgScale": 1.5,
}


@pytest.mark.unit
class TestVenueLayout:
    """Test loading and editing the venue layout"""

    def test_missing_path_gives_empty_layout(self):
        layout = load_layout(None)

        assert layout.stations == []
        assert layout.width == 800
        assert layout.height == 600

    def test_nonexistent_file_gives_empty_layout(self, tmp_path):
        assert load_layout(tmp_path / "nope.json").stations == []

    def test_load_layout(self, tmp_path):
        path = tmp_path / "venue.json"
        path.write_text(json.dumps(LAYOUT_DOC))

        layout = load_layout(path)

        assert layout.station_ids == frozenset({"1", "2"})
        assert layout.stations[1].shape == "cube"
        assert layout.labels[0].text == "STAGE"
        assert layout.bgScale == 1.5

    def test_invalid_json_raises_layout_error(self, tmp_path):
        path = tmp_path / "venue.json"
        path.write_text("{not json")

        with pytest.raises(LayoutError):
            load_layout(path)

    def test_invalid_shape_raises_layout_error(self, tmp_path):
        path = tmp_path / "venue.json"
        doc = dict(LAYOUT_DOC, stations=[{"id": "1", "shape": "hexagon"}])
        path.write_text(json.dumps(doc))

        with pytest.raises(LayoutError):
            load_layout(path)

    def test_save_then_load(self, tmp_path):
        layout = VenueLayout(stations=[VenueStation(id="7", x=1, y=2)])
        path = tmp_path / "nested" / "venue.json"

        save_layout(layout, path)

        assert load_layout(path) == layout

    def test_add_station_uses_next_numeric_id(self):
        layout = VenueLayout(
            width=400,
            height=200,
            stations=[VenueStation(id="3"), VenueStation(id="stream"), VenueStation(id="9")],
        )

        station = layout.add_station(shape="cube")

        assert station.id == "10"
        assert (station.x, station.y) == (200, 100)
        assert station.shape == "cube"
        assert "10" in layout.station_ids

    def test_add_station_to_empty_layout(self):
        assert VenueLayout().add_station().id == "1"


@pytest.mark.unit
class TestSlugNormalization:
    """Test turning user input into a tournament slug"""

    def setup_method(self):
        resolve.clear_cache()

    @pytest.mark.parametrize(
        "value",
        [
            "https://www.start.gg/tournament/melee-abbey-tavern-123/details",
            "https://start.gg/tournament/melee-abbey-tavern-123/event/singles",
            "start.gg/tournament/melee-abbey-tavern-123",
            "tournament/melee-abbey-tavern-123",
            "melee-abbey-tavern-123",
            "  https://start.gg/tournament/melee-abbey-tavern-123/  ",
        ],
    )
    def test_normalize_without_network(self, value):
        with patch("stationboard.utils.resolve.requests.head") as mock_head:
            assert normalize_tournament_slug(value) == "melee-abbey-tavern-123"
            mock_head.assert_not_called()

    def test_extract_slug_strips_query(self):
        assert extract_slug_from_url("https://start.gg/tournament/abc?tab=events") == "abc"
        assert extract_slug_from_url("https://start.gg/abbey") is None

    def test_short_link_follows_redirect(self):
        response = MagicMock(status_code=200, url="https://www.start.gg/tournament/melee-abbey-tavern-114/details")
        with patch("stationboard.utils.resolve.requests.head", return_value=response) as mock_head:
            assert normalize_tournament_slug("https://start.gg/abbey") == "melee-abbey-tavern-114"
            # Second lookup is served from the in-process cache
            assert resolve_short_url("abbey") == "melee-abbey-tavern-114"

        assert mock_head.call_count == 1

    def test_short_link_failure_raises(self):
        with patch(
            "stationboard.utils.resolve.requests.head",
            side_effect=requests.ConnectionError("offline"),
        ), patch("stationboard.utils.resolve.time.sleep"):
            with pytest.raises(RuntimeError):
                resolve_short_url("nowhere", max_retries=2)
