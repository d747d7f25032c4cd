"""Tests for the command line entry point"""

from unittest.mock import AsyncMock, patch

import pytest

from stationboard.__main__ import main
from stationboard.models import SessionContext


def run_main(args: list[str], env: dict[str, str] | None = None):
    """Run main() with a mocked StationBoard, returning the mock class"""
    with patch("sys.argv", ["stationboard"] + args), patch(
        "stationboard.__main__.StationBoard"
    ) as mock_app_class, patch.dict("os.environ", env or {}, clear=True):
        mock_app_class.return_value.run.return_value = None
        main()
    return mock_app_class


@pytest.mark.integration
class TestMain:
    """Test CLI mode selection"""

    def test_demo_flag_ignores_credentials(self):
        app_class = run_main(["--demo", "--token", "ignored", "--event", "1"])

        session = app_class.call_args.kwargs["session"]
        assert session == SessionContext()
        assert session.is_demo

    def test_no_arguments_runs_demo(self):
        app_class = run_main([])

        assert app_class.call_args.kwargs["session"].is_demo

    def test_token_without_event_runs_demo(self):
        app_class = run_main(["--token", "valid_token"])

        assert app_class.call_args.kwargs["session"].is_demo

    def test_token_and_event(self):
        app_class = run_main(["--token", "valid_token", "--event", "12345"])

        session = app_class.call_args.kwargs["session"]
        assert session.api_token == "valid_token"
        assert session.event_id == "12345"

    def test_token_from_environment(self):
        app_class = run_main(["--event", "12345"], env={"STARTGG_API_TOKEN": "env_token"})

        assert app_class.call_args.kwargs["session"].api_token == "env_token"

    def test_slug_is_resolved_to_event_id(self):
        with patch(
            "stationboard.__main__.BracketAPI.get_event_id_from_slug",
            new_callable=AsyncMock,
            return_value="67890",
        ) as mock_lookup:
            app_class = run_main(["--token", "t", "--slug", "tournament/x/event/y"])

        mock_lookup.assert_awaited_once_with("tournament/x/event/y")
        assert app_class.call_args.kwargs["session"].event_id == "67890"

    def test_unknown_slug_exits(self):
        with patch(
            "stationboard.__main__.BracketAPI.get_event_id_from_slug",
            new_callable=AsyncMock,
            return_value=None,
        ), pytest.raises(SystemExit) as exc_info:
            run_main(["--token", "t", "--slug", "tournament/x/event/y"])

        assert exc_info.value.code == 1

    def test_poll_interval_sets_countdown(self):
        app_class = run_main(["--demo", "--poll-interval", "15"])

        settings = app_class.call_args.kwargs["settings"]
        assert settings.poll_interval == 15.0
        assert settings.countdown_seconds == 15

    @pytest.mark.parametrize("value", ["0", "-5", "soon"])
    def test_bad_poll_interval_is_rejected(self, value):
        with pytest.raises(SystemExit) as exc_info:
            run_main(["--demo", "--poll-interval", value])

        assert exc_info.value.code == 2

    def test_bad_layout_exits(self, tmp_path):
        layout = tmp_path / "venue.json"
        layout.write_text("not json")

        with pytest.raises(SystemExit):
            run_main(["--demo", "--layout", str(layout)])

    def test_list_events(self, capsys):
        events = [
            type("Event", (), {"id": 1, "name": "Melee Singles"})(),
            type("Event", (), {"id": 2, "name": "Melee Doubles"})(),
        ]
        with patch(
            "stationboard.__main__.BracketAPI.list_events",
            new_callable=AsyncMock,
            return_value=events,
        ), pytest.raises(SystemExit) as exc_info:
            run_main(["--token", "t", "--tournament", "tournament/weekly", "--list-events"])

        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        assert "1\tMelee Singles" in out
        assert "2\tMelee Doubles" in out

    def test_list_events_requires_tournament(self):
        with pytest.raises(SystemExit) as exc_info:
            run_main(["--token", "t", "--list-events"])

        assert exc_info.value.code == 1
