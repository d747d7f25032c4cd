"""Station board TUI: called, playing and upcoming sets plus the venue strip."""

import sys
from datetime import datetime
from typing import ClassVar

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import BindingType
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.widgets import DataTable, Footer, Header, Static
from textual.widgets.data_table import CellDoesNotExist

from ..api import BracketAPI
from ..config import BoardSettings
from ..engine import ElapsedTimers, RefreshScheduler, SchedulerStatus
from ..models import BoardCycle, DisplayMatch, RawSnapshot, SessionContext, VenueLayout
from ..utils.logging import log, set_console_logging

STATION_STYLES: dict[str, str] = {
    "playing": "bold white on red",
    "called": "bold black on yellow",
    "idle": "dim",
}


def slot_text(name: str, known: bool) -> Text:
    """Real players in bold, "Winner of ..." placeholders muted"""
    return Text(name, style="bold" if known else "dim italic")


def match_text(match: DisplayMatch) -> Text:
    text = Text()
    text.append_text(slot_text(match.p1, match.s1_info.is_known))
    text.append(" vs ", style="yellow")
    text.append_text(slot_text(match.p2, match.s2_info.is_known))
    return text


def station_text(match: DisplayMatch) -> Text:
    # Stream setups are shown in purple as S<n>
    return Text(match.station_label, style="bold magenta" if match.is_stream else "bold")


class StationBoard(App[None]):
    """Main station board application"""

    CSS: ClassVar[str] = """
    Screen {
        layout: vertical;
    }

    #board {
        height: 1fr;
    }

    .board-column {
        width: 1fr;
        padding: 0 1;
    }

    .section-title {
        background: $primary;
        color: $text;
        padding: 0 1;
        text-align: center;
        height: 1;
    }

    #called-title {
        background: $warning;
        color: $background;
    }

    #playing-title {
        background: $error;
    }

    .board-table {
        height: auto;
        max-height: 50%;
        min-height: 3;
        margin: 0 0 1 0;
    }

    #venue-map {
        height: auto;
        padding: 0 1;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        ("r", "refresh", "Refresh"),
        ("q", "quit", "Quit"),
    ]

    # Reactive variables
    event_name: reactive[str] = reactive("Loading...")
    called_sets: reactive[int] = reactive(0)
    playing_sets: reactive[int] = reactive(0)
    upcoming_sets: reactive[int] = reactive(0)
    last_update: reactive[str] = reactive("")

    def __init__(
        self,
        session: SessionContext | None = None,
        settings: BoardSettings | None = None,
        layout: VenueLayout | None = None,
    ):
        super().__init__()
        self.settings: BoardSettings = settings or BoardSettings()
        self.api: BracketAPI = BracketAPI(session, self.settings)
        self.layout: VenueLayout = layout or VenueLayout()
        self.cycle: BoardCycle | None = None
        self.timers: ElapsedTimers = ElapsedTimers()
        self.scheduler: RefreshScheduler = RefreshScheduler(
            fetch=self._fetch_snapshot,
            on_cycle=self.apply_cycle,
            on_status=self.show_status,
            on_clock=self.update_durations,
            on_error=self.show_error,
            poll_interval=self.settings.poll_interval,
            countdown_seconds=self.settings.countdown_seconds,
            fetch_deadline=self.settings.fetch_deadline,
        )
        self.title = "Loading Tournament..."
        log(
            "🎯 StationBoard initialized with token: "
            f"{self.api.session.masked_token}, event: {self.api.session.event_id}, "
            f"poll_interval: {self.settings.poll_interval}"
        )

    def compose(self) -> ComposeResult:
        """Create the UI layout"""
        yield Header()
        with Horizontal(id="board"):
            with Vertical(classes="board-column"):
                yield Static("CALLED TO STATION", id="called-title", classes="section-title")
                yield DataTable(id="called-table", classes="board-table")
                yield Static("NOW PLAYING", id="playing-title", classes="section-title")
                yield DataTable(id="playing-table", classes="board-table")
            with Vertical(classes="board-column"):
                yield Static("UP NEXT", id="upcoming-title", classes="section-title")
                yield DataTable(id="upcoming-table", classes="board-table")
                yield Static("VENUE", classes="section-title")
                yield Static(id="venue-map")
        yield Footer()

    def on_mount(self) -> None:
        """Set up tables and start polling"""
        # The TUI owns the terminal from here on
        set_console_logging(False)
        log("🏁 on_mount() called")

        for table_id in ("#called-table", "#playing-table"):
            table = self.query_one(table_id, DataTable)
            table.add_column("Stn", width=5, key="station")
            table.add_column("Match", key="match")
            table.add_column("Round", key="round")
            table.add_column("Time", width=6, key="time")
            table.cursor_type = "row"

        upcoming = self.query_one("#upcoming-table", DataTable)
        upcoming.add_column("#", width=3, key="position")
        upcoming.add_column("Match", key="match")
        upcoming.add_column("Round", key="round")
        upcoming.cursor_type = "row"

        self.show_loading_state()
        self.render_venue()
        self.scheduler.start()

    async def _fetch_snapshot(self) -> RawSnapshot:
        return await self.api.fetch_snapshot()

    def show_loading_state(self) -> None:
        self.event_name = "Fetching bracket data from start.gg..."
        self.last_update = "Loading..."
        self.sub_title = "loading..."

    def apply_cycle(self, cycle: BoardCycle) -> None:
        """Swap in a freshly published cycle and redraw everything from it"""
        self.cycle = cycle
        self.event_name = cycle.event_name
        self.title = cycle.title
        self.called_sets = len(cycle.called)
        self.playing_sets = len(cycle.playing)
        self.upcoming_sets = len(cycle.upcoming)
        self.last_update = datetime.now().strftime("%H:%M:%S")

        self.timers.sync(cycle.called + cycle.playing)
        self.update_tables()
        self.render_venue()

        unmapped = cycle.occupancy.unmapped(self.layout.station_ids)
        if self.layout.stations and unmapped:
            log(f"⚠️  Stations not on the venue map: {', '.join(unmapped)}")

    def update_tables(self) -> None:
        if self.cycle is None:
            return
        durations = self.timers.render_all()

        for table_id, matches in (
            ("#called-table", self.cycle.called),
            ("#playing-table", self.cycle.playing),
        ):
            table = self.query_one(table_id, DataTable)
            table.clear()
            for match in matches:
                table.add_row(
                    station_text(match),
                    match_text(match),
                    match.round,
                    durations.get(match.id, "00:00"),
                    key=match.id,
                )

        upcoming = self.query_one("#upcoming-table", DataTable)
        upcoming.clear()
        for position, match in enumerate(self.cycle.upcoming, start=1):
            upcoming.add_row(
                f"#{position}", match_text(match), match.round, key=match.id
            )

        log(
            f"🔄 Tables updated: {self.called_sets} called, "
            f"{self.playing_sets} playing, {self.upcoming_sets} upcoming"
        )

    def render_venue(self) -> None:
        venue = self.query_one("#venue-map", Static)
        if not self.layout.stations:
            venue.update(Text("NO MAP CONFIGURED (use --layout)", style="dim"))
            return

        occupancy = self.cycle.occupancy if self.cycle else None
        strip = Text()
        for station in sorted(
            self.layout.stations, key=lambda s: (not s.id.isdigit(), len(s.id), s.id)
        ):
            status = occupancy.status_for(station.id) if occupancy else "idle"
            strip.append(f" {station.id} ", style=STATION_STYLES[status])
            strip.append(" ")
        venue.update(strip)

    def update_durations(self, now: float) -> None:
        """Refresh the Time column (called every second)"""
        if self.cycle is None:
            return
        durations = self.timers.render_all(now)
        for table_id, matches in (
            ("#called-table", self.cycle.called),
            ("#playing-table", self.cycle.playing),
        ):
            table = self.query_one(table_id, DataTable)
            for match in matches:
                try:
                    table.update_cell(match.id, "time", durations.get(match.id, "00:00"))
                except CellDoesNotExist:
                    log(f"⚠️ No row for set {match.id} in {table_id}")

    def show_status(self, status: SchedulerStatus) -> None:
        if status.in_flight:
            text = "refreshing..."
        else:
            text = f"next refresh in {status.seconds_to_refresh}s"
        if status.last_error:
            text += " | last refresh failed"
        if self.last_update:
            text += f" | updated {self.last_update}"
        self.sub_title = text

    def show_error(self, error: Exception) -> None:
        self.notify(f"Refresh failed: {error}", severity="error", timeout=5)

    def action_refresh(self) -> None:
        """Manually refresh data"""
        log("🔄 Manual refresh triggered")
        if self.scheduler.trigger():
            self.notify("Refreshing bracket data...")
        else:
            self.notify("Refresh already in progress")

    async def on_unmount(self) -> None:
        """Release every timer when the board goes away"""
        await self.scheduler.stop()
        self.timers.clear()
        self._cleanup_terminal()

    def _cleanup_terminal(self) -> None:
        """Ensure terminal state is properly restored"""
        try:
            # Force disable mouse tracking and restore cursor
            sys.stdout.write(
                "\033[?1000l\033[?1003l\033[?1015l\033[?1006l\033[?25h\033[?1004l"
            )
            sys.stdout.flush()
        except OSError:
            pass

    async def action_quit(self):
        """Quit the application"""
        await self.scheduler.stop()
        self.timers.clear()
        self.exit()
