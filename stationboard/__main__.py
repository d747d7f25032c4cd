"""Main entry point for the station board application."""

import argparse
import asyncio
import sys

from .api import BracketAPI
from .config import TOKEN_ENV_VAR, BoardSettings, token_from_env
from .errors import LayoutError, StationBoardError
from .models import SessionContext, load_layout
from .ui import StationBoard
from .utils.logging import log
from .utils.resolve import normalize_tournament_slug


def positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tournament station board")
    parser.add_argument(
        "--token", help=f"start.gg API token (default: ${TOKEN_ENV_VAR})"
    )
    parser.add_argument("--event", help="start.gg event ID")
    parser.add_argument(
        "--slug",
        help="start.gg event slug (e.g., tournament/the-c-stick-55/event/melee-singles)",
    )
    parser.add_argument(
        "--tournament",
        help="Tournament slug, start.gg URL or short link (used with --list-events)",
    )
    parser.add_argument(
        "--list-events",
        action="store_true",
        help="List the events of --tournament and exit",
    )
    parser.add_argument("--layout", help="Venue layout JSON file")
    parser.add_argument(
        "--poll-interval",
        type=positive_float,
        default=30.0,
        help="Seconds between refreshes (default: 30)",
    )
    parser.add_argument("--demo", action="store_true", help="Run with demo data")
    return parser


async def list_events(token: str, tournament: str) -> int:
    """Print the events of a tournament so the user can pick an --event"""
    slug = normalize_tournament_slug(tournament)
    api = BracketAPI(SessionContext(api_token=token, tournament_slug=slug))
    events = await api.list_events(slug)
    if not events:
        log(f"❌ No events found for {slug}")
        return 1
    for event in events:
        print(f"{event.id}\t{event.name}")
    return 0


async def resolve_session(token: str, event_id: str | None, slug: str | None) -> SessionContext:
    if not event_id and slug:
        log("🔍 Getting event ID from slug...")
        api = BracketAPI(SessionContext(api_token=token))
        event_id = await api.get_event_id_from_slug(slug)
        if not event_id:
            raise StationBoardError(f"Could not get event ID from slug {slug}")
    return SessionContext(api_token=token, event_id=event_id)


def main():
    """Main entry point"""
    args = build_parser().parse_args()
    token = args.token or token_from_env()

    log("🔍 Command line args:")
    log(f"   Token: {'***' + token[-4:] if token else 'None'}")
    log(f"   Event: {args.event}")
    log(f"   Slug: {args.slug}")
    log(f"   Layout: {args.layout}")
    log(f"   Demo: {args.demo}")

    if args.list_events:
        if not token or not args.tournament:
            log("❌ --list-events requires a token and --tournament")
            sys.exit(1)
        try:
            sys.exit(asyncio.run(list_events(token, args.tournament)))
        except (StationBoardError, RuntimeError) as e:
            log(f"❌ Error listing events: {e}")
            sys.exit(1)

    if args.demo or not token or (not args.event and not args.slug):
        log("🏆 Running in DEMO mode with mock data")
        log("   Use --token and (--event or --slug) for real data")
        session = SessionContext()
    else:
        log("🌐 Running with REAL start.gg data")
        try:
            session = asyncio.run(resolve_session(token, args.event, args.slug))
        except StationBoardError as e:
            log(f"❌ {e}")
            sys.exit(1)

    try:
        layout = load_layout(args.layout)
    except LayoutError as e:
        log(f"❌ {e}")
        sys.exit(1)

    settings = BoardSettings(
        poll_interval=args.poll_interval,
        countdown_seconds=int(args.poll_interval),
    )
    app = StationBoard(session=session, settings=settings, layout=layout)

    try:
        log("🏁 Starting station board...")
        app.run()
        log("🏁 Station board finished")
    except KeyboardInterrupt:
        log("\n👋 Station board stopped")


if __name__ == "__main__":
    main()
