"""Bracket API client for start.gg GraphQL API."""

import asyncio
import json
import time

import aiohttp
from pydantic import ValidationError

from ..config import BoardSettings
from ..errors import ProtocolError, TransportError
from ..models.match import (
    ACTIVE_STATES,
    COMPLETED_STATES,
    MatchSnapshot,
    RawSnapshot,
    StationAssignment,
    make_slot,
)
from ..models.mock_data import build_mock_snapshot
from ..models.session import SessionContext
from ..models.startgg_api import (
    StartGGAPIResponse,
    StartGGEventSummary,
    StartGGSet,
    StartGGSlot,
    StartGGTournament,
)
from ..utils.logging import log

# Active sets in call order and the most recently finished sets, in one request.
# Completed sets are only used to name "Winner of A vs B" slots.
BOARD_QUERY = """
query BoardSnapshot($eventId: ID!, $activePerPage: Int!, $completedPerPage: Int!,
                    $activeStates: [Int], $completedStates: [Int]) {
    event(id: $eventId) {
        name
        tournament {
            name
            images {
                url
                type
            }
        }
        activeSets: sets(
            page: 1
            perPage: $activePerPage
            sortType: CALL_ORDER
            filters: { state: $activeStates }
        ) {
            nodes {
                id
                fullRoundText
                state
                startedAt
                station {
                    id
                    number
                }
                stream {
                    streamName
                }
                phaseGroup {
                    displayIdentifier
                }
                slots {
                    id
                    prereqId
                    prereqPlacement
                    entrant {
                        name
                    }
                }
            }
        }
        completedSets: sets(
            page: 1
            perPage: $completedPerPage
            sortType: RECENT
            filters: { state: $completedStates }
        ) {
            nodes {
                id
                state
                slots {
                    entrant {
                        name
                    }
                }
            }
        }
    }
}
"""

EVENT_BY_SLUG_QUERY = """
query GetEvent($slug: String!) {
    event(slug: $slug) {
        id
        name
    }
}
"""

TOURNAMENT_EVENTS_QUERY = """
query TournamentEvents($slug: String!) {
    tournament(slug: $slug) {
        name
        events {
            id
            name
            slug
        }
    }
}
"""


def pick_logo(tournament: StartGGTournament | None) -> str | None:
    """Profile image if there is one, else whatever image comes first"""
    if not tournament or not tournament.images:
        return None
    for image in tournament.images:
        if image.type == "profile":
            return image.url
    return tournament.images[0].url


def _convert_slot(slot: StartGGSlot | None):
    if slot is None:
        return make_slot()
    entrant_name = slot.entrant.name if slot.entrant else None
    return make_slot(entrant_name, slot.prereqId, slot.prereqPlacement)


def convert_set(set_data: StartGGSet) -> MatchSnapshot:
    """Flatten a start.gg set into an engine snapshot"""
    slots = list(set_data.slots[:2])
    while len(slots) < 2:
        slots.append(None)

    station = None
    if set_data.station and set_data.station.number is not None:
        station = StationAssignment(
            number=str(set_data.station.number),
            is_stream=set_data.stream is not None,
            stream_name=set_data.stream.streamName if set_data.stream else None,
        )

    return MatchSnapshot(
        id=str(set_data.id),
        slots=(_convert_slot(slots[0]), _convert_slot(slots[1])),
        state=set_data.state if set_data.state is not None else 0,
        started_at=set_data.startedAt,
        station=station,
        round_text=set_data.fullRoundText,
        pool=set_data.phaseGroup.displayIdentifier if set_data.phaseGroup else None,
    )


class BracketAPI:
    """Handle API calls to start.gg"""

    def __init__(
        self,
        session: SessionContext | None = None,
        settings: BoardSettings | None = None,
    ):
        self.session: SessionContext = session or SessionContext()
        self.settings: BoardSettings = settings or BoardSettings()
        self.base_url: str = self.settings.api_url

    async def _post(self, query: str, variables: dict) -> StartGGAPIResponse:
        """POST a GraphQL query and validate the envelope.

        Raises TransportError for network and HTTP failures, ProtocolError when
        the body is not a usable GraphQL response.
        """
        headers = {
            "Authorization": f"Bearer {self.session.api_token}",
            "Content-Type": "application/json",
        }

        try:
            async with aiohttp.ClientSession() as http:
                async with http.post(
                    self.base_url,
                    json={"query": query, "variables": variables},
                    headers=headers,
                    timeout=aiohttp.ClientTimeout(total=self.settings.request_timeout),
                ) as response:
                    log(f"📡 API Response Status: {response.status}")

                    if response.status != 200:
                        error_text = await response.text()
                        log(f"❌ HTTP Error: {error_text[:200]}")
                        raise TransportError(f"HTTP {response.status}: {error_text[:200]}")

                    try:
                        raw_data = await response.json()
                    except (aiohttp.ContentTypeError, ValueError) as e:
                        raise ProtocolError(f"Response is not JSON: {e}") from e

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e

        if not isinstance(raw_data, dict):
            raise ProtocolError("Response body is not a JSON object")

        try:
            api_response = StartGGAPIResponse(**raw_data)
        except ValidationError as e:
            log(f"❌ Pydantic validation error: {e}")
            log(f"📋 Raw response: {json.dumps(raw_data, indent=2)[:500]}...")
            raise ProtocolError(f"API response validation failed: {e}") from e

        if api_response.errors:
            for error in api_response.errors:
                log(f"   - {error.message}")
            messages = "; ".join(error.message for error in api_response.errors)
            raise ProtocolError(f"GraphQL errors: {messages}")

        if not api_response.data:
            raise ProtocolError("No data field in API response")

        return api_response

    async def fetch_snapshot(self) -> RawSnapshot:
        """Fetch active and recently completed sets for the session's event"""
        if self.session.is_demo:
            log("⚠️  No token/event - serving demo data")
            await asyncio.sleep(0.1)  # Simulate network delay
            return build_mock_snapshot(int(time.time()))

        variables = {
            "eventId": self.session.event_id,
            "activePerPage": self.settings.active_per_page,
            "completedPerPage": self.settings.completed_per_page,
            "activeStates": list(ACTIVE_STATES),
            "completedStates": list(COMPLETED_STATES),
        }
        log(f"🔍 Fetching board snapshot for event ID: {self.session.event_id}")
        api_response = await self._post(BOARD_QUERY, variables)
        return self.parse_snapshot(api_response)

    def parse_snapshot(self, api_response: StartGGAPIResponse) -> RawSnapshot:
        """Turn a validated board response into a RawSnapshot"""
        if not api_response.data or not api_response.data.event:
            raise ProtocolError(f"Event not found for ID: {self.session.event_id}")

        event = api_response.data.event
        tournament = event.tournament

        active_nodes = event.activeSets.nodes if event.activeSets else None
        completed_nodes = event.completedSets.nodes if event.completedSets else None

        active = tuple(convert_set(node) for node in active_nodes or [])
        completed = tuple(convert_set(node) for node in completed_nodes or [])

        log(f"📊 Event: {event.name} - {len(active)} active, {len(completed)} completed")
        return RawSnapshot(
            event_name=event.name,
            tournament_name=tournament.name if tournament else "Unknown Tournament",
            logo_url=pick_logo(tournament),
            active=active,
            completed=completed,
        )

    async def get_event_id_from_slug(self, event_slug: str) -> str | None:
        """Get event ID from event slug (e.g., 'tournament/the-c-stick-55/event/melee-singles')"""
        if not event_slug.startswith("tournament/"):
            log(f"🔧 Slug missing 'tournament/' prefix, fixing: {event_slug}")
            event_slug = f"tournament/{event_slug}"

        log(f"🔍 Fetching event ID for slug: {event_slug}")
        try:
            api_response = await self._post(EVENT_BY_SLUG_QUERY, {"slug": event_slug})
        except (TransportError, ProtocolError) as e:
            log(f"❌ Error getting event ID: {e}")
            return None

        event = api_response.data.event if api_response.data else None
        if not event or event.id is None:
            log(f"❌ No event found for slug: {event_slug}")
            log("💡 Slug format should be: tournament/tournament-name/event/event-name")
            return None

        log(f"✅ Found event: {event.name} (ID: {event.id})")
        return str(event.id)

    async def list_events(self, tournament_slug: str) -> list[StartGGEventSummary]:
        """Events under a tournament, for picking which bracket to show"""
        if tournament_slug.startswith("tournament/"):
            tournament_slug = tournament_slug[len("tournament/"):]

        log(f"🔍 Looking up events for tournament: {tournament_slug}")
        api_response = await self._post(TOURNAMENT_EVENTS_QUERY, {"slug": tournament_slug})

        tournament = api_response.data.tournament if api_response.data else None
        if not tournament:
            raise ProtocolError(f"Tournament not found or invalid token: {tournament_slug}")

        events = tournament.events or []
        log(f"✅ {tournament.name}: {len(events)} events")
        return events
