"""Pydantic models for start.gg API responses."""

from typing import List, Optional, Union

from pydantic import BaseModel


class DictCompatibleBaseModel(BaseModel):
    """Response model that tolerates fields the query does not ask about"""

    model_config = {"extra": "allow"}


class StartGGEntrant(DictCompatibleBaseModel):
    """An entrant in a set (display name covers teams too)"""

    name: Optional[str] = None


class StartGGSlot(DictCompatibleBaseModel):
    """A slot in a set: an entrant, or the set it is waiting on"""

    id: Optional[Union[str, int]] = None
    prereqId: Optional[Union[str, int]] = None
    prereqPlacement: Optional[int] = None
    entrant: Optional[StartGGEntrant] = None


class StartGGPhaseGroup(DictCompatibleBaseModel):
    """A phase group (e.g., Pool A, Pool B)"""

    displayIdentifier: Optional[str] = None


class StartGGStation(DictCompatibleBaseModel):
    """A tournament station"""

    id: Optional[Union[str, int]] = None
    number: Optional[Union[str, int]] = None


class StartGGStream(DictCompatibleBaseModel):
    """A tournament stream"""

    streamName: Optional[str] = None


class StartGGSet(DictCompatibleBaseModel):
    """A set/match in a tournament"""

    id: Union[str, int]
    fullRoundText: Optional[str] = None
    state: Optional[int] = None
    startedAt: Optional[int] = None
    slots: List[StartGGSlot] = []
    phaseGroup: Optional[StartGGPhaseGroup] = None
    station: Optional[StartGGStation] = None
    stream: Optional[StartGGStream] = None


class StartGGSetsContainer(DictCompatibleBaseModel):
    """Container for one page of sets"""

    nodes: Optional[List[StartGGSet]] = None


class StartGGImage(DictCompatibleBaseModel):
    """Tournament artwork"""

    url: str
    type: Optional[str] = None


class StartGGEventSummary(DictCompatibleBaseModel):
    """An event as listed under its tournament"""

    id: Union[str, int]
    name: str
    slug: Optional[str] = None


class StartGGTournament(DictCompatibleBaseModel):
    """A tournament"""

    name: str
    images: Optional[List[StartGGImage]] = None
    events: Optional[List[StartGGEventSummary]] = None


class StartGGEvent(DictCompatibleBaseModel):
    """An event within a tournament"""

    id: Optional[Union[str, int]] = None
    name: str
    tournament: Optional[StartGGTournament] = None
    activeSets: Optional[StartGGSetsContainer] = None
    completedSets: Optional[StartGGSetsContainer] = None


class StartGGData(DictCompatibleBaseModel):
    """The `data` object; which key is filled depends on the query"""

    event: Optional[StartGGEvent] = None
    tournament: Optional[StartGGTournament] = None


class StartGGError(DictCompatibleBaseModel):
    """GraphQL error from start.gg API"""

    message: str
    locations: Optional[List[dict]] = None
    path: Optional[List[Union[str, int]]] = None


class StartGGAPIResponse(DictCompatibleBaseModel):
    """Complete start.gg API response"""

    data: Optional[StartGGData] = None
    errors: Optional[List[StartGGError]] = None
