"""Session context handed to the engine once an event has been chosen."""

from pydantic import BaseModel, ConfigDict


class SessionContext(BaseModel):
    """Credentials and event selection for one board session.

    Created after the token and event are known, discarded when the board
    exits. Nothing else in the package keeps credentials around.
    """

    model_config = ConfigDict(frozen=True)

    api_token: str | None = None
    event_id: str | None = None
    tournament_slug: str | None = None

    @property
    def is_demo(self) -> bool:
        return not self.api_token or not self.event_id

    @property
    def masked_token(self) -> str:
        return "***" + self.api_token[-4:] if self.api_token else "None"
