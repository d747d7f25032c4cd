"""Runtime settings for the board."""

import os

from pydantic import BaseModel, Field

STARTGG_API_URL = "https://api.start.gg/gql/alpha"
TOKEN_ENV_VAR = "STARTGG_API_TOKEN"


class BoardSettings(BaseModel):
    """Tunable knobs. Defaults match what start.gg tolerates comfortably."""

    api_url: str = STARTGG_API_URL
    poll_interval: float = Field(default=30.0, gt=0)
    countdown_seconds: int = Field(default=30, ge=0)
    request_timeout: float = Field(default=10.0, gt=0)
    fetch_deadline: float = Field(default=20.0, gt=0)
    active_per_page: int = Field(default=300, gt=0)
    completed_per_page: int = Field(default=100, gt=0)


def token_from_env() -> str | None:
    return os.environ.get(TOKEN_ENV_VAR) or None
