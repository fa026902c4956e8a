"""Settings for a game session. Defaults match a standard 10 minute game."""

from pydantic import BaseModel, ConfigDict, Field

from src.core.shared_types import Color

DEFAULT_CLOCK_SECONDS = 600


class GameSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    clock_seconds: int = Field(default=DEFAULT_CLOCK_SECONDS, gt=0)
    first_player: Color = Color.WHITE
