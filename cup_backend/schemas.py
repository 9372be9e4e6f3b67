from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from cup_backend.config import DEFAULT_NUM_GROUPS

PlayerId = Union[int, str]
Slot = Optional[PlayerId]


class Pool(str, Enum):
    OZARK = "ozark"
    VALLEY = "valley"


class FillMode(str, Enum):
    OVERWRITE = "overwrite"
    UNASSIGNED = "unassigned"


class Player(BaseModel):
    id: PlayerId
    name: Optional[str] = Field(default=None, description="Display name, not used for pairing")
    team: Pool = Pool.OZARK

    @field_validator("team", mode="before")
    @classmethod
    def _coerce_team(cls, value):
        # anyone not explicitly on Valley plays for Ozark
        if isinstance(value, Pool):
            return value
        return Pool.VALLEY if str(value or "").strip().lower() == Pool.VALLEY.value else Pool.OZARK


class EventState(BaseModel):
    players: list[Player] = Field(default_factory=list)
    format: dict[str, dict[str, str]] = Field(default_factory=dict)
    groups: dict[str, dict[str, list[list[Slot]]]] = Field(default_factory=dict)
    num_groups: int = DEFAULT_NUM_GROUPS
    current_day: str = "day1"
    current_side: str = "front"


class PairOptions(BaseModel):
    seed: Optional[int] = Field(default=None, description="Fixed seed for reproducible shuffles")
    fill_mode: Optional[FillMode] = Field(default=None, description="Falls back to the configured default")


class PairRoundRequest(PairOptions):
    day: Optional[str] = None
    side: Optional[str] = None


class PairDayRequest(PairOptions):
    day: Optional[str] = None
