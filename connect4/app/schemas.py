from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from connect4.app.enums import PlayerType


class MoveRecord(BaseModel):
    # Unknown keys are dropped so stray metadata never fails a move
    model_config = ConfigDict(extra='ignore')

    player: int = Field(description="1 for player A, -1 for player B")
    column: int = Field(ge=0, le=6)
    row: int = Field(ge=0, le=5)
    player_type: PlayerType = PlayerType.HUMAN

    # Only filled in for CPU moves
    evaluation: Optional[float] = None
    nodes: Optional[int] = 0
    duration: Optional[float] = 0.0


class ScoreSnapshot(BaseModel):
    player_a: int = 0
    player_b: int = 0
    draws: int = 0
