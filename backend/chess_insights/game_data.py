"""
Normalized game model shared by both platform parsers.
"""
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Platform = Literal["chess.com", "lichess"]
Result = Literal["Win", "Loss", "Draw"]
Color = Literal["White", "Black"]

CHESS_COM = "chess.com"
LICHESS = "lichess"

WIN = "Win"
LOSS = "Loss"
DRAW = "Draw"

WHITE = "White"
BLACK = "Black"

UNKNOWN_OPENING = "Unknown"

# Chess.com per-side outcomes that end the game without a winner
CHESS_COM_DRAW_RESULTS = frozenset({
    "stalemate",
    "insufficient",
    "agreed",
    "repetition",
    "50move",
    "timevsinsufficient",
})


class NormalizedGame(BaseModel):
    """One game from the viewing player's perspective."""
    model_config = ConfigDict(frozen=True)

    platform: Platform
    result: Result
    color: Color
    opening: str = UNKNOWN_OPENING
    date: datetime  # UTC instant
    moves: int = Field(default=0, ge=0)  # full moves, not plies
