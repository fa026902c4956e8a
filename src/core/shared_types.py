"""
Type definitions used across layers
"""

from enum import StrEnum
from typing import Literal


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class GameStatus(StrEnum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"


# The winner of a finished game is either a side or the literal "draw". Unfinished games have no winner (None).
DRAW = "draw"
Winner = Color | Literal["draw"]

TERMINAL_STATUSES: frozenset[GameStatus] = frozenset(
    {GameStatus.CHECKMATE, GameStatus.STALEMATE, GameStatus.DRAW}
)
