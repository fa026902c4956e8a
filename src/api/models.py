"""Requests and Response models exchanged with whoever drives the game (a UI, a CLI, tests)."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, GameStatus, PieceType, Winner
from src.engine.pieces import PROMOTION_OPTIONS
from src.engine.square import BOARD_SIZE


class SquareModel(BaseModel):
    """Row 0 is the 8th rank, column 0 is the a-file. Coordinates outside the board are rejected here."""

    row: int = Field(ge=0, lt=BOARD_SIZE)
    col: int = Field(ge=0, lt=BOARD_SIZE)


def _validate_promotion_choice(value: Optional[PieceType]) -> Optional[PieceType]:
    if value is not None and value not in PROMOTION_OPTIONS:
        raise InvalidRequestError(
            f"Cannot promote into a {value}. Pick one from {','.join(PROMOTION_OPTIONS)}"
        )
    return value


# --- REQUEST MODELS ---
class SelectSquareRequest(BaseModel):
    square: SquareModel


class LegalMovesRequest(BaseModel):
    square: SquareModel


class MoveRequest(BaseModel):
    from_square: SquareModel
    to_square: SquareModel
    promote_to: Optional[PieceType] = None

    @field_validator("promote_to")
    @classmethod
    def validate_promote_to(cls, value: Optional[PieceType]) -> Optional[PieceType]:
        return _validate_promotion_choice(value)


class PromotionRequest(BaseModel):
    piece_type: PieceType

    @field_validator("piece_type")
    @classmethod
    def validate_piece_type(cls, value: PieceType) -> PieceType:
        _validate_promotion_choice(value)
        return value


# --- RESPONSE MODELS ---
class PieceModel(BaseModel):
    id: str
    type: PieceType
    color: Color
    has_moved: bool


class MoveModel(BaseModel):
    from_square: SquareModel
    to_square: SquareModel
    piece: PieceModel
    captured: Optional[PieceModel] = None
    is_castling: bool = False
    is_en_passant: bool = False
    is_promotion: bool = False
    promoted_to: Optional[PieceType] = None
    notation: str


class GameResponse(BaseModel):
    status: GameStatus
    current_player: Color
    winner: Optional[Winner]
    in_check: bool
    board: list[list[Optional[PieceModel]]]
    move_history: list[MoveModel]
    selected_square: Optional[SquareModel]
    legal_moves: list[SquareModel]
    promotion_pending: bool
    captured_white: list[PieceModel]
    captured_black: list[PieceModel]
    clocks: dict[Color, int]
    is_flipped: bool


class LegalMovesResponse(BaseModel):
    square: SquareModel
    legal_moves: list[SquareModel]
