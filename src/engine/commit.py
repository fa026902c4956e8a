"""
Committing a move: produce the board after the move, the finalized history record and the state of the game afterwards.
"""

from dataclasses import dataclass, replace
from typing import Optional

from src.core.exceptions import IllegalMoveError, PromotionRequiredError
from src.core.shared_types import GameStatus, PieceType
from src.engine.board import Board
from src.engine.moves import (
    Move,
    castling_rook_columns,
    forward_direction,
    is_castling_step,
)
from src.engine.notation import notate
from src.engine.pieces import PROMOTION_OPTIONS, Piece
from src.engine.rules import Outcome, evaluate_position, legal_moves
from src.engine.square import BOARD_SIZE, Position


@dataclass(frozen=True)
class MoveResult:
    board: Board
    move: Move
    outcome: Outcome


def is_promotion_square(piece: Piece, to_position: Position) -> bool:
    """A pawn reaching the first or the last row"""
    return piece.type == PieceType.PAWN and to_position.row in (0, BOARD_SIZE - 1)


def commit_move(
    board: Board,
    from_position: Position,
    to_position: Position,
    last_move: Optional[Move] = None,
    promote_to: Optional[PieceType] = None,
) -> MoveResult:
    """
    Make a move
    -----

    1. make sure the move is legal (and a piece type is given when promoting)
    2. update a copy of the board (NOTE: if castling, move the king and the rook. If en passant, remove the pawn taken)
    3. classify the new position for the opponent
    4. finalize the move with its notation

    The board passed in is left untouched.
    """
    piece = board.piece(from_position)
    if piece is None:
        raise IllegalMoveError(f"No piece on {from_position.to_algebraic()}")

    if to_position not in legal_moves(board, from_position, last_move):
        raise IllegalMoveError(
            f"Move not allowed: {from_position.to_algebraic()}{to_position.to_algebraic()}"
        )

    promoting = is_promotion_square(piece, to_position)
    if promoting and promote_to is None:
        raise PromotionRequiredError(
            f"Pawn reaches {to_position.to_algebraic()}: pick one of {', '.join(PROMOTION_OPTIONS)}"
        )
    if promote_to is not None and not promoting:
        raise IllegalMoveError(
            f"Cannot promote with {from_position.to_algebraic()}{to_position.to_algebraic()}"
        )
    if promote_to is not None and promote_to not in PROMOTION_OPTIONS:
        raise IllegalMoveError(
            f"Cannot promote into a {promote_to}. Pick one of {', '.join(PROMOTION_OPTIONS)}"
        )

    new_board = board.copy()
    captured = new_board.remove_piece(to_position)

    # castling: the rook jumps over the king onto the square the king crossed
    castling = is_castling_step(piece, from_position, to_position)
    if castling:
        rook_from_col, rook_to_col = castling_rook_columns(from_position, to_position)
        rook_from = Position(from_position.row, rook_from_col)
        rook = new_board.remove_piece(rook_from)
        new_board.place_piece(rook.moved(), Position(from_position.row, rook_to_col))

    # en passant: pawn moves diagonally onto an empty square, the pawn taken stands right behind it
    en_passant = (
        piece.type == PieceType.PAWN
        and to_position.col != from_position.col
        and captured is None
    )
    if en_passant:
        taken_square = to_position.offset(-forward_direction(piece.color), 0)
        captured = new_board.remove_piece(taken_square)

    moved_piece = piece.promoted(promote_to) if promote_to else piece.moved()
    new_board.remove_piece(from_position)
    new_board.place_piece(moved_piece, to_position)

    candidate = Move(
        from_position=from_position,
        to_position=to_position,
        piece=piece,
        captured=captured,
        is_castling=castling,
        is_en_passant=en_passant,
        is_promotion=promote_to is not None,
        promoted_to=promote_to,
    )
    outcome = evaluate_position(new_board, piece.color.opponent, candidate)
    notation = notate(
        from_position,
        to_position,
        piece,
        was_capture=captured is not None,
        is_check=outcome.is_check,
        is_mate=outcome.status == GameStatus.CHECKMATE,
        promoted_to=promote_to,
    )
    return MoveResult(new_board, replace(candidate, notation=notation), outcome)
