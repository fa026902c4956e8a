"""
Check detection, legality and end-of-game conditions.

Every "what if" question is answered on an independent copy of the board. The board passed in is never changed.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.shared_types import (
    DRAW,
    TERMINAL_STATUSES,
    Color,
    GameStatus,
    PieceType,
    Winner,
)
from src.engine.board import Board
from src.engine.moves import (
    Move,
    forward_direction,
    is_castling_step,
    piece_reach,
    pseudo_legal_moves,
)
from src.engine.square import Position

MINOR_PIECES: frozenset[PieceType] = frozenset({PieceType.KNIGHT, PieceType.BISHOP})


@dataclass(frozen=True)
class Outcome:
    """Classification of a position for the side to move"""

    status: GameStatus
    winner: Optional[Winner] = None
    is_check: bool = False

    @property
    def is_over(self) -> bool:
        return self.status in TERMINAL_STATUSES


# --- ATTACKS / CHECK ---
def is_square_attacked(board: Board, square: Position, by_color: Color) -> bool:
    """Is the square in the reach of any piece of the given color (castling never attacks anything)"""
    return any(
        square in piece_reach(board, attacker_square)
        for attacker_square in board.locate_color(by_color)
    )


def is_king_in_check(board: Board, color: Color) -> bool:
    """
    Is the king of the given color under attack?

    NOTE: A board without that king reports 'not in check'. This keeps malformed boards from blowing up,
    it does not make a kingless position safe.
    """
    king_square = board.find_king(color)
    if king_square is None:
        return False
    return is_square_attacked(board, king_square, color.opponent)


# --- LEGAL MOVES ---
def simulate_move(board: Board, from_position: Position, to_position: Position) -> Board:
    """
    Copy of the board with the piece moved.
    ---

    A pawn moving diagonally onto an empty square is taking en passant: the pawn it takes stands
    one row behind the target square (seen from the mover).
    """
    simulated = board.copy()
    piece = simulated.piece(from_position)
    captured = simulated.piece(to_position)
    simulated.remove_piece(from_position)
    simulated.place_piece(piece.moved(), to_position)

    if (
        piece.type == PieceType.PAWN
        and to_position.col != from_position.col
        and captured is None
    ):
        taken_square = to_position.offset(-forward_direction(piece.color), 0)
        if taken_square.is_within_board():
            simulated.remove_piece(taken_square)
    return simulated


def _leaves_king_in_check(
    board: Board, from_position: Position, to_position: Position
) -> bool:
    color = board.piece(from_position).color
    return is_king_in_check(simulate_move(board, from_position, to_position), color)


def _is_castling_out_of_or_through_check(
    board: Board, from_position: Position, to_position: Position
) -> bool:
    """
    You cannot castle out of check, and the king cannot pass through an attacked square.

    NOTE: landing on an attacked square is covered by the regular check simulation.
    """
    color = board.piece(from_position).color
    if is_king_in_check(board, color):
        return True
    step = 1 if to_position.col > from_position.col else -1
    intermediate = from_position.offset(0, step)
    step_board = board.copy()
    step_board.move_piece(from_position, intermediate)
    return is_king_in_check(step_board, color)


def legal_moves(
    board: Board, position: Position, last_move: Optional[Move] = None
) -> list[Position]:
    """
    Legal destinations of the piece on the given square
    ----

    1. generate the pseudo legal moves (castling included)
    2. drop the moves that would put (or leave) your own king in check
    3. drop castling out of check / through an attacked square

    Order is the order the moves were generated in.
    """
    piece = board.piece(position)
    if piece is None:
        return []

    moves: list[Position] = []
    for destination in pseudo_legal_moves(board, position, last_move):
        if _leaves_king_in_check(board, position, destination):
            continue
        if is_castling_step(
            piece, position, destination
        ) and _is_castling_out_of_or_through_check(board, position, destination):
            continue
        moves.append(destination)
    return moves


def all_legal_moves(
    board: Board, color: Color, last_move: Optional[Move] = None
) -> list[Move]:
    """Every legal move of one player. Notation is left empty: only committed moves get one."""
    return [
        Move(from_position=square, to_position=destination, piece=piece)
        for square, piece in board.pieces()
        if piece.color == color
        for destination in legal_moves(board, square, last_move)
    ]


# --- END OF GAME ---
def is_insufficient_material(board: Board) -> bool:
    """K vs K, K+minor vs K, K+B vs K+B (same-color bishops)."""
    non_kings = [
        (square, piece) for square, piece in board.pieces() if piece.type != PieceType.KING
    ]

    # K vs K
    if not non_kings:
        return True

    # K+minor vs K
    if len(non_kings) == 1:
        return non_kings[0][1].type in MINOR_PIECES

    # K+B vs K+B with same-colored bishops
    if len(non_kings) == 2:
        (first_square, first), (second_square, second) = non_kings
        both_bishops = first.type == second.type == PieceType.BISHOP
        if both_bishops and first.color != second.color:
            first_shade = (first_square.row + first_square.col) % 2
            second_shade = (second_square.row + second_square.col) % 2
            return first_shade == second_shade

    return False


def evaluate_position(
    board: Board, side_to_move: Color, last_move: Optional[Move] = None
) -> Outcome:
    """
    Classify the position after a move was made
    ----

    * no legal moves while in check -> checkmate, the other player wins
    * no legal moves, not in check -> stalemate
    * not enough material left to ever mate -> draw
    * otherwise the game continues
    """
    check = is_king_in_check(board, side_to_move)
    has_legal_move = bool(all_legal_moves(board, side_to_move, last_move))

    if not has_legal_move and check:
        return Outcome(GameStatus.CHECKMATE, side_to_move.opponent, is_check=True)
    if not has_legal_move:
        return Outcome(GameStatus.STALEMATE, DRAW)
    if is_insufficient_material(board):
        return Outcome(GameStatus.DRAW, DRAW, is_check=check)
    return Outcome(GameStatus.PLAYING, is_check=check)
