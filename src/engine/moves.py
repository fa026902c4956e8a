"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define the reach of each piece type.

Two operations are exposed:
* `piece_reach()` : the squares a piece can move to or capture on, without castling. Attack detection uses this one.
* `pseudo_legal_moves()` : the reach plus castling. What a player could try to play.

Neither looks at whether the mover's own king ends up in check. Legality is checked in rules.py
"""

from dataclasses import dataclass
from typing import Callable, Optional

from src.core.shared_types import Color, PieceType
from src.engine.board import Board
from src.engine.pieces import Piece
from src.engine.square import Position

Vector = tuple[int, int]

DIAGONALS: list[Vector] = [(-1, -1), (-1, 1), (1, -1), (1, 1)]
STRAIGHTS: list[Vector] = [(-1, 0), (1, 0), (0, -1), (0, 1)]
KNIGHT_JUMPS: list[Vector] = [
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
]
KING_STEPS: list[Vector] = DIAGONALS + STRAIGHTS

# Columns of the rooks a king castles with, and the column the king starts from
KING_SIDE_ROOK_COL = 7
QUEEN_SIDE_ROOK_COL = 0
KING_HOME_COL = 4


@dataclass(frozen=True)
class Move:
    """
    A move of the game history.
    ---

    * `piece` is the piece as it stood on `from_position` before the move.
    * `notation` is only filled in once the move is committed. Candidate moves leave it empty.
    """

    from_position: Position
    to_position: Position
    piece: Piece
    captured: Optional[Piece] = None
    is_castling: bool = False
    is_en_passant: bool = False
    is_promotion: bool = False
    promoted_to: Optional[PieceType] = None
    notation: str = ""

    @property
    def is_double_pawn_push(self) -> bool:
        return (
            self.piece.type == PieceType.PAWN
            and abs(self.from_position.row - self.to_position.row) == 2
        )


def forward_direction(color: Color) -> int:
    """White moves UP the board (towards row 0), black moves DOWN"""
    return -1 if color == Color.WHITE else 1


def is_castling_step(piece: Piece, from_position: Position, to_position: Position) -> bool:
    """A king moving two columns at once is castling"""
    return (
        piece.type == PieceType.KING
        and abs(to_position.col - from_position.col) == 2
    )


# --- MOVEMENT RULES ---
def raycasting_moves(
    position: Position, board: Board, directions: list[Vector]
) -> list[Position]:
    """
    Raycasting algorithm
    -----

    We define move directions and move along them until we hit another piece or
    the edge of the board. An opponent's piece can be captured (included), your own piece blocks (excluded).
    """
    player_color = board.piece(position).color
    moves: list[Position] = []
    for d_row, d_col in directions:
        target = position.offset(d_row, d_col)
        while target.is_within_board():
            piece_found = board.piece(target)
            if piece_found is None:
                moves.append(target)
            else:
                if piece_found.color != player_color:
                    moves.append(target)
                break
            target = target.offset(d_row, d_col)
    return moves


def single_step_moves(
    position: Position, board: Board, deltas: list[Vector]
) -> list[Position]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump/step a single time along a direction"""
    player_color = board.piece(position).color
    moves: list[Position] = []
    for d_row, d_col in deltas:
        target = position.offset(d_row, d_col)
        if not target.is_within_board():
            continue

        piece_found = board.piece(target)
        if piece_found is None or piece_found.color != player_color:
            moves.append(target)
    return moves


def candidate_pawn_moves(
    position: Position, board: Board, last_move: Optional[Move]
) -> list[Position]:
    """
    A pawn:
    - moves by a single square forward onto an empty square.
    - can move by two while it has not moved yet (and the square it passes is empty as well)
    - takes diagonally, only if an opponent's piece is standing there
    - takes en passant: right after an opponent's pawn passed it with a double step

    NOTE: The double step looks at `has_moved`, not at the row the pawn is standing on.
    """
    pawn = board.piece(position)
    direction = forward_direction(pawn.color)
    moves: list[Position] = []

    # pushes
    one_step = position.offset(direction, 0)
    if one_step.is_within_board() and board.is_empty(one_step):
        moves.append(one_step)
        two_steps = position.offset(2 * direction, 0)
        if not pawn.has_moved and two_steps.is_within_board() and board.is_empty(two_steps):
            moves.append(two_steps)

    # takes
    for d_col in (-1, 1):
        target = position.offset(direction, d_col)
        target_piece = board.piece(target)
        if target_piece is not None and target_piece.color != pawn.color:
            moves.append(target)

    # en passant: the square behind the pawn that just made a double step
    if (
        last_move is not None
        and last_move.is_double_pawn_push
        and last_move.to_position.row == position.row
        and abs(last_move.to_position.col - position.col) == 1
    ):
        moves.append(Position(position.row + direction, last_move.to_position.col))
    return moves


def candidate_knight_moves(
    position: Position, board: Board, last_move: Optional[Move]
) -> list[Position]:
    """Knights always move such that |delta_row| + |delta_col| = 3"""
    return single_step_moves(position, board, KNIGHT_JUMPS)


def candidate_bishop_moves(
    position: Position, board: Board, last_move: Optional[Move]
) -> list[Position]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_moves(position, board, DIAGONALS)


def candidate_rook_moves(
    position: Position, board: Board, last_move: Optional[Move]
) -> list[Position]:
    """Rooks move either horizontally or vertically"""
    return raycasting_moves(position, board, STRAIGHTS)


def candidate_queen_moves(
    position: Position, board: Board, last_move: Optional[Move]
) -> list[Position]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return raycasting_moves(position, board, DIAGONALS + STRAIGHTS)


def candidate_king_moves(
    position: Position, board: Board, last_move: Optional[Move]
) -> list[Position]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (handled separately).
    """
    return single_step_moves(position, board, KING_STEPS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Position, Board, Optional[Move]], list[Position]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


# -- CASTLING MOVES ---
def squares_between_on_row(from_col: int, to_col: int, row: int) -> list[Position]:
    """The squares strictly in between two columns of the same row"""
    low, high = sorted((from_col, to_col))
    return [Position(row, col) for col in range(low + 1, high)]


def castling_moves(position: Position, board: Board) -> list[Position]:
    """
    Castling targets of the king standing on `position`
    ---

    **A direction is available if**

    * the king has not moved and stands on its home column (the e-file)
    * the rook in the corner of that side exists, belongs to the same player and has not moved
    * all squares in between the king and the rook are empty

    NOTE: Whether the king is in check, passes through or lands on an attacked square is NOT checked here.
    That needs attack detection, which in turn uses the reach of the pieces. rules.py filters these out.
    """
    king = board.piece(position)
    if king is None or king.type != PieceType.KING or king.has_moved:
        return []
    if position.col != KING_HOME_COL:
        return []

    moves: list[Position] = []
    for rook_col, d_col in ((KING_SIDE_ROOK_COL, 2), (QUEEN_SIDE_ROOK_COL, -2)):
        rook = board.piece(Position(position.row, rook_col))
        if rook is None or rook.type != PieceType.ROOK or rook.color != king.color:
            continue
        if rook.has_moved:
            continue
        path = squares_between_on_row(position.col, rook_col, position.row)
        if any(not board.is_empty(square) for square in path):
            continue
        moves.append(position.offset(0, d_col))
    return moves


def castling_rook_columns(king_from: Position, king_to: Position) -> tuple[int, int]:
    """Where the rook comes from and where it ends up: on the square the king crossed"""
    if king_to.col > king_from.col:
        return KING_SIDE_ROOK_COL, king_to.col - 1
    return QUEEN_SIDE_ROOK_COL, king_to.col + 1


# --- PUBLIC OPERATIONS ---
def piece_reach(
    board: Board, position: Position, last_move: Optional[Move] = None
) -> list[Position]:
    """Raw reach of the piece: every square it could move to or capture on, castling excluded. Empty square -> no moves."""
    piece = board.piece(position)
    if piece is None:
        return []
    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(position, board, last_move)


def pseudo_legal_moves(
    board: Board, position: Position, last_move: Optional[Move] = None
) -> list[Position]:
    """The reach of the piece, including castling for an unmoved king. Own king safety is not considered."""
    moves = piece_reach(board, position, last_move)
    piece = board.piece(position)
    if piece is not None and piece.type == PieceType.KING:
        moves.extend(castling_moves(position, board))
    return moves
