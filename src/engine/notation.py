"""Short algebraic notation of committed moves"""

from typing import Optional

from src.core.shared_types import PieceType
from src.engine.moves import is_castling_step
from src.engine.pieces import PIECE_LETTERS, Piece
from src.engine.square import FILES, Position


def square_name(position: Position) -> str:
    return position.to_algebraic()


def notate(
    from_position: Position,
    to_position: Position,
    piece: Piece,
    was_capture: bool,
    is_check: bool,
    is_mate: bool,
    promoted_to: Optional[PieceType] = None,
) -> str:
    """
    Algebraic notation of a move
    ---

    examples:
    * "e4" : pawn push
    * "exd5" : pawn on the e-file takes on d5
    * "Nf3", "Bxc6+", "Qxf7#" : piece letter, 'x' if taking, target square, check/mate suffix
    * "e8=Q" : promotion
    * "O-O", "O-O-O" : castling king side / queen side

    NOTE: castling never gets a check or mate suffix. Known deviation from standard notation.
    """
    if is_castling_step(piece, from_position, to_position):
        return "O-O" if to_position.col > from_position.col else "O-O-O"

    notation = PIECE_LETTERS[piece.type]
    if was_capture:
        if piece.type == PieceType.PAWN:
            notation += FILES[from_position.col]
        notation += "x"
    notation += square_name(to_position)
    if promoted_to is not None:
        notation += f"={PIECE_LETTERS[promoted_to]}"

    if is_mate:
        notation += "#"
    elif is_check:
        notation += "+"
    return notation
