"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8
BOARD_SIZE = 8

# Columns 0..7 are the a- to h-file. Row 0 is black's back rank (rank 8), row 7 is white's back rank (rank 1).
FILES = "abcdefgh"
RANKS = "87654321"


def is_within_board(row: int, col: int) -> bool:
    """Every board access is gated by this check"""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


@dataclass(frozen=True)
class Position:
    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Position:
        """Algebraic notation: 'a8' maps to (0, 0), 'h1' maps to (7, 7)"""
        col = FILES.index(sq[0])
        row = RANKS.index(sq[1])
        return cls(row, col)

    def to_algebraic(self) -> str:
        return f"{FILES[self.col]}{RANKS[self.row]}"

    def offset(self, d_row: int, d_col: int) -> Position:
        return Position(self.row + d_row, self.col + d_col)

    def is_within_board(self) -> bool:
        return is_within_board(self.row, self.col)
