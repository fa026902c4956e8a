"""The board holds the configuration of pieces. All rules live elsewhere and only read from it."""

from copy import deepcopy
from dataclasses import dataclass
from typing import Iterator, Optional, Self

from src.core.shared_types import Color, PieceType
from src.engine.pieces import Piece
from src.engine.square import BOARD_SIZE, Position

Grid = list[list[Optional[Piece]]]

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

# Row a pawn of the given color starts on
PAWN_HOME_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}


def piece_id(piece_type: PieceType, color: Color, row: int, col: int) -> str:
    return f"{piece_type}-{color}-{row}-{col}"


@dataclass
class Board:
    grid: Grid

    @classmethod
    def empty(cls) -> Self:
        return cls([[None] * BOARD_SIZE for _ in range(BOARD_SIZE)])

    @classmethod
    def initial(cls) -> Self:
        """Standard starting setup, nothing has moved yet"""
        return cls.from_fen(STARTING_POSITION_FEN)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * the first group is row 0 (black's back rank, rank 8), read from the a-file to the h-file
        * letters are pieces (upper case white, lower case black)
        * a number denotes that many consecutive empty squares

        ---
        NOTE: Pawns are only allowed a double step while unmoved. A pawn placed away from its home row
        is therefore created as already moved. All other pieces start unmoved.
        """
        board = cls.empty()
        for row, fen_one_row in enumerate(fen_str.split("/")):
            col = 0
            for character in fen_one_row:
                if character.isalpha():
                    piece = Piece.from_fen(character, id="")
                    has_moved = (
                        piece.type == PieceType.PAWN
                        and row != PAWN_HOME_ROW[piece.color]
                    )
                    board.grid[row][col] = Piece(
                        piece_id(piece.type, piece.color, row, col),
                        piece.type,
                        piece.color,
                        has_moved,
                    )
                    col += 1
                else:
                    col += int(character)
        return board

    def to_fen(self) -> str:
        """Rows are separated by slashes in FEN string."""
        return "/".join(self._row_to_fen(row) for row in self.grid)

    def _row_to_fen(self, row: list[Optional[Piece]]) -> str:
        fen_characters: list[str] = []
        empty_count = 0
        for piece in row:
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire row is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def piece(self, position: Position) -> Optional[Piece]:
        """The piece on the square. Off-board squares behave like empty ones."""
        if not position.is_within_board():
            return None
        return self.grid[position.row][position.col]

    def is_empty(self, position: Position) -> bool:
        return self.piece(position) is None

    def place_piece(self, piece: Piece, position: Position) -> None:
        self.grid[position.row][position.col] = piece

    def remove_piece(self, position: Position) -> Optional[Piece]:
        removed = self.grid[position.row][position.col]
        self.grid[position.row][position.col] = None
        return removed

    def move_piece(
        self, from_position: Position, to_position: Position
    ) -> Optional[Piece]:
        """Relocate the piece (the source square is cleared). Returns whatever stood on the target square."""
        moving_piece = self.remove_piece(from_position)
        replaced = self.piece(to_position)
        self.grid[to_position.row][to_position.col] = moving_piece
        return replaced

    def copy(self) -> Self:
        """Independent copy: changing it never affects this board"""
        return deepcopy(self)

    def pieces(self) -> Iterator[tuple[Position, Piece]]:
        for row, pieces_on_row in enumerate(self.grid):
            for col, piece in enumerate(pieces_on_row):
                if piece is not None:
                    yield Position(row, col), piece

    def locate_color(self, color: Color) -> list[Position]:
        return [position for position, piece in self.pieces() if piece.color == color]

    def find_king(self, color: Color) -> Optional[Position]:
        """Position of the king of that color. None if there is no such king (malformed board)."""
        return next(
            (
                position
                for position, piece in self.pieces()
                if piece.type == PieceType.KING and piece.color == color
            ),
            None,
        )
