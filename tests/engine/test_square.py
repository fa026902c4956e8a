"""Unit tests for /src/engine/square.py"""

import pytest

from src.engine.square import BOARD_SIZE, FILES, Position, is_within_board


@pytest.mark.parametrize(
    "row, col, notation",
    [
        (row, col, f"{FILES[col]}{BOARD_SIZE - row}")
        for row in range(BOARD_SIZE)
        for col in range(BOARD_SIZE)
    ],
)
def test_creating_from_algebraic(row: int, col: int, notation: str) -> None:
    """Row 0 is the 8th rank, column 0 is the a-file"""
    position = Position.from_algebraic(notation)
    assert position == Position(row, col)
    assert position.to_algebraic() == notation


def test_corners() -> None:
    assert Position(0, 0).to_algebraic() == "a8"
    assert Position(7, 7).to_algebraic() == "h1"
    assert Position(7, 4).to_algebraic() == "e1"


def test_within_board() -> None:
    """happy case: every square of the 8x8 board"""
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            assert is_within_board(row, col)
            assert Position(row, col).is_within_board()


@pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (8, 0), (0, 8), (8, 8), (-1, -1)])
def test_out_of_board(row: int, col: int) -> None:
    assert not is_within_board(row, col)
    assert not Position(row, col).is_within_board()


def test_offset() -> None:
    assert Position(6, 4).offset(-2, 0) == Position(4, 4)
    assert Position(0, 0).offset(-1, 1) == Position(-1, 1)
