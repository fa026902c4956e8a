"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/helpers required for testing multiple layers.
"""

from typing import Callable, Optional

import pytest

from src.core.shared_types import PieceType
from src.engine.board import Board
from src.engine.commit import MoveResult, commit_move
from src.engine.moves import Move
from src.engine.square import Position

EMPTY_FEN = "/".join(["8"] * 8)

PlayMovesFn = Callable[[Board, list[str]], list[MoveResult]]


def parse_uci(uci: str) -> tuple[Position, Position, Optional[PieceType]]:
    """'e7e8q' -> (e7, e8, queen). Only used to write test move sequences compactly."""
    promotions = {
        "q": PieceType.QUEEN,
        "r": PieceType.ROOK,
        "b": PieceType.BISHOP,
        "n": PieceType.KNIGHT,
    }
    promote_to = promotions[uci[4]] if len(uci) == 5 else None
    from_position = Position.from_algebraic(uci[:2])
    to_position = Position.from_algebraic(uci[2:4])
    return from_position, to_position, promote_to


@pytest.fixture
def empty_board() -> Board:
    return Board.from_fen(EMPTY_FEN)


@pytest.fixture
def play_moves() -> PlayMovesFn:
    """Call the inner function with a board and a list of moves in UCI notation. Returns the result of every move."""

    def _play(board: Board, moves_uci: list[str]) -> list[MoveResult]:
        results: list[MoveResult] = []
        last_move: Optional[Move] = None
        for uci in moves_uci:
            from_position, to_position, promote_to = parse_uci(uci)
            result = commit_move(
                board, from_position, to_position, last_move, promote_to
            )
            results.append(result)
            board = result.board
            last_move = result.move
        return results

    return _play


@pytest.fixture
def scholars_mate() -> list[str]:
    """1.e4 e5 2.Bc4 Nc6 3.Qh5 Nf6 4.Qxf7#"""
    return ["e2e4", "e7e5", "f1c4", "b8c6", "d1h5", "g8f6", "h5f7"]
