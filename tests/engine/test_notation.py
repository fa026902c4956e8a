"""Unit tests for /src/engine/notation.py"""

import pytest

from src.core.shared_types import Color, PieceType
from src.engine.notation import notate, square_name
from src.engine.pieces import Piece
from src.engine.square import Position


def sq(name: str) -> Position:
    return Position.from_algebraic(name)


def piece(piece_type: PieceType, color: Color = Color.WHITE) -> Piece:
    return Piece(f"{piece_type}-{color}", piece_type, color)


@pytest.mark.parametrize(
    "position, name", [(Position(0, 0), "a8"), (Position(7, 7), "h1"), (Position(4, 4), "e4")]
)
def test_square_name(position: Position, name: str) -> None:
    assert square_name(position) == name


@pytest.mark.parametrize(
    "from_name, to_name, piece_type, was_capture, is_check, is_mate, expected",
    [
        ("e2", "e4", PieceType.PAWN, False, False, False, "e4"),
        ("e4", "d5", PieceType.PAWN, True, False, False, "exd5"),
        ("g1", "f3", PieceType.KNIGHT, False, False, False, "Nf3"),
        ("b5", "c6", PieceType.BISHOP, True, True, False, "Bxc6+"),
        ("a1", "a8", PieceType.ROOK, False, True, False, "Ra8+"),
        ("h5", "f7", PieceType.QUEEN, True, True, True, "Qxf7#"),
        ("e1", "f1", PieceType.KING, False, False, False, "Kf1"),
    ],
)
def test_notate(
    from_name: str,
    to_name: str,
    piece_type: PieceType,
    was_capture: bool,
    is_check: bool,
    is_mate: bool,
    expected: str,
) -> None:
    notation = notate(
        sq(from_name), sq(to_name), piece(piece_type), was_capture, is_check, is_mate
    )
    assert notation == expected


def test_mate_wins_over_check() -> None:
    assert notate(sq("a1"), sq("a8"), piece(PieceType.ROOK), False, True, True) == "Ra8#"


@pytest.mark.parametrize(
    "promoted_to, is_check, expected",
    [
        (PieceType.QUEEN, False, "e8=Q"),
        (PieceType.KNIGHT, True, "e8=N+"),
    ],
)
def test_promotion(promoted_to: PieceType, is_check: bool, expected: str) -> None:
    pawn = piece(PieceType.PAWN)
    assert notate(sq("e7"), sq("e8"), pawn, False, is_check, False, promoted_to) == expected


def test_promotion_with_capture() -> None:
    pawn = piece(PieceType.PAWN, Color.BLACK)
    assert notate(sq("d2"), sq("c1"), pawn, True, False, False, PieceType.QUEEN) == "dxc1=Q"


@pytest.mark.parametrize(
    "from_name, to_name, expected",
    [("e1", "g1", "O-O"), ("e1", "c1", "O-O-O"), ("e8", "g8", "O-O"), ("e8", "c8", "O-O-O")],
)
def test_castling(from_name: str, to_name: str, expected: str) -> None:
    king = piece(PieceType.KING)
    assert notate(sq(from_name), sq(to_name), king, False, False, False) == expected


def test_castling_never_gets_a_suffix() -> None:
    """Known deviation from standard notation"""
    king = piece(PieceType.KING)
    assert notate(sq("e1"), sq("g1"), king, False, True, False) == "O-O"
    assert notate(sq("e1"), sq("c1"), king, False, True, True) == "O-O-O"
