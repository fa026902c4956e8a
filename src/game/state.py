"""
Game state machine
----

The GameState is an immutable value. Every transition is a pure function that takes the current state
and returns a new one. Whoever drives the game (the service / a UI) keeps the single reference to the
current state and replaces it wholesale after each transition.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from src.core.config import GameSettings
from src.core.exceptions import GameStateError, NotYourTurnError
from src.core.shared_types import Color, GameStatus, PieceType, Winner
from src.engine.board import Board
from src.engine.commit import commit_move, is_promotion_square
from src.engine.moves import Move
from src.engine.pieces import Piece
from src.engine.rules import is_king_in_check, legal_moves
from src.engine.square import Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Clocks:
    """Remaining seconds per player"""

    white: int
    black: int

    @classmethod
    def from_settings(cls, settings: GameSettings) -> "Clocks":
        return cls(settings.clock_seconds, settings.clock_seconds)

    def remaining(self, color: Color) -> int:
        return self.white if color == Color.WHITE else self.black

    def decrement(self, color: Color) -> "Clocks":
        """One second less for that player, never below zero"""
        remaining = max(0, self.remaining(color) - 1)
        if color == Color.WHITE:
            return replace(self, white=remaining)
        return replace(self, black=remaining)


@dataclass(frozen=True)
class PendingPromotion:
    from_position: Position
    to_position: Position


@dataclass(frozen=True)
class GameState:
    board: Board
    current_player: Color
    status: GameStatus
    clocks: Clocks
    history: tuple[Move, ...] = ()
    winner: Optional[Winner] = None
    selected_square: Optional[Position] = None
    last_move: Optional[Move] = None
    # captured_white holds the white pieces black has taken, and vice versa
    captured_white: tuple[Piece, ...] = ()
    captured_black: tuple[Piece, ...] = ()
    is_flipped: bool = False
    pending_promotion: Optional[PendingPromotion] = None


# --- SESSION TRANSITIONS ---
def new_game_state(settings: Optional[GameSettings] = None) -> GameState:
    """The state the application starts in: the menu, with a board ready to go"""
    settings = settings or GameSettings()
    return GameState(
        board=Board.initial(),
        current_player=settings.first_player,
        status=GameStatus.MENU,
        clocks=Clocks.from_settings(settings),
    )


def start_game(state: GameState, settings: Optional[GameSettings] = None) -> GameState:
    """Fresh board, fresh clocks, empty history. The board orientation is kept."""
    settings = settings or GameSettings()
    logger.info("Starting a new game")
    return replace(
        new_game_state(settings),
        status=GameStatus.PLAYING,
        is_flipped=state.is_flipped,
    )


def toggle_pause(state: GameState) -> GameState:
    if state.status == GameStatus.PLAYING:
        return replace(state, status=GameStatus.PAUSED)
    if state.status == GameStatus.PAUSED:
        return replace(state, status=GameStatus.PLAYING)
    raise GameStateError(f"Cannot pause or resume a game with status: {state.status}")


def go_to_menu(state: GameState) -> GameState:
    return replace(
        state,
        status=GameStatus.MENU,
        selected_square=None,
        pending_promotion=None,
    )


def flip_board(state: GameState) -> GameState:
    return replace(state, is_flipped=not state.is_flipped)


def tick(state: GameState) -> GameState:
    """
    One second passed for the player to move.

    NOTE: Only while a game is being played. Running the timer loop itself is up to the caller.
    """
    if state.status != GameStatus.PLAYING:
        return state
    return replace(state, clocks=state.clocks.decrement(state.current_player))


# --- QUERIES ---
def legal_destinations(state: GameState) -> list[Position]:
    """Where the selected piece may go"""
    if state.selected_square is None:
        return []
    return legal_moves(state.board, state.selected_square, state.last_move)


def is_in_check(state: GameState) -> bool:
    return is_king_in_check(state.board, state.current_player)


# --- PLAYING ---
def select_square(state: GameState, position: Position) -> GameState:
    """
    Click-to-move
    ----

    1. Clicking one of your own pieces selects it
    2. Clicking a legal destination of the selected piece plays the move
       (a pawn reaching the last row first waits for the promotion choice)
    3. Any other click clears the selection

    Clicks are ignored unless a game is being played and no promotion choice is open.
    """
    if state.status != GameStatus.PLAYING or state.pending_promotion is not None:
        return state

    piece = state.board.piece(position)
    if piece is not None and piece.color == state.current_player:
        logger.debug("Selected %s", position.to_algebraic())
        return replace(state, selected_square=position)

    if state.selected_square is None:
        return state

    if position not in legal_destinations(state):
        return replace(state, selected_square=None)

    moving_piece = state.board.piece(state.selected_square)
    if is_promotion_square(moving_piece, position):
        return replace(
            state,
            pending_promotion=PendingPromotion(state.selected_square, position),
        )
    return apply_move(state, state.selected_square, position)


def choose_promotion(state: GameState, piece_type: PieceType) -> GameState:
    if state.pending_promotion is None:
        raise GameStateError("There is no pawn waiting to be promoted")
    pending = state.pending_promotion
    return apply_move(
        state, pending.from_position, pending.to_position, promote_to=piece_type
    )


def cancel_promotion(state: GameState) -> GameState:
    return replace(state, pending_promotion=None, selected_square=None)


def apply_move(
    state: GameState,
    from_position: Position,
    to_position: Position,
    promote_to: Optional[PieceType] = None,
) -> GameState:
    """
    Attempt to make a move
    -----

    1. the game must be in progress
    2. the piece must belong to the player to move
    3. commit the move (the engine checks legality)
    4. record the move, the piece taken, hand the turn over and update the game status
    """
    if state.status != GameStatus.PLAYING:
        raise GameStateError(f"Game is not in progress. status: {state.status}")

    piece = state.board.piece(from_position)
    if piece is not None and piece.color != state.current_player:
        raise NotYourTurnError(
            f"It is not your turn. Waiting for {state.current_player} to make a move first."
        )

    result = commit_move(
        state.board, from_position, to_position, state.last_move, promote_to
    )
    move = result.move
    logger.info("%s played %s", state.current_player, move.notation)

    captured_white = state.captured_white
    captured_black = state.captured_black
    if move.captured is not None and move.captured.color == Color.WHITE:
        captured_white += (move.captured,)
    elif move.captured is not None:
        captured_black += (move.captured,)

    outcome = result.outcome
    if outcome.is_over:
        logger.info("Game over: %s (winner: %s)", outcome.status, outcome.winner)

    return replace(
        state,
        board=result.board,
        current_player=state.current_player.opponent,
        history=state.history + (move,),
        last_move=move,
        selected_square=None,
        pending_promotion=None,
        status=outcome.status,
        winner=outcome.winner,
        captured_white=captured_white,
        captured_black=captured_black,
    )
