"""Orchestration between whoever drives the game (requests in, responses out) and the game state machine."""

import logging
from typing import Optional

from src.api.models import (
    GameResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveModel,
    MoveRequest,
    PieceModel,
    PromotionRequest,
    SelectSquareRequest,
    SquareModel,
)
from src.core.config import GameSettings
from src.core.exceptions import GameError
from src.core.shared_types import Color
from src.engine import rules
from src.engine.moves import Move
from src.engine.pieces import Piece
from src.engine.square import Position
from src.game import state as transitions
from src.game.state import GameState

logger = logging.getLogger(__name__)


class GameService:
    """
    Owns the one authoritative GameState.
    ----

    Each request runs a pure transition and replaces the stored state with its result.
    A transition that raises leaves the stored state as it was.

    NOTE: No internal locking. Requests are expected one at a time (a single local game).
    """

    def __init__(self, settings: Optional[GameSettings] = None) -> None:
        self.settings = settings or GameSettings()
        self.state: GameState = transitions.new_game_state(self.settings)

    # -- Session ---
    def start_game(self) -> GameResponse:
        self.state = transitions.start_game(self.state, self.settings)
        return self.game_state()

    def toggle_pause(self) -> GameResponse:
        self.state = transitions.toggle_pause(self.state)
        logger.debug("Game status now %s", self.state.status)
        return self.game_state()

    def go_to_menu(self) -> GameResponse:
        self.state = transitions.go_to_menu(self.state)
        return self.game_state()

    def flip_board(self) -> GameResponse:
        self.state = transitions.flip_board(self.state)
        return self.game_state()

    def tick(self) -> GameResponse:
        """Called once per second by the caller's timer loop"""
        self.state = transitions.tick(self.state)
        return self.game_state()

    # -- Playing ---
    def select_square(self, request: SelectSquareRequest) -> GameResponse:
        self.state = transitions.select_square(
            self.state, self._to_position(request.square)
        )
        return self.game_state()

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Legal destinations of the piece on any square (empty list for an empty square)."""
        position = self._to_position(request.square)
        destinations = rules.legal_moves(
            self.state.board, position, self.state.last_move
        )
        return LegalMovesResponse(
            square=request.square,
            legal_moves=[self._to_square_model(square) for square in destinations],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        try:
            self.state = transitions.apply_move(
                self.state,
                self._to_position(request.from_square),
                self._to_position(request.to_square),
                request.promote_to,
            )
        except GameError as error:
            logger.warning("Move rejected: %s", error)
            raise
        return self.game_state()

    def choose_promotion(self, request: PromotionRequest) -> GameResponse:
        self.state = transitions.choose_promotion(self.state, request.piece_type)
        return self.game_state()

    def cancel_promotion(self) -> GameResponse:
        self.state = transitions.cancel_promotion(self.state)
        return self.game_state()

    def game_state(self) -> GameResponse:
        """Snapshot of the current state, ready to be rendered"""
        state = self.state
        return GameResponse(
            status=state.status,
            current_player=state.current_player,
            winner=state.winner,
            in_check=transitions.is_in_check(state),
            board=[
                [self._to_piece_model(piece) if piece else None for piece in row]
                for row in state.board.grid
            ],
            move_history=[self._to_move_model(move) for move in state.history],
            selected_square=(
                self._to_square_model(state.selected_square)
                if state.selected_square
                else None
            ),
            legal_moves=[
                self._to_square_model(square)
                for square in transitions.legal_destinations(state)
            ],
            promotion_pending=state.pending_promotion is not None,
            captured_white=[self._to_piece_model(p) for p in state.captured_white],
            captured_black=[self._to_piece_model(p) for p in state.captured_black],
            clocks={color: state.clocks.remaining(color) for color in Color},
            is_flipped=state.is_flipped,
        )

    # -- Internal helpers --
    def _to_position(self, square: SquareModel) -> Position:
        return Position(square.row, square.col)

    def _to_square_model(self, position: Position) -> SquareModel:
        return SquareModel(row=position.row, col=position.col)

    def _to_piece_model(self, piece: Piece) -> PieceModel:
        return PieceModel(
            id=piece.id, type=piece.type, color=piece.color, has_moved=piece.has_moved
        )

    def _to_move_model(self, move: Move) -> MoveModel:
        return MoveModel(
            from_square=self._to_square_model(move.from_position),
            to_square=self._to_square_model(move.to_position),
            piece=self._to_piece_model(move.piece),
            captured=self._to_piece_model(move.captured) if move.captured else None,
            is_castling=move.is_castling,
            is_en_passant=move.is_en_passant,
            is_promotion=move.is_promotion,
            promoted_to=move.promoted_to,
            notation=move.notation,
        )
