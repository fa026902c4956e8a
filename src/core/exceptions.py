"""Custom errors raised by the game layers. The engine queries themselves never raise."""


class GameError(Exception):
    """Base class for all errors raised while playing a game"""


class GameStateError(GameError):
    """The requested transition is not allowed in the current game status"""


class NotYourTurnError(GameError):
    """A move was requested for a piece that does not belong to the side to move"""


class IllegalMoveError(GameError):
    """The move is not part of the legal move set of the piece"""


class PromotionRequiredError(IllegalMoveError):
    """A pawn reaches the last rank, but no piece type to promote into was given"""


class InvalidRequestError(GameError, ValueError):
    """
    Request could not be validated at the boundary.

    NOTE: subclasses ValueError so pydantic wraps it into a ValidationError when raised inside a validator.
    """
