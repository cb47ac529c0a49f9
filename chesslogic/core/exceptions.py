"""
Exceptions used across layers.

The domain layer raises these, the Game facade turns move errors into a plain boolean,
and the Service layer lets the rest propagate to whoever called it.
"""


class ChessError(Exception):
    """Base class for everything this package raises on purpose."""


# --- DOMAIN ERRORS ---
class InvalidAddressError(ChessError):
    """Square name in algebraic notation could not be decoded (wrong length, file outside a-h, rank outside 1-8)."""


class IllegalMoveError(ChessError):
    """Well-formed move that is not in the current set of legal moves."""


class InvariantViolationError(ChessError):
    """The board reached a state that should be unreachable (ex. a king went missing)."""


class InvalidFENError(ChessError):
    """Position descriptor could not be parsed."""


# --- SERVICE / PERSISTENCE ERRORS ---
class RepositoryError(ChessError):
    """Persistence layer could not fulfil the request."""


class GameNotFoundError(RepositoryError):
    """No game stored under the requested ID."""


class InvalidRequestError(ChessError):
    """
    Raised by the request model validators.

    NOTE: not a ValueError subclass: pydantic lets it through instead of wrapping it in a ValidationError.
    """
