"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Both the domain layer (Game) and the persistence layer (Repository) convert to/from the model defined here,
so neither has to know about the other.
"""

from dataclasses import dataclass, field


@dataclass
class GameModel:
    """Transport-safe representation of a chess game used between Service, DB, and Game layers."""

    current_fen: str
    history_fen: list[str] = field(default_factory=list)
    moves: list[str] = field(default_factory=list)
