"""
The relay that carries free-text messages between the two players.

The chess logic never talks to it; the service announces accepted moves on it.
"""

from typing import Protocol


class MessageRelay(Protocol):
    def send_message(self, text: str) -> None:
        """Forward the text to the other side. Delivery is the relay's own business."""
        ...


def move_announcement(move: str, fen: str) -> str:
    """The text sent after a move has been played"""
    return f"move {move} {fen}"
