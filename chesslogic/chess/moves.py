"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define the move set for each piece type.

Everything generated here is *pseudo-legal*: it follows the movement rules of the piece,
but may still leave your own king under attack. Legality is checked later (see legality.py).
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from chesslogic.chess.pieces import Color, Piece, PieceType
from chesslogic.chess.square import Square
from chesslogic.core.exceptions import InvalidAddressError


class Cell(Protocol):
    square: Square
    piece: Optional[Piece]


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Optional[Piece]: ...
    def cells_of_color(self, color: Color) -> list[Cell]: ...


Vector = tuple[int, int]


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_text(cls, text: str) -> Self:
        """
        Moves are written as two squares in algebraic notation after each other.

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "g8f6": move the piece that was on g8 to f6
        """
        text = text.strip()
        if len(text) != 4:
            raise InvalidAddressError(
                f"Move must consist of exactly two squares, ex. 'e2e4'. Got: {text!r}"
            )

        from_sq = Square.from_algebraic(text[:2])
        to_sq = Square.from_algebraic(text[2:])
        if from_sq is None or to_sq is None:
            raise InvalidAddressError(f"Cannot interpret {text!r} as two squares.")
        return cls(from_sq, to_sq)

    def to_text(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"


@dataclass(frozen=True)
class AcceptedMove:
    """
    Snapshot of a move at the moment it got accepted: which piece moved and what stood on the target square.

    NOTE: pieces are copied, so a later promotion of the moving pawn does not rewrite history.
    """

    move: Move
    moving_piece: Piece
    captured_piece: Optional[Piece]

    @classmethod
    def from_move_and_board(cls, move: Move, board: Board) -> Self:
        moving_piece = board.piece(move.from_square)
        if moving_piece is None:
            raise InvalidAddressError(
                f"No piece to move on {move.from_square.to_algebraic()}"
            )
        target = board.piece(move.to_square)
        return cls(
            move=move,
            moving_piece=Piece(moving_piece.type, moving_piece.color),
            captured_piece=Piece(target.type, target.color) if target else None,
        )


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, board: Board, directions: list[Vector]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    We define move directions and move along them until we hit another piece or
    the edge of the board.
    * edge of the board or own piece: the ray stops before that square
    * opponent's piece: the square is included (it can be captured), then the ray stops
    """
    moving_piece = board.piece(square)
    assert moving_piece is not None

    moves: list[Move] = []
    for df, dr in directions:
        target_square = square
        while True:
            target_square = target_square.offset(df, dr)
            if not target_square.is_within_bounds():
                break

            piece_found = board.piece(target_square)
            if piece_found is not None:
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if piece_found.color != moving_piece.color:
                    moves.append(Move(from_square=square, to_square=target_square))
                break

            moves.append(Move(from_square=square, to_square=target_square))
    return moves


def single_step_move(square: Square, board: Board, deltas: list[Vector]) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump a single step along a direction"""
    moving_piece = board.piece(square)
    assert moving_piece is not None

    moves: list[Move] = []
    for df, dr in deltas:
        target_square = square.offset(df, dr)
        if not target_square.is_within_bounds():
            continue

        piece_found = board.piece(target_square)
        if piece_found is None or piece_found.color != moving_piece.color:
            moves.append(Move(from_square=square, to_square=target_square))

    return moves


PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}
PAWN_STARTING_RANK: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}
PROMOTION_RANK: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}


def candidate_pawn_moves(
    square: Square, board: Board, en_passant_square: Optional[Square] = None
) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward (onto an empty square only).
    - It can move by two in their first move (so when on their starting rank), if both squares are empty
    - takes diagonally forward, or onto the en passant square (only with an enemy pawn next to it to take)
    """
    pawn = board.piece(square)
    assert pawn is not None
    direction = PAWN_DIRECTION[pawn.color]

    moves: list[Move] = []
    # Pawn pushes : Black moves down the board, White moves up the board
    one_step = square.offset(0, direction)
    if one_step.is_within_bounds() and board.piece(one_step) is None:
        moves.append(Move(from_square=square, to_square=one_step))

        two_steps = square.offset(0, 2 * direction)
        on_starting_rank = square.rank == PAWN_STARTING_RANK[pawn.color]
        if (
            on_starting_rank
            and two_steps.is_within_bounds()
            and board.piece(two_steps) is None
        ):
            moves.append(Move(from_square=square, to_square=two_steps))

    # pawns take diagonally:
    for df in (-1, 1):
        target_square = square.offset(df, direction)
        if not target_square.is_within_bounds():
            continue

        piece_found = board.piece(target_square)
        is_opponent_piece = piece_found is not None and piece_found.color != pawn.color
        is_en_passant = (
            target_square == en_passant_square
            and piece_found is None
            and is_opponent_pawn(
                board.piece(en_passant_victim_square(Move(square, target_square))), pawn.color
            )
        )
        if is_opponent_piece or is_en_passant:
            moves.append(Move(from_square=square, to_square=target_square))
    return moves


KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
# The 8 neighbouring squares, each exactly once
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS


def candidate_knight_moves(square: Square, board: Board) -> list[Move]:
    """Knights always move such that |delta_rank| + |delta_file| = 3"""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(square: Square, board: Board) -> list[Move]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: Square, board: Board) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(square: Square, board: Board) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    diagonal_moves = candidate_bishop_moves(square, board)
    horizontal_and_vertical_moves = candidate_rook_moves(square, board)
    return diagonal_moves + horizontal_and_vertical_moves


def candidate_king_moves(square: Square, board: Board) -> list[Move]:
    """
    The king can move by a single square at the time.

    No castling moves: only the castling rights are tracked.
    """
    return single_step_move(square, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def generate_pseudo_legal_moves(
    board: Board, color: Color, en_passant_square: Optional[Square] = None
) -> list[Move]:
    """
    All moves for the pieces of one color, using the basic movement rules.
    ---

    NOTE: The en passant square only matters for pawns, so only the pawn rule gets to see it.
    """
    candidate_moves: list[Move] = []
    for cell in board.cells_of_color(color):
        assert cell.piece is not None
        if cell.piece.type == PieceType.PAWN:
            candidate_moves.extend(
                candidate_pawn_moves(cell.square, board, en_passant_square)
            )
            continue

        movement_rule = MOVEMENT_RULES[cell.piece.type]
        candidate_moves.extend(movement_rule(cell.square, board))
    return candidate_moves


# -- EN PASSANT / PROMOTION HELPERS --
def is_en_passant_capture(move: Move, board: Board) -> bool:
    """A pawn that changes file while landing on an empty square, next to an enemy pawn, is taking en passant."""
    moving_piece = board.piece(move.from_square)
    if moving_piece is None or moving_piece.type != PieceType.PAWN:
        return False
    changes_file = move.from_square.file != move.to_square.file
    return (
        changes_file
        and board.piece(move.to_square) is None
        and is_opponent_pawn(board.piece(en_passant_victim_square(move)), moving_piece.color)
    )


def is_opponent_pawn(piece: Optional[Piece], color: Color) -> bool:
    return piece is not None and piece.type == PieceType.PAWN and piece.color != color


def en_passant_victim_square(move: Move) -> Square:
    """
    The pawn taken en passant stands one rank behind the target square, seen from the capturing pawn.
    (That is: on the rank the capturing pawn came from, in the file it moves to.)
    """
    return Square(file=move.to_square.file, rank=move.from_square.rank)


def double_push_en_passant_square(move: Move, moving_piece: Piece) -> Optional[Square]:
    """The square skipped by a pawn advancing two ranks. None for any other move."""
    ranks_moved = abs(move.from_square.rank - move.to_square.rank)
    if moving_piece.type != PieceType.PAWN or ranks_moved != 2:
        return None
    direction = PAWN_DIRECTION[moving_piece.color]
    return move.from_square.offset(0, direction)


def is_pawn_on_promotion_square(square: Square, piece: Optional[Piece]) -> bool:
    """check if a pawn stands on the farthest rank for its color"""
    if piece is None or piece.type != PieceType.PAWN:
        return False
    return square.rank == PROMOTION_RANK[piece.color]
