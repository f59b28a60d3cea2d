"""
Movement, capture and win-condition rules

Key idea: every check is a plain function of a Board (and the mover), so Game can run them in a fixed order on a copy of the board.
Pieces carry no behaviour of their own: the differences between Attackers, Defenders and the King are the lookup tables below.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.exceptions import (
    DestinationOccupiedError,
    IllegalGeometryError,
    NoPieceAtSourceError,
    NotYourTurnError,
    OutOfBoundsError,
    PathBlockedError,
    RestrictedTileError,
)
from src.hnefatafl.board import Board
from src.hnefatafl.coordinate import (
    BOARD_SIZE,
    ORTHOGONAL_DIRECTIONS,
    THRONE,
    Coordinate,
    Vector,
    is_corner,
)
from src.hnefatafl.pieces import PieceKind, Side, side_of


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_coord: Coordinate
    to_coord: Coordinate

    def __str__(self) -> str:
        return f"{self.from_coord}->{self.to_coord}"


@dataclass(frozen=True)
class Ruleset:
    """
    Switches for the parts of the rules that vary between tables.

    * king_only_corners: only the King may finish a move on a corner.
    * king_only_throne: only the King may finish a move on the throne (5,5).
    * first_side: the side that opens the game.
    """

    king_only_corners: bool = True
    king_only_throne: bool = False
    first_side: Side = Side.ATTACKERS


DEFAULT_RULESET = Ruleset()


# -- CAPTURE TABLES ---
# Which kinds a moving piece can remove by flanking. The King is never among them: it is only taken by encirclement.
CAPTURABLE_BY: dict[PieceKind, frozenset[PieceKind]] = {
    PieceKind.ATTACKER: frozenset({PieceKind.DEFENDER}),
    PieceKind.DEFENDER: frozenset({PieceKind.ATTACKER}),
    PieceKind.KING: frozenset({PieceKind.ATTACKER}),
}


# --- MOVEMENT RULES ---
def validate_move(board: Board, move: Move, turn: Side, ruleset: Ruleset) -> PieceKind:
    """
    Check a proposed move against the board. Return the moving piece or raise the reason it is illegal.
    ----

    1. both coordinates on the board
    2. there is a piece to move ...
    3. ... and it belongs to the side on move
    4. straight along a row or a column, and not standing still
    5. nothing in between
    6. nothing on the destination
    7. the destination is not reserved for the King
    """
    for coordinate in (move.from_coord, move.to_coord):
        if not coordinate.is_within_bounds():
            raise OutOfBoundsError(
                f"Coordinate {coordinate} is off the {BOARD_SIZE}x{BOARD_SIZE} board."
            )

    piece = board.piece_at(move.from_coord)
    if piece is None:
        raise NoPieceAtSourceError(f"No piece to move on {move.from_coord}.")

    if side_of(piece) != turn:
        raise NotYourTurnError(
            f"The {piece.name.lower()} on {move.from_coord} belongs to the {side_of(piece).name.lower()}. It is the {turn.name.lower()}' turn."
        )

    if not is_straight_line(move):
        raise IllegalGeometryError(
            f"Move {move} does not go along a single row or column."
        )

    blocking = first_blocking_tile(board, move)
    if blocking is not None:
        raise PathBlockedError(f"Move {move} is blocked by a piece on {blocking}.")

    if not board.is_empty(move.to_coord):
        raise DestinationOccupiedError(f"Tile {move.to_coord} is already occupied.")

    if is_restricted_for(piece, move.to_coord, ruleset):
        raise RestrictedTileError(
            f"Only the King may move onto {move.to_coord}."
        )

    return piece


def is_straight_line(move: Move) -> bool:
    same_row = move.from_coord.row == move.to_coord.row
    same_column = move.from_coord.column == move.to_coord.column
    # exactly one of the two: both would mean standing still
    return same_row != same_column


def direction_of(move: Move) -> Vector:
    """Unit vector pointing from the start to the destination of a straight move"""
    d_row = move.to_coord.row - move.from_coord.row
    d_column = move.to_coord.column - move.from_coord.column
    return ((d_row > 0) - (d_row < 0), (d_column > 0) - (d_column < 0))


def path_between(move: Move) -> list[Coordinate]:
    """Tiles strictly between start and destination of a straight move"""
    direction = direction_of(move)
    distance = abs(move.to_coord.row - move.from_coord.row) + abs(
        move.to_coord.column - move.from_coord.column
    )
    return [move.from_coord.step(direction, step) for step in range(1, distance)]


def first_blocking_tile(board: Board, move: Move) -> Optional[Coordinate]:
    return next(
        (tile for tile in path_between(move) if not board.is_empty(tile)), None
    )


def is_restricted_for(piece: PieceKind, coordinate: Coordinate, ruleset: Ruleset) -> bool:
    if piece == PieceKind.KING:
        return False
    if ruleset.king_only_corners and is_corner(coordinate):
        return True
    if ruleset.king_only_throne and coordinate == THRONE:
        return True
    return False


def raycasting_moves(board: Board, square: Coordinate, ruleset: Ruleset) -> list[Move]:
    """
    Raycasting algorithm
    -----

    Walk along each direction until we hit another piece or the edge of the board.
    Every piece slides like a rook, so this is the only movement rule there is.
    Reserved tiles are skipped, but do not stop the ray: passing over an empty corner/throne is allowed.
    """
    piece = board.piece_at(square)
    if piece is None:
        return []

    moves: list[Move] = []
    for direction in ORTHOGONAL_DIRECTIONS:
        target = square.step(direction)
        while target.is_within_bounds() and board.is_empty(target):
            if not is_restricted_for(piece, target, ruleset):
                moves.append(Move(from_coord=square, to_coord=target))
            target = target.step(direction)
    return moves


def generate_moves(board: Board, side: Side, ruleset: Ruleset) -> list[Move]:
    """All legal moves for the pieces of `side`"""
    moves: list[Move] = []
    for square, piece in sorted(
        board.position.items(), key=lambda item: (item[0].row, item[0].column)
    ):
        if side_of(piece) == side:
            moves.extend(raycasting_moves(board, square, ruleset))
    return moves


# --- CAPTURING RULES ---
def is_hostile_anchor(board: Board, coordinate: Coordinate, side: Side) -> bool:
    """
    Can `coordinate` close a flank for `side`?
    Either a piece of that side (the King included) stands there, or it is a corner: corners are hostile to everyone, occupied or not.
    """
    if is_corner(coordinate):
        return True
    piece = board.piece_at(coordinate)
    return piece is not None and side_of(piece) == side


def find_captures(board: Board, square: Coordinate) -> list[Coordinate]:
    """
    The pieces flanked by the piece that just arrived on `square`.
    ----

    For every direction: the neighbour must be a capturable opponent and the tile behind it a hostile anchor for the mover.
    Only the mover's new neighbours are examined. A piece that walks in between two enemies is therefore never taken.
    """
    mover = board.piece_at(square)
    if mover is None:
        return []

    mover_side = side_of(mover)
    captures: list[Coordinate] = []
    for direction in ORTHOGONAL_DIRECTIONS:
        adjacent = square.step(direction)
        beyond = square.step(direction, 2)
        if not (adjacent.is_within_bounds() and beyond.is_within_bounds()):
            continue
        neighbour = board.piece_at(adjacent)
        if neighbour not in CAPTURABLE_BY[mover]:
            continue
        if is_hostile_anchor(board, beyond, mover_side):
            captures.append(adjacent)
    return captures


def resolve_captures(board: Board, square: Coordinate) -> list[Coordinate]:
    """Remove every flanked piece in one pass. Returns the tiles that were cleared."""
    captures = find_captures(board, square)
    for captured in captures:
        board.place(captured, None)
    return captures


# --- WIN CONDITIONS ---
def is_king_encircled(board: Board) -> bool:
    """
    The King falls when Attackers stand on all four sides of him.
    On an edge tile he has fewer than four neighbours on the board, so he cannot be taken there.
    """
    king = board.king_position()
    if king is None:
        return False
    neighbours = king.neighbours()
    return len(neighbours) == len(ORTHOGONAL_DIRECTIONS) and all(
        board.piece_at(neighbour) == PieceKind.ATTACKER for neighbour in neighbours
    )


def is_king_escaped(board: Board) -> bool:
    king = board.king_position()
    return king is not None and is_corner(king)
