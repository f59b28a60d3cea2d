"""The Game board stores the `position` (which piece stands on which tile). The rules that change it live in rules.py"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import GameStateError, OutOfBoundsError
from src.hnefatafl.coordinate import BOARD_SIZE, THRONE, Coordinate, is_corner
from src.hnefatafl.pieces import CHAR_TO_PIECE, EMPTY_CHAR, PIECE_TO_CHAR, PieceKind


def _starting_position() -> dict[Coordinate, PieceKind]:
    """
    Official 11x11 layout
    ----

    * King on the throne (5,5)
    * Defenders in a diamond around him: the diamond's half-width shrinks by one per row away from the centre row.
    * Attackers on the middle five tiles of every edge, plus one tile inwards from the middle of every edge.
    """
    position: dict[Coordinate, PieceKind] = {}
    centre = BOARD_SIZE // 2
    last = BOARD_SIZE - 1

    for row in range(centre - 2, centre + 3):
        half_width = 2 - abs(row - centre)
        for column in range(centre - half_width, centre + half_width + 1):
            position[Coordinate(row, column)] = PieceKind.DEFENDER
    position[THRONE] = PieceKind.KING

    for i in range(centre - 2, centre + 3):
        position[Coordinate(i, 0)] = PieceKind.ATTACKER
        position[Coordinate(i, last)] = PieceKind.ATTACKER
        position[Coordinate(0, i)] = PieceKind.ATTACKER
        position[Coordinate(last, i)] = PieceKind.ATTACKER
    position[Coordinate(centre, 1)] = PieceKind.ATTACKER
    position[Coordinate(centre, last - 1)] = PieceKind.ATTACKER
    position[Coordinate(1, centre)] = PieceKind.ATTACKER
    position[Coordinate(last - 1, centre)] = PieceKind.ATTACKER
    return position


@dataclass
class Board:
    # only occupied tiles are stored
    position: dict[Coordinate, PieceKind] = field(default_factory=dict)

    @classmethod
    def initial(cls) -> Self:
        return cls(_starting_position())

    @classmethod
    def empty(cls) -> Self:
        return cls({})

    @classmethod
    def from_rows(cls, rows: list[str]) -> Self:
        """Construct a board from its textual contents.

        One string per row, top (row 0) to bottom, one character per column:
        'A' attacker, 'D' defender, 'K' king, '.' empty tile.
        """
        if len(rows) != BOARD_SIZE:
            raise GameStateError(
                f"Board needs {BOARD_SIZE} rows, got {len(rows)}."
            )
        position: dict[Coordinate, PieceKind] = {}
        for row_idx, row in enumerate(rows):
            if len(row) != BOARD_SIZE:
                raise GameStateError(
                    f"Row {row_idx} needs {BOARD_SIZE} tiles, got {len(row)}: {row!r}"
                )
            for column_idx, character in enumerate(row):
                if character == EMPTY_CHAR:
                    continue
                if character not in CHAR_TO_PIECE:
                    raise GameStateError(
                        f"Unknown piece {character!r} at ({row_idx},{column_idx}). Pick one from {','.join(CHAR_TO_PIECE)} or {EMPTY_CHAR!r}"
                    )
                position[Coordinate(row_idx, column_idx)] = CHAR_TO_PIECE[character]
        return cls(position)

    def to_rows(self) -> list[str]:
        return [self._row_to_text(row) for row in range(BOARD_SIZE)]

    def _row_to_text(self, row: int) -> str:
        return "".join(
            PIECE_TO_CHAR[piece] if piece else EMPTY_CHAR
            for piece in (
                self.position.get(Coordinate(row, column))
                for column in range(BOARD_SIZE)
            )
        )

    def piece_at(self, coordinate: Coordinate) -> Optional[PieceKind]:
        self._assert_within_bounds(coordinate)
        return self.position.get(coordinate)

    def is_empty(self, coordinate: Coordinate) -> bool:
        return self.piece_at(coordinate) is None

    def is_corner(self, coordinate: Coordinate) -> bool:
        return is_corner(coordinate)

    def place(self, coordinate: Coordinate, piece: Optional[PieceKind]) -> None:
        """
        Put a piece on (or with None: clear) a tile.
        NOTE: Only the rules engine and board construction call this. Game states hand out copies, never this mutator.
        """
        self._assert_within_bounds(coordinate)
        if piece is None:
            self.position.pop(coordinate, None)
        else:
            self.position[coordinate] = piece

    def move_piece(self, from_coord: Coordinate, to_coord: Coordinate) -> None:
        """Unchecked move. Legality is the rules engine's job."""
        piece = self.piece_at(from_coord)
        self.place(from_coord, None)
        self.place(to_coord, piece)

    def locate(self, piece: PieceKind) -> list[Coordinate]:
        return [
            coordinate for coordinate, kind in self.position.items() if kind == piece
        ]

    def king_position(self) -> Optional[Coordinate]:
        """None once the King has been captured"""
        kings = self.locate(PieceKind.KING)
        return kings[0] if kings else None

    def count(self, piece: PieceKind) -> int:
        return len(self.locate(piece))

    def copy(self) -> Self:
        return deepcopy(self)

    def _assert_within_bounds(self, coordinate: Coordinate) -> None:
        if not coordinate.is_within_bounds():
            raise OutOfBoundsError(
                f"Coordinate {coordinate} is off the {BOARD_SIZE}x{BOARD_SIZE} board."
            )
