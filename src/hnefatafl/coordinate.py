"""
A tile on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Hnefatafl is played on 11x11. Kept adjustable, but the starting layout in board.py assumes 11.
BOARD_SIZE = 11

Vector = tuple[int, int]

# The four orthogonal directions as (d_row, d_column)
ORTHOGONAL_DIRECTIONS: tuple[Vector, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass(frozen=True)
class Coordinate:
    row: int
    column: int

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_SIZE) and (0 <= self.column < BOARD_SIZE)

    def is_corner(self) -> bool:
        return self in CORNERS

    def step(self, direction: Vector, distance: int = 1) -> Coordinate:
        """The coordinate `distance` tiles away along `direction`. May fall off the board."""
        d_row, d_column = direction
        return Coordinate(self.row + distance * d_row, self.column + distance * d_column)

    def neighbours(self) -> list[Coordinate]:
        """Orthogonally adjacent coordinates that lie on the board"""
        return [
            neighbour
            for neighbour in (self.step(direction) for direction in ORTHOGONAL_DIRECTIONS)
            if neighbour.is_within_bounds()
        ]

    def __str__(self) -> str:
        return f"({self.row},{self.column})"


_LAST = BOARD_SIZE - 1
CORNERS: frozenset[Coordinate] = frozenset(
    {
        Coordinate(0, 0),
        Coordinate(0, _LAST),
        Coordinate(_LAST, 0),
        Coordinate(_LAST, _LAST),
    }
)
THRONE = Coordinate(BOARD_SIZE // 2, BOARD_SIZE // 2)


def is_corner(coordinate: Coordinate) -> bool:
    return coordinate in CORNERS
