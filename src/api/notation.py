"""
Translation between the two-character tile notation players type and engine coordinates.

"12" is row 1, column 2. The digits 0-9 denote themselves and "X" denotes 10, so "X0" is the bottom-left corner.
A move is written as its two tiles back to back: "0747" moves the piece on (0,7) to (4,7).
"""

from src.core.exceptions import InvalidRequestError
from src.hnefatafl.coordinate import Coordinate
from src.hnefatafl.rules import Move

TEN = "X"


def _index_from_char(character: str) -> int:
    if character.upper() == TEN:
        return 10
    if character.isdigit() and len(character) == 1 and character.isascii():
        return int(character)
    raise InvalidRequestError(
        f"Cannot interpret {character!r} as a row or column. Use 0-9 or {TEN}."
    )


def _index_to_char(index: int) -> str:
    if index == 10:
        return TEN
    if 0 <= index <= 9:
        return str(index)
    raise InvalidRequestError(f"Index {index} has no tile notation.")


def is_tile_notation(value: str) -> bool:
    return len(value) == 2 and all(
        character.upper() == TEN or (character.isascii() and character.isdigit())
        for character in value
    )


def coordinate_from_notation(value: str) -> Coordinate:
    """'12' --> Coordinate(1, 2), 'X0' --> Coordinate(10, 0)"""
    if len(value) != 2:
        raise InvalidRequestError(
            f"Cannot interpret {value!r} as a tile: expected two characters."
        )
    return Coordinate(_index_from_char(value[0]), _index_from_char(value[1]))


def coordinate_to_notation(coordinate: Coordinate) -> str:
    return f"{_index_to_char(coordinate.row)}{_index_to_char(coordinate.column)}"


def move_from_notation(value: str) -> Move:
    if len(value) != 4:
        raise InvalidRequestError(
            f"Cannot interpret {value!r} as a move: expected four characters."
        )
    return Move(
        from_coord=coordinate_from_notation(value[:2]),
        to_coord=coordinate_from_notation(value[2:]),
    )


def move_to_notation(move: Move) -> str:
    return f"{coordinate_to_notation(move.from_coord)}{coordinate_to_notation(move.to_coord)}"
