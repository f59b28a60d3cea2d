"""Defines the kinds of Hnefatafl pieces and the sides controlling them"""

from enum import Enum, auto


class PieceKind(Enum):
    ATTACKER = auto()
    DEFENDER = auto()
    KING = auto()


class Side(Enum):
    ATTACKERS = auto()
    DEFENDERS = auto()

    @property
    def opponent(self) -> "Side":
        return Side.DEFENDERS if self == Side.ATTACKERS else Side.ATTACKERS


# NOTE: The King is a Defender for turn purposes, but remains its own kind for the capture rules.
PIECE_SIDE: dict[PieceKind, Side] = {
    PieceKind.ATTACKER: Side.ATTACKERS,
    PieceKind.DEFENDER: Side.DEFENDERS,
    PieceKind.KING: Side.DEFENDERS,
}

CHAR_TO_PIECE: dict[str, PieceKind] = {
    "A": PieceKind.ATTACKER,
    "D": PieceKind.DEFENDER,
    "K": PieceKind.KING,
}

PIECE_TO_CHAR: dict[PieceKind, str] = {value: key for key, value in CHAR_TO_PIECE.items()}

EMPTY_CHAR = "."


def side_of(piece: PieceKind) -> Side:
    return PIECE_SIDE[piece]


def is_opponent(piece: PieceKind, side: Side) -> bool:
    return side_of(piece) != side
