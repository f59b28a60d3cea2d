"""
Custom exceptions used across layers.

Every error raised on purpose derives from `HnefataflError`, so the service (and its callers) can catch a single top-level exception
while the specific subclasses keep telling the engine's rejections apart.
"""


class HnefataflError(Exception):
    """Top-level custom exception"""


# --- MOVE REJECTIONS (raised by the rules engine) ---
class MoveError(HnefataflError):
    """A proposed move was rejected. The game state it was proposed on is left untouched."""


class OutOfBoundsError(MoveError):
    """Coordinate outside the 11x11 grid"""


class NoPieceAtSourceError(MoveError):
    """Nothing to move on the starting tile"""


class NotYourTurnError(MoveError):
    """The piece on the starting tile belongs to the side that is not on move"""


class IllegalGeometryError(MoveError):
    """Pieces only move along a row or a column, and must actually go somewhere"""


class PathBlockedError(MoveError):
    """A piece stands between the starting tile and the destination"""


class DestinationOccupiedError(MoveError):
    """The destination already holds a piece"""


class RestrictedTileError(MoveError):
    """The destination is reserved for the King"""


class GameOverError(MoveError):
    """No move is legal once the game has been decided"""


# --- BOUNDARY ERRORS ---
class GameStateError(HnefataflError):
    """A game cannot be (re)constructed from the data given"""


class InvalidRequestError(HnefataflError):
    """Request data could not be interpreted"""


class RepositoryError(HnefataflError):
    """Lookup in the game repository failed"""
