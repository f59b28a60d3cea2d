"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    DEFENDERS_WIN = "defenders win"
    ATTACKERS_WIN = "attackers win"


# --- NOTE The domain layer (src/hnefatafl) has its own Side / GameStatus enums. These string versions are what crosses the boundary.
class Side(StrEnum):
    ATTACKERS = "attackers"
    DEFENDERS = "defenders"
