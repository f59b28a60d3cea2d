"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/storage layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the storage layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field

# Type aliases to make GameModel easier to read
SideName = str
PlayerName = str


@dataclass
class GameModel:
    """Transport-safe representation of a Hnefatafl game used between API, Service, storage, and Game layers.

    A game can be rebuilt from the board contents, the side to move and the status alone. The move list and players are bookkeeping of the Service.
    """

    board: list[str]
    turn: SideName
    status: str
    moves: list[str] = field(default_factory=list)
    registered_players: dict[SideName, PlayerName] = field(default_factory=dict)
