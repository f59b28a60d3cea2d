"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.api.notation import is_tile_notation
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Side, Status

SideName = str
PlayerName = str


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    attacker_name: Optional[PlayerName] = None
    defender_name: Optional[PlayerName] = None


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not is_tile_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid tile name."
            )
        return value.upper()


class GetGameRequest(BaseModel):
    game_id: UUID


class MoveHistoryRequest(BaseModel):
    game_id: UUID


class ResetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    players: dict[SideName, PlayerName]
    board: list[str]
    turn: Side
    status: Status
    winner: Optional[Side]
    move_history: list[str]


class MoveHistoryResponse(BaseModel):
    game_id: UUID
    moves: list[str]
