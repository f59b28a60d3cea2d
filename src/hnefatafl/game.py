"""
The GameState class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of Hnefatafl -->
passes the resulting state to the service layer, which can then pass it onwards to the API layer.

A GameState is an immutable snapshot: `try_move` hands back a new state and leaves the one it was called on as it was.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Self

from src.core.exceptions import GameOverError, GameStateError
from src.core.models import GameModel
from src.core.shared_types import Side as SideName
from src.core.shared_types import Status as StatusName
from src.hnefatafl.board import Board
from src.hnefatafl.coordinate import Coordinate
from src.hnefatafl.pieces import PieceKind, Side
from src.hnefatafl.rules import (
    DEFAULT_RULESET,
    Move,
    Ruleset,
    generate_moves,
    is_king_encircled,
    is_king_escaped,
    resolve_captures,
    validate_move,
)

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    IN_PROGRESS = auto()
    DEFENDERS_WIN = auto()
    ATTACKERS_WIN = auto()


WINNERS: dict[GameStatus, Side] = {
    GameStatus.DEFENDERS_WIN: Side.DEFENDERS,
    GameStatus.ATTACKERS_WIN: Side.ATTACKERS,
}


@dataclass(frozen=True)
class GameState:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    _board: Board
    turn: Side
    status: GameStatus = GameStatus.IN_PROGRESS
    ruleset: Ruleset = DEFAULT_RULESET
    # tiles emptied by the move that produced this state
    last_captures: tuple[Coordinate, ...] = field(default=())

    @classmethod
    def new(cls, ruleset: Ruleset = DEFAULT_RULESET) -> Self:
        """A fresh game in the official starting layout"""
        return cls(Board.initial(), ruleset.first_side, GameStatus.IN_PROGRESS, ruleset)

    @classmethod
    def from_position(
        cls,
        board: Board,
        turn: Side,
        ruleset: Ruleset = DEFAULT_RULESET,
    ) -> Self:
        """Start from an arbitrary (in progress) position. The board is copied, the caller keeps no handle on the game's board."""
        return cls(board.copy(), turn, GameStatus.IN_PROGRESS, ruleset)

    @classmethod
    def from_model(cls, model: GameModel, ruleset: Ruleset = DEFAULT_RULESET) -> Self:
        """Define how to construct a GameState from the information the Service layer actually has"""

        # Validation
        status_name = model.status.replace(" ", "_").upper()
        if status_name not in GameStatus.__members__:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join([status.value for status in StatusName])}"
            )
        turn_name = model.turn.upper()
        if turn_name not in Side.__members__:
            raise GameStateError(
                f"Invalid side to move: {model.turn!r}. \nPick one from {','.join([side.value for side in SideName])}"
            )

        board = Board.from_rows(model.board)
        status = GameStatus[status_name]
        expected_kings = 0 if status == GameStatus.ATTACKERS_WIN else 1
        if board.count(PieceKind.KING) != expected_kings:
            raise GameStateError(
                f"A game with status {model.status!r} must have {expected_kings} King(s) on the board, found {board.count(PieceKind.KING)}."
            )

        return cls(board, Side[turn_name], status, ruleset)

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            board=self._board.to_rows(),
            turn=SideName[self.turn.name].value,
            status=StatusName[self.status.name].value,
        )

    # --- READ-ONLY QUERIES ---
    @property
    def board(self) -> Board:
        """A copy: changing it does not change the game"""
        return self._board.copy()

    def piece_at(self, coordinate: Coordinate) -> Optional[PieceKind]:
        return self._board.piece_at(coordinate)

    def is_over(self) -> bool:
        return self.status != GameStatus.IN_PROGRESS

    @property
    def winner(self) -> Optional[Side]:
        return WINNERS.get(self.status)

    def legal_moves(self) -> list[Move]:
        """Every move the side on turn may make. Nothing once the game is decided."""
        if self.is_over():
            return []
        return generate_moves(self._board, self.turn, self.ruleset)

    # --- THE ONLY MUTATOR (returns a new state) ---
    def try_move(self, move: Move) -> Self:
        """
        Attempt to make a move
        -----

        1. refuse if the game is already decided
        2. validate the move (raises the specific MoveError, nothing has been written yet)
        3. move the piece on a copy of the board
        4. remove the pieces flanked by the moved piece
        5. check the King: escaped to a corner, or encircled
        6. pass the turn (only when the game goes on)
        """
        if self.is_over():
            raise GameOverError(
                f"Game is over ({StatusName[self.status.name].value}). No more moves can be made."
            )

        piece = validate_move(self._board, move, self.turn, self.ruleset)

        board = self._board.copy()
        board.move_piece(move.from_coord, move.to_coord)
        captures = resolve_captures(board, move.to_coord)
        logger.debug(
            "%s %s moved %s, captured %s",
            self.turn.name.lower(),
            piece.name.lower(),
            move,
            [str(captured) for captured in captures] or "nothing",
        )

        status, captures = self._update_game_status(board, captures)
        if status != GameStatus.IN_PROGRESS:
            logger.info("Game over after %s: %s", move, status.name.lower())
            return type(self)(board, self.turn, status, self.ruleset, tuple(captures))

        return type(self)(
            board, self.turn.opponent, status, self.ruleset, tuple(captures)
        )

    # -- PRIVATE HELPERS ---
    def _update_game_status(
        self, board: Board, captures: list[Coordinate]
    ) -> tuple[GameStatus, list[Coordinate]]:
        """
        Performs checks to see if game has ended.

        NOTE the King is checked on every move, whoever moved: an Attacker move anywhere may close the last side around him.
        """
        if is_king_escaped(board):
            return GameStatus.DEFENDERS_WIN, captures

        if is_king_encircled(board):
            king = board.king_position()
            # for the typechecker: encirclement implies there is a King
            assert king is not None
            board.place(king, None)
            return GameStatus.ATTACKERS_WIN, [*captures, king]

        return GameStatus.IN_PROGRESS, captures
