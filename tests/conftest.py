"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Iterator

import pytest

from src.db.memory_repository import InMemoryGameRepository
from src.hnefatafl.board import Board
from src.hnefatafl.coordinate import Coordinate
from src.hnefatafl.pieces import PieceKind

Placement = dict[tuple[int, int], PieceKind]


@pytest.fixture
def repository() -> Iterator[InMemoryGameRepository]:
    """Fresh in-memory repository, cleared at teardown to keep tests independent of each other."""
    repo = InMemoryGameRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def board_with() -> Callable[[Placement], Board]:
    """Call the inner function with {(row, column): piece} to get a board holding just those pieces"""

    def _create_board(placement: Placement) -> Board:
        board = Board.empty()
        for (row, column), piece in placement.items():
            board.place(Coordinate(row, column), piece)
        return board

    return _create_board
