# core.py
# This file holds the game engine: it owns one board and plays full turns on it.

import logging
import random
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, Union

from game_grid import DIRECTION, GameGrid
from score_keeper import ScoreKeeper
from tile import Tile, TileFactory
from tile_slider import TileSlider

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 4
START_TILES = 2
TWO_PROBABILITY = 0.9  # otherwise a 4 spawns

__all__ = [
    "DEFAULT_SIZE",
    "DIRECTION",
    "GameEngine",
    "GameProgressState",
    "MoveSummary",
]


class GameProgressState(Enum):
    """Represents the current progress state of the game."""
    IN_PROGRESS = 1
    GAME_OVER = 2


class MoveSummary(NamedTuple):
    """Outcome of a single GameEngine.move() call."""
    moved: bool
    score_gained: int
    added_tile: Optional[Tile]


class GameEngine:
    """
    Plays 2048 on a square board.

    The engine starts with an empty board; call reset() to place the two
    starting tiles. All randomness comes from random_source, a zero-argument
    callable returning floats in [0, 1). Each spawn draws from it exactly twice,
    cell index first and tile value second.

    Tiles absorbed by a merge stay in `tiles` with pending_removal set until
    cleanup_merged_tiles() is called, so a renderer can still animate them.
    """

    def __init__(
        self,
        size: int = DEFAULT_SIZE,
        best_score: int = 0,
        random_source: Optional[Callable[[], float]] = None,
    ):
        if not isinstance(size, int) or size < 2:
            raise ValueError("Board size must be an integer of at least 2.")
        self.size = size
        self.grid = GameGrid(size)
        self.tiles: List[Tile] = []
        self.game_over = False
        self._scores = ScoreKeeper(best_score)
        self._factory = TileFactory()
        self._slider = TileSlider()
        self._random = random_source or random.random

    # --- Read Model ---

    @property
    def score(self) -> int:
        return self._scores.score

    @property
    def best_score(self) -> int:
        return self._scores.best

    @property
    def progress(self) -> GameProgressState:
        return GameProgressState.GAME_OVER if self.game_over else GameProgressState.IN_PROGRESS

    def get_grid_values(self) -> List[List[int]]:
        """Returns the board as a size x size matrix of values, 0 for empty."""
        return self.grid.get_values()

    # --- Commands ---

    def reset(self) -> None:
        """
        Starts a new game: empties the board, zeroes the score (the best score
        is kept), restarts tile ids and spawns the starting tiles.
        """
        self.grid.reset()
        self.tiles = []
        self._scores.reset()
        self._factory.reset()
        self.game_over = False
        for _ in range(START_TILES):
            self.add_random_tile()
        logger.debug("New %dx%d game started: %s", self.size, self.size, self.get_grid_values())

    def move(self, direction: Union[DIRECTION, str]) -> MoveSummary:
        """
        Plays one turn in the given direction.
        Args:
            direction (Union[DIRECTION, str]): The direction to move.
        Returns:
            MoveSummary: Whether the board changed, the score gained and the
                         tile spawned afterwards (None if nothing spawned).
        Raises:
            ValueError: If an invalid direction is specified.
        """
        direction = DIRECTION(direction)
        if self.game_over:
            return MoveSummary(False, 0, None)

        for tile in self.tiles:
            tile.prepare_for_turn()

        moved, score_gained = self._slider.slide(self.grid, direction)

        added_tile = None
        if moved:
            self._scores.add_points(score_gained)
            added_tile = self.add_random_tile()

        # A blocked move only ends the game if no other direction would work.
        if not self.moves_available():
            self.game_over = True
            logger.info("Game over with score %d (best %d)", self.score, self.best_score)

        return MoveSummary(moved, score_gained, added_tile)

    def add_random_tile(self) -> Optional[Tile]:
        """
        Spawns a 2 (90%) or a 4 (10%) on a random empty cell.
        Returns:
            Optional[Tile]: The new tile, or None if the board is full.
        """
        cells = self.grid.available_cells()
        if not cells:
            return None

        index = int(self._random() * len(cells))
        position = cells[min(max(index, 0), len(cells) - 1)]
        value = 2 if self._random() < TWO_PROBABILITY else 4

        tile = self._factory.create(value, position)
        tile.mark_as_new()
        self.grid.set_cell(position, tile)
        self.tiles.append(tile)
        logger.debug("Spawned %r", tile)
        return tile

    def cleanup_merged_tiles(self) -> bool:
        """
        Drops tiles absorbed by merges from the tile collection.
        Returns:
            bool: True if any tile was removed.
        """
        remaining = [tile for tile in self.tiles if not tile.pending_removal]
        removed = len(remaining) != len(self.tiles)
        self.tiles = remaining
        return removed

    def moves_available(self) -> bool:
        """True while some direction can still move or merge a tile."""
        return bool(self.grid.available_cells()) or self.grid.tile_matches_available()

    def set_grid(self, values: List[List[int]]) -> None:
        """
        Loads an exact board, bypassing random spawns. Intended for tests and debugging.
        Args:
            values (List[List[int]]): size x size matrix; each positive entry
                                      becomes one tile, 0 means empty.
        Raises:
            ValueError: If the matrix is not size x size or holds a negative value.
        """
        if len(values) != self.size or any(len(row) != self.size for row in values):
            raise ValueError(f"Grid must be {self.size}x{self.size}.")
        if any(value < 0 for row in values for value in row):
            raise ValueError("Grid values must be non-negative.")

        self.grid.reset()
        self.tiles = []
        self._scores.reset()
        self.game_over = False
        for row, row_values in enumerate(values):
            for col, value in enumerate(row_values):
                if value > 0:
                    tile = self._factory.create(value, (row, col))
                    self.grid.set_cell((row, col), tile)
                    self.tiles.append(tile)
