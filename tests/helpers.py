from typing import Callable, List

from game_grid import GameGrid
from tile import TileFactory


def create_deterministic_random(sequence: List[float]) -> Callable[[], float]:
    """Replays sequence one value per call, then keeps returning its last value."""
    values = iter(sequence)
    fallback = sequence[-1] if sequence else 0.0

    def random_source() -> float:
        return next(values, fallback)

    return random_source


def build_grid(values):
    """Builds a GameGrid holding one tile per positive entry of values."""
    grid = GameGrid(len(values))
    factory = TileFactory()
    for row, row_values in enumerate(values):
        for col, value in enumerate(row_values):
            if value:
                grid.set_cell((row, col), factory.create(value, (row, col)))
    return grid
