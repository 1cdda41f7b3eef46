# tile_slider.py
# One full slide-and-merge pass over a grid.

from typing import NamedTuple, Union

from game_grid import DIRECTION, GameGrid, Vector, get_vector
from tile import Tile


class SlideResult(NamedTuple):
    moved: bool
    score_gained: int


class TileSlider:
    """
    Stateless: slides every tile on a grid in one direction, merging equal
    tiles that collide. A tile receives at most one merge per pass, which is
    enforced through the target's merged_this_turn flag.
    """

    def slide(self, grid: GameGrid, direction: Union[DIRECTION, str]) -> SlideResult:
        """
        Resolves one move on the grid.
        Args:
            grid (GameGrid): The board to mutate.
            direction (Union[DIRECTION, str]): The direction to move.
        Returns:
            SlideResult: Whether any tile moved or merged, and the summed value
                         of every merge performed.
        Raises:
            ValueError: If an invalid direction is specified.
        """
        vector = get_vector(direction)
        traversals = grid.get_traversal_order(vector)

        moved = False
        score_gained = 0

        for row in traversals.rows:
            for col in traversals.cols:
                tile = grid.get_cell((row, col))
                if tile is None:
                    continue

                result = self._slide_tile(grid, tile, vector)
                moved = moved or result.moved
                score_gained += result.score_gained

        return SlideResult(moved, score_gained)

    def _slide_tile(self, grid: GameGrid, tile: Tile, vector: Vector) -> SlideResult:
        positions = grid.find_farthest_position(tile.position, vector)
        next_tile = grid.get_cell(positions.next) if positions.next else None

        if (
            next_tile is not None
            and next_tile.value == tile.value
            and not next_tile.merged_this_turn
        ):
            return SlideResult(True, grid.merge_tiles(tile, next_tile))

        return SlideResult(grid.move_tile(tile, positions.farthest), 0)
