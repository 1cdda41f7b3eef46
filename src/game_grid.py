# game_grid.py
# The size x size occupancy array and the board geometry built on top of it.

from enum import Enum
from typing import List, NamedTuple, Optional, Union

from tile import Position, Tile


class DIRECTION(str, Enum):
    """Represents the possible move directions."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class Vector(NamedTuple):
    """A unit step on the board: x is the column delta, y the row delta."""
    x: int
    y: int


class FarthestPosition(NamedTuple):
    farthest: Position
    next: Optional[Position]


class TraversalOrder(NamedTuple):
    rows: List[int]
    cols: List[int]


_VECTORS = {
    DIRECTION.UP: Vector(0, -1),
    DIRECTION.DOWN: Vector(0, 1),
    DIRECTION.LEFT: Vector(-1, 0),
    DIRECTION.RIGHT: Vector(1, 0),
}

# Orthogonal neighbour offsets used by the merge-availability scan.
_NEIGHBOURS = tuple(_VECTORS.values())


def get_vector(direction: Union[DIRECTION, str]) -> Vector:
    """
    Maps a direction to its unit vector.
    Args:
        direction (Union[DIRECTION, str]): A DIRECTION member or its value ("up", "left", ...).
    Returns:
        Vector: The step taken by a tile sliding in that direction.
    Raises:
        ValueError: If the direction is not one of up/down/left/right.
    """
    return _VECTORS[DIRECTION(direction)]


class GameGrid:
    """
    Owns the board's occupancy: which Tile, if any, sits in each cell.

    The grid is the single authority for occupancy. move_tile() and
    merge_tiles() update the slot and the tile's coordinates together, so a
    tile's (row, col) always equals the slot that references it.
    """

    def __init__(self, size: int):
        self.size = size
        self._cells = self._create_empty_cells(size)

    @staticmethod
    def _create_empty_cells(size: int) -> List[List[Optional[Tile]]]:
        return [[None] * size for _ in range(size)]

    def reset(self) -> None:
        self._cells = self._create_empty_cells(self.size)

    def get_values(self) -> List[List[int]]:
        """
        Returns the board as a matrix of tile values, 0 for empty cells.
        """
        return [[tile.value if tile else 0 for tile in row] for row in self._cells]

    # --- Cell Access ---

    def within_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get_cell(self, position: Position) -> Optional[Tile]:
        """
        Looks up the tile at a position.
        Args:
            position (Position): (row, col), may lie outside the board.
        Returns:
            Optional[Tile]: The occupying tile, or None if the cell is empty
                            or out of range.
        """
        row, col = position
        if not self.within_bounds(row, col):
            return None
        return self._cells[row][col]

    def set_cell(self, position: Position, tile: Optional[Tile]) -> None:
        row, col = position
        if self.within_bounds(row, col):
            self._cells[row][col] = tile

    def clear_cell(self, position: Position) -> None:
        self.set_cell(position, None)

    # --- Tile Movement ---

    def move_tile(self, tile: Tile, position: Position) -> bool:
        """
        Moves a tile to an (empty) position.
        Args:
            tile (Tile): The tile to move; must currently occupy its own cell.
            position (Position): The destination.
        Returns:
            bool: False if the tile was already there, True if it moved.
        """
        if tile.position == tuple(position):
            return False
        self.clear_cell(tile.position)
        tile.store_current_as_previous()
        tile.move_to(position)
        self.set_cell(position, tile)
        return True

    def merge_tiles(self, source: Tile, target: Tile) -> int:
        """
        Absorbs source into target.

        The source leaves the board and is marked pending removal, but its
        coordinates are moved onto the target cell so an animation can slide
        it there. The target keeps its cell and doubles its value.
        Args:
            source (Tile): The moving tile being absorbed.
            target (Tile): The stationary tile receiving the merge.
        Returns:
            int: The target's new value, which is the score for this merge.
        """
        target_position = target.position
        self.clear_cell(source.position)

        source.store_current_as_previous()
        source.move_to(target_position)
        source.mark_pending_removal()

        target.store_current_as_previous()
        merged_value = target.double_value()
        target.mark_merged()
        self.set_cell(target_position, target)

        return merged_value

    # --- Board Queries ---

    def available_cells(self) -> List[Position]:
        """
        Get coordinates of empty cells in row-major order.
        Returns:
            List[Position]: List of (row, col) tuples for empty cells.
        """
        cells = []
        for row in range(self.size):
            for col in range(self.size):
                if self._cells[row][col] is None:
                    cells.append((row, col))
        return cells

    def tile_matches_available(self) -> bool:
        """
        Checks whether any tile has an orthogonal neighbour of equal value.
        Returns:
            bool: True if at least one merge is still possible somewhere.
        """
        for row in range(self.size):
            for col in range(self.size):
                tile = self._cells[row][col]
                if tile is None:
                    continue
                for vector in _NEIGHBOURS:
                    neighbour = self.get_cell((row + vector.y, col + vector.x))
                    if neighbour is not None and neighbour.value == tile.value:
                        return True
        return False

    def find_farthest_position(self, start: Position, vector: Vector) -> FarthestPosition:
        """
        Walks from start along vector while the next cell is on the board and empty.
        Args:
            start (Position): The cell the walk begins from.
            vector (Vector): The step to repeat.
        Returns:
            FarthestPosition: farthest is the last empty cell reached (start itself
                              if the first step is blocked); next is the occupied
                              cell that stopped the walk, or None at the edge.
        """
        previous = (start[0], start[1])
        row, col = start[0] + vector.y, start[1] + vector.x

        while self.within_bounds(row, col) and self._cells[row][col] is None:
            previous = (row, col)
            row, col = row + vector.y, col + vector.x

        next_position = (row, col) if self.within_bounds(row, col) else None
        return FarthestPosition(previous, next_position)

    def get_traversal_order(self, vector: Vector) -> TraversalOrder:
        """
        Rows and columns to visit when resolving a move along vector.

        Cells nearest the destination wall come first, so a tile already pushed
        against the wall is settled before the tiles behind it are processed.
        """
        rows = list(range(self.size))
        cols = list(range(self.size))
        if vector.y == 1:
            rows.reverse()
        if vector.x == 1:
            cols.reverse()
        return TraversalOrder(rows, cols)
