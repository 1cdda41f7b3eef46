# tile.py
# Tile entities shared by the grid and the engine's tile collection.

from typing import Optional, Tuple

Position = Tuple[int, int]


class Tile:
    """
    A single numbered piece on the board.

    The grid and the engine hold references to the same Tile object, so a
    tile's coordinates always match the slot that points at it. The
    previous_* fields and the turn flags exist for animation only; no game
    logic reads them except merged_this_turn.
    """

    def __init__(self, tile_id: int, value: int, position: Position):
        self._id = tile_id
        self.value = value
        self.row, self.col = position
        self.previous_row: Optional[int] = None
        self.previous_col: Optional[int] = None
        self.is_new = False
        self.just_merged = False
        self.merged_this_turn = False
        self.pending_removal = False

    @property
    def id(self) -> int:
        return self._id

    @property
    def position(self) -> Position:
        return self.row, self.col

    def mark_as_new(self) -> None:
        self.is_new = True

    def prepare_for_turn(self) -> None:
        """Clears last turn's flags and snapshots the current position."""
        self.store_current_as_previous()
        self.just_merged = False
        self.merged_this_turn = False
        self.pending_removal = False
        self.is_new = False

    def store_current_as_previous(self) -> None:
        self.previous_row = self.row
        self.previous_col = self.col

    def move_to(self, position: Position) -> None:
        self.row, self.col = position

    def mark_merged(self) -> None:
        self.just_merged = True
        self.merged_this_turn = True

    def mark_pending_removal(self) -> None:
        self.pending_removal = True

    def double_value(self) -> int:
        """
        Doubles the tile's value in place.
        Returns:
            int: The new value.
        """
        self.value *= 2
        return self.value

    def __repr__(self) -> str:
        return f"Tile(id={self.id}, value={self.value}, position={self.position})"


class TileFactory:
    """Issues tiles with monotonically increasing ids, starting at 0."""

    def __init__(self):
        self._next_id = 0

    def create(self, value: int, position: Position) -> Tile:
        tile = Tile(self._next_id, value, position)
        self._next_id += 1
        return tile

    def reset(self) -> None:
        self._next_id = 0
