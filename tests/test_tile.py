import unittest

from tile import Tile, TileFactory


class TestTile(unittest.TestCase):

    def test_new_tile_has_no_history_or_flags(self):
        tile = Tile(7, 2, (1, 3))
        self.assertEqual(tile.id, 7)
        self.assertEqual(tile.position, (1, 3))
        self.assertIsNone(tile.previous_row)
        self.assertIsNone(tile.previous_col)
        self.assertFalse(tile.is_new)
        self.assertFalse(tile.just_merged)
        self.assertFalse(tile.merged_this_turn)
        self.assertFalse(tile.pending_removal)

    def test_prepare_for_turn_clears_flags_and_snapshots_position(self):
        tile = Tile(0, 4, (2, 2))
        tile.mark_as_new()
        tile.mark_merged()
        tile.mark_pending_removal()

        tile.prepare_for_turn()

        self.assertEqual((tile.previous_row, tile.previous_col), (2, 2))
        self.assertFalse(tile.is_new)
        self.assertFalse(tile.just_merged)
        self.assertFalse(tile.merged_this_turn)
        self.assertFalse(tile.pending_removal)

    def test_move_to_keeps_previous_position_separate(self):
        tile = Tile(0, 2, (0, 0))
        tile.store_current_as_previous()
        tile.move_to((0, 3))
        self.assertEqual(tile.position, (0, 3))
        self.assertEqual((tile.previous_row, tile.previous_col), (0, 0))

    def test_double_value(self):
        tile = Tile(0, 8, (0, 0))
        self.assertEqual(tile.double_value(), 16)
        self.assertEqual(tile.value, 16)

    def test_mark_merged_sets_both_merge_flags(self):
        tile = Tile(0, 2, (0, 0))
        tile.mark_merged()
        self.assertTrue(tile.just_merged)
        self.assertTrue(tile.merged_this_turn)


class TestTileFactory(unittest.TestCase):

    def test_ids_increase_from_zero(self):
        factory = TileFactory()
        ids = [factory.create(2, (0, i)).id for i in range(3)]
        self.assertEqual(ids, [0, 1, 2])

    def test_reset_restarts_ids(self):
        factory = TileFactory()
        factory.create(2, (0, 0))
        factory.create(2, (0, 1))
        factory.reset()
        self.assertEqual(factory.create(4, (1, 1)).id, 0)


if __name__ == "__main__":
    unittest.main()
