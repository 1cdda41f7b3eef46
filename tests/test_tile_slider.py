import unittest

from tile_slider import TileSlider
from helpers import build_grid


def empty_rows(count, size=4):
    return [[0] * size for _ in range(count)]


class TestTileSlider(unittest.TestCase):

    def setUp(self):
        self.slider = TileSlider()

    """Merging Behavior Tests"""
    def test_double_merge_in_one_row(self):
        grid = build_grid([[2, 2, 2, 2]] + empty_rows(3))
        result = self.slider.slide(grid, "left")
        self.assertTrue(result.moved)
        self.assertEqual(result.score_gained, 8)
        self.assertEqual(grid.get_values()[0], [4, 4, 0, 0])

    def test_three_equal_tiles_merge_only_the_leading_pair(self):
        grid = build_grid([[2, 2, 2, 0]] + empty_rows(3))
        result = self.slider.slide(grid, "left")
        self.assertEqual(result.score_gained, 4)
        self.assertEqual(grid.get_values()[0], [4, 2, 0, 0])

    def test_three_equal_tiles_moving_right(self):
        grid = build_grid([[2, 2, 2, 0]] + empty_rows(3))
        result = self.slider.slide(grid, "right")
        self.assertEqual(result.score_gained, 4)
        self.assertEqual(grid.get_values()[0], [0, 0, 2, 4])

    def test_merged_tile_does_not_merge_again(self):
        grid = build_grid([[4, 4, 8, 0]] + empty_rows(3))
        result = self.slider.slide(grid, "left")
        self.assertEqual(result.score_gained, 8)
        self.assertEqual(grid.get_values()[0], [8, 8, 0, 0])

    def test_column_merges_moving_up(self):
        grid = build_grid([
            [2, 0, 0, 0],
            [2, 0, 0, 0],
            [4, 0, 0, 0],
            [4, 0, 0, 0]
        ])
        result = self.slider.slide(grid, "up")
        self.assertEqual(result.score_gained, 12)
        self.assertEqual([row[0] for row in grid.get_values()], [4, 8, 0, 0])

    def test_column_slides_down_without_merge(self):
        grid = build_grid([
            [2, 0, 0, 0],
            [0, 0, 0, 0],
            [4, 0, 0, 0],
            [0, 0, 0, 0]
        ])
        result = self.slider.slide(grid, "down")
        self.assertTrue(result.moved)
        self.assertEqual(result.score_gained, 0)
        self.assertEqual([row[0] for row in grid.get_values()], [0, 0, 2, 4])

    def test_merge_flags_land_on_target(self):
        grid = build_grid([[2, 2, 0, 0]] + empty_rows(3))
        target = grid.get_cell((0, 0))
        source = grid.get_cell((0, 1))

        self.slider.slide(grid, "left")

        self.assertTrue(target.merged_this_turn)
        self.assertTrue(source.pending_removal)
        self.assertFalse(source.merged_this_turn)
        self.assertIs(grid.get_cell((0, 0)), target)

    """Blocked Moves"""
    def test_blocked_row_reports_no_change(self):
        grid = build_grid([[2, 4, 8, 16]] + empty_rows(3))
        before = grid.get_values()
        result = self.slider.slide(grid, "left")
        self.assertFalse(result.moved)
        self.assertEqual(result.score_gained, 0)
        self.assertEqual(grid.get_values(), before)

    def test_invalid_direction_raises(self):
        grid = build_grid([[2, 0], [0, 0]])
        with self.assertRaises(ValueError):
            self.slider.slide(grid, "sideways")


if __name__ == "__main__":
    unittest.main()
