import unittest

from score_keeper import ScoreKeeper


class TestScoreKeeper(unittest.TestCase):

    def test_starts_at_zero_with_seeded_best(self):
        keeper = ScoreKeeper(500)
        self.assertEqual(keeper.score, 0)
        self.assertEqual(keeper.best, 500)

    def test_best_follows_score_once_exceeded(self):
        keeper = ScoreKeeper(10)
        keeper.add_points(8)
        self.assertEqual(keeper.best, 10)
        keeper.add_points(4)
        self.assertEqual(keeper.score, 12)
        self.assertEqual(keeper.best, 12)

    def test_reset_keeps_best(self):
        keeper = ScoreKeeper()
        keeper.add_points(64)
        keeper.reset()
        self.assertEqual(keeper.score, 0)
        self.assertEqual(keeper.best, 64)
        keeper.add_points(4)
        self.assertEqual(keeper.best, 64, "Best score must never decrease")


if __name__ == "__main__":
    unittest.main()
