# score_keeper.py
# Running score and best score for one engine.


class ScoreKeeper:
    """
    Tracks the score of the current game and the best score seen so far.
    The best score survives reset() and never decreases.
    """

    def __init__(self, initial_best_score: int = 0):
        self._score = 0
        self._best = initial_best_score

    @property
    def score(self) -> int:
        return self._score

    @property
    def best(self) -> int:
        return self._best

    def reset(self) -> None:
        self._score = 0

    def add_points(self, points: int) -> None:
        self._score += points
        if self._score > self._best:
            self._best = self._score
