"""
In-memory high score store for tests and runs without persistence.
"""


class InMemoryHighScoreStore:
    def __init__(self, high_score: int = 0):
        self.high_score = high_score
        self.saves = []

    def load_high_score(self) -> int:
        return self.high_score

    def save_high_score(self, score: int) -> None:
        self.high_score = score
        self.saves.append(score)
