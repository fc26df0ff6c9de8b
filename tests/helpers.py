"""Shared test helpers for Trait Titans."""


class FixedRandom:
    """Deterministic stand-in for random.Random.

    Integer draws always return the lowest value in range, choices pick
    the first item, and random() returns `value`.
    """

    def __init__(self, value: float = 0.99):
        self.value = value
        self.float_draws = 0

    def random(self) -> float:
        self.float_draws += 1
        return self.value

    def randrange(self, start, stop=None, step=1):
        if stop is None:
            return 0
        return start

    def choice(self, seq):
        return seq[0]
