import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


class QueuedDraws:
    """Stands in for a numpy Generator: `random()` hands out preset arrays in order."""

    def __init__(self, *arrays):
        self._queue = [np.asarray(a, dtype=float) for a in arrays]
        self.calls = []

    def random(self, size=None):
        self.calls.append(tuple(size))
        out = self._queue.pop(0)
        assert out.shape == tuple(size)
        return out


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def queued_draws():
    return QueuedDraws
