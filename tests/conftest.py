import os

import pytest

# Must be set before pytest-qt creates the QApplication.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class SequenceRandomSource:
    """Replays fixed indices (modulo n) so generated passwords are predictable."""

    def __init__(self, indices):
        self._indices = list(indices)
        self._pos = 0
        self.calls = []

    def randbelow(self, n):
        self.calls.append(n)
        value = self._indices[self._pos % len(self._indices)] % n
        self._pos += 1
        return value


@pytest.fixture
def sequence_rng():
    return SequenceRandomSource
