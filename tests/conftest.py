import itertools
import random

import pytest

from mindmap.editor import MindMapEditor
from mindmap.graph_store import GraphStore


class RecordingNotifier:
    """Collects (kind, message) pairs instead of showing them."""

    def __init__(self):
        self.messages = []

    def notify(self, kind, message):
        self.messages.append((kind, message))

    @property
    def texts(self):
        return [m for _, m in self.messages]


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"n{next(counter)}"


@pytest.fixture
def store(notifier, id_factory):
    """Fresh store with deterministic ids (root is 'n1') and placement."""
    return GraphStore(notifier=notifier, rng=random.Random(7), id_factory=id_factory)


@pytest.fixture
def editor(notifier):
    return MindMapEditor(notifier=notifier, rng=random.Random(7))
