import json
import os

import pytest

from embedscore.embeddings import EmbeddingProvider
from embedscore.models import LabeledItem

REPO_DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "data")


class FakeProvider(EmbeddingProvider):
    """Deterministic provider: looks texts up in a dict, falls back to `default`."""

    def __init__(self, vectors=None, default=(1.0, 0.0)):
        self.vectors = vectors or {}
        self.default = list(default)
        self.calls = []

    def embed(self, text):
        self.calls.append(text)
        return list(self.vectors.get(text, self.default))

    def embed_batch(self, texts):
        self.calls.append(list(texts))
        return [list(self.vectors.get(t, self.default)) for t in texts]


def make_item(label, embedding, title=""):
    return LabeledItem(title=title, label=label, embedding=embedding)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def data_dir(tmp_path):
    """A data dir holding a small copy of the review sources."""
    reviews = {
        "positive": [
            {"title": "Loved it", "content": "Great fun."},
            {"title": "A masterpiece", "content": "Stunning."},
        ],
        "negative": [
            {"title": "Hated it", "content": "Dull."},
        ],
    }
    for sentiment, records in reviews.items():
        with open(tmp_path / f"{sentiment}-movie-reviews.json", "w", encoding="utf-8") as f:
            json.dump(records, f)
    return str(tmp_path)
