import json
import os

import pytest

from embedscore import store
from embedscore.errors import CorpusReadError
from embedscore.models import Emotion, Sentiment

from conftest import make_item


def _write(path, data):
    if isinstance(data, bytes):
        with open(path, "wb") as f:
            f.write(data)
        return
    with open(path, "w", encoding="utf-8") as f:
        if isinstance(data, str):
            f.write(data)
        else:
            json.dump(data, f)


def test_round_trip_preserves_labels_vectors_and_order(tmp_path):
    path = str(tmp_path / "corpus.json")
    items = [
        make_item("POSITIVE-1", [0.1, 0.2, 0.3], title="first"),
        make_item("NEGATIVE-1", [-0.5, 0.0, 1.5]),
        make_item("POSITIVE-2", [1e-9, 2.0, -3.25]),
    ]

    store.store_corpus(path, items)
    loaded = store.load_corpus(path)

    assert [(i.label, i.embedding) for i in loaded] == [(i.label, i.embedding) for i in items]
    assert loaded[0].title == "first"


def test_store_uses_requested_label_field(tmp_path):
    path = str(tmp_path / "positive-movie-reviews-embeddings.json")
    store.store_corpus(path, [make_item("positive", [1.0])], label_field="sentiment")

    with open(path, encoding="utf-8") as f:
        records = json.load(f)
    assert records == [{"title": "", "content": "", "sentiment": "positive", "embedding": [1.0]}]
    assert store.load_corpus(path)[0].label == "positive"


def test_store_serializes_enum_labels_by_name(tmp_path):
    path = str(tmp_path / "emotions.json")
    item = make_item("placeholder", [1.0]).model_copy(update={"label": Emotion.ANGER})
    store.store_corpus(path, [item])

    with open(path, encoding="utf-8") as f:
        assert json.load(f)[0]["label"] == "anger"


def test_store_overwrites_and_leaves_no_temp_files(tmp_path):
    path = str(tmp_path / "nested" / "corpus.json")
    store.store_corpus(path, [make_item("a", [1.0]), make_item("b", [2.0])])
    store.store_corpus(path, [make_item("c", [3.0])])

    assert [i.label for i in store.load_corpus(path)] == ["c"]
    assert os.listdir(tmp_path / "nested") == ["corpus.json"]


def test_load_missing_file(tmp_path):
    with pytest.raises(CorpusReadError):
        store.load_corpus(str(tmp_path / "nope.json"))


@pytest.mark.parametrize("content", [
    "{not json",
    {"label": "a", "embedding": [1.0]},
    [{"embedding": [1.0]}],
    [{"label": "a"}],
    [{"label": "a", "embedding": ["x", "y"]}],
    ["just a string"],
    b'[{"label": "a\xff", "embedding": [1.0]}]',
    '[{"label": "a", "embedding": ["0.5", true]}]',
    [{"label": "a", "embedding": [0.5, True]}],
])
def test_load_malformed(tmp_path, content):
    path = str(tmp_path / "bad.json")
    _write(path, content)
    with pytest.raises(CorpusReadError):
        store.load_corpus(path)


def test_load_rejects_dimension_change_across_records(tmp_path):
    path = str(tmp_path / "bad.json")
    _write(path, [
        {"label": "a", "embedding": [1.0, 2.0]},
        {"label": "b", "embedding": [1.0, 2.0, 3.0]},
    ])
    with pytest.raises(CorpusReadError) as excinfo:
        store.load_corpus(path)
    assert "record 1" in str(excinfo.value)


def test_load_empty_array(tmp_path):
    path = str(tmp_path / "empty.json")
    _write(path, [])
    assert store.load_corpus(path) == []


def test_load_reviews(data_dir):
    reviews = store.load_reviews(store.reviews_path(data_dir, Sentiment.POSITIVE))
    assert [r.title for r in reviews] == ["Loved it", "A masterpiece"]


def test_load_reviews_requires_title(tmp_path):
    path = str(tmp_path / "reviews.json")
    _write(path, [{"content": "no title"}])
    with pytest.raises(CorpusReadError):
        store.load_reviews(path)


def test_paths(tmp_path):
    d = str(tmp_path)
    assert store.reviews_path(d, Sentiment.NEGATIVE).endswith("negative-movie-reviews.json")
    assert store.review_embeddings_path(d, Sentiment.POSITIVE).endswith("positive-movie-reviews-embeddings.json")
    assert store.emotion_embeddings_path(d).endswith("emotions-embeddings.json")


def test_integer_components_load_as_floats(tmp_path):
    path = str(tmp_path / "ints.json")
    _write(path, [{"label": "a", "embedding": [1, 0, -2]}])

    assert store.load_corpus(path)[0].embedding == [1.0, 0.0, -2.0]


def test_files_signature_changes_when_corpus_is_rewritten(tmp_path):
    path = str(tmp_path / "corpus.json")
    missing = str(tmp_path / "other.json")
    store.store_corpus(path, [make_item("a", [1.0])])
    before = store.files_signature([path, missing])

    store.store_corpus(path, [make_item("a", [1.0])])

    assert before.endswith("|missing")
    assert store.files_signature([path, missing]) != before
