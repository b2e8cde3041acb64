"""
store.py

Responsibilities:
- Read the un-embedded movie review files (title + content).
- Save / load labeled embedding corpora as JSON.

Corpus file shape (top-level array):
  [{"title": "...", "content": "...", "sentiment": "positive", "embedding": [0.1, ...]}, ...]
The label may be stored under "label" or "sentiment".
"""

import json
import os
import tempfile
from typing import List, Sequence

from pydantic import ValidationError

from embedscore.errors import CorpusReadError
from embedscore.models import LabeledItem, Review, Sentiment

LABEL_FIELDS = ("label", "sentiment")
EMOTIONS_FILE = "emotions-embeddings.json"


def reviews_path(data_dir: str, sentiment: Sentiment) -> str:
    return os.path.join(data_dir, f"{sentiment.value}-movie-reviews.json")


def review_embeddings_path(data_dir: str, sentiment: Sentiment) -> str:
    return os.path.join(data_dir, f"{sentiment.value}-movie-reviews-embeddings.json")


def emotion_embeddings_path(data_dir: str) -> str:
    return os.path.join(data_dir, EMOTIONS_FILE)


def _read_json_array(path: str) -> list:
    if not os.path.exists(path):
        raise CorpusReadError(f"{path} not found. Run 'embedscore generate' first.")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError
        raise CorpusReadError(f"{path} is not valid UTF-8 JSON: {e}")
    except OSError as e:
        raise CorpusReadError(f"could not read {path}: {e}")

    if not isinstance(data, list):
        raise CorpusReadError(f"{path} must contain a JSON array, got {type(data).__name__}")
    return data


def load_reviews(path: str) -> List[Review]:
    """
    Load the raw reviews that generate mode embeds.
    """
    reviews = []
    for i, record in enumerate(_read_json_array(path)):
        try:
            reviews.append(Review.model_validate(record))
        except ValidationError as e:
            raise CorpusReadError(f"{path}: review {i} is malformed: {e}")
    return reviews


def _record_to_item(path: str, index: int, record) -> LabeledItem:
    if not isinstance(record, dict):
        raise CorpusReadError(f"{path}: record {index} is not an object")

    label = next((record[f] for f in LABEL_FIELDS if f in record), None)
    if label is None:
        raise CorpusReadError(f"{path}: record {index} has no 'label' or 'sentiment' field")
    if "embedding" not in record:
        raise CorpusReadError(f"{path}: record {index} has no 'embedding' field")

    try:
        return LabeledItem(
            title=record.get("title") or "",
            content=record.get("content") or "",
            label=str(label),
            embedding=record["embedding"],
        )
    except ValidationError as e:
        raise CorpusReadError(f"{path}: record {index} is malformed: {e}")


def load_corpus(path: str) -> List[LabeledItem]:
    """
    Load a previously-saved corpus from disk.

    Every embedding must have the same length as the first record's.
    """
    items = [_record_to_item(path, i, record) for i, record in enumerate(_read_json_array(path))]

    if items:
        dim = len(items[0].embedding)
        for i, item in enumerate(items):
            if len(item.embedding) != dim:
                raise CorpusReadError(
                    f"{path}: record {i} has {len(item.embedding)} dimensions, expected {dim}"
                )

    print(f"[store] Loaded {len(items)} items from {path}")
    return items


def store_corpus(path: str, items: Sequence[LabeledItem], label_field: str = "label"):
    """
    Save a corpus, replacing whatever was at `path`.

    The file is written next to its destination first and then renamed, so
    readers never see a half-written corpus.
    """
    if label_field not in LABEL_FIELDS:
        raise ValueError(f"label_field must be one of {LABEL_FIELDS}")

    serialized = [
        {
            "title": item.title,
            "content": item.content,
            label_field: str(item.label),
            "embedding": [float(x) for x in item.embedding],
        }
        for item in items
    ]

    output_dir = os.path.dirname(os.path.abspath(path))
    os.makedirs(output_dir, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=output_dir, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(serialized, f, ensure_ascii=False)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise

    print(f"[store] Saved {len(serialized)} items to {path}")


def files_signature(paths: Sequence[str]) -> str:
    """
    Identify the current on-disk version of `paths` (inode, mtime, size).

    store_corpus always renames a fresh file into place, so regenerating a
    corpus changes its signature. Missing files read as "missing".
    """
    parts = []
    for path in paths:
        try:
            st = os.stat(path)
        except OSError:
            parts.append("missing")
            continue
        parts.append(f"{st.st_ino}-{st.st_mtime_ns}-{st.st_size}")
    return "|".join(parts)
