# embedscore/utils.py
"""
Small utilities: in-memory LRU cache for query responses.
This cache is process-local; a restart starts from empty.
"""

from collections import OrderedDict
from typing import Any


# Bounded cache of HTTP responses, oldest-used entry evicted first
class SimpleLRUCache:
    def __init__(self, capacity: int = 1024):
        self.capacity = capacity
        self._store = OrderedDict()

    def get(self, key: str):
        if key not in self._store:
            return None
        # most recently used entries live at the end
        self._store.move_to_end(key)
        return self._store[key]

    def set(self, key: str, value: Any):
        if key in self._store:
            self._store.move_to_end(key)
        self._store[key] = value
        if len(self._store) > self.capacity:
            # evict the head (least recently used)
            self._store.popitem(last=False)

    def clear(self):
        self._store.clear()

    def __len__(self):
        return len(self._store)


# Single cache instance shared by the HTTP routes
query_response_cache = SimpleLRUCache(capacity=500)


def make_cache_key(corpus: str, text: str, version: str = "") -> str:
    """
    Normalize a query into a cache key. Case is kept: embeddings are case-sensitive.

    `version` identifies the corpus files on disk, so a regenerated corpus
    never serves responses computed from the old one.
    """
    return f"{corpus}@{version}::{text.strip()}"
