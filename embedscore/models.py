# embedscore/models.py
"""
Data contracts shared by the store, the scorer and the pipeline.

Two kinds of label exist and are never mixed:
- closed enumerations (Sentiment, Emotion) with parse / serialized-name pairs
- free-form positional labels such as "POSITIVE-1" (plain str)
"""

from enum import Enum
from typing import List, NamedTuple, Union

from pydantic import BaseModel, StrictFloat

from embedscore.errors import InvalidArgument


class _ClosedLabel(str, Enum):
    @classmethod
    def parse(cls, value: str):
        """Return the member whose serialized name matches `value` (case-insensitive)."""
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        names = ", ".join(repr(m.value) for m in cls)
        raise InvalidArgument(f"Invalid {cls.__name__.lower()} {value!r}. Please provide one of: {names}.")

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class Sentiment(_ClosedLabel):
    POSITIVE = "positive"
    NEGATIVE = "negative"


class Emotion(_ClosedLabel):
    SADNESS = "sadness"
    HAPPINESS = "happiness"
    FEAR = "fear"
    ANGER = "anger"
    SURPRISE = "surprise"
    DISGUST = "disgust"


class CorpusKind(_ClosedLabel):
    REVIEWS = "reviews"
    EMOTIONS = "emotions"


Label = Union[Emotion, str]


class Review(BaseModel):
    """A raw movie review, before it gets an embedding."""
    title: str
    content: str = ""


class LabeledItem(BaseModel):
    title: str = ""
    content: str = ""
    label: Label
    embedding: List[StrictFloat]


class SimilarityResult(NamedTuple):
    label: Label
    raw_score: float
    percentage: float
