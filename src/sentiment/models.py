"""
Data models shared across the pipeline stages.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SentimentClass(str, Enum):
    """Three-way sentiment label with a fixed canonical ordering"""
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    POSITIVE = "positive"

    @classmethod
    def ordered(cls):
        """Canonical row/column order for every matrix and report"""
        return [cls.NEGATIVE, cls.NEUTRAL, cls.POSITIVE]

    @classmethod
    def labels(cls):
        """Canonical order as plain strings"""
        return [label.value for label in cls.ordered()]


def classify_score(score) -> Optional[SentimentClass]:
    """Map a numeric score to a sentiment class.

    score < 0 is negative, score > 0 is positive and exactly 0 is neutral.
    Missing scores (None or NaN) stay missing.
    """
    if score is None:
        return None
    score = float(score)
    if math.isnan(score):
        return None
    if score < 0:
        return SentimentClass.NEGATIVE
    if score > 0:
        return SentimentClass.POSITIVE
    return SentimentClass.NEUTRAL


def classify_star(star) -> Optional[SentimentClass]:
    """Star ratings are centred on 3 before the shared threshold applies"""
    if star is None:
        return None
    star = float(star)
    if math.isnan(star):
        return None
    return classify_score(star - 3)


@dataclass(frozen=True)
class Document:
    """A single scraped review.

    Later stages attach fields with ``dataclasses.replace``; instances
    themselves are never mutated.
    """
    doc_id: int
    title: str
    text: str
    star: Optional[int] = None
    page: Optional[int] = None
    title_language: Optional[str] = None
    text_language: Optional[str] = None

    @property
    def star_class(self) -> Optional[SentimentClass]:
        """Sentiment class derived from the star rating"""
        return classify_star(self.star)


@dataclass(frozen=True)
class Token:
    """One cleaned word of a document"""
    doc_id: int
    word: str
    position: int


@dataclass(frozen=True)
class AnnotatedToken:
    """One token as returned by the linguistic annotation step"""
    doc_id: int
    token: str
    lemma: str
    sentence_id: int
    position: int
