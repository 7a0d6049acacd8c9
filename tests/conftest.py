"""
Shared fixtures: small hand-written lexicons, modifier sets and documents.
"""

import matplotlib
matplotlib.use("Agg")

import pytest  # pylint: disable=wrong-import-position
import spacy  # pylint: disable=wrong-import-position

from src.sentiment.config import ContextScorerConfig  # pylint: disable=wrong-import-position
from src.sentiment.context_scorer import ContextAwareScorer  # pylint: disable=wrong-import-position
from src.sentiment.lexicons import (  # pylint: disable=wrong-import-position
    CategoricalLexicon,
    ModifierSets,
    SignedLexicon,
)
from src.sentiment.models import AnnotatedToken, Document  # pylint: disable=wrong-import-position


@pytest.fixture
def bing_lexicon():
    """Bing-style positive/negative lexicon plus a few emotion rows"""
    return CategoricalLexicon.from_pairs("fixture", [
        ("good", "positive"),
        ("great", "positive"),
        ("love", "positive"),
        ("well", "positive"),
        ("bad", "negative"),
        ("terrible", "negative"),
        ("broken", "negative"),
        ("love", "joy"),
        ("great", "trust"),
    ])


@pytest.fixture
def signed_lexicon():
    return SignedLexicon.from_mapping("fixture-signed", {
        "good": 1, "great": 1, "love": 1, "excellent": 2,
        "bad": -1, "terrible": -1, "break": -1,
    })


@pytest.fixture
def modifiers():
    return ModifierSets(
        negators=frozenset({"not", "never", "n't"}),
        amplifiers=frozenset({"really", "very"}),
        deamplifiers=frozenset({"slightly", "barely"}),
    )


@pytest.fixture
def make_scorer(signed_lexicon, modifiers):
    """Factory for a scorer with overridable window parameters"""
    def _make(**params):
        return ContextAwareScorer(signed_lexicon, modifiers, ContextScorerConfig(**params))
    return _make


def annotated(words, doc_id=1, sentence_id=0):
    """AnnotatedTokens for a list of words; lemma equals the word"""
    return [
        AnnotatedToken(doc_id=doc_id, token=w, lemma=w, sentence_id=sentence_id, position=i)
        for i, w in enumerate(words)
    ]


@pytest.fixture
def blank_nlp():
    """English tokenizer with rule-based sentence splitting, no model download"""
    nlp = spacy.blank("en")
    nlp.add_pipe("sentencizer")
    return nlp


@pytest.fixture
def documents():
    return [
        Document(doc_id=1, title="Great", text="I love this tablet, the screen is great.", star=5),
        Document(doc_id=2, title="Bad", text="Terrible battery and a broken charger.", star=1),
        Document(doc_id=3, title="Meh", text="It arrived on Tuesday in a box.", star=3),
    ]
