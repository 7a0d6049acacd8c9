"""
Tests for the VADER and Naive Bayes reference scorers.

Usage:
    pytest tests/test_baselines.py -v
"""

import math

from src.sentiment.baselines import NaiveBayesClassifier, VaderScorer
from src.sentiment.models import Document

POSITIVE_TEXTS = [
    "I love this tablet, the screen is great and bright",
    "Excellent value, works great and the battery is great",
    "Great product, I love it and my kids love it too",
    "Wonderful reader, great screen, love the light",
    "Fantastic speaker with great sound, love it",
    "Really great device, excellent and easy to use",
]
NEGATIVE_TEXTS = [
    "Terrible tablet, the screen broke after a week",
    "Awful battery, it died and the charger is broken",
    "Worst purchase ever, terrible and slow, it broke",
    "Broken on arrival, awful support, terrible experience",
    "The speaker is terrible, awful sound and it broke",
    "Slow, broken and awful, do not buy this terrible thing",
]


def make_documents():
    texts = [(t, 5) for t in POSITIVE_TEXTS] + [(t, 1) for t in NEGATIVE_TEXTS]
    return [Document(doc_id=i, title="", text=text, star=star)
            for i, (text, star) in enumerate(texts, start=1)]


class TestVaderScorer:

    def test_polarity_direction(self):
        scorer = VaderScorer()
        assert scorer.score_text("This is a great product, I love it!") > 0
        assert scorer.score_text("Terrible, awful, it broke.") < 0

    def test_empty_text_is_missing(self):
        assert math.isnan(VaderScorer().score_text(""))

    def test_document_frame(self, documents):
        frame = VaderScorer().score_documents(documents)
        assert frame['id'].tolist() == [1, 2, 3]
        assert frame['vader_score'].between(-1, 1).all()


class TestNaiveBayesClassifier:

    def test_scores_every_document(self):
        documents = make_documents()
        frame = NaiveBayesClassifier(test_size=0.25).fit_score(documents)
        assert frame['id'].tolist() == [doc.doc_id for doc in documents]
        assert frame['nb_score'].between(-1, 1).all()
        assert set(frame['nb_split']) == {"train", "test"}
        assert (frame['nb_split'] == "test").sum() == 3

    def test_separates_training_classes(self):
        documents = make_documents()
        frame = NaiveBayesClassifier(test_size=0.25).fit_score(documents).set_index('id')
        train = frame[frame['nb_split'] == "train"]
        stars = {doc.doc_id: doc.star for doc in documents}
        for doc_id, row in train.iterrows():
            assert (row['nb_score'] > 0) == (stars[doc_id] == 5)

    def test_single_class_leaves_scores_missing(self):
        documents = [Document(doc_id=i, title="", text=t, star=5)
                     for i, t in enumerate(POSITIVE_TEXTS, start=1)]
        frame = NaiveBayesClassifier().fit_score(documents)
        assert frame['nb_score'].isna().all()
        assert frame['nb_split'].isna().all()
