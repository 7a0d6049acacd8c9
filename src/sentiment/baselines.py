"""
Reference scorers compared against the lexicon methods:
VADER compound polarity and a TF-IDF Naive Bayes classifier trained on
star-derived labels.
"""

import logging
from typing import List

import numpy as np
import pandas as pd
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.model_selection import train_test_split
from sklearn.naive_bayes import MultinomialNB
from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from .models import Document

logger = logging.getLogger(__name__)


class VaderScorer:
    """Document-level VADER compound score in [-1, 1]"""

    def __init__(self):
        self.analyzer = SentimentIntensityAnalyzer()

    def score_text(self, text: str) -> float:
        if not isinstance(text, str) or not text.strip():
            return np.nan
        return self.analyzer.polarity_scores(text)['compound']

    def score_documents(self, documents: List[Document]) -> pd.DataFrame:
        return pd.DataFrame({
            'id': pd.Series([doc.doc_id for doc in documents], dtype='int64'),
            'vader_score': pd.Series([self.score_text(doc.text) for doc in documents],
                                     dtype='float64'),
        })


class NaiveBayesClassifier:
    """TF-IDF + multinomial Naive Bayes over the review text.

    Trained on the star-derived class of a stratified training split; the
    score for every document is P(positive) - P(negative), and ``nb_split``
    records whether the document was used for training.
    """

    def __init__(self, max_features: int = 5000, test_size: float = 0.2,
                 random_state: int = 42):
        self.vectorizer = TfidfVectorizer(max_features=max_features)
        self.model = MultinomialNB()
        self.test_size = test_size
        self.random_state = random_state

    def fit_score(self, documents: List[Document]) -> pd.DataFrame:
        ids = [doc.doc_id for doc in documents]
        result = pd.DataFrame({
            'id': pd.Series(ids, dtype='int64'),
            'nb_score': pd.Series(np.nan, index=range(len(ids)), dtype='float64'),
            'nb_split': pd.Series(None, index=range(len(ids)), dtype='object'),
        })

        labelled = [doc for doc in documents if doc.star_class is not None and doc.text.strip()]
        labels = [doc.star_class.value for doc in labelled]
        if len(set(labels)) < 2:
            logger.warning("Naive Bayes needs at least two star classes; scores left missing")
            return result

        counts = pd.Series(labels).value_counts()
        n_test = int(np.ceil(self.test_size * len(labelled)))
        can_stratify = (counts.min() >= 2 and n_test >= len(counts)
                        and len(labelled) - n_test >= len(counts))
        stratify = labels if can_stratify else None
        train_docs, _ = train_test_split(
            labelled, test_size=self.test_size,
            random_state=self.random_state, stratify=stratify)

        features = self.vectorizer.fit_transform([doc.text for doc in train_docs])
        self.model.fit(features, [doc.star_class.value for doc in train_docs])
        logger.info("Trained Naive Bayes on %d of %d labelled reviews",
                    len(train_docs), len(labelled))

        probabilities = self.model.predict_proba(
            self.vectorizer.transform([doc.text for doc in documents]))
        classes = list(self.model.classes_)
        positive = (probabilities[:, classes.index('positive')]
                    if 'positive' in classes else np.zeros(len(documents)))
        negative = (probabilities[:, classes.index('negative')]
                    if 'negative' in classes else np.zeros(len(documents)))

        train_ids = {doc.doc_id for doc in train_docs}
        result['nb_score'] = positive - negative
        result['nb_split'] = ['train' if doc_id in train_ids else 'test' for doc_id in ids]
        return result
