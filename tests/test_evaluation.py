"""
Tests for classification, confusion matrices, recall and correlation.

Usage:
    pytest tests/test_evaluation.py -v
"""

import math

import numpy as np
import pandas as pd
import pytest

from src.sentiment.evaluation import (
    build_confusion_matrix,
    classify_series,
    classify_star_series,
    correlation_matrix,
    evaluate_methods,
    pearson,
)
from src.sentiment.ingestion import parse_star
from src.sentiment.models import SentimentClass, classify_score, classify_star


class TestClassify:

    @pytest.mark.parametrize("score, expected", [
        (-3.5, SentimentClass.NEGATIVE),
        (-0.001, SentimentClass.NEGATIVE),
        (0, SentimentClass.NEUTRAL),
        (0.0, SentimentClass.NEUTRAL),
        (0.001, SentimentClass.POSITIVE),
        (12, SentimentClass.POSITIVE),
    ])
    def test_threshold_at_zero(self, score, expected):
        assert classify_score(score) is expected

    @pytest.mark.parametrize("score", [None, float("nan"), np.nan])
    def test_missing_stays_missing(self, score):
        assert classify_score(score) is None

    @pytest.mark.parametrize("star, expected", [
        (1, SentimentClass.NEGATIVE),
        (2, SentimentClass.NEGATIVE),
        (3, SentimentClass.NEUTRAL),
        (4, SentimentClass.POSITIVE),
        (5, SentimentClass.POSITIVE),
    ])
    def test_star_classes(self, star, expected):
        assert classify_star(star) is expected

    def test_star_strings_end_to_end(self):
        stars = ["5 out of 5 stars", "1 out of 5 stars", "3 out of 5 stars"]
        classes = [classify_star(parse_star(s)) for s in stars]
        assert classes == [SentimentClass.POSITIVE, SentimentClass.NEGATIVE,
                           SentimentClass.NEUTRAL]

    def test_classify_series_values(self):
        labels = classify_series(pd.Series([2.0, np.nan, 0.0, -1.0]))
        assert labels.tolist() == ["positive", None, "neutral", "negative"]
        assert set(labels.dropna()) <= set(SentimentClass.labels())

    def test_classify_star_series_with_missing(self):
        stars = pd.Series([5, None, 2], dtype='Int64')
        assert classify_star_series(stars).tolist() == ["positive", None, "negative"]

    def test_canonical_order(self):
        assert SentimentClass.labels() == ["negative", "neutral", "positive"]


def labelled(values):
    return pd.Series(values, index=range(1, len(values) + 1), dtype='object')


class TestConfusionMatrix:

    def setup_method(self):
        predicted = labelled(["positive", "positive", "negative", "neutral", "positive", None])
        true = labelled(["positive", "negative", "negative", "positive", "positive", "neutral"])
        self.matrix = build_confusion_matrix(predicted, true, method="test")

    def test_indexed_by_label(self):
        assert self.matrix.count("positive", "positive") == 2
        assert self.matrix.count(SentimentClass.POSITIVE, SentimentClass.NEGATIVE) == 1
        assert self.matrix.count("neutral", "positive") == 1
        assert self.matrix.count("negative", "negative") == 1

    def test_rows_are_predicted_columns_are_true(self):
        assert self.matrix.counts.index.name == 'predicted'
        assert self.matrix.counts.columns.name == 'true'
        assert list(self.matrix.counts.index) == SentimentClass.labels()
        assert list(self.matrix.counts.columns) == SentimentClass.labels()

    def test_missing_labels_excluded_explicitly(self):
        assert self.matrix.excluded == 1
        assert self.matrix.total == 5

    def test_sums_match_total(self):
        counts = self.matrix.counts
        assert counts.sum(axis=0).sum() == self.matrix.total
        assert counts.sum(axis=1).sum() == self.matrix.total

    def test_accuracy_is_diagonal_share(self):
        diagonal = sum(self.matrix.count(c, c) for c in SentimentClass.labels())
        assert self.matrix.accuracy == diagonal / self.matrix.total
        assert self.matrix.accuracy == pytest.approx(3 / 5)

    def test_recall_per_true_class(self):
        assert self.matrix.recall("positive") == pytest.approx(2 / 3)
        assert self.matrix.recall("negative") == pytest.approx(1 / 2)

    def test_recall_without_members_is_nan(self):
        """Only the unscored document was truly neutral."""
        assert math.isnan(self.matrix.recall("neutral"))
        assert math.isnan(self.matrix.recalls()["neutral"])

    def test_ids_only_on_one_side_are_excluded(self):
        predicted = pd.Series(["positive", "negative"], index=[1, 2])
        true = pd.Series(["positive", "negative"], index=[2, 3])
        matrix = build_confusion_matrix(predicted, true)
        assert matrix.total == 1
        assert matrix.excluded == 2
        assert matrix.count("negative", "negative") == 1

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError):
            build_confusion_matrix(pd.Series(["positive"] * 2, index=[1, 1]),
                                   pd.Series(["positive"], index=[1]))

    def test_empty_matrix(self):
        matrix = build_confusion_matrix(labelled([None]), labelled(["positive"]))
        assert matrix.total == 0
        assert math.isnan(matrix.accuracy)


class TestEvaluateMethods:

    def test_summary_per_method(self):
        results = pd.DataFrame({
            'id': [1, 2, 3, 4],
            'star_class': ["positive", "negative", "neutral", "positive"],
            'bow_class': ["positive", None, "neutral", "negative"],
            'context_class': ["positive", "negative", "positive", "positive"],
        })
        matrices, metrics = evaluate_methods(
            results, {'bag_of_words': 'bow_class', 'context': 'context_class'})

        assert set(matrices) == {'bag_of_words', 'context'}
        by_method = metrics.set_index('method')
        assert by_method.loc['bag_of_words', 'excluded'] == 1
        assert by_method.loc['bag_of_words', 'documents'] == 3
        assert by_method.loc['context', 'accuracy'] == pytest.approx(3 / 4)
        assert math.isnan(by_method.loc['bag_of_words', 'recall_negative'])
        assert by_method.loc['context', 'recall_neutral'] == 0


class TestCorrelation:

    def setup_method(self):
        self.frame = pd.DataFrame({
            'star': [5, 1, 3, 4, 2],
            'bow_score': [3, -2, np.nan, 1, -1],
            'context_score': [2.5, -1.8, 0.0, 1.0, 0.2],
        })

    def test_symmetric_with_unit_diagonal(self):
        corr = correlation_matrix(self.frame, ['star', 'bow_score', 'context_score'])
        assert (corr.to_numpy() == corr.T.to_numpy()).all()
        assert np.diag(corr.to_numpy()).tolist() == [1.0, 1.0, 1.0]

    def test_constant_column_keeps_unit_diagonal(self):
        frame = self.frame.assign(context_score=0.0, nb_score=np.nan)
        corr = correlation_matrix(frame, ['star', 'context_score', 'nb_score'])
        assert corr.loc['context_score', 'context_score'] == 1.0
        assert math.isnan(corr.loc['star', 'context_score'])
        assert math.isnan(corr.loc['nb_score', 'nb_score'])

    def test_complete_case_pairs(self):
        corr = correlation_matrix(self.frame, ['star', 'bow_score'])
        complete = self.frame.dropna()
        expected = round(np.corrcoef(complete['star'], complete['bow_score'])[0, 1], 3)
        assert corr.loc['star', 'bow_score'] == pytest.approx(expected)

    def test_pearson_rounds(self):
        value = pearson(self.frame['star'], self.frame['context_score'], decimals=2)
        assert value == round(value, 2)
        assert 0 < value <= 1

    def test_pearson_needs_two_pairs(self):
        assert math.isnan(pearson(pd.Series([1.0, np.nan]), pd.Series([np.nan, 2.0])))
