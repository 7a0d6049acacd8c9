"""
Classification of scores into sentiment classes and evaluation against
star-derived ground truth.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Tuple

import numpy as np
import pandas as pd
from sklearn.metrics import confusion_matrix

from .models import SentimentClass, classify_score, classify_star

logger = logging.getLogger(__name__)


def classify_series(scores: pd.Series) -> pd.Series:
    """Class labels (as strings) for a score column; missing stays missing"""
    return scores.apply(lambda s: _label(classify_score(_or_none(s)))).astype('object')


def classify_star_series(stars: pd.Series) -> pd.Series:
    """Class labels for a star column; missing or malformed stars stay missing"""
    return stars.apply(lambda s: _label(classify_star(_or_none(s)))).astype('object')


def _or_none(value):
    return None if pd.isna(value) else value


def _label(sentiment_class: Optional[SentimentClass]):
    return sentiment_class.value if sentiment_class is not None else None


@dataclass(frozen=True)
class ConfusionMatrix:
    """Counts indexed by (predicted class, true class) labels"""
    method: str
    counts: pd.DataFrame
    excluded: int = 0

    def count(self, predicted, true) -> int:
        return int(self.counts.loc[SentimentClass(predicted).value, SentimentClass(true).value])

    @property
    def total(self) -> int:
        return int(self.counts.to_numpy().sum())

    def recall(self, true_class) -> float:
        """Share of documents of ``true_class`` predicted as such; NaN without members"""
        label = SentimentClass(true_class).value
        members = int(self.counts[label].sum())
        if members == 0:
            return float('nan')
        return self.counts.loc[label, label] / members

    def recalls(self) -> Dict[str, float]:
        return {label: self.recall(label) for label in SentimentClass.labels()}

    @property
    def accuracy(self) -> float:
        if self.total == 0:
            return float('nan')
        correct = sum(self.counts.loc[label, label] for label in SentimentClass.labels())
        return correct / self.total


def build_confusion_matrix(predicted: pd.Series, true: pd.Series,
                           method: str = "") -> ConfusionMatrix:
    """Tabulate predicted vs. true classes over documents present in both.

    Both series are indexed by document id. Documents with a missing label
    on either side are left out and counted in ``excluded``.
    """
    for name, series in (("predicted", predicted), ("true", true)):
        if not series.index.is_unique:
            raise ValueError(f"{name} labels must be indexed by unique document ids")

    joined = pd.concat({'predicted': predicted, 'true': true}, axis=1, join='outer')
    complete = joined.dropna()
    excluded = len(joined) - len(complete)
    if excluded:
        logger.warning("%s: %d documents without a class excluded from the confusion matrix",
                       method or "confusion matrix", excluded)

    labels = SentimentClass.labels()
    predicted_labels = [SentimentClass(v).value for v in complete['predicted']]
    true_labels = [SentimentClass(v).value for v in complete['true']]

    if complete.empty:
        matrix = np.zeros((len(labels), len(labels)), dtype=int)
    else:
        # scikit-learn puts true classes on rows
        matrix = confusion_matrix(true_labels, predicted_labels, labels=labels).T

    counts = pd.DataFrame(matrix,
                          index=pd.Index(labels, name='predicted'),
                          columns=pd.Index(labels, name='true'))
    return ConfusionMatrix(method=method, counts=counts, excluded=excluded)


def evaluate_methods(results: pd.DataFrame, class_columns: Mapping[str, str],
                     truth_column: str = 'star_class',
                     id_column: str = 'id') -> Tuple[Dict[str, ConfusionMatrix], pd.DataFrame]:
    """Confusion matrix and summary metrics for every method column"""
    indexed = results.set_index(id_column)
    matrices = {}
    rows = []
    for method, column in class_columns.items():
        matrix = build_confusion_matrix(indexed[column], indexed[truth_column], method=method)
        matrices[method] = matrix
        row = {
            'method': method,
            'documents': matrix.total,
            'excluded': matrix.excluded,
            'accuracy': matrix.accuracy,
        }
        row.update({f'recall_{label}': value for label, value in matrix.recalls().items()})
        rows.append(row)
    return matrices, pd.DataFrame(rows)


def pearson(first: pd.Series, second: pd.Series, decimals: int = 3) -> float:
    """Pearson correlation over documents with a value in both series"""
    paired = pd.concat([first, second], axis=1, join='inner').dropna()
    if len(paired) < 2:
        return float('nan')
    value = paired.iloc[:, 0].astype(float).corr(paired.iloc[:, 1].astype(float))
    return round(value, decimals)


def correlation_matrix(frame: pd.DataFrame, columns: Iterable[str],
                       decimals: int = 3) -> pd.DataFrame:
    """Pairwise complete-case Pearson correlations between score columns

    A column with at least two values correlates 1.0 with itself even when
    it is constant (e.g. every context score is 0). A column with fewer than
    two values keeps NaN throughout.
    """
    columns = list(columns)
    numeric = frame[columns].apply(pd.to_numeric, errors='coerce').astype(float)
    corr = numeric.corr(method='pearson').round(decimals)
    for column in columns:
        if numeric[column].count() >= 2:
            corr.loc[column, column] = 1.0
    return corr
