"""
Charts for word contributions, confusion matrices and score distributions.
Every function returns the matplotlib Figure and leaves showing or saving
it to the caller.
"""

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from sklearn.metrics import ConfusionMatrixDisplay

from .evaluation import ConfusionMatrix
from .models import SentimentClass


def plot_word_contributions(contributions: pd.DataFrame, value_column: str = 'n',
                            word_column: str = 'word', title: str = "Top words by sentiment"):
    """Horizontal bar chart of the top words, one panel per sentiment label"""
    labels = sorted(contributions['sentiment'].unique()) if not contributions.empty else []
    fig, axes = plt.subplots(1, max(len(labels), 1), figsize=(5 * max(len(labels), 1), 5),
                             squeeze=False)

    for ax, label in zip(axes[0], labels):
        subset = contributions[contributions['sentiment'] == label].sort_values(value_column)
        ax.barh(subset[word_column], subset[value_column])
        ax.set_title(label)
        ax.set_xlabel('Contribution to sentiment')

    fig.suptitle(title)
    fig.tight_layout()
    return fig


def plot_confusion_matrix(matrix: ConfusionMatrix):
    """Heatmap with true classes on rows and predicted on columns"""
    fig, ax = plt.subplots(figsize=(6, 5))
    display = ConfusionMatrixDisplay(confusion_matrix=matrix.counts.T.to_numpy(),
                                     display_labels=SentimentClass.labels())
    display.plot(ax=ax, cmap=plt.cm.Blues, colorbar=False)
    ax.set_title(f'Confusion Matrix: {matrix.method} (accuracy {matrix.accuracy:.2f})')
    ax.set_xlabel('Predicted Label')
    ax.set_ylabel('True Label')
    fig.tight_layout()
    return fig


def plot_score_by_star(table: pd.DataFrame, score_column: str, star_column: str = 'star'):
    """Distribution of a method's scores for each star rating"""
    data = table[[star_column, score_column]].dropna()
    fig, ax = plt.subplots(figsize=(8, 5))
    sns.boxplot(x=data[star_column].astype(int), y=data[score_column].astype(float), ax=ax)
    ax.set_xlabel('Star rating')
    ax.set_ylabel(score_column)
    ax.set_title(f'{score_column} by star rating')
    fig.tight_layout()
    return fig


def plot_correlations(correlations: pd.DataFrame):
    """Annotated heatmap of a correlation matrix"""
    fig, ax = plt.subplots(figsize=(7, 6))
    sns.heatmap(correlations, annot=True, cmap='coolwarm', vmin=-1, vmax=1, ax=ax)
    ax.set_title('Correlation between sentiment scores')
    fig.tight_layout()
    return fig
