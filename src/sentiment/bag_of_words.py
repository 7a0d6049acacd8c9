"""
Bag-of-words lexicon scoring: positive minus negative match counts.
"""

import logging
from typing import Iterable

import numpy as np
import pandas as pd

from .lexicons import CategoricalLexicon

logger = logging.getLogger(__name__)


def match_tokens(tokens: pd.DataFrame, lexicon: CategoricalLexicon) -> pd.DataFrame:
    """Inner join of the token table with the lexicon on the exact word"""
    return tokens.merge(lexicon.to_frame(), on='word', how='inner')


def score_documents(tokens: pd.DataFrame, lexicon: CategoricalLexicon,
                    doc_ids: Iterable[int]) -> pd.DataFrame:
    """Score every document id as count(positive) - count(negative).

    Documents with no lexicon match keep a missing (NaN) score; a score of 0
    means matches were found and cancelled out. ``bow_matches`` tells the
    two apart.
    """
    polarity = lexicon.polarity_subset()
    matched = match_tokens(tokens, polarity)

    if matched.empty:
        counts = pd.DataFrame({
            'id': pd.Series(dtype='int64'),
            'positive': pd.Series(dtype='int64'),
            'negative': pd.Series(dtype='int64'),
        })
    else:
        counts = (matched.groupby(['id', 'sentiment']).size()
                  .unstack(fill_value=0)
                  .reindex(columns=['positive', 'negative'], fill_value=0)
                  .reset_index())
        counts.columns.name = None

    ids = pd.DataFrame({'id': pd.Series(list(doc_ids), dtype='int64')})
    result = ids.merge(counts, on='id', how='left')
    result['bow_positive'] = result['positive'].fillna(0).astype(int)
    result['bow_negative'] = result['negative'].fillna(0).astype(int)
    result['bow_matches'] = result['bow_positive'] + result['bow_negative']
    result['bow_score'] = np.where(
        result['bow_matches'] > 0,
        result['bow_positive'] - result['bow_negative'],
        np.nan,
    )

    unscored = int((result['bow_matches'] == 0).sum())
    if unscored:
        logger.warning("%d documents have no %s lexicon match; their score is missing",
                       unscored, lexicon.name)

    return result[['id', 'bow_positive', 'bow_negative', 'bow_matches', 'bow_score']]


def word_contributions(tokens: pd.DataFrame, lexicon: CategoricalLexicon,
                       top_n: int = 10) -> pd.DataFrame:
    """Most frequent matched words per label (word, sentiment, n)"""
    matched = match_tokens(tokens, lexicon)
    if matched.empty:
        return pd.DataFrame(columns=['word', 'sentiment', 'n'])

    counts = (matched.groupby(['sentiment', 'word']).size()
              .reset_index(name='n')
              .sort_values(['sentiment', 'n', 'word'], ascending=[True, False, True]))
    top = counts.groupby('sentiment', group_keys=False).head(top_n)
    return top[['word', 'sentiment', 'n']].reset_index(drop=True)
