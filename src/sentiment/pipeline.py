"""
End-to-end review sentiment pipeline.
Ingests scraped reviews, keeps English ones, scores them with every method
and compares the resulting classes with the star ratings.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from .annotation import SpacyAnnotator
from .bag_of_words import score_documents, word_contributions
from .baselines import NaiveBayesClassifier, VaderScorer
from .config import PipelineConfig
from .context_scorer import ContextAwareScorer
from .evaluation import (
    ConfusionMatrix,
    classify_series,
    correlation_matrix,
    evaluate_methods,
)
from .ingestion import documents_from_frame, documents_to_frame, load_reviews
from .language import filter_language
from .lexicons import (
    CategoricalLexicon,
    ModifierSets,
    SignedLexicon,
    vader_categorical_lexicon,
    vader_modifiers,
    vader_signed_lexicon,
)
from .models import AnnotatedToken, Document
from .tokenizer import TextCleaner

logger = logging.getLogger(__name__)

# method name -> (score column, class column)
METHOD_COLUMNS = {
    'bag_of_words': ('bow_score', 'bow_class'),
    'context': ('context_score', 'context_class'),
    'vader': ('vader_score', 'vader_class'),
    'naive_bayes': ('nb_score', 'nb_class'),
}


@dataclass
class PipelineResults:
    """Everything one pipeline run produces"""
    documents: List[Document]
    excluded_language: int
    table: pd.DataFrame
    tokens: pd.DataFrame
    annotations: List[AnnotatedToken]
    matrices: Dict[str, ConfusionMatrix]
    metrics: pd.DataFrame
    correlations: pd.DataFrame
    bow_contributions: pd.DataFrame = field(default_factory=pd.DataFrame)
    context_contributions: pd.DataFrame = field(default_factory=pd.DataFrame)

    @property
    def stats(self) -> Dict[str, int]:
        return {
            'documents': len(self.documents),
            'excluded_language': self.excluded_language,
            'empty_after_cleaning': int(self.table['empty_after_cleaning'].sum()),
            'missing_bow_score': int(self.table['bow_score'].isna().sum()),
            'missing_star': int(self.table['star'].isna().sum()),
        }


class SentimentPipeline:
    """Batch pipeline comparing lexicon-based sentiment with star ratings"""

    def __init__(self, config: Optional[PipelineConfig] = None,
                 categorical_lexicon: Optional[CategoricalLexicon] = None,
                 signed_lexicon: Optional[SignedLexicon] = None,
                 modifiers: Optional[ModifierSets] = None,
                 annotator: Optional[SpacyAnnotator] = None,
                 vader: Optional[VaderScorer] = None,
                 naive_bayes: Optional[NaiveBayesClassifier] = None):
        self.config = config or PipelineConfig()
        self.modifiers = modifiers or vader_modifiers()
        # Full lexicon (emotion labels included) for word contributions,
        # its positive/negative subset for scoring
        self.categorical_lexicon = categorical_lexicon or vader_categorical_lexicon()
        self.polarity_lexicon = self.categorical_lexicon.polarity_subset()
        self.signed_lexicon = signed_lexicon or vader_signed_lexicon(self.modifiers)
        self._annotator = annotator
        self.vader = vader or VaderScorer()
        if naive_bayes is None and self.config.run_naive_bayes:
            naive_bayes = NaiveBayesClassifier(test_size=self.config.naive_bayes_test_size,
                                               random_state=self.config.random_state)
        self.naive_bayes = naive_bayes

        self.cleaner = TextCleaner(self.config.cleaning, self.polarity_lexicon.vocabulary)
        self.context_cleaner = TextCleaner(
            self.config.cleaning,
            self.signed_lexicon.vocabulary,
            always_keep=self.modifiers.all_terms,
            remove_stop_words=self.config.cleaning.clean_for_context_scorer,
        )
        self.context_scorer = ContextAwareScorer(self.signed_lexicon, self.modifiers,
                                                 self.config.context)

    @property
    def annotator(self) -> SpacyAnnotator:
        """spaCy annotator, loaded on first use"""
        if self._annotator is None:
            self._annotator = SpacyAnnotator(self.config.spacy_model)
        return self._annotator

    def prepare_documents(self, reviews: pd.DataFrame):
        """Build documents and keep those in the target language"""
        documents = documents_from_frame(
            reviews,
            text_column=self.config.text_column,
            title_column=self.config.title_column,
            star_column=self.config.star_column,
            page_column=self.config.page_column,
        )
        kept = filter_language(documents, self.config.language)
        if not kept:
            logger.warning("No %s documents left after language filtering", self.config.language)
        return kept, len(documents) - len(kept)

    def annotate(self, documents: List[Document]) -> List[AnnotatedToken]:
        """Annotated tokens for the context scorer, cleaned like the word tokens"""
        annotations = self.annotator.annotate(documents)
        return self.context_cleaner.clean_annotations(annotations)

    def run_csv(self, csv_path: str) -> PipelineResults:
        return self.run(load_reviews(csv_path))

    def run(self, reviews: pd.DataFrame) -> PipelineResults:
        """Run every stage over the full review table"""
        documents, excluded = self.prepare_documents(reviews)
        doc_ids = [doc.doc_id for doc in documents]

        tokens = self.cleaner.tokenize_all(documents)
        logger.info("Tokenized %d documents into %d cleaned tokens", len(documents), len(tokens))

        bow = score_documents(tokens, self.polarity_lexicon, doc_ids)

        # Documents left empty by cleaning have nothing to score in context either
        cleaned_ids = set(tokens['id'])
        to_annotate = [doc for doc in documents if doc.doc_id in cleaned_ids]
        annotations = self.annotate(to_annotate) if to_annotate else []
        context = self.context_scorer.score_documents(annotations, doc_ids)

        vader = self.vader.score_documents(documents)

        table = self._build_table(documents, tokens, bow, context, vader)

        if self.naive_bayes is not None and documents:
            naive_bayes = self.naive_bayes.fit_score(documents)
            table = table.merge(naive_bayes, on='id', how='left', validate='one_to_one')
            table['nb_class'] = classify_series(table['nb_score'])

        matrices, metrics = self._evaluate(table)
        score_columns = ['star'] + [
            score for score, _ in METHOD_COLUMNS.values() if score in table.columns
        ]
        correlations = correlation_matrix(table, score_columns,
                                          decimals=self.config.correlation_decimals)

        return PipelineResults(
            documents=documents,
            excluded_language=excluded,
            table=table,
            tokens=tokens,
            annotations=annotations,
            matrices=matrices,
            metrics=metrics,
            correlations=correlations,
            bow_contributions=word_contributions(tokens, self.categorical_lexicon),
            context_contributions=self.context_scorer.word_contributions(annotations),
        )

    def _build_table(self, documents, tokens, bow, context, vader) -> pd.DataFrame:
        table = documents_to_frame(documents)

        n_tokens = tokens.groupby('id').size().rename('n_tokens').reset_index()
        n_tokens['id'] = n_tokens['id'].astype('int64')
        table = table.merge(n_tokens, on='id', how='left', validate='one_to_one')
        table['n_tokens'] = table['n_tokens'].fillna(0).astype(int)
        table['empty_after_cleaning'] = table['n_tokens'] == 0

        for scores in (bow, context, vader):
            table = table.merge(scores, on='id', how='left', validate='one_to_one')

        table['bow_class'] = classify_series(table['bow_score'])
        table['context_class'] = classify_series(table['context_score'])
        table['vader_class'] = classify_series(table['vader_score'])

        empty = int(table['empty_after_cleaning'].sum())
        if empty:
            logger.warning("%d documents are empty after cleaning", empty)
        return table

    def _evaluate(self, table: pd.DataFrame):
        lexicon_methods = {
            method: class_column
            for method, (_, class_column) in METHOD_COLUMNS.items()
            if method != 'naive_bayes' and class_column in table.columns
        }
        matrices, metrics = evaluate_methods(table, lexicon_methods)

        if 'nb_class' in table.columns:
            # Only held-out reviews are a fair test of the classifier
            held_out = table[table['nb_split'] == 'test']
            nb_matrices, nb_metrics = evaluate_methods(held_out, {'naive_bayes': 'nb_class'})
            matrices.update(nb_matrices)
            metrics = pd.concat([metrics, nb_metrics], ignore_index=True)

        return matrices, metrics
