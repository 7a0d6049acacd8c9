"""
Exploratory sentiment analysis of scraped product reviews.
Compares bag-of-words and context-aware lexicon scoring against star ratings.
"""

from .config import CleaningConfig, ContextScorerConfig, PipelineConfig
from .context_scorer import ContextAwareScorer
from .evaluation import ConfusionMatrix, build_confusion_matrix, classify_series
from .lexicons import CategoricalLexicon, ModifierSets, SignedLexicon
from .models import AnnotatedToken, Document, SentimentClass, Token
from .pipeline import PipelineResults, SentimentPipeline
from .tokenizer import TextCleaner

__all__ = [
    'AnnotatedToken',
    'CategoricalLexicon',
    'CleaningConfig',
    'ConfusionMatrix',
    'ContextAwareScorer',
    'ContextScorerConfig',
    'Document',
    'ModifierSets',
    'PipelineConfig',
    'PipelineResults',
    'SentimentClass',
    'SentimentPipeline',
    'SignedLexicon',
    'TextCleaner',
    'Token',
    'build_confusion_matrix',
    'classify_series',
]
