"""
Exception types for the review sentiment analysis package.
"""


class SentimentAnalysisError(Exception):
    """Base class for all errors raised by the sentiment package"""


class ConfigurationError(SentimentAnalysisError, ValueError):
    """Invalid configuration value"""


class IngestionError(SentimentAnalysisError):
    """The review source returned no usable data"""


class AnnotationError(SentimentAnalysisError):
    """The linguistic annotation step failed or returned nothing"""


class LexiconError(SentimentAnalysisError):
    """A lexicon could not be loaded or is empty"""
