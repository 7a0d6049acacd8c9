"""
Configuration for the review sentiment pipeline.
"""

import os
from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from dotenv import load_dotenv
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from .errors import ConfigurationError


@dataclass
class CleaningConfig:
    """Tokenizer/cleaner configuration"""
    stop_words: FrozenSet[str] = field(default_factory=lambda: frozenset(ENGLISH_STOP_WORDS))
    product_stop_words: FrozenSet[str] = field(default_factory=frozenset)
    # Keep stop-words that the bag-of-words lexicon scores
    protect_lexicon_stopwords: bool = True
    # Also drop stop-words from the annotated tokens fed to the context scorer
    clean_for_context_scorer: bool = False

    def __post_init__(self):
        self.stop_words = frozenset(w.lower() for w in self.stop_words)
        self.product_stop_words = frozenset(w.lower() for w in self.product_stop_words)


@dataclass
class ContextScorerConfig:
    """Negation/amplification window parameters"""
    amplifier_weight: float = 0.8
    lookback: int = 2
    lookahead: int = 0
    constrain: bool = False

    def __post_init__(self):
        if self.amplifier_weight < 0:
            raise ConfigurationError(
                f"amplifier_weight must be >= 0, got {self.amplifier_weight}")
        if self.lookback < 0 or self.lookahead < 0:
            raise ConfigurationError(
                f"window sizes must be >= 0, got lookback={self.lookback} "
                f"lookahead={self.lookahead}")


@dataclass
class PipelineConfig:
    """Top-level pipeline configuration"""
    language: str = "en"
    text_column: str = "text"
    title_column: str = "title"
    star_column: str = "star"
    page_column: str = "page"
    correlation_decimals: int = 3
    spacy_model: str = "en_core_web_sm"
    run_naive_bayes: bool = True
    naive_bayes_test_size: float = 0.2
    random_state: int = 42

    cleaning: CleaningConfig = field(default_factory=CleaningConfig)
    context: ContextScorerConfig = field(default_factory=ContextScorerConfig)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "PipelineConfig":
        """Build a config from defaults overridden by environment variables"""
        load_dotenv(env_file)

        context = ContextScorerConfig(
            amplifier_weight=_env_float("SENTIMENT_AMPLIFIER_WEIGHT", 0.8),
            lookback=_env_int("SENTIMENT_LOOKBACK", 2),
            lookahead=_env_int("SENTIMENT_LOOKAHEAD", 0),
            constrain=_env_bool("SENTIMENT_CONSTRAIN", False),
        )
        return cls(
            language=os.getenv("SENTIMENT_LANGUAGE", "en"),
            spacy_model=os.getenv("SENTIMENT_SPACY_MODEL", "en_core_web_sm"),
            context=context,
        )

    def get_summary(self) -> str:
        """Printable summary of the active configuration"""
        return f"""
Pipeline Configuration Summary:
{'='*40}
Language: {self.language}
spaCy model: {self.spacy_model}
Naive Bayes: {'enabled' if self.run_naive_bayes else 'disabled'}

Cleaning:
- Stop-words: {len(self.cleaning.stop_words)}
- Product stop-words: {', '.join(sorted(self.cleaning.product_stop_words)) or '-'}
- Protect lexicon stop-words: {self.cleaning.protect_lexicon_stopwords}

Context-aware scorer:
- Amplifier weight: {self.context.amplifier_weight}
- Lookback: {self.context.lookback}
- Lookahead: {self.context.lookahead}
- Constrain: {self.context.constrain}
{'='*40}
        """.strip()


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from exc


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")
