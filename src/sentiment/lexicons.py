"""
Sentiment lexicons and modifier word sets.

Every lexicon variant is its own immutable value and is passed explicitly
to the scorers that use it, so several lexicons can be compared side by side.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

import numpy as np
import pandas as pd
from vaderSentiment.vaderSentiment import (
    BOOSTER_DICT,
    NEGATE,
    SentimentIntensityAnalyzer,
)

from .errors import ConfigurationError, LexiconError

logger = logging.getLogger(__name__)

POLARITY_LABELS = ("positive", "negative")


@dataclass(frozen=True)
class CategoricalLexicon:
    """Term to label lexicon; a term may carry several labels (e.g. emotions)"""
    name: str
    entries: FrozenSet[Tuple[str, str]]

    @classmethod
    def from_pairs(cls, name: str, pairs: Iterable[Tuple[str, str]]) -> "CategoricalLexicon":
        """Build from (term, label) pairs, lowercasing both"""
        entries = frozenset(
            (str(term).strip().lower(), str(label).strip().lower())
            for term, label in pairs
            if str(term).strip()
        )
        if not entries:
            raise LexiconError(f"Lexicon '{name}' has no entries")
        return cls(name=name, entries=entries)

    @property
    def vocabulary(self) -> FrozenSet[str]:
        return frozenset(term for term, _ in self.entries)

    @property
    def label_set(self) -> FrozenSet[str]:
        return frozenset(label for _, label in self.entries)

    def polarity_subset(self) -> "CategoricalLexicon":
        """Variant restricted to the positive/negative labels"""
        return self._subset(POLARITY_LABELS, f"{self.name}:polarity")

    def label_subset(self, label: str) -> "CategoricalLexicon":
        """Variant restricted to one label, e.g. joy or trust"""
        return self._subset((label.lower(),), f"{self.name}:{label.lower()}")

    def _subset(self, labels, name: str) -> "CategoricalLexicon":
        entries = frozenset((t, l) for t, l in self.entries if l in labels)
        if not entries:
            raise LexiconError(f"Lexicon '{self.name}' has no entries labelled {labels}")
        return CategoricalLexicon(name=name, entries=entries)

    def to_frame(self) -> pd.DataFrame:
        """Two-column table (word, sentiment) for joins"""
        return pd.DataFrame(sorted(self.entries), columns=['word', 'sentiment'])

    def __len__(self):
        return len(self.entries)


@dataclass(frozen=True)
class SignedLexicon:
    """Term to numeric polarity lexicon, keyed by lemma"""
    name: str
    values: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the mapping so the lexicon can be shared read-only
        if not isinstance(self.values, MappingProxyType):
            object.__setattr__(self, 'values', MappingProxyType(dict(self.values)))

    @classmethod
    def from_mapping(cls, name: str, values: Mapping[str, float]) -> "SignedLexicon":
        cleaned: Dict[str, float] = {}
        for term, value in values.items():
            term = str(term).strip().lower()
            if not term or pd.isna(value):
                continue
            cleaned[term] = float(value)
        if not cleaned:
            raise LexiconError(f"Lexicon '{name}' has no entries")
        return cls(name=name, values=cleaned)

    @property
    def vocabulary(self) -> FrozenSet[str]:
        return frozenset(self.values)

    def polarity(self, term: str) -> Optional[float]:
        return self.values.get(term)

    def signed(self) -> "SignedLexicon":
        """Variant with every value collapsed to +1/-1; zero-valued terms are dropped"""
        values = {t: float(np.sign(v)) for t, v in self.values.items() if v != 0}
        return SignedLexicon.from_mapping(f"{self.name}:signed", values)

    def without(self, terms: Iterable[str]) -> "SignedLexicon":
        """Variant with the given terms removed"""
        excluded = {t.lower() for t in terms}
        values = {t: v for t, v in self.values.items() if t not in excluded}
        return SignedLexicon.from_mapping(self.name, values)

    def to_categorical(self) -> CategoricalLexicon:
        """Positive/negative labels by sign, zero-valued terms are dropped"""
        return CategoricalLexicon.from_pairs(
            f"{self.name}:categorical",
            ((t, "positive" if v > 0 else "negative")
             for t, v in self.values.items() if v != 0))

    def __len__(self):
        return len(self.values)


@dataclass(frozen=True)
class ModifierSets:
    """Negators, amplifiers and deamplifiers; the three sets are disjoint"""
    negators: FrozenSet[str] = frozenset()
    amplifiers: FrozenSet[str] = frozenset()
    deamplifiers: FrozenSet[str] = frozenset()

    def __post_init__(self):
        for attr in ('negators', 'amplifiers', 'deamplifiers'):
            object.__setattr__(self, attr, frozenset(w.lower() for w in getattr(self, attr)))

        overlaps = ((self.negators & self.amplifiers)
                    | (self.negators & self.deamplifiers)
                    | (self.amplifiers & self.deamplifiers))
        if overlaps:
            raise ConfigurationError(
                f"Modifier sets must be disjoint, shared terms: {', '.join(sorted(overlaps))}")

    @property
    def all_terms(self) -> FrozenSet[str]:
        return self.negators | self.amplifiers | self.deamplifiers


def load_categorical_lexicon(csv_path: str, name: Optional[str] = None,
                             term_column: str = "word",
                             label_column: str = "sentiment") -> CategoricalLexicon:
    """Load a (word, label) lexicon such as Bing or NRC from CSV"""
    df = _read_lexicon_csv(csv_path, (term_column, label_column))
    df = df.dropna(subset=[term_column, label_column])
    lexicon = CategoricalLexicon.from_pairs(
        name or csv_path, zip(df[term_column], df[label_column]))
    logger.info("Loaded categorical lexicon '%s' (%d entries, labels: %s)",
                lexicon.name, len(lexicon), ", ".join(sorted(lexicon.label_set)))
    return lexicon


def load_signed_lexicon(csv_path: str, name: Optional[str] = None,
                        term_column: str = "word",
                        value_column: str = "value") -> SignedLexicon:
    """Load a (word, numeric value) lexicon such as AFINN from CSV"""
    df = _read_lexicon_csv(csv_path, (term_column, value_column))
    values = pd.to_numeric(df[value_column], errors='coerce')
    lexicon = SignedLexicon.from_mapping(name or csv_path, dict(zip(df[term_column], values)))
    logger.info("Loaded numeric lexicon '%s' (%d entries)", lexicon.name, len(lexicon))
    return lexicon


def _read_lexicon_csv(csv_path: str, columns) -> pd.DataFrame:
    try:
        df = pd.read_csv(csv_path)
    except pd.errors.EmptyDataError as exc:
        raise LexiconError(f"Lexicon file is empty: {csv_path}") from exc

    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise LexiconError(f"Lexicon {csv_path} is missing columns: {', '.join(missing)}")
    return df


def vader_numeric_lexicon() -> SignedLexicon:
    """VADER's valence lexicon (continuous scores roughly in [-4, 4])"""
    analyzer = SentimentIntensityAnalyzer()
    return SignedLexicon.from_mapping("vader", analyzer.lexicon)


def vader_categorical_lexicon() -> CategoricalLexicon:
    """VADER lexicon reduced to positive/negative labels"""
    return vader_numeric_lexicon().to_categorical()


def vader_modifiers() -> ModifierSets:
    """Single-word negators and boosters bundled with VADER"""
    negators = {w.lower() for w in NEGATE if " " not in w}
    # spaCy splits contractions ("don't" -> "do", "n't")
    negators.add("n't")
    amplifiers = {w for w, v in BOOSTER_DICT.items() if v > 0 and " " not in w}
    deamplifiers = {w for w, v in BOOSTER_DICT.items() if v < 0 and " " not in w}
    return ModifierSets(
        negators=frozenset(negators),
        amplifiers=frozenset(amplifiers - negators),
        deamplifiers=frozenset(deamplifiers - negators - amplifiers),
    )


def vader_signed_lexicon(modifiers: Optional[ModifierSets] = None) -> SignedLexicon:
    """+1/-1 lexicon derived from VADER, minus any modifier terms"""
    modifiers = modifiers or vader_modifiers()
    return vader_numeric_lexicon().signed().without(modifiers.all_terms)
