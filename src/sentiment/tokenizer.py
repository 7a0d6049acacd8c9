"""
Word tokenization and cleaning of review text.
"""

import logging
import re
from typing import FrozenSet, Iterable, Iterator, List, Optional

import pandas as pd
from nltk.tokenize import RegexpTokenizer

from .config import CleaningConfig
from .models import AnnotatedToken, Document, Token

logger = logging.getLogger(__name__)

# Words, keeping internal apostrophes, dots and colons ("don't", "e.g", "10:30")
WORD_TOKENIZER = RegexpTokenizer(r"\w+(?:[.:'’]\w+)*")

DIGITS_ONLY = re.compile(r"^\d+$")
PUNCTUATION_ONLY = re.compile(r"^[^\w]+$")
STRAY_CHARACTER = re.compile(r"(?:^|[.:'’])[^\W\d_][.:'’]")
TWO_LETTERS = re.compile(r"^[^\W\d_]{2}$")
INTERNAL_COLON = re.compile(r"\w:\w")

NOISE_PATTERNS = (DIGITS_ONLY, PUNCTUATION_ONLY, STRAY_CHARACTER, TWO_LETTERS, INTERNAL_COLON)


def split_words(text) -> List[str]:
    """Lowercase word tokens of ``text``; anything that is not a string gives []"""
    if not isinstance(text, str):
        return []
    return WORD_TOKENIZER.tokenize(text.lower())


def is_noise_token(word: str) -> bool:
    """Digits, stray abbreviation characters, two-letter words and colon tokens"""
    return any(pattern.search(word) for pattern in NOISE_PATTERNS)


def removable_stop_words(stop_words: FrozenSet[str], lexicon_vocabulary: Iterable[str],
                         protect: bool = True) -> FrozenSet[str]:
    """Stop-words to drop: the full list minus those the lexicon scores"""
    if not protect:
        return frozenset(stop_words)
    protected = frozenset(stop_words) & frozenset(lexicon_vocabulary)
    return frozenset(stop_words) - protected


class TextCleaner:
    """Splits documents into cleaned word tokens

    ``always_keep`` terms (modifiers such as "not" or "n't") bypass the
    stop-word and noise filters; product stop-words are dropped regardless.
    With ``remove_stop_words=False`` only noise and product words are dropped.
    """

    def __init__(self, config: Optional[CleaningConfig] = None,
                 lexicon_vocabulary: Iterable[str] = (),
                 always_keep: Iterable[str] = (),
                 remove_stop_words: bool = True):
        self.config = config or CleaningConfig()
        self.always_keep = frozenset(always_keep)
        if remove_stop_words:
            self.stop_words = removable_stop_words(
                self.config.stop_words,
                lexicon_vocabulary,
                protect=self.config.protect_lexicon_stopwords,
            ) - self.always_keep
            self.protected_stop_words = self.config.stop_words - self.stop_words
        else:
            self.stop_words = frozenset()
            self.protected_stop_words = frozenset()
        if self.protected_stop_words:
            logger.debug("Keeping %d stop-words that carry polarity: %s",
                         len(self.protected_stop_words),
                         ", ".join(sorted(self.protected_stop_words)))

    def keep(self, word: str) -> bool:
        """Whether a single lowercase token survives cleaning"""
        if word in self.config.product_stop_words:
            return False
        if word in self.always_keep:
            return True
        if word in self.stop_words:
            return False
        return not is_noise_token(word)

    def clean_words(self, words: Iterable[str]) -> List[str]:
        return [w for w in words if self.keep(w)]

    def clean_annotations(self, tokens: Iterable[AnnotatedToken]) -> List[AnnotatedToken]:
        """Annotated tokens whose surface form survives cleaning"""
        return [tok for tok in tokens if self.keep(tok.token)]

    def tokenize(self, document: Document) -> Iterator[Token]:
        """Lazily yield the cleaned tokens of one document"""
        for position, word in enumerate(split_words(document.text)):
            if self.keep(word):
                yield Token(doc_id=document.doc_id, word=word, position=position)

    def tokenize_all(self, documents: Iterable[Document]) -> pd.DataFrame:
        """Tidy table with one row per (id, word)"""
        rows = [
            {'id': token.doc_id, 'word': token.word, 'position': token.position}
            for document in documents
            for token in self.tokenize(document)
        ]
        return pd.DataFrame(rows, columns=['id', 'word', 'position'])
