"""
Context-aware lexicon scoring.

Each lemma found in a signed lexicon contributes its polarity to the
document score after adjustment by nearby modifier words:

- a negator in the window inverts the sign
- an amplifier multiplies the magnitude by (1 + amplifier_weight)
- a deamplifier divides the magnitude by (1 + amplifier_weight)

The window covers ``lookback`` tokens before the term and ``lookahead``
tokens after it, never crossing a sentence boundary. With ``constrain``
set, every modifier is consumed by the single closest polarity term.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from .config import ContextScorerConfig
from .lexicons import ModifierSets, SignedLexicon
from .models import AnnotatedToken

logger = logging.getLogger(__name__)

NEGATOR = "negator"
AMPLIFIER = "amplifier"
DEAMPLIFIER = "deamplifier"


@dataclass(frozen=True)
class TermContribution:
    """Adjusted polarity of one matched lexicon term"""
    doc_id: int
    sentence_id: int
    position: int
    lemma: str
    base_polarity: float
    polarity: float
    negated: bool = False
    amplified: bool = False
    deamplified: bool = False


class ContextAwareScorer:
    """Scores annotated tokens against a signed lexicon with modifier windows"""

    def __init__(self, lexicon: SignedLexicon, modifiers: ModifierSets,
                 config: Optional[ContextScorerConfig] = None):
        self.lexicon = lexicon
        self.modifiers = modifiers
        self.config = config or ContextScorerConfig()

    def modifier_kind(self, token: AnnotatedToken) -> Optional[str]:
        """Which modifier set, if any, the token (or its lemma) belongs to"""
        forms = (token.token, token.lemma)
        if any(form in self.modifiers.negators for form in forms):
            return NEGATOR
        if any(form in self.modifiers.amplifiers for form in forms):
            return AMPLIFIER
        if any(form in self.modifiers.deamplifiers for form in forms):
            return DEAMPLIFIER
        return None

    def _window(self, index: int, length: int) -> range:
        return range(max(0, index - self.config.lookback),
                     min(length, index + self.config.lookahead + 1))

    def _assign_modifiers(self, kinds: List[Optional[str]],
                          terms: List[int]) -> Dict[int, List[int]]:
        """Modifier indices that act on each polarity term index"""
        length = len(kinds)
        in_window = {
            i: [m for m in self._window(i, length) if m != i and kinds[m] is not None]
            for i in terms
        }
        if not self.config.constrain:
            return in_window

        owner: Dict[int, int] = {}
        for i, mods in in_window.items():
            for m in mods:
                current = owner.get(m)
                # Closest term wins; on a tie the term following the modifier
                if current is None or (abs(i - m), m > i) < (abs(current - m), m > current):
                    owner[m] = i
        return {i: [m for m in mods if owner[m] == i] for i, mods in in_window.items()}

    def score_sentence(self, tokens: Sequence[AnnotatedToken]) -> List[TermContribution]:
        """Adjusted contributions for one sentence of tokens in position order"""
        kinds = [self.modifier_kind(tok) for tok in tokens]
        terms = [
            i for i, tok in enumerate(tokens)
            if kinds[i] is None and self.lexicon.polarity(tok.lemma) is not None
        ]
        assigned = self._assign_modifiers(kinds, terms)

        weight = 1 + self.config.amplifier_weight
        contributions = []
        for i in terms:
            tok = tokens[i]
            base = self.lexicon.polarity(tok.lemma)
            found = {kinds[m] for m in assigned[i]}

            polarity = base
            negated = NEGATOR in found
            if negated:
                polarity = -polarity
            if AMPLIFIER in found:
                polarity *= weight
            if DEAMPLIFIER in found:
                polarity /= weight

            contributions.append(TermContribution(
                doc_id=tok.doc_id,
                sentence_id=tok.sentence_id,
                position=tok.position,
                lemma=tok.lemma,
                base_polarity=base,
                polarity=polarity,
                negated=negated,
                amplified=AMPLIFIER in found,
                deamplified=DEAMPLIFIER in found,
            ))
        return contributions

    def contributions(self, tokens: Iterable[AnnotatedToken]) -> List[TermContribution]:
        """Term contributions for every document and sentence in ``tokens``"""
        sentences = defaultdict(list)
        for tok in tokens:
            sentences[(tok.doc_id, tok.sentence_id)].append(tok)

        result = []
        for key in sorted(sentences):
            ordered = sorted(sentences[key], key=lambda t: t.position)
            result.extend(self.score_sentence(ordered))
        return result

    def score_tokens(self, tokens: Iterable[AnnotatedToken]) -> float:
        """Sum of adjusted polarities; 0 when nothing matches"""
        return float(sum(c.polarity for c in self.contributions(tokens)))

    def score_documents(self, tokens: Iterable[AnnotatedToken],
                        doc_ids: Iterable[int]) -> pd.DataFrame:
        """One context score per document id, 0 for documents without matches"""
        scores: Dict[int, float] = defaultdict(float)
        matches: Dict[int, int] = defaultdict(int)
        for contribution in self.contributions(tokens):
            scores[contribution.doc_id] += contribution.polarity
            matches[contribution.doc_id] += 1

        doc_ids = list(doc_ids)
        unmatched = sum(1 for doc_id in doc_ids if matches[doc_id] == 0)
        if unmatched:
            logger.info("%d documents have no %s lexicon match; scored 0",
                        unmatched, self.lexicon.name)

        return pd.DataFrame({
            'id': pd.Series(doc_ids, dtype='int64'),
            'context_matches': pd.Series([matches[d] for d in doc_ids], dtype='int64'),
            'context_score': pd.Series([scores[d] for d in doc_ids], dtype='float64'),
        })

    def word_contributions(self, tokens: Iterable[AnnotatedToken],
                           top_n: int = 10) -> pd.DataFrame:
        """Lemmas with the largest summed contribution in each direction"""
        rows = [{'lemma': c.lemma, 'contribution': c.polarity}
                for c in self.contributions(tokens)]
        if not rows:
            return pd.DataFrame(columns=['lemma', 'contribution', 'n', 'sentiment'])

        summary = (pd.DataFrame(rows).groupby('lemma')['contribution']
                   .agg(contribution='sum', n='count')
                   .reset_index())
        summary['sentiment'] = summary['contribution'].apply(
            lambda value: 'positive' if value > 0 else 'negative' if value < 0 else 'neutral')
        positive = summary[summary['contribution'] > 0].nlargest(top_n, 'contribution')
        negative = summary[summary['contribution'] < 0].nsmallest(top_n, 'contribution')
        return pd.concat([positive, negative]).reset_index(drop=True)
