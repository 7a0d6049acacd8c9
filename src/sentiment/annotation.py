"""
Linguistic annotation of review text with spaCy.

Produces one AnnotatedToken per word with its lemma, sentence index and
position within the sentence. Tagging, parsing and lemmatization are left
entirely to the spaCy pipeline.
"""

import logging
from typing import Iterable, List, Optional

import pandas as pd
import spacy
from spacy.language import Language

from .errors import AnnotationError
from .models import AnnotatedToken, Document

logger = logging.getLogger(__name__)

SENTENCE_PIPES = ("parser", "senter", "sentencizer")


def load_spacy_model(model_name: str = "en_core_web_sm") -> Language:
    """Load a spaCy pipeline, failing loudly when the model is not installed"""
    try:
        nlp = spacy.load(model_name, disable=["ner"])
    except OSError as exc:
        raise AnnotationError(
            f"spaCy model '{model_name}' is not available. "
            f"Install it with: python -m spacy download {model_name}") from exc
    logger.info("Loaded spaCy model %s (pipes: %s)", model_name, ", ".join(nlp.pipe_names))
    return nlp


class SpacyAnnotator:
    """Batch annotator over a spaCy pipeline"""

    def __init__(self, model_name: str = "en_core_web_sm", nlp: Optional[Language] = None,
                 batch_size: int = 64):
        self.nlp = nlp if nlp is not None else load_spacy_model(model_name)
        self.batch_size = batch_size
        if not any(pipe in self.nlp.pipe_names for pipe in SENTENCE_PIPES):
            self.nlp.add_pipe("sentencizer")

    def annotate(self, documents: Iterable[Document]) -> List[AnnotatedToken]:
        """Annotate all documents in one batch"""
        documents = list(documents)
        texts = [doc.text for doc in documents]
        try:
            parsed = list(self.nlp.pipe(texts, batch_size=self.batch_size))
        except (ValueError, RuntimeError, TypeError) as exc:
            raise AnnotationError(f"Annotation failed: {exc}") from exc

        if len(parsed) != len(documents):
            raise AnnotationError(
                f"Annotation returned {len(parsed)} results for {len(documents)} documents")

        tokens: List[AnnotatedToken] = []
        for document, spacy_doc in zip(documents, parsed):
            tokens.extend(self._tokens_for(document.doc_id, spacy_doc))

        if not tokens and any(text.strip() for text in texts):
            raise AnnotationError("Annotation returned no tokens for non-empty input")

        logger.info("Annotated %d documents into %d tokens", len(documents), len(tokens))
        return tokens

    @staticmethod
    def _tokens_for(doc_id: int, spacy_doc) -> List[AnnotatedToken]:
        tokens = []
        for sentence_id, sentence in enumerate(spacy_doc.sents):
            position = 0
            for tok in sentence:
                if tok.is_punct or tok.is_space:
                    continue
                # Blank pipelines leave lemma_ empty
                lemma = tok.lemma_.lower() or tok.lower_
                tokens.append(AnnotatedToken(
                    doc_id=doc_id,
                    token=tok.lower_,
                    lemma=lemma,
                    sentence_id=sentence_id,
                    position=position,
                ))
                position += 1
        return tokens


def tokens_to_frame(tokens: Iterable[AnnotatedToken]) -> pd.DataFrame:
    """Tabular view of annotated tokens"""
    rows = [{
        'id': t.doc_id,
        'token': t.token,
        'lemma': t.lemma,
        'sentence_id': t.sentence_id,
        'position': t.position,
    } for t in tokens]
    return pd.DataFrame(rows, columns=['id', 'token', 'lemma', 'sentence_id', 'position'])
