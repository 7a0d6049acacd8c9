"""
Tests for spaCy-based annotation, run on a blank English pipeline.

Usage:
    pytest tests/test_annotation.py -v
"""

import pytest

from src.sentiment.annotation import SpacyAnnotator, load_spacy_model, tokens_to_frame
from src.sentiment.errors import AnnotationError
from src.sentiment.models import AnnotatedToken, Document


class TestSpacyAnnotator:

    def test_sentences_and_positions(self, blank_nlp):
        annotator = SpacyAnnotator(nlp=blank_nlp)
        tokens = annotator.annotate([Document(doc_id=4, title="", text="Not good. Really great!")])
        assert tokens == [
            AnnotatedToken(doc_id=4, token="not", lemma="not", sentence_id=0, position=0),
            AnnotatedToken(doc_id=4, token="good", lemma="good", sentence_id=0, position=1),
            AnnotatedToken(doc_id=4, token="really", lemma="really", sentence_id=1, position=0),
            AnnotatedToken(doc_id=4, token="great", lemma="great", sentence_id=1, position=1),
        ]

    def test_contractions_split(self, blank_nlp):
        annotator = SpacyAnnotator(nlp=blank_nlp)
        tokens = annotator.annotate([Document(doc_id=1, title="", text="I don't like it")])
        assert [t.token for t in tokens] == ["i", "do", "n't", "like", "it"]

    def test_sentencizer_added_when_missing(self):
        import spacy  # pylint: disable=import-outside-toplevel
        nlp = spacy.blank("en")
        annotator = SpacyAnnotator(nlp=nlp)
        assert "sentencizer" in annotator.nlp.pipe_names

    def test_empty_documents_are_fine(self, blank_nlp):
        annotator = SpacyAnnotator(nlp=blank_nlp)
        assert annotator.annotate([Document(doc_id=1, title="", text="")]) == []

    def test_failing_pipeline_raises(self):
        class BrokenPipeline:
            pipe_names = ["sentencizer"]

            def pipe(self, texts, batch_size=64):
                raise RuntimeError("model crashed")

        annotator = SpacyAnnotator(nlp=BrokenPipeline())
        with pytest.raises(AnnotationError):
            annotator.annotate([Document(doc_id=1, title="", text="Good")])

    def test_missing_model(self):
        with pytest.raises(AnnotationError):
            load_spacy_model("xx_model_that_does_not_exist")

    def test_frame(self, blank_nlp):
        annotator = SpacyAnnotator(nlp=blank_nlp)
        frame = tokens_to_frame(annotator.annotate([Document(doc_id=1, title="", text="Good.")]))
        assert frame.to_dict('records') == [
            {'id': 1, 'token': 'good', 'lemma': 'good', 'sentence_id': 0, 'position': 0}
        ]
