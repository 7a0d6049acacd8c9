"""
Language identification and filtering of review documents.
"""

import logging
from dataclasses import replace
from typing import List, Optional

from langdetect import DetectorFactory, detect
from langdetect.lang_detect_exception import LangDetectException

from .models import Document

logger = logging.getLogger(__name__)

# langdetect is probabilistic; a fixed seed keeps results reproducible
DetectorFactory.seed = 0


def detect_language(text: str) -> Optional[str]:
    """Return the ISO language code of ``text``, or None when undetectable"""
    if not text or not text.strip():
        return None
    try:
        return detect(text)
    except LangDetectException:
        return None


def annotate_languages(documents: List[Document]) -> List[Document]:
    """Attach title and body language codes to every document"""
    return [
        replace(doc,
                title_language=detect_language(doc.title),
                text_language=detect_language(doc.text))
        for doc in documents
    ]


def is_target_language(document: Document, language: str = "en") -> bool:
    """True when the body text was detected as ``language``"""
    return document.text_language == language


def filter_language(documents: List[Document], language: str = "en") -> List[Document]:
    """Detect languages and keep only documents whose body is in ``language``"""
    annotated = annotate_languages(documents)
    kept = [doc for doc in annotated if is_target_language(doc, language)]

    dropped = len(annotated) - len(kept)
    if dropped:
        undetected = sum(1 for doc in annotated if doc.text_language is None)
        logger.info("Excluded %d non-%s documents (%d undetectable)",
                    dropped, language, undetected)
    return kept
