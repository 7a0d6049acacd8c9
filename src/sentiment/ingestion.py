"""
Review ingestion: reads the scraped review table and builds Documents.
"""

import logging
import re
from typing import List, Optional

import pandas as pd

from .errors import IngestionError
from .evaluation import classify_star_series
from .models import Document

logger = logging.getLogger(__name__)

STAR_PATTERN = re.compile(r"^\s*(\d)(?:\.0)?\b")


def parse_star(star_text) -> Optional[int]:
    """Extract the leading digit of a rating string such as "4 out of 5 stars".

    Returns None for anything that does not start with a rating digit 1-5.
    """
    if star_text is None or (isinstance(star_text, float) and pd.isna(star_text)):
        return None
    match = STAR_PATTERN.match(str(star_text))
    if not match:
        return None
    star = int(match.group(1))
    if not 1 <= star <= 5:
        return None
    return star


def load_reviews(csv_path: str) -> pd.DataFrame:
    """Load the scraped review CSV"""
    try:
        df = pd.read_csv(csv_path)
    except pd.errors.EmptyDataError as exc:
        raise IngestionError(f"Review file is empty: {csv_path}") from exc

    if df.empty:
        raise IngestionError(f"No reviews found in {csv_path}")

    logger.info("Loaded %d reviews from %s", len(df), csv_path)
    return df


def documents_from_frame(df: pd.DataFrame, text_column: str = "text",
                         title_column: str = "title", star_column: str = "star",
                         page_column: str = "page") -> List[Document]:
    """Turn a review table into Documents with stable 1-based ids"""
    if df is None or df.empty:
        raise IngestionError("Review table is empty")

    missing = [col for col in (text_column, star_column) if col not in df.columns]
    if missing:
        raise IngestionError(f"Review table is missing columns: {', '.join(missing)}")

    documents = []
    malformed = 0
    for doc_id, (_, row) in enumerate(df.iterrows(), start=1):
        star = parse_star(row[star_column])
        if star is None:
            malformed += 1

        page = row.get(page_column) if page_column in df.columns else None
        documents.append(Document(
            doc_id=doc_id,
            title=_as_text(row.get(title_column, "")),
            text=_as_text(row[text_column]),
            star=star,
            page=None if page is None or pd.isna(page) else int(page),
        ))

    if malformed:
        logger.warning("%d reviews have a malformed star rating", malformed)

    return documents


def documents_to_frame(documents: List[Document]) -> pd.DataFrame:
    """Flat table view of documents, one row per document id"""
    rows = [{
        'id': doc.doc_id,
        'title': doc.title,
        'text': doc.text,
        'star': doc.star,
        'title_language': doc.title_language,
        'text_language': doc.text_language,
    } for doc in documents]
    columns = ['id', 'title', 'text', 'star', 'title_language', 'text_language']
    frame = pd.DataFrame(rows, columns=columns)
    frame['id'] = frame['id'].astype('int64')
    frame['star'] = frame['star'].astype('Int64')
    frame.insert(4, 'star_class', classify_star_series(frame['star']))
    return frame


def _as_text(value) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value)
