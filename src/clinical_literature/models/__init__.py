"""Data models for the clinical literature client."""

from clinical_literature.models.model_pubmed import (
    Article,
    ArticleResult,
    Author,
    ESearchResult,
    IdConversionRecord,
    Journal,
    JournalPubDate,
    SearchQuery,
    SearchResult,
    SourceResult,
)

__all__ = [
    "Article",
    "ArticleResult",
    "Author",
    "ESearchResult",
    "IdConversionRecord",
    "Journal",
    "JournalPubDate",
    "SearchQuery",
    "SearchResult",
    "SourceResult",
]
