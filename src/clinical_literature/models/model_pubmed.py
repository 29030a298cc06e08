"""
Pydantic models for PubMed data.

These are the data contracts between the PubMed client, the search service
and the AI orchestration layer. Callers receive these models - they never
see raw E-utilities responses.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

SortMode = Literal["relevance", "date"]


class SearchQuery(BaseModel):
    """A PubMed search request. Never mutated once built."""

    query: str
    year_from: int | None = None
    year_to: int | None = None
    free_full_text_only: bool = False
    sort: SortMode = "relevance"
    max_results: int | None = None  # None -> client default

    model_config = {"frozen": True}


class ESearchResult(BaseModel):
    """What ESearch returned for one query."""

    pmids: list[str] = []  # ranking order from NCBI
    total_count: int = 0  # total matches, not len(pmids)
    query_translation: str | None = None
    errors: dict[str, list[str]] = {}
    warnings: dict[str, list[str]] = {}


class Author(BaseModel):
    last_name: str
    fore_name: str = ""
    initials: str = ""
    affiliation: str | None = None


class JournalPubDate(BaseModel):
    year: str = ""
    month: str | None = None
    day: str | None = None


class Journal(BaseModel):
    title: str = ""
    iso_abbreviation: str = ""
    volume: str | None = None
    issue: str | None = None
    pub_date: JournalPubDate = JournalPubDate()


class Article(BaseModel):
    """A single parsed PubmedArticle block."""

    pmid: str  # PubMed identifier (e.g. "38472913")
    title: str
    abstract: str = ""  # joined sections; empty string if missing
    authors: list[Author] = []  # document order
    journal: Journal = Journal()
    doi: str | None = None
    pmcid: str | None = None
    publication_types: list[str] = []  # NLM controlled vocabulary
    mesh_terms: list[str] = []  # MeSH descriptor names only
    keywords: list[str] = []
    pub_date: str = ""  # e.g. "2023 Jun 15"
    year: str = ""


class ArticleResult(BaseModel):
    """Citation-ready article handed to the orchestration layer."""

    pmid: str
    title: str
    abstract: str
    authors: str  # formatted, e.g. "Smith J et al."
    journal: str  # formatted, e.g. "J Clin Med. 2023. 45(2)"
    year: str
    pub_date: str
    doi: str | None = None
    pmcid: str | None = None
    free_full_text: bool = False
    url: str
    publication_types: list[str] = []
    mesh_terms: list[str] = []
    keywords: list[str] = []


class SearchResult(BaseModel):
    """Tagged result of one PubMed search."""

    type: Literal["pubmed"] = "pubmed"
    results: list[ArticleResult] = []
    total_count: int = 0
    query_translation: str | None = None


class IdConversionRecord(BaseModel):
    """One record from the PMC ID converter."""

    pmid: str | None = None
    pmcid: str | None = None
    doi: str | None = None
    status: str | None = None


class SourceResult(BaseModel):
    """An article shaped as a generic literature source for answer synthesis."""

    type: Literal["pubmed"] = "pubmed"
    title: str
    content: str
    url: str | None = None
    year: str | None = None
    authors: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
