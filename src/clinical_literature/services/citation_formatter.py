"""Turn parsed Articles into citation-ready ArticleResults."""

from clinical_literature.constants import PUBMED_ARTICLE_URL, UNKNOWN_AUTHORS
from clinical_literature.models.model_pubmed import (
    Article,
    ArticleResult,
    Author,
    Journal,
)


def _author_name(author: Author) -> str:
    return f"{author.last_name} {author.initials}".strip()


def format_authors(authors: list[Author]) -> str:
    """Vancouver-style short author string: only the first of 3+ is named."""
    if not authors:
        return UNKNOWN_AUTHORS
    if len(authors) == 1:
        return _author_name(authors[0])
    if len(authors) == 2:
        return f"{_author_name(authors[0])}, {_author_name(authors[1])}"
    return f"{_author_name(authors[0])} et al."


def format_journal_citation(journal: Journal, year: str = "") -> str:
    """e.g. "J Clin Med. 2023. 45(2)". Missing parts are left out entirely."""
    parts = [journal.iso_abbreviation or journal.title, year]

    if journal.volume:
        volume = journal.volume
        if journal.issue:
            volume += f"({journal.issue})"
        parts.append(volume)

    return ". ".join(p for p in parts if p)


def article_url(pmid: str) -> str:
    return f"{PUBMED_ARTICLE_URL}/{pmid}/"


def format_article_result(
    article: Article, pmcid_map: dict[str, str | None]
) -> ArticleResult:
    """Merge an Article with the open-access map.

    A PMC id from the ID converter wins; otherwise the one already present
    in the article XML is used.
    """
    pmcid = pmcid_map.get(article.pmid) or article.pmcid

    return ArticleResult(
        pmid=article.pmid,
        title=article.title,
        abstract=article.abstract,
        authors=format_authors(article.authors),
        journal=format_journal_citation(article.journal, article.year),
        year=article.year,
        pub_date=article.pub_date,
        doi=article.doi,
        pmcid=pmcid,
        free_full_text=bool(pmcid),
        url=article_url(article.pmid),
        publication_types=article.publication_types,
        mesh_terms=article.mesh_terms,
        keywords=article.keywords,
    )
