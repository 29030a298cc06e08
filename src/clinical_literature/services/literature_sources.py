"""Adapt PubMed results to the generic literature-source shape."""

from clinical_literature.constants import NO_ABSTRACT
from clinical_literature.models.model_pubmed import SearchResult, SourceResult


def to_source_results(result: SearchResult) -> list[SourceResult]:
    return [
        SourceResult(
            title=article.title,
            content=article.abstract or NO_ABSTRACT,
            url=article.url,
            year=article.year or None,
            authors=article.authors,
            metadata={
                "pmid": article.pmid,
                "doi": article.doi,
                "journal": article.journal,
                "free_full_text": article.free_full_text,
                "publication_types": article.publication_types,
            },
        )
        for article in result.results
    ]


def build_pubmed_context(sources: list[SourceResult]) -> str:
    """Render PubMed sources as a markdown section for an LLM prompt."""
    if not sources:
        return ""

    lines = ["## PubMed Articles"]
    for source in sources:
        year = f" ({source.year})" if source.year else ""
        authors = f" - {source.authors}" if source.authors else ""
        lines.append(f"### {source.title}{year}{authors}")
        lines.append(source.content)
        lines.append("")

    return "\n".join(lines)
