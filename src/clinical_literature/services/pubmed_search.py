"""
PubMed search service.

Runs the full pipeline for one query:
search -> (fetch || open-access check) -> parse -> format.
"""

import asyncio
import logging

from clinical_literature.data_sources.pubmed import PubMedClient
from clinical_literature.data_sources.pubmed_xml import parse_articles_xml
from clinical_literature.models.model_pubmed import (
    Article,
    SearchQuery,
    SearchResult,
)
from clinical_literature.services.citation_formatter import format_article_result

logger = logging.getLogger(__name__)


class PubMedService:
    """High-level PubMed search for the clinical literature chat."""

    def __init__(self, client: PubMedClient) -> None:
        self.client = client

    async def search(self, query: SearchQuery) -> SearchResult:
        """Search PubMed and return citation-ready results in ESearch order.

        Raises DataSourceError only when the search or fetch stage fails.
        Open-access lookups and individual malformed articles degrade
        silently.
        """
        logger.info(
            "Starting PubMed search query=%r max_results=%s free_full_text_only=%s",
            query.query,
            query.max_results,
            query.free_full_text_only,
        )

        try:
            search = await self.client.search(query)

            if not search.pmids:
                logger.info("No PubMed results found query=%r", query.query)
                return SearchResult(
                    results=[],
                    total_count=0,
                    query_translation=search.query_translation,
                )

            xml_text, pmcid_map = await self._fetch_with_pmc(search.pmids)
        except Exception:
            logger.exception("PubMed search service failed query=%r", query.query)
            raise

        articles = order_by_pmids(parse_articles_xml(xml_text), search.pmids)
        results = [format_article_result(a, pmcid_map) for a in articles]

        logger.info(
            "PubMed search complete query=%r total=%d returned=%d free_full_text=%d",
            query.query,
            search.total_count,
            len(results),
            sum(1 for r in results if r.free_full_text),
        )

        return SearchResult(
            results=results,
            total_count=search.total_count,
            query_translation=search.query_translation,
        )

    async def _fetch_with_pmc(
        self, pmids: list[str]
    ) -> tuple[str, dict[str, str | None]]:
        """Run EFetch and the PMC check concurrently.

        The PMC check never raises. If the fetch fails, the PMC task is
        cancelled and awaited before the error propagates, so nothing keeps
        using the client after search() returns.
        """
        pmc_task = asyncio.create_task(self.client.check_free_full_text(pmids))
        try:
            xml_text = await self.client.fetch_articles(pmids)
        except BaseException:
            pmc_task.cancel()
            await asyncio.gather(pmc_task, return_exceptions=True)
            raise
        return xml_text, await pmc_task


def order_by_pmids(articles: list[Article], pmids: list[str]) -> list[Article]:
    """Put articles in ESearch ranking order.

    EFetch does not promise to return records in request order. Articles
    whose PMID was not requested, and repeats, are dropped.
    """
    by_pmid: dict[str, Article] = {}
    for article in articles:
        by_pmid.setdefault(article.pmid, article)
    return [by_pmid[pmid] for pmid in pmids if pmid in by_pmid]
