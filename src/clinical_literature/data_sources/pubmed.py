"""
PubMed / NCBI E-utilities client.

Three methods:
  1. search              — ESearch: query -> ranked PMIDs + total count
  2. fetch_articles      — EFetch: PMIDs -> raw PubmedArticleSet XML
  3. check_free_full_text — PMC ID converter: PMIDs -> PMC ids (best-effort)
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from clinical_literature.config import PubMedConfig
from clinical_literature.constants import (
    EARLIEST_PUBLICATION_YEAR,
    FREE_FULL_TEXT_FILTER,
    OPEN_ACCESS_MAX_RETRIES,
)
from clinical_literature.data_sources.base_client import (
    BaseClient,
    ClientConfig,
    DataSourceError,
    RequestContext,
    RetryConfig,
)
from clinical_literature.models.model_pubmed import (
    ESearchResult,
    IdConversionRecord,
    SearchQuery,
)

logger = logging.getLogger(__name__)


def build_search_term(query: SearchQuery, today: date | None = None) -> str:
    """Append PubMed date-range and free-full-text filter clauses to the query."""
    term = query.query

    if query.year_from or query.year_to:
        year_from = query.year_from or EARLIEST_PUBLICATION_YEAR
        year_to = query.year_to or (today or date.today()).year
        term += (
            f' AND ("{year_from}"[Date - Publication]'
            f' : "{year_to}"[Date - Publication])'
        )

    if query.free_full_text_only:
        term += f" AND {FREE_FULL_TEXT_FILTER}"

    return term


class PubMedClient(BaseClient):
    """Client for querying PubMed/NCBI APIs."""

    def __init__(self, config: PubMedConfig) -> None:
        super().__init__(ClientConfig(timeout_seconds=config.timeout_seconds))
        self.pubmed_config = config

    @property
    def _source_name(self) -> str:
        return "pubmed"

    @property
    def search_url(self) -> str:
        return f"{self.pubmed_config.base_url}/esearch.fcgi"

    @property
    def fetch_url(self) -> str:
        return f"{self.pubmed_config.base_url}/efetch.fcgi"

    def _base_params(self, *, with_api_key: bool = True) -> dict[str, Any]:
        params: dict[str, Any] = {
            "tool": self.pubmed_config.tool,
            "email": self.pubmed_config.email,
        }
        if with_api_key and self.pubmed_config.api_key:
            params["api_key"] = self.pubmed_config.api_key
        return params

    # ------------------------------------------------------------------
    # Public: search
    # ------------------------------------------------------------------

    async def search(self, query: SearchQuery) -> ESearchResult:
        """Search PubMed and return PMIDs in NCBI's ranking order."""
        term = build_search_term(query)
        params: dict[str, Any] = {
            "db": "pubmed",
            "term": term,
            "retmax": (
                query.max_results
                if query.max_results is not None
                else self.pubmed_config.default_max_results
            ),
            "retmode": "json",
            "sort": query.sort,
            **self._base_params(),
        }

        logger.debug(
            "Executing PubMed search term=%r retmax=%s", term, params["retmax"]
        )
        data = await self._rest_get(
            self.search_url,
            params,
            context=RequestContext(
                source=self._source_name, method="search", params={"term": term}
            ),
        )

        result = self._parse_esearch(data)
        logger.info(
            "PubMed search complete query=%r total=%d returned=%d",
            query.query,
            result.total_count,
            len(result.pmids),
        )
        return result

    def _parse_esearch(self, data: Any) -> ESearchResult:
        payload = (data or {}).get("esearchresult")
        if payload is None:
            raise DataSourceError(
                self._source_name, "ESearch response missing esearchresult"
            )
        if "ERROR" in payload:
            raise DataSourceError(
                self._source_name, f"ESearch error: {payload['ERROR']}"
            )

        return ESearchResult(
            pmids=[str(pmid) for pmid in payload.get("idlist", [])],
            total_count=int(payload.get("count", 0) or 0),
            query_translation=payload.get("querytranslation") or None,
            errors=_string_lists(payload.get("errorlist")),
            warnings=_string_lists(payload.get("warninglist")),
        )

    # ------------------------------------------------------------------
    # Public: fetch_articles
    # ------------------------------------------------------------------

    async def fetch_articles(self, pmids: list[str]) -> str:
        """Fetch the PubmedArticleSet XML for a batch of PMIDs in one call."""
        if not pmids:
            return ""

        params: dict[str, Any] = {
            "db": "pubmed",
            "id": ",".join(pmids),
            "rettype": "xml",
            "retmode": "xml",
            **self._base_params(),
        }

        xml_text = await self._rest_get_xml(
            self.fetch_url,
            params,
            context=RequestContext(
                source=self._source_name,
                method="fetch_articles",
                params={"pmid_count": len(pmids)},
            ),
        )
        logger.info("PubMed articles fetched pmid_count=%d", len(pmids))
        return xml_text

    # ------------------------------------------------------------------
    # Public: check_free_full_text
    # ------------------------------------------------------------------

    async def check_free_full_text(self, pmids: list[str]) -> dict[str, str | None]:
        """Map PMIDs to PMC ids via the ID converter.

        A key mapped to None was checked and has no PMC copy; a missing key
        was not checked. PMC availability is optional, so any failure yields
        an empty map instead of an error.
        """
        if not pmids:
            return {}

        params = {
            "ids": ",".join(pmids),
            "format": "json",
            **self._base_params(with_api_key=False),
        }

        try:
            data = await self._rest_get(
                self.pubmed_config.idconv_url,
                params,
                retry=RetryConfig(max_retries=OPEN_ACCESS_MAX_RETRIES),
                context=RequestContext(
                    source=self._source_name,
                    method="check_free_full_text",
                    params={"pmid_count": len(pmids)},
                ),
            )
            records = [
                IdConversionRecord.model_validate(_stringify(r))
                for r in (data or {}).get("records", [])
            ]
        except Exception as e:
            logger.warning(
                "PMC availability check failed, continuing without PMC info "
                "pmid_count=%d: %s",
                len(pmids),
                e,
            )
            return {}

        pmcid_map: dict[str, str | None] = {
            r.pmid: r.pmcid or None for r in records if r.pmid
        }
        logger.info(
            "PMC availability checked checked=%d found=%d",
            len(pmids),
            sum(1 for v in pmcid_map.values() if v),
        )
        return pmcid_map


def _string_lists(raw: Any) -> dict[str, list[str]]:
    """Keep only the list-of-strings entries of an ESearch error/warning block."""
    if not isinstance(raw, dict):
        return {}
    return {
        key: [str(v) for v in values]
        for key, values in raw.items()
        if isinstance(values, list)
    }


def _stringify(record: dict[str, Any]) -> dict[str, Any]:
    # The converter has returned numeric pmids in some API versions.
    return {k: str(v) if isinstance(v, int) else v for k, v in record.items()}
