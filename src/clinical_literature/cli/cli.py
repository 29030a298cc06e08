"""Command-line interface for the clinical literature client."""

import asyncio
import json
import logging
from pathlib import Path

import click

from clinical_literature.config import get_settings
from clinical_literature.data_sources.pubmed import PubMedClient
from clinical_literature.models.model_pubmed import SearchQuery, SearchResult
from clinical_literature.services.pubmed_search import PubMedService


async def run_search(query: SearchQuery) -> SearchResult:
    settings = get_settings()
    async with PubMedClient(settings.pubmed_config()) as client:
        return await PubMedService(client).search(query)


@click.group()
@click.version_option(package_name="clinical-literature")
def main():
    """Clinical literature: PubMed search with citation formatting."""


@main.command()
@click.argument("query")
@click.option("-n", "--max-results", type=int, help="Maximum articles to return")
@click.option("--year-from", type=int, help="Earliest publication year")
@click.option("--year-to", type=int, help="Latest publication year")
@click.option(
    "--free-full-text", is_flag=True, help="Only articles with free full text"
)
@click.option(
    "--sort",
    type=click.Choice(["relevance", "date"]),
    default="relevance",
    show_default=True,
)
@click.option("-o", "--output", type=click.Path(), help="Output file path (JSON)")
def search(
    query: str,
    max_results: int | None,
    year_from: int | None,
    year_to: int | None,
    free_full_text: bool,
    sort: str,
    output: str | None,
):
    """Search PubMed and print formatted citations."""
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    result = asyncio.run(
        run_search(
            SearchQuery(
                query=query,
                max_results=max_results,
                year_from=year_from,
                year_to=year_to,
                free_full_text_only=free_full_text,
                sort=sort,
            )
        )
    )

    click.echo(f"{result.total_count} matches for: {query}")
    if result.query_translation:
        click.echo(f"Query translation: {result.query_translation}")

    for i, article in enumerate(result.results, 1):
        oa = " [free full text]" if article.free_full_text else ""
        click.echo(f"  {i}. {article.authors}. {article.title} {article.journal}.{oa}")
        click.echo(f"     {article.url}")

    if output:
        Path(output).write_text(json.dumps(result.model_dump(), indent=2))
        click.echo(f"\nResults saved to: {output}")


if __name__ == "__main__":
    main()
