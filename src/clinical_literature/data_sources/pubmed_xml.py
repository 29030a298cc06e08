"""
Parse EFetch PubmedArticleSet XML into Article models.

Upstream XML is not uniform across article types (case reports, errata,
comments, ...), so each PubmedArticle block is parsed on its own: a block
without a PMID is dropped, and a block that raises while being read is
logged and skipped without affecting the rest of the batch.
"""

import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterator

from clinical_literature.constants import UNTITLED_ARTICLE
from clinical_literature.models.model_pubmed import (
    Article,
    Author,
    Journal,
    JournalPubDate,
)

logger = logging.getLogger(__name__)

_ARTICLE_BLOCK = re.compile(r"<PubmedArticle\b[^>]*>.*?</PubmedArticle>", re.DOTALL)
_MEDLINE_YEAR = re.compile(r"\s*(\d{4})")


def parse_articles_xml(xml_text: str) -> list[Article]:
    """Parse a PubmedArticleSet document. Never raises for bad article blocks."""
    if not xml_text or not xml_text.strip():
        return []

    articles: list[Article] = []
    for block in _iter_article_blocks(xml_text):
        try:
            article = parse_article(block)
        except Exception as e:
            logger.warning("Failed to parse PubMed article: %s", e)
            continue
        if article is not None:
            articles.append(article)

    return articles


def _iter_article_blocks(xml_text: str) -> Iterator[ET.Element]:
    """Yield each PubmedArticle element, block by block if the document is broken."""
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        logger.warning(
            "PubMed XML not well-formed (%s), parsing article blocks individually", e
        )
        yield from _parse_blocks(xml_text)
        return

    yield from root.iter("PubmedArticle")


def _parse_blocks(xml_text: str) -> Iterator[ET.Element]:
    for match in _ARTICLE_BLOCK.finditer(xml_text):
        try:
            yield ET.fromstring(match.group(0))
        except ET.ParseError as e:
            logger.warning("Skipping unparseable PubMed article block: %s", e)


def parse_article(elem: ET.Element) -> Article | None:
    """Extract one Article from a PubmedArticle element; None if it has no PMID."""
    citation = _first(elem, "MedlineCitation")
    pmid = _xml_text(citation, "PMID") or _xml_text(elem, ".//PMID")
    if not pmid:
        return None

    article = _first(citation, "Article", fallback=elem)
    journal = _parse_journal(article, elem)
    year = journal.pub_date.year

    return Article(
        pmid=pmid,
        title=_xml_text(article, "ArticleTitle") or UNTITLED_ARTICLE,
        abstract=_parse_abstract(article),
        authors=_parse_authors(article),
        journal=journal,
        doi=_article_id(elem, "doi")
        or _xml_text(article, "ELocationID[@EIdType='doi']"),
        pmcid=_article_id(elem, "pmc"),
        publication_types=_xml_texts(
            article, ".//PublicationTypeList/PublicationType"
        ),
        mesh_terms=_xml_texts(
            elem, ".//MeshHeadingList/MeshHeading/DescriptorName"
        ),
        keywords=_xml_texts(elem, ".//KeywordList/Keyword"),
        pub_date=" ".join(
            p
            for p in (year, journal.pub_date.month, journal.pub_date.day)
            if p
        ),
        year=year,
    )


# ---------------------------------------------------------------------------
# Field extraction
# ---------------------------------------------------------------------------


def _parse_abstract(article: ET.Element) -> str:
    """Join AbstractText sections, prefixing each with its Label if present."""
    abstract = article.find("Abstract")
    if abstract is None:
        abstract = article.find(".//Abstract")
    if abstract is None:
        return ""

    parts = []
    for section in abstract.findall("AbstractText"):
        label = (section.get("Label") or "").strip()
        text = _clean_text(section)
        parts.append(f"{label}: {text}" if label else text)

    return " ".join(p for p in parts if p).strip()


def _parse_authors(article: ET.Element) -> list[Author]:
    author_list = article.find(".//AuthorList")
    if author_list is None:
        return []

    authors = []
    for author in author_list.findall("Author"):
        last_name = _xml_text(author, "LastName")
        # Collective (group) authors have no LastName and are not counted.
        if not last_name:
            continue
        authors.append(
            Author(
                last_name=last_name,
                fore_name=_xml_text(author, "ForeName") or "",
                initials=_xml_text(author, "Initials") or "",
                affiliation=_xml_text(author, ".//Affiliation"),
            )
        )
    return authors


def _parse_journal(article: ET.Element, elem: ET.Element) -> Journal:
    journal = _first(article, "Journal", fallback=article)

    pub_date = journal.find(".//PubDate")
    if pub_date is None:
        pub_date = elem.find(".//PubDate")

    return Journal(
        title=_xml_text(journal, "Title") or "",
        iso_abbreviation=_xml_text(journal, "ISOAbbreviation") or "",
        volume=_xml_text(journal, ".//JournalIssue/Volume"),
        issue=_xml_text(journal, ".//JournalIssue/Issue"),
        pub_date=_parse_pub_date(pub_date),
    )


def _parse_pub_date(pub_date: ET.Element | None) -> JournalPubDate:
    if pub_date is None:
        return JournalPubDate()

    year = _xml_text(pub_date, "Year")
    if not year:
        # e.g. <MedlineDate>1998 Dec-1999 Jan</MedlineDate>
        match = _MEDLINE_YEAR.match(_xml_text(pub_date, "MedlineDate") or "")
        year = match.group(1) if match else ""

    return JournalPubDate(
        year=year,
        month=_xml_text(pub_date, "Month"),
        day=_xml_text(pub_date, "Day"),
    )


def _article_id(elem: ET.Element, id_type: str) -> str | None:
    """The article's own typed id, not ids of its cited references."""
    return _xml_text(
        elem, f"PubmedData/ArticleIdList/ArticleId[@IdType='{id_type}']"
    )


# ---------------------------------------------------------------------------
# Element helpers
# ---------------------------------------------------------------------------


def _first(
    elem: ET.Element | None, path: str, fallback: ET.Element | None = None
) -> ET.Element:
    found = elem.find(path) if elem is not None else None
    if found is not None:
        return found
    return fallback if fallback is not None else ET.Element(path)


def _clean_text(elem: ET.Element) -> str:
    """All text under elem with inline markup (<i>, <sup>, ...) dropped.

    The XML parser has already decoded &lt; &gt; &amp; &quot; &apos; and
    numeric character references.
    """
    return " ".join("".join(elem.itertext()).split())


def _xml_text(elem: ET.Element, path: str) -> str | None:
    """Safely extract cleaned text from an XML element."""
    found = elem.find(path)
    if found is None:
        return None
    return _clean_text(found) or None


def _xml_texts(elem: ET.Element, path: str) -> list[str]:
    texts = (_clean_text(found) for found in elem.findall(path))
    return [text for text in texts if text]
