"""Article detail-page extractors for reuters.com.

Reuters serves article pages in three layouts.  Each layout has one
extractor; :class:`~newsfeed_adapters.sources.reuters.enricher.DetailEnricher`
asks them in priority order and uses the first whose :meth:`can_handle`
accepts the page:

1. :class:`InvestigativeReportExtractor` — special reports under
   ``/investigates/``, described by a JSON-LD block.
2. :class:`FusionContentExtractor` — regular articles whose
   ``script#fusion-metadata`` assigns ``Fusion.globalContent={...};``.
3. :class:`GenericArticleExtractor` — anything else; reads Open Graph and
   schema.org fragments straight from the page text.
"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from bs4 import BeautifulSoup

from newsfeed_adapters.core.dates import parse_date
from newsfeed_adapters.core.exceptions import ExtractionShapeMismatch
from newsfeed_adapters.core.feed import ArticleDetail
from newsfeed_adapters.core.rendering import TemplateRenderer
from newsfeed_adapters.sources.reuters.config import (
    DESCRIPTION_TEMPLATE,
    REUTERS_INVESTIGATES_PREFIX,
)
from newsfeed_adapters.sources.reuters.normalizer import join_author_names

_SOURCE = "reuters"

_FUSION_GLOBAL_CONTENT_RE = re.compile(r"Fusion\.globalContent\s*=\s*(?=\{)")
_DATE_PUBLISHED_RE = re.compile(r'"datePublished":"((?:[^"\\]|\\.)*)"')
_PERSON_RE = re.compile(r'\{"@type":"Person","name":"((?:[^"\\]|\\.)*)"\}')

#: Boilerplate removed from special reports before serialising the body.
_INVESTIGATES_BOILERPLATE = (
    ".special-report-article-container .container, "
    "#slide-dek, #slide-end, .share-in-article-container"
)


@dataclass
class DetailPage:
    """A fetched article page.

    Attributes:
        url: Final URL after redirects.
        html: Raw page text.
        soup: Parsed, mutable document tree of ``html``.
    """

    url: str
    html: str
    soup: BeautifulSoup

    @classmethod
    def parse(cls, url: str, html: str) -> DetailPage:
        return cls(url=url, html=html, soup=BeautifulSoup(html, "html.parser"))


def _unescape_json_string(value: str) -> str:
    try:
        return json.loads(f'"{value}"')
    except ValueError:
        return value


def _as_text_list(value: Any) -> tuple[str, ...]:
    """Normalise a JSON-LD keywords/creator value to a tuple of strings."""
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(",") if part.strip())
    if isinstance(value, dict):
        name = value.get("name")
        return (str(name),) if name else ()
    if isinstance(value, list):
        out: list[str] = []
        for entry in value:
            out.extend(_as_text_list(entry))
        return tuple(out)
    return (str(value),)


class DetailExtractor(ABC):
    """One detail-page layout.

    Subclasses decide whether a page has their layout and pull the article
    fields out of it.  :meth:`extract` may mutate ``page.soup``; only one
    extractor ever runs per page.
    """

    name: str

    @abstractmethod
    def can_handle(self, page: DetailPage) -> bool:
        """Return ``True`` if *page* has this extractor's layout."""

    @abstractmethod
    def extract(self, page: DetailPage) -> ArticleDetail:
        """Return the fields found on *page*.

        Raises:
            ExtractionShapeMismatch: If an element the layout requires is missing.
        """

    def _mismatch(self, page: DetailPage, what: str) -> ExtractionShapeMismatch:
        return ExtractionShapeMismatch(
            f"reuters: {self.name} layout without {what} at {page.url}",
            url=page.url,
            source=_SOURCE,
        )


class InvestigativeReportExtractor(DetailExtractor):
    """Special reports under ``https://www.reuters.com/investigates/``."""

    name = "investigates"

    def can_handle(self, page: DetailPage) -> bool:
        return page.url.startswith(REUTERS_INVESTIGATES_PREFIX)

    def extract(self, page: DetailPage) -> ArticleDetail:
        script = page.soup.select_one('script[type="application/ld+json"]')
        if script is None:
            raise self._mismatch(page, "JSON-LD metadata")
        try:
            ld_json = json.loads(script.string or "")
        except ValueError as exc:
            raise self._mismatch(page, "valid JSON-LD metadata") from exc
        if isinstance(ld_json, list):
            ld_json = next((entry for entry in ld_json if isinstance(entry, dict)), {})

        for node in page.soup.select(_INVESTIGATES_BOILERPLATE):
            node.decompose()

        container = page.soup.select_one(".special-report-article-container")
        if container is None:
            raise self._mismatch(page, "report container")

        return ArticleDetail(
            title=ld_json.get("headline") or None,
            published_at=parse_date(ld_json.get("dateCreated")),
            author=", ".join(_as_text_list(ld_json.get("creator"))),
            categories=_as_text_list(ld_json.get("keywords")),
            description=container.decode_contents(),
        )


class FusionContentExtractor(DetailExtractor):
    """Regular articles carrying their payload in ``Fusion.globalContent``.

    Args:
        renderer: Renders the article payload into the description HTML.
    """

    name = "fusion"

    def __init__(self, renderer: TemplateRenderer) -> None:
        self._renderer = renderer

    @staticmethod
    def _metadata_text(page: DetailPage) -> str:
        script = page.soup.select_one("script#fusion-metadata")
        return (script.string or "") if script is not None else ""

    def can_handle(self, page: DetailPage) -> bool:
        return _FUSION_GLOBAL_CONTENT_RE.search(self._metadata_text(page)) is not None

    def global_content(self, page: DetailPage) -> dict[str, Any]:
        """Decode the object assigned to ``Fusion.globalContent``."""
        text = self._metadata_text(page)
        match = _FUSION_GLOBAL_CONTENT_RE.search(text)
        if match is None:
            raise self._mismatch(page, "Fusion.globalContent")
        try:
            data, _ = json.JSONDecoder().raw_decode(text, match.end())
        except ValueError as exc:
            raise self._mismatch(page, "decodable Fusion.globalContent") from exc
        if not isinstance(data, dict):
            raise self._mismatch(page, "a Fusion.globalContent object")
        return data

    def extract(self, page: DetailPage) -> ArticleDetail:
        result = self.global_content(page).get("result")
        if not isinstance(result, dict):
            raise self._mismatch(page, "Fusion.globalContent.result")

        taxonomy = result.get("taxonomy") or {}
        return ArticleDetail(
            title=result.get("title") or None,
            published_at=parse_date(result.get("display_time")),
            author=join_author_names(result.get("authors")),
            categories=tuple(taxonomy.get("keywords") or ()),
            description=self._renderer.render(DESCRIPTION_TEMPLATE, {"result": result}),
        )


class GenericArticleExtractor(DetailExtractor):
    """Last-resort layout: Open Graph title, schema.org date/authors, ``<article>`` body.

    ``datePublished``, at least one schema.org ``Person`` and an ``<article>``
    element are required; the title may be missing.
    """

    name = "generic"

    def can_handle(self, page: DetailPage) -> bool:
        return True

    def extract(self, page: DetailPage) -> ArticleDetail:
        for node in page.soup.select(".title, .article-metadata"):
            node.decompose()

        date_match = _DATE_PUBLISHED_RE.search(page.html)
        if date_match is None:
            raise self._mismatch(page, '"datePublished"')

        article = page.soup.select_one("article")
        if article is None:
            raise self._mismatch(page, "<article> element")

        og_title = page.soup.select_one('meta[property="og:title"]')
        authors = [_unescape_json_string(name) for name in _PERSON_RE.findall(page.html)]
        if not authors:
            raise self._mismatch(page, "schema.org Person")

        return ArticleDetail(
            title=(og_title.get("content") if og_title is not None else None) or None,
            published_at=parse_date(_unescape_json_string(date_match.group(1))),
            author=", ".join(authors),
            description=article.decode_contents(),
        )


def default_extractors(renderer: TemplateRenderer) -> list[DetailExtractor]:
    """Return the extractors in priority order."""
    return [
        InvestigativeReportExtractor(),
        FusionContentExtractor(renderer),
        GenericArticleExtractor(),
    ]
