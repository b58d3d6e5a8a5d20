"""Tests for the Reuters detail-page extractors.

Covers each of the three layouts against recorded pages, extractor
priority (can_handle), and the malformed-page cases that raise
ExtractionShapeMismatch.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from newsfeed_adapters.core.exceptions import ExtractionShapeMismatch
from newsfeed_adapters.sources.reuters.extractors import (
    DetailPage,
    FusionContentExtractor,
    GenericArticleExtractor,
    InvestigativeReportExtractor,
    default_extractors,
)

_ARTICLE_URL = "https://www.reuters.com/world/us/senate-passes-stopgap-funding-bill-2024-03-01/"
_REPORT_URL = "https://www.reuters.com/investigates/special-report/shipping-flags/"


def _first_handler(page: DetailPage, renderer) -> str:
    return next(e.name for e in default_extractors(renderer) if e.can_handle(page))


class TestExtractorSelection:
    def test_investigates_url_wins(self, reuters_fixture, renderer) -> None:
        page = DetailPage.parse(_REPORT_URL, reuters_fixture("investigates_report.html"))

        assert _first_handler(page, renderer) == "investigates"

    def test_fusion_page(self, reuters_fixture, renderer) -> None:
        page = DetailPage.parse(_ARTICLE_URL, reuters_fixture("fusion_article.html"))

        assert _first_handler(page, renderer) == "fusion"

    def test_anything_else_is_generic(self, reuters_fixture, renderer) -> None:
        page = DetailPage.parse(_ARTICLE_URL, reuters_fixture("generic_article.html"))

        assert _first_handler(page, renderer) == "generic"


class TestInvestigativeReportExtractor:
    def test_extracts_report(self, reuters_fixture) -> None:
        page = DetailPage.parse(_REPORT_URL, reuters_fixture("investigates_report.html"))

        detail = InvestigativeReportExtractor().extract(page)

        assert detail.title == "The hidden cost of cheap shipping"
        assert detail.published_at == datetime(2024, 2, 20, 12, tzinfo=timezone.utc)
        assert detail.author == "Jane Roe, John Doe"
        assert detail.categories == ("SHIPPING", "TRADE")
        assert "Part one of a Reuters investigation." in detail.description
        assert "Ships sailed under flags of convenience." in detail.description

    def test_boilerplate_removed(self, reuters_fixture) -> None:
        page = DetailPage.parse(_REPORT_URL, reuters_fixture("investigates_report.html"))

        description = InvestigativeReportExtractor().extract(page).description

        assert "Share this report" not in description
        assert "Slide deck" not in description
        assert "share-in-article-container" not in description

    def test_missing_json_ld_raises(self) -> None:
        html = '<div class="special-report-article-container"><p>x</p></div>'
        page = DetailPage.parse(_REPORT_URL, html)

        with pytest.raises(ExtractionShapeMismatch):
            InvestigativeReportExtractor().extract(page)

    def test_missing_container_raises(self) -> None:
        html = '<script type="application/ld+json">{"headline": "x"}</script>'
        page = DetailPage.parse(_REPORT_URL, html)

        with pytest.raises(ExtractionShapeMismatch) as exc_info:
            InvestigativeReportExtractor().extract(page)

        assert exc_info.value.url == _REPORT_URL


class TestFusionContentExtractor:
    def test_extracts_article(self, reuters_fixture, renderer) -> None:
        page = DetailPage.parse(_ARTICLE_URL, reuters_fixture("fusion_article.html"))

        detail = FusionContentExtractor(renderer).extract(page)

        assert detail.title == "Senate passes stopgap funding bill"
        assert detail.published_at == datetime(2024, 3, 1, 21, 14, 3, 511000, tzinfo=timezone.utc)
        assert detail.author == "David Morgan, Moira Warburton"
        assert detail.categories == ("CONGRESS", "BUDGET")

    def test_description_is_rendered(self, reuters_fixture, renderer) -> None:
        page = DetailPage.parse(_ARTICLE_URL, reuters_fixture("fusion_article.html"))

        description = FusionContentExtractor(renderer).extract(page).description

        assert 'src="https://cloudfront.example/senate.jpg"' in description
        assert "<figcaption>The U.S. Capitol</figcaption>" in description
        assert "The Senate voted <b>77-13</b>." in description
        assert "<h3>What comes next</h3>" in description
        assert "<li>House vote</li>" in description

    def test_brace_inside_string_does_not_truncate_payload(self, reuters_fixture, renderer) -> None:
        page = DetailPage.parse(_ARTICLE_URL, reuters_fixture("fusion_article.html"))

        content = FusionContentExtractor(renderer).global_content(page)

        assert content["result"]["content_elements"][-1]["content"].endswith("president.}")

    def test_undecodable_payload_raises(self, renderer) -> None:
        html = '<script id="fusion-metadata">Fusion.globalContent={"result": ;</script>'
        page = DetailPage.parse(_ARTICLE_URL, html)

        with pytest.raises(ExtractionShapeMismatch):
            FusionContentExtractor(renderer).extract(page)

    def test_missing_result_raises(self, renderer) -> None:
        html = '<script id="fusion-metadata">Fusion.globalContent={"other":1};</script>'
        page = DetailPage.parse(_ARTICLE_URL, html)

        with pytest.raises(ExtractionShapeMismatch):
            FusionContentExtractor(renderer).extract(page)

    def test_assignment_outside_metadata_script_is_ignored(self, renderer) -> None:
        html = '<script>Fusion.globalContent={"result":{}};</script>'
        page = DetailPage.parse(_ARTICLE_URL, html)

        assert FusionContentExtractor(renderer).can_handle(page) is False


class TestGenericArticleExtractor:
    def test_extracts_article(self, reuters_fixture) -> None:
        page = DetailPage.parse(_ARTICLE_URL, reuters_fixture("generic_article.html"))

        detail = GenericArticleExtractor().extract(page)

        assert detail.title == "Markets rally on rate cut hopes"
        assert detail.published_at == datetime(2024, 3, 2, 8, 30, tzinfo=timezone.utc)
        assert detail.author == "Anna Smith, Li Wei"
        assert detail.categories is None

    def test_title_and_metadata_removed_from_body(self, reuters_fixture) -> None:
        page = DetailPage.parse(_ARTICLE_URL, reuters_fixture("generic_article.html"))

        description = GenericArticleExtractor().extract(page).description

        assert "<p>Stocks rose on Saturday.</p>" in description
        assert "<h1" not in description
        assert "By Anna Smith" not in description

    def test_missing_title_gives_none(self) -> None:
        html = (
            '<script>{"datePublished":"2024-03-02T08:30:00Z",'
            '"author":[{"@type":"Person","name":"Anna Smith"}]}</script>'
            "<article><p>x</p></article>"
        )
        page = DetailPage.parse(_ARTICLE_URL, html)

        detail = GenericArticleExtractor().extract(page)

        assert detail.title is None
        assert detail.author == "Anna Smith"

    def test_no_persons_raises(self) -> None:
        html = '<script>{"datePublished":"2024-03-02T08:30:00Z"}</script><article><p>x</p></article>'
        page = DetailPage.parse(_ARTICLE_URL, html)

        with pytest.raises(ExtractionShapeMismatch):
            GenericArticleExtractor().extract(page)

    def test_missing_date_raises(self) -> None:
        page = DetailPage.parse(_ARTICLE_URL, "<article><p>x</p></article>")

        with pytest.raises(ExtractionShapeMismatch):
            GenericArticleExtractor().extract(page)

    def test_missing_article_raises(self) -> None:
        page = DetailPage.parse(_ARTICLE_URL, '{"datePublished":"2024-03-02T08:30:00Z"}')

        with pytest.raises(ExtractionShapeMismatch):
            GenericArticleExtractor().extract(page)
