"""Tests for the Reuters mobile wire fallback.

Covers:
- fallback URL construction with and without topic
- normalize_wire_item(): story_with_image selection, link/id/date/author
  mapping, items without a story template -> None
- FallbackFetcher.fetch() with mocked wire API (respx): feed metadata,
  channel-tag categories, limit truncation, empty wireitems ->
  EmptyFallbackResult, HTTP error -> FallbackFetchError, wrongly typed
  fields ignored
- wire items missing their article URL or usn are skipped
"""

from __future__ import annotations

from datetime import datetime, timezone

import httpx
import pytest
import respx

from newsfeed_adapters.core.exceptions import EmptyFallbackResult, FallbackFetchError
from newsfeed_adapters.sources.reuters.config import REUTERS_FEED_IMAGE
from newsfeed_adapters.sources.reuters.fallback import (
    FallbackFetcher,
    build_fallback_url,
    normalize_wire_item,
)
from newsfeed_adapters.sources.reuters.models import ListingRequest

_WORLD_US_URL = "https://www.reuters.com/arc/outboundfeeds/v4/mobile/section/world/us/"


class TestBuildFallbackUrl:
    def test_with_topic(self) -> None:
        assert build_fallback_url("world", "us") == f"{_WORLD_US_URL}?outputType=json"

    def test_without_topic(self) -> None:
        assert build_fallback_url("business") == (
            "https://www.reuters.com/arc/outboundfeeds/v4/mobile/section/business/?outputType=json"
        )


class TestNormalizeWireItem:
    def test_story_fields(self, reuters_fixture) -> None:
        wire_item = reuters_fixture("wire_listing.json")["wireitems"][0]

        item = normalize_wire_item(wire_item, ["World", "US"])

        assert item is not None
        assert item.id == "WIRE0001"
        assert item.title == "Senate passes stopgap funding bill"
        assert item.link == (
            "https://www.reuters.com/world/us/senate-passes-stopgap-funding-bill-2024-03-01/"
        )
        assert item.description == "The U.S. Senate on Friday passed a stopgap spending bill."
        assert item.author == "David Morgan"
        assert item.categories == ["World", "US"]
        expected = datetime(2024, 3, 1, 22, 40, 10, tzinfo=timezone.utc)
        assert item.published_at == expected
        assert item.updated_at == expected

    def test_missing_authors_gives_none(self, reuters_fixture) -> None:
        wire_item = reuters_fixture("wire_listing.json")["wireitems"][2]

        item = normalize_wire_item(wire_item, [])

        assert item is not None
        assert item.author is None

    def test_item_without_story_template_is_skipped(self, reuters_fixture) -> None:
        wire_item = reuters_fixture("wire_listing.json")["wireitems"][1]

        assert normalize_wire_item(wire_item, []) is None

    def test_item_without_templates_is_skipped(self) -> None:
        assert normalize_wire_item({"wireitem_type": "ad"}, []) is None

    def test_categories_are_copied(self, reuters_fixture) -> None:
        categories = ["World"]
        item = normalize_wire_item(reuters_fixture("wire_listing.json")["wireitems"][0], categories)

        item.categories.append("extra")

        assert categories == ["World"]


@pytest.mark.asyncio
class TestFallbackFetcher:
    async def test_builds_feed(self, reuters_fixture, http_client) -> None:
        with respx.mock:
            route = respx.get(_WORLD_US_URL).mock(
                return_value=httpx.Response(200, json=reuters_fixture("wire_listing.json"))
            )
            feed = await FallbackFetcher(http_client).fetch(ListingRequest.create("world", "us"))

        assert route.calls.last.request.url.params["outputType"] == "json"
        assert feed.title == "U.S. | Reuters"
        assert feed.description == "Latest U.S. news from Reuters"
        assert feed.image == REUTERS_FEED_IMAGE
        assert feed.link == "https://www.reuters.com/world/us/"
        assert feed.categories == ["World", "US"]
        assert [item.id for item in feed.items] == ["WIRE0001", "WIRE0002"]

    async def test_truncates_to_limit(self, reuters_fixture, http_client) -> None:
        with respx.mock:
            respx.get(_WORLD_US_URL).mock(
                return_value=httpx.Response(200, json=reuters_fixture("wire_listing.json"))
            )
            feed = await FallbackFetcher(http_client).fetch(
                ListingRequest.create("world", "us", limit=1)
            )

        assert [item.id for item in feed.items] == ["WIRE0001"]

    async def test_title_from_wire_name_without_analytics(self, reuters_fixture, http_client) -> None:
        body = reuters_fixture("wire_listing.json")
        del body["analytics"]
        del body["canonical_action"]
        with respx.mock:
            respx.get(_WORLD_US_URL).mock(return_value=httpx.Response(200, json=body))
            feed = await FallbackFetcher(http_client).fetch(ListingRequest.create("world", "us"))

        assert feed.title == "U.S. | Reuters"
        assert feed.description is None
        assert feed.link == "https://www.reuters.com/world/us/"
        assert feed.categories == []

    async def test_no_story_templates_gives_empty_items(self, http_client) -> None:
        body = {"wire_name": "U.S.", "wireitems": [{"templates": [{"template": "divider"}]}]}
        with respx.mock:
            respx.get(_WORLD_US_URL).mock(return_value=httpx.Response(200, json=body))
            feed = await FallbackFetcher(http_client).fetch(ListingRequest.create("world", "us"))

        assert feed.items == []

    async def test_empty_wireitems_raises(self, http_client) -> None:
        with respx.mock:
            respx.get(_WORLD_US_URL).mock(
                return_value=httpx.Response(200, json={"wire_name": "U.S.", "wireitems": []})
            )
            with pytest.raises(EmptyFallbackResult):
                await FallbackFetcher(http_client).fetch(ListingRequest.create("world", "us"))

    async def test_http_error_raises(self, http_client) -> None:
        with respx.mock:
            respx.get(_WORLD_US_URL).mock(return_value=httpx.Response(500))
            with pytest.raises(FallbackFetchError) as exc_info:
                await FallbackFetcher(http_client).fetch(ListingRequest.create("world", "us"))

        assert not isinstance(exc_info.value, EmptyFallbackResult)

    async def test_non_object_body_raises(self, http_client) -> None:
        with respx.mock:
            respx.get(_WORLD_US_URL).mock(return_value=httpx.Response(200, json=[1, 2]))
            with pytest.raises(FallbackFetchError):
                await FallbackFetcher(http_client).fetch(ListingRequest.create("world", "us"))

    @pytest.mark.parametrize(
        "body",
        [
            {"wire_name": "U.S.", "wireitems": [{"templates": []}], "analytics": "oops"},
            {"wire_name": "U.S.", "wireitems": [{"templates": "story_with_image"}]},
            {
                "wire_name": "U.S.",
                "wireitems": [{"templates": [{"template": "story_with_image", "story": "x"}]}],
            },
            {
                "wire_name": "U.S.",
                "wireitems": [{"templates": []}],
                "canonical_action": "https://x",
            },
        ],
        ids=["analytics-string", "templates-string", "story-string", "canonical-string"],
    )
    async def test_wrongly_typed_fields_are_ignored(self, body, http_client) -> None:
        with respx.mock:
            respx.get(_WORLD_US_URL).mock(return_value=httpx.Response(200, json=body))
            feed = await FallbackFetcher(http_client).fetch(ListingRequest.create("world", "us"))

        assert feed.items == []
        assert feed.title == "U.S. | Reuters"
        assert feed.link == "https://www.reuters.com/world/us/"
        assert feed.categories == []


class TestNormalizeWireItemRejects:
    def _wire_item(self, **story_overrides) -> dict:
        story = {"usn": "WIRE9", "hed": "Headline", "updated_at": "2024-03-01T10:00:00Z"}
        story.update(story_overrides)
        return {
            "templates": [
                {
                    "template": "story_with_image",
                    "template_action": {"url": "/world/us/headline/"},
                    "story": story,
                }
            ]
        }

    def test_missing_usn_is_skipped(self) -> None:
        wire_item = self._wire_item()
        del wire_item["templates"][0]["story"]["usn"]

        assert normalize_wire_item(wire_item, []) is None

    def test_missing_action_url_is_skipped(self) -> None:
        wire_item = self._wire_item()
        del wire_item["templates"][0]["template_action"]

        assert normalize_wire_item(wire_item, []) is None

    def test_non_list_authors_gives_none(self) -> None:
        item = normalize_wire_item(self._wire_item(authors="David Morgan"), [])

        assert item is not None
        assert item.author is None
        assert item.link == "https://www.reuters.com/world/us/headline/"

    def test_non_string_headline_gives_empty_title(self) -> None:
        item = normalize_wire_item(self._wire_item(hed={"text": "x"}), [])

        assert item is not None
        assert item.title == ""
