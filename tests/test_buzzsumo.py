import httpx
import pytest

from news_sources.buzzsumo import (
    BuzzSumoItem,
    BuzzSumoSource,
    format_display_date,
    item_to_article,
    to_unix_timestamp,
)
from telco_news.config import SourceConfig
from telco_news.errors import ConfigurationError, SourceFetchError
from telco_news.http_client import HTTPClient
from telco_news.keywords import TELCO_SEARCH_QUERY

BASE_URL = "https://api.buzzsumo.com/search/articles.json"

# 2025-10-22T00:00:00Z
OCT_22 = 1761091200

SAMPLE_ITEM = {
    "title": "PLDT posts record profit",
    "url": "https://business.inquirer.net/pldt-record-profit",
    "published_date": OCT_22,
    "author_name": "Jane Reyes",
    "domain_name": "business.inquirer.net",
    "total_shares": 1200,
    "facebook_shares": 1000,
    "pinterest_shares": 0,
    "twitter_shares": 200,
    "num_linking_domains": 12,
    "evergreen_score": 0.4,
    "thumbnail": "https://business.inquirer.net/thumb.jpg",
    "description": "PLDT net income rose 8 percent.",
}


def _make_source(handler, api_key="test-key"):
    client = HTTPClient(transport=httpx.MockTransport(handler))
    config = SourceConfig(api_key=api_key, base_url=BASE_URL, timeout=5.0)
    return BuzzSumoSource(config, client), client


class TestHelpers:
    def test_to_unix_timestamp_date(self):
        assert to_unix_timestamp("1970-01-02") == 86400
        assert to_unix_timestamp("2025-10-01") == 1759276800

    def test_to_unix_timestamp_keeps_offset(self):
        assert to_unix_timestamp("1970-01-01T08:00:00+08:00") == 0

    def test_to_unix_timestamp_invalid(self):
        with pytest.raises(ValueError):
            to_unix_timestamp("October 1")

    def test_format_display_date(self):
        assert format_display_date(OCT_22) == "October 22, 2025"
        assert format_display_date(OCT_22 - 21 * 86400) == "October 1, 2025"


class TestItemToArticle:
    def test_full_item(self):
        article = item_to_article(BuzzSumoItem.model_validate(SAMPLE_ITEM))
        assert article.title == "PLDT posts record profit"
        assert article.published_date == "October 22, 2025"
        assert article.domain == "business.inquirer.net"
        assert article.excerpt == "PLDT net income rose 8 percent."
        assert article.thumbnail_url == "https://business.inquirer.net/thumb.jpg"
        assert article.author == "Jane Reyes"
        assert article.engagement.total_shares == 1200
        assert article.engagement.total_links == 12
        assert article.engagement.evergreen_score == 0.4
        assert article.total_shares == 1200

    def test_empty_item_defaults(self):
        article = item_to_article(BuzzSumoItem())
        assert article.title == "Untitled"
        assert article.url == ""
        assert article.domain == ""
        assert article.excerpt is None
        assert article.total_shares == 0
        assert article.engagement.evergreen_score is None
        assert article.published_date  # falls back to now

    def test_domain_from_url(self):
        article = item_to_article(BuzzSumoItem(url="https://WWW.Rappler.com/business/globe"))
        assert article.domain == "www.rappler.com"
        assert article.source_title == "www.rappler.com"

    def test_domain_name_lower_cased(self):
        article = item_to_article(BuzzSumoItem(url="https://x.com/a", domain_name="PhilStar.com"))
        assert article.domain == "philstar.com"
        assert article.source_title == "PhilStar.com"


class TestBuzzSumoSource:
    @pytest.mark.asyncio
    async def test_request_params(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"results": [], "total_results": 0})

        source, client = _make_source(handler)
        articles = await source.fetch("2025-10-01", "2025-10-22", limit=50)
        await client.close()

        assert articles == []
        params = seen[0].url.params
        assert str(seen[0].url).startswith(BASE_URL)
        assert params["q"] == TELCO_SEARCH_QUERY
        assert params["begin_date"] == "1759276800"
        assert params["end_date"] == str(OCT_22)
        assert params["num_results"] == "50"
        assert params["page"] == "0"
        assert params["api_key"] == "test-key"
        assert params["country"] == "Philippines"

    @pytest.mark.asyncio
    async def test_country_optional(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"results": []})

        client = HTTPClient(transport=httpx.MockTransport(handler))
        source = BuzzSumoSource(SourceConfig("k", BASE_URL, 5.0), client, country=None)
        await source.fetch("2025-10-01", "2025-10-22")
        await client.close()

        assert "country" not in seen[0].url.params
        assert seen[0].url.params["num_results"] == "10"

    @pytest.mark.asyncio
    async def test_converts_results(self):
        def handler(request):
            return httpx.Response(200, json={"results": [SAMPLE_ITEM, {"url": "https://www.rappler.com/x"}]})

        source, client = _make_source(handler)
        articles = await source.fetch("2025-10-01", "2025-10-22")
        await client.close()

        assert [a.title for a in articles] == ["PLDT posts record profit", "Untitled"]
        assert articles[1].domain == "www.rappler.com"
        assert articles[1].total_shares == 0

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={"results": []})

        source, client = _make_source(handler, api_key="")
        with pytest.raises(ConfigurationError, match="BUZZSUMO_API_KEY"):
            await source.fetch("2025-10-01", "2025-10-22")
        await client.close()
        assert calls == []

    @pytest.mark.asyncio
    async def test_error_status(self):
        source, client = _make_source(lambda request: httpx.Response(500, text="upstream exploded"))
        with pytest.raises(SourceFetchError, match="status 500: upstream exploded") as exc_info:
            await source.fetch("2025-10-01", "2025-10-22")
        await client.close()
        assert exc_info.value.source == "buzzsumo"

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        source, client = _make_source(lambda request: httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(SourceFetchError, match="Malformed"):
            await source.fetch("2025-10-01", "2025-10-22")
        await client.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {"total_results": 3},
        {"results": "nope"},
        {"results": [{"total_shares": "lots"}]},
    ])
    async def test_wrong_shape(self, body):
        source, client = _make_source(lambda request: httpx.Response(200, json=body))
        with pytest.raises(SourceFetchError, match="Malformed"):
            await source.fetch("2025-10-01", "2025-10-22")
        await client.close()

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        source, client = _make_source(handler)
        with pytest.raises(SourceFetchError, match="timed out"):
            await source.fetch("2025-10-01", "2025-10-22")
        await client.close()

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request):
            raise httpx.RemoteProtocolError("server hung up", request=request)

        source, client = _make_source(handler)
        with pytest.raises(SourceFetchError, match="request failed"):
            await source.fetch("2025-10-01", "2025-10-22")
        await client.close()

    @pytest.mark.asyncio
    async def test_invalid_date(self):
        source, client = _make_source(lambda request: httpx.Response(200, json={"results": []}))
        with pytest.raises(SourceFetchError, match="Invalid date range"):
            await source.fetch("last week", "2025-10-22")
        await client.close()
