import json
import logging
import time
from datetime import datetime, timezone
from typing import List, Optional

import httpx
from pydantic import BaseModel, ValidationError

from telco_news.config import SourceConfig
from telco_news.errors import SourceFetchError
from telco_news.http_client import HTTPClient
from telco_news.keywords import TELCO_SEARCH_QUERY
from telco_news.models import Article, Engagement
from telco_news.source_base import BaseSource
from telco_news.text import extract_domain

logger = logging.getLogger(__name__)

SOURCE_NAME = "buzzsumo"
DEFAULT_COUNTRY = "Philippines"
DEFAULT_LIMIT = 10


class BuzzSumoItem(BaseModel):
    title: Optional[str] = None
    url: Optional[str] = None
    published_date: Optional[float] = None  # Unix seconds
    author_name: Optional[str] = None
    domain_name: Optional[str] = None
    total_shares: Optional[float] = None
    facebook_shares: Optional[float] = None
    pinterest_shares: Optional[float] = None
    twitter_shares: Optional[float] = None
    num_linking_domains: Optional[float] = None
    evergreen_score: Optional[float] = None
    thumbnail: Optional[str] = None
    description: Optional[str] = None


class BuzzSumoResponse(BaseModel):
    results: List[BuzzSumoItem]
    total_results: Optional[int] = None


def to_unix_timestamp(date_string: str) -> int:
    """ISO date or datetime to Unix seconds. Naive values are taken as UTC."""
    parsed = datetime.fromisoformat(date_string)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


def format_display_date(unix_timestamp: float) -> str:
    dt = datetime.fromtimestamp(unix_timestamp, tz=timezone.utc)
    return f"{dt:%B} {dt.day}, {dt.year}"


def item_to_article(item: BuzzSumoItem) -> Article:
    """
    Convert one search hit. Missing fields get the same lenient defaults the
    feed has always shown: "Untitled", zero shares, domain from the URL.
    """
    url = item.url or ""
    return Article(
        title=item.title or "Untitled",
        url=url,
        published_date=format_display_date(item.published_date or time.time()),
        domain=(item.domain_name or extract_domain(url)).lower(),
        excerpt=item.description or None,
        engagement=Engagement(
            total_shares=item.total_shares or 0,
            facebook_shares=item.facebook_shares or 0,
            pinterest_shares=item.pinterest_shares or 0,
            twitter_shares=item.twitter_shares or 0,
            total_links=item.num_linking_domains or 0,
            evergreen_score=item.evergreen_score or None,
        ),
        thumbnail_url=item.thumbnail or None,
        source_title=item.domain_name or extract_domain(url),
        author=item.author_name or None,
    )


class BuzzSumoSource(BaseSource):
    """Secondary source: BuzzSumo article search ranked by social engagement."""

    API_KEY_ENV = "BUZZSUMO_API_KEY"

    def __init__(
        self,
        config: SourceConfig,
        http_client: HTTPClient,
        query: str = TELCO_SEARCH_QUERY,
        country: Optional[str] = DEFAULT_COUNTRY,
    ):
        super().__init__(config)
        self.http_client = http_client
        self.query = query
        self.country = country

    def build_params(self, start_date: str, end_date: str, limit: int) -> dict:
        params = {
            "q": self.query,
            "begin_date": str(to_unix_timestamp(start_date)),
            "end_date": str(to_unix_timestamp(end_date)),
            "num_results": str(limit),
            "page": "0",
            "api_key": self.config.api_key,
        }
        if self.country:
            params["country"] = self.country
        return params

    async def fetch(self, start_date: str, end_date: str, limit: int = DEFAULT_LIMIT) -> List[Article]:
        self.require_api_key()
        try:
            params = self.build_params(start_date, end_date, limit)
        except ValueError as e:
            raise SourceFetchError(SOURCE_NAME, f"Invalid date range {start_date}..{end_date}: {e}") from e

        logger.info(f"Fetching BuzzSumo news (limit={limit})")
        try:
            response = await self.http_client.get_json_response(
                self.config.base_url, params=params, timeout=self.config.timeout
            )
        except httpx.TimeoutException as e:
            raise SourceFetchError(SOURCE_NAME, f"BuzzSumo request timed out after {self.config.timeout}s") from e
        except httpx.HTTPError as e:
            raise SourceFetchError(SOURCE_NAME, f"BuzzSumo request failed: {e}") from e

        if not response.is_success:
            raise SourceFetchError(
                SOURCE_NAME,
                f"BuzzSumo API request failed with status {response.status_code}: {response.text}",
            )

        try:
            payload = BuzzSumoResponse.model_validate(response.json())
        except (json.JSONDecodeError, ValidationError) as e:
            raise SourceFetchError(SOURCE_NAME, f"Malformed BuzzSumo response: {e}") from e

        articles = [item_to_article(item) for item in payload.results]
        logger.info(f"BuzzSumo returned {len(articles)} articles")
        return articles
