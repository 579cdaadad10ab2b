"""
News aggregation pipeline.

Primary source (Gemini search, critical) and secondary source (BuzzSumo,
best effort) are fetched concurrently. The secondary list goes through:

    URL dedup -> relevance -> importance -> rank by shares -> top 15

The primary buckets are kept as returned, URL-repaired, and the trending
articles that duplicate nothing in them are appended to general news.
"""
import asyncio
import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from telco_news.dedup import dedupe_by_url, merge_unique
from telco_news.importance import is_important
from telco_news.models import AggregateResult, Article, PrimaryNews
from telco_news.relevance import is_relevant
from telco_news.url_repair import UrlRepairer

logger = logging.getLogger(__name__)

SECONDARY_FETCH_LIMIT = 50
TRENDING_DISPLAY_LIMIT = 15


def filter_trending(articles: Sequence[Article], limit: int = TRENDING_DISPLAY_LIMIT) -> List[Article]:
    """Dedup, filter and rank engagement-search articles. Pure, no I/O."""
    unique = dedupe_by_url(articles)
    relevant = [a for a in unique if is_relevant(a)]
    important = [a for a in relevant if is_important(a)]
    ranked = sorted(important, key=lambda a: a.total_shares, reverse=True)

    logger.info(
        f"Trending filter: {len(articles)} fetched, {len(unique)} unique, "
        f"{len(relevant)} relevant, {len(important)} important, keeping {min(len(ranked), limit)}"
    )
    return ranked[:limit]


def _format_count(count: float) -> str:
    return str(int(count)) if float(count).is_integer() else str(count)


def to_feed_article(article: Article) -> Article:
    """Give an engagement-search article the summary/takeaways shape of the feed."""
    shares = _format_count(article.total_shares)
    return replace(
        article,
        excerpt=article.excerpt or f"Trending article from {article.domain} with {shares} social shares.",
        takeaways=[
            f"High engagement: {shares} total shares across social platforms",
            f"Source: {article.domain}",
        ],
        source_title=article.domain,
    )


def merge_trending(news: PrimaryNews, trending: Sequence[Article]) -> AggregateResult:
    """Append trending articles that duplicate nothing in any primary bucket to general news."""
    candidates = [to_feed_article(a) for a in trending]
    unique = merge_unique(news.all_articles(), candidates)
    logger.info(
        f"Merged {len(unique)} unique trending articles "
        f"({len(candidates) - len(unique)} duplicates removed)"
    )
    return AggregateResult(
        international_news=list(news.international_news),
        general_news=[*news.general_news, *unique],
        company_news=list(news.company_news),
        trending_articles=list(trending),
    )


class NewsPipeline:
    def __init__(self, primary, secondary, url_repairer: Optional[UrlRepairer] = None):
        """
        Args:
            primary: source whose ``fetch(start, end)`` returns PrimaryNews
            secondary: source whose ``fetch(start, end, limit=...)`` returns a list of Articles
            url_repairer: optional URL repair step for the primary articles
        """
        self.primary = primary
        self.secondary = secondary
        self.url_repairer = url_repairer

    async def fetch_trending(self, start_date: str, end_date: str) -> List[Article]:
        raw = await self.secondary.fetch(start_date, end_date, limit=SECONDARY_FETCH_LIMIT)
        return filter_trending(raw)

    async def fetch_news(self, start_date: str, end_date: str) -> AggregateResult:
        logger.info(f"Fetching news for {start_date} to {end_date}")

        # Both fetches settle; neither failure cancels the other
        primary_result, trending_result = await asyncio.gather(
            self.primary.fetch(start_date, end_date),
            self.fetch_trending(start_date, end_date),
            return_exceptions=True,
        )

        if isinstance(primary_result, BaseException):
            logger.error(f"Primary source failed: {primary_result}")
            raise primary_result

        if isinstance(trending_result, BaseException):
            logger.warning(f"Secondary source failed (non-critical): {trending_result}")
            trending: List[Article] = []
        else:
            trending = trending_result

        if self.url_repairer is not None:
            await self.url_repairer.repair(primary_result, trending)

        result = merge_trending(primary_result, trending)
        logger.info(
            f"News fetch complete: {len(result.international_news)} international, "
            f"{len(result.general_news)} general, "
            f"{sum(len(s.articles) for s in result.company_news)} company, "
            f"{len(result.trending_articles)} trending"
        )
        return result
