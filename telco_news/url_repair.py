import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence
from urllib.parse import urljoin

import httpx

from telco_news.config import DEFAULT_URL_RESOLVE_TIMEOUT, DEFAULT_URL_VALIDATE_TIMEOUT
from telco_news.http_client import HTTPClient
from telco_news.models import Article, GroundingChunk, PrimaryNews
from telco_news.similarity import title_similarity
from telco_news.text import extract_domain

logger = logging.getLogger(__name__)

GROUNDING_URL_MARKERS = ("vertexaisearch", "grounding-api-redirect", "googleusercontent.com/grounding")
GROUNDING_MATCH_THRESHOLD = 0.6
TRENDING_MATCH_THRESHOLD = 0.5
MAX_REDIRECTS = 5


def _set_url(article: Article, url: str):
    article.url = url
    article.domain = extract_domain(url)


def is_grounding_redirect(url: str) -> bool:
    return any(marker in url for marker in GROUNDING_URL_MARKERS)


def find_grounding_match(title: str, chunks: Sequence[GroundingChunk]) -> Optional[GroundingChunk]:
    """First grounding chunk with a real URL and a similar enough title."""
    for chunk in chunks:
        if is_grounding_redirect(chunk.uri):
            continue
        if title_similarity(title, chunk.title) >= GROUNDING_MATCH_THRESHOLD:
            return chunk
    return None


def find_trending_match(title: str, trending: Sequence[Article]) -> Optional[str]:
    """URL of the most similar trending article, if at least 50% similar."""
    best_url = None
    best_similarity = 0.0
    for article in trending:
        similarity = title_similarity(title, article.title)
        if similarity > best_similarity and similarity >= TRENDING_MATCH_THRESHOLD:
            best_similarity = similarity
            best_url = article.url
    if best_url:
        logger.debug(f"Trending match ({best_similarity:.0%} similar): {best_url}")
    return best_url


@dataclass
class ResolvedUrl:
    url: str
    valid: bool
    status: Optional[int] = None
    reason: Optional[str] = None


@dataclass
class RepairStats:
    total: int = 0
    validated: int = 0
    fixed: int = 0
    failed: int = 0


class UrlRepairer:
    """
    Replaces grounding redirect URLs with working article URLs and flags the
    articles whose URL could not be confirmed live. Articles are never removed.
    """

    def __init__(
        self,
        http_client: HTTPClient,
        resolve_timeout: float = DEFAULT_URL_RESOLVE_TIMEOUT,
        validate_timeout: float = DEFAULT_URL_VALIDATE_TIMEOUT,
    ):
        self.http_client = http_client
        self.resolve_timeout = resolve_timeout
        self.validate_timeout = validate_timeout

    async def resolve(self, url: str) -> ResolvedUrl:
        """Follow redirects by hand with HEAD requests and report where they end."""
        current_url = url
        redirects = 0
        try:
            while redirects < MAX_REDIRECTS:
                try:
                    response = await self.http_client.head(current_url, timeout=self.resolve_timeout)
                except httpx.TimeoutException:
                    raise
                except httpx.HTTPError:
                    # Some servers refuse HEAD outright; retry the first hop as GET
                    if redirects == 0:
                        fallback = await self._try_get(current_url)
                        if fallback:
                            return fallback
                    raise

                if response.is_redirect and response.headers.get("location"):
                    current_url = urljoin(current_url, response.headers["location"])
                    redirects += 1
                    logger.debug(f"Redirect {redirects}: {current_url}")
                    continue

                if response.is_success:
                    return ResolvedUrl(url=current_url, valid=True)
                # News sites often block bot HEAD requests on a real page
                if response.status_code == 403 and redirects > 0:
                    return ResolvedUrl(url=current_url, valid=True, status=403)
                return ResolvedUrl(url=current_url, valid=False, status=response.status_code)
        except httpx.HTTPError as e:
            return ResolvedUrl(url=url, valid=False, reason=str(e) or e.__class__.__name__)

        return ResolvedUrl(url=current_url, valid=False, reason="Too many redirects")

    async def _try_get(self, url: str) -> Optional[ResolvedUrl]:
        try:
            response = await self.http_client.get_page(url, timeout=self.resolve_timeout)
        except httpx.HTTPError:
            return None
        if response.is_success:
            return ResolvedUrl(url=str(response.url), valid=True)
        return None

    async def is_live(self, url: str) -> bool:
        """2xx or 403 counts as live; 403 is what bot-blocking news sites send."""
        try:
            response = await self.http_client.head(url, timeout=self.validate_timeout, follow_redirects=True)
        except httpx.HTTPError as e:
            logger.debug(f"Liveness check failed for {url}: {e}")
            return False
        return response.is_success or response.status_code == 403

    async def _repair_redirect(self, article: Article, chunks: Sequence[GroundingChunk], trending: Sequence[Article]) -> Optional[str]:
        resolved = await self.resolve(article.url)
        if resolved.valid and not is_grounding_redirect(resolved.url):
            logger.info(f"   ✅ Resolved to: {resolved.url}")
            return resolved.url
        logger.info(f"   ❌ Redirect resolution failed: {resolved.reason or f'Status {resolved.status}'}")

        chunk = find_grounding_match(article.title, chunks)
        if chunk:
            logger.info(f"   ✅ Grounding chunk match: {chunk.uri}")
            article.source_title = chunk.title
            return chunk.uri

        return find_trending_match(article.title, trending)

    async def repair_article(self, article: Article, chunks: Sequence[GroundingChunk], trending: Sequence[Article]) -> bool:
        """
        Repair one article in place.

        Returns True if the final URL was repaired (not just validated).
        Sets url_broken when no live URL could be found.
        """
        current_url = article.url
        fixed = False

        if is_grounding_redirect(current_url):
            repaired = await self._repair_redirect(article, chunks, trending)
            if repaired:
                current_url = repaired
                fixed = True

        if is_grounding_redirect(current_url):
            article.url_broken = True
            return False

        if await self.is_live(current_url):
            _set_url(article, current_url)
            return fixed

        if not fixed:
            trending_url = find_trending_match(article.title, trending)
            if trending_url and await self.is_live(trending_url):
                logger.info(f"   ✅ Trending fallback succeeded: {trending_url}")
                _set_url(article, trending_url)
                return True

        article.url_broken = True
        return False

    async def repair(self, news: PrimaryNews, trending: Sequence[Article]) -> RepairStats:
        articles: List[Article] = news.all_articles()
        stats = RepairStats(total=len(articles))
        logger.info(f"🔗 Validating {stats.total} article URLs...")

        for article in articles:
            fixed = await self.repair_article(article, news.grounding_chunks, trending)
            if article.url_broken:
                stats.failed += 1
                logger.warning(f"   ⚠️  Broken URL for: \"{article.title[:50]}\"")
                continue
            stats.validated += 1
            if fixed:
                stats.fixed += 1

        logger.info(
            f"URL validation: {stats.validated}/{stats.total} validated, "
            f"{stats.fixed} fixed, {stats.failed} failed"
        )
        return stats
