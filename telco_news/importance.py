import logging

from telco_news.keywords import (
    VIDEO_DOMAINS,
    SPORTS_KEYWORDS,
    LOW_IMPORTANCE_KEYWORDS,
    HIGH_IMPORTANCE_KEYWORDS,
    MAJOR_NEWS_DOMAINS,
    AD_MARKERS,
)
from telco_news.models import Article

logger = logging.getLogger(__name__)


def is_video_domain(domain: str) -> bool:
    domain = (domain or "").lower()
    return any(video in domain for video in VIDEO_DOMAINS)


def is_major_news_domain(domain: str) -> bool:
    domain = (domain or "").lower()
    return any(source in domain for source in MAJOR_NEWS_DOMAINS)


def is_important(article: Article) -> bool:
    """
    Keep strategic news only.

    Video links, sports coverage and promotional items are rejected. An
    article is kept when its title has a high-importance keyword, or when it
    comes from a major national outlet and carries no ad marker.
    """
    title = article.title.lower()

    if is_video_domain(article.domain):
        logger.debug(f"Skipping video link: {article.url}")
        return False

    if any(keyword in title for keyword in SPORTS_KEYWORDS):
        return False

    if any(keyword in title for keyword in LOW_IMPORTANCE_KEYWORDS):
        return False

    if any(keyword in title for keyword in HIGH_IMPORTANCE_KEYWORDS):
        return True

    # Plain substring test: "ad" also hits "broadband", "leader", ...
    has_ad_marker = any(marker in title for marker in AD_MARKERS)
    return is_major_news_domain(article.domain) and not has_ad_marker

