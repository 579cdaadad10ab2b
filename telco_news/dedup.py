from typing import List, Sequence

from telco_news.models import Article
from telco_news.similarity import is_duplicate
from telco_news.text import normalize_url


def dedupe_by_url(articles: Sequence[Article]) -> List[Article]:
    """Drop repeated URLs within one source. First occurrence wins."""
    seen = set()
    unique = []
    for article in articles:
        key = normalize_url(article.url)
        if key in seen:
            continue
        seen.add(key)
        unique.append(article)
    return unique


def merge_unique(existing: Sequence[Article], candidates: Sequence[Article]) -> List[Article]:
    """Candidates that duplicate none of ``existing``, in their original order."""
    return [
        candidate for candidate in candidates
        if not any(is_duplicate(article, candidate) for article in existing)
    ]
