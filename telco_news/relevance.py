import logging

from telco_news.keywords import (
    TELCO_INDICATORS,
    SMART_FALSE_POSITIVES,
    DITO_FALSE_POSITIVES,
    DITO_TAGALOG_FOLLOWERS,
    GLOBE_FALSE_POSITIVES,
    CONVERGE_FALSE_POSITIVES,
)
from telco_news.models import Article

logger = logging.getLogger(__name__)


def _contains_any(text: str, phrases) -> bool:
    return any(phrase in text for phrase in phrases)


def has_telco_context(text: str) -> bool:
    return _contains_any(text, TELCO_INDICATORS)


def _smart_ok(title: str, combined: str) -> bool:
    if "smart" not in title or "smart communications" in title:
        return True
    if _contains_any(title, SMART_FALSE_POSITIVES):
        return has_telco_context(combined)
    return True


def _dito_ok(title: str, combined: str) -> bool:
    if "dito" not in title or "dito telecom" in title or "dito network" in title:
        return True
    if _contains_any(title, DITO_FALSE_POSITIVES):
        return False

    words = title.split()
    dito_index = next((i for i, w in enumerate(words) if "dito" in w), None)
    if dito_index is None:
        return True

    # Tagalog usage: "dito sa ...", "dito ang ..."
    if dito_index + 1 < len(words) and words[dito_index + 1] in DITO_TAGALOG_FOLLOWERS:
        return False

    return has_telco_context(combined)


def _globe_ok(title: str) -> bool:
    if "globe" not in title or "globe telecom" in title:
        return True
    return not _contains_any(title, GLOBE_FALSE_POSITIVES)


def _converge_ok(title: str) -> bool:
    if "converge" not in title or "converge ict" in title:
        return True
    return not _contains_any(title, CONVERGE_FALSE_POSITIVES)


def is_relevant(article: Article) -> bool:
    """
    Reject false positives for the ambiguous brand keywords "smart", "dito",
    "globe" and "converge". Every check must pass; articles that mention none
    of them are relevant.
    """
    title = article.title.lower()
    excerpt = (article.excerpt or "").lower()
    combined = f"{title} {excerpt}"

    relevant = (
        _smart_ok(title, combined)
        and _dito_ok(title, combined)
        and _globe_ok(title)
        and _converge_ok(title)
    )
    if not relevant:
        logger.debug(f"Not telco-relevant: {article.title}")
    return relevant
