from telco_news.models import Article
from telco_news.text import normalize_title, normalize_url


def title_similarity(title1: str, title2: str) -> float:
    """Jaccard index over the word sets of two normalized titles (0.0 - 1.0)."""
    norm1 = normalize_title(title1)
    norm2 = normalize_title(title2)

    if norm1 == norm2:
        return 1.0

    words1 = set(norm1.split(" "))
    words2 = set(norm2.split(" "))
    union = words1 | words2
    if not union:
        return 0.0
    return len(words1 & words2) / len(union)


def is_duplicate(article1: Article, article2: Article) -> bool:
    """
    Same URL after normalization, same normalized title, or the shorter
    title (over 10 chars) contained in the longer one.
    """
    if normalize_url(article1.url) == normalize_url(article2.url):
        return True

    title1 = normalize_title(article1.title)
    title2 = normalize_title(article2.title)
    if title1 == title2:
        return True

    if len(title1) > len(title2):
        longer, shorter = title1, title2
    else:
        longer, shorter = title2, title1
    return len(shorter) > 10 and shorter in longer
