import pytest

from telco_news.models import Article
from telco_news.similarity import title_similarity, is_duplicate
from telco_news.text import normalize_url


def _make_article(title="PLDT posts record profit", url="https://www.philstar.com/business/pldt-profit", **overrides) -> Article:
    defaults = dict(title=title, url=url, published_date="October 22, 2025", domain="www.philstar.com")
    defaults.update(overrides)
    return Article(**defaults)


TITLES = [
    "PLDT posts record profit",
    "Globe Telecom completes subsea cable landing in Batangas",
    "DICT: new spectrum rules take effect",
    "",
    "a a a b",
]


class TestTitleSimilarity:
    @pytest.mark.parametrize("title", TITLES)
    def test_identical_is_one(self, title):
        assert title_similarity(title, title) == 1.0

    @pytest.mark.parametrize("a", TITLES)
    @pytest.mark.parametrize("b", TITLES)
    def test_symmetric(self, a, b):
        assert title_similarity(a, b) == title_similarity(b, a)

    def test_jaccard_over_word_sets(self):
        # 3 shared words out of 5 distinct
        assert title_similarity("PLDT posts record profit", "PLDT posts record revenue") == pytest.approx(0.6)

    def test_duplicate_tokens_collapse(self):
        assert title_similarity("globe globe 5g", "globe 5g") == 1.0

    def test_punctuation_ignored(self):
        assert title_similarity("Globe: 5G!", "globe 5g") == 1.0

    def test_no_overlap(self):
        assert title_similarity("PLDT earnings", "Starlink launch") == 0.0

    def test_empty_vs_text(self):
        assert title_similarity("", "abc") == 0.0


class TestIsDuplicate:
    def test_same_normalized_url(self):
        a = _make_article(title="One headline", url="https://Example.com/news/story/")
        b = _make_article(title="Completely different", url="https://www.example.com/news/story?utm=1")
        assert normalize_url(a.url) == normalize_url(b.url)
        assert is_duplicate(a, b)

    def test_same_normalized_title(self):
        a = _make_article(title="PLDT posts record profit!", url="https://a.com/1")
        b = _make_article(title="pldt posts  record profit", url="https://b.com/2")
        assert is_duplicate(a, b)

    def test_shorter_title_contained_in_longer(self):
        a = _make_article(title="Globe Telecom completes subsea cable landing", url="https://a.com/1")
        b = _make_article(title="Globe Telecom completes subsea cable landing in Batangas", url="https://b.com/2")
        assert is_duplicate(a, b)
        assert is_duplicate(b, a)

    def test_short_contained_title_ignored(self):
        # "pldt news" has only 9 characters
        a = _make_article(title="PLDT news", url="https://a.com/1")
        b = _make_article(title="PLDT news today", url="https://b.com/2")
        assert not is_duplicate(a, b)

    def test_similar_but_not_contained(self):
        a = _make_article(title="PLDT posts record profit", url="https://a.com/1")
        b = _make_article(title="PLDT posts record revenue", url="https://b.com/2")
        assert not is_duplicate(a, b)
