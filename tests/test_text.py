import pytest

from telco_news.text import normalize_title, normalize_url, extract_domain


# ── normalize_title ───────────────────────────────────────────

class TestNormalizeTitle:
    def test_strips_punctuation_and_case(self):
        assert normalize_title("  Globe Telecom: 5G, Rollout!!  ") == "globe telecom 5g rollout"

    def test_collapses_whitespace(self):
        assert normalize_title("PLDT\t posts \n record   profit") == "pldt posts record profit"

    def test_keeps_underscores_and_digits(self):
        assert normalize_title("Q3_2025 results") == "q3_2025 results"

    def test_empty(self):
        assert normalize_title("") == ""
        assert normalize_title(None) == ""


# ── normalize_url ─────────────────────────────────────────────

class TestNormalizeUrl:
    def test_trailing_slash_and_query_variants_match(self):
        a = normalize_url("https://Example.com/news/story/")
        b = normalize_url("https://www.example.com/news/story?utm=1")
        assert a == "example.com/news/story"
        assert a == b

    def test_protocol_ignored(self):
        assert normalize_url("http://rappler.com/a") == normalize_url("https://rappler.com/a")

    def test_fragment_dropped(self):
        assert normalize_url("https://inquirer.net/x#comments") == "inquirer.net/x"

    def test_root_url(self):
        assert normalize_url("https://www.philstar.com/") == "philstar.com"

    def test_path_case_preserved(self):
        assert normalize_url("https://mb.com.ph/Tech/Story") == "mb.com.ph/Tech/Story"

    def test_fallback_without_scheme(self):
        assert normalize_url("WWW.Example.com/news?id=3") == "example.com/news"

    def test_fallback_on_parse_error(self):
        # Unbalanced IPv6 bracket makes urlparse raise
        assert normalize_url("http://[invalid") == "[invalid"

    def test_empty(self):
        assert normalize_url("") == ""


# ── extract_domain ────────────────────────────────────────────

class TestExtractDomain:
    @pytest.mark.parametrize("url, expected", [
        ("https://WWW.Rappler.com/business/x", "www.rappler.com"),
        ("https://youtu.be/abc", "youtu.be"),
        ("not a url", ""),
        ("", ""),
        ("http://[invalid", ""),
    ])
    def test_extract_domain(self, url, expected):
        assert extract_domain(url) == expected
