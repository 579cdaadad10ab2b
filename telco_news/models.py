from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any

TRACKED_COMPANIES = ("PLDT", "Globe Telecom", "Converge ICT", "DITO Telecommunity")


@dataclass
class Engagement:
    total_shares: float = 0
    facebook_shares: float = 0
    pinterest_shares: float = 0
    twitter_shares: float = 0
    total_links: float = 0
    evergreen_score: Optional[float] = None


@dataclass
class Article:
    title: str
    url: str
    published_date: str  # Display string, not parsed
    domain: str  # Lower-case hostname of url, "" if unparseable
    excerpt: Optional[str] = None
    engagement: Optional[Engagement] = None  # Only set for engagement-search articles
    thumbnail_url: Optional[str] = None
    takeaways: List[str] = field(default_factory=list)
    source_title: str = ""
    author: Optional[str] = None
    url_broken: bool = False  # Set by URL repair when no live URL was found

    @property
    def total_shares(self) -> float:
        return self.engagement.total_shares if self.engagement else 0

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "title": self.title,
            "date": self.published_date,
            "summary": self.excerpt or "",
            "takeaways": list(self.takeaways),
            "source": {"title": self.source_title or self.domain, "uri": self.url},
        }
        if self.thumbnail_url:
            data["thumbnailUrl"] = self.thumbnail_url
        if self.engagement:
            data["engagement"] = asdict(self.engagement)
        if self.url_broken:
            data["urlBroken"] = True
        return data


@dataclass
class CompanySection:
    company_name: str
    articles: List[Article] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "companyName": self.company_name,
            "articles": [a.to_dict() for a in self.articles],
        }


@dataclass
class GroundingChunk:
    title: str
    uri: str


@dataclass
class PrimaryNews:
    """Bucketed output of the AI-search source, before merging."""
    international_news: List[Article] = field(default_factory=list)
    general_news: List[Article] = field(default_factory=list)
    company_news: List[CompanySection] = field(default_factory=list)
    grounding_chunks: List[GroundingChunk] = field(default_factory=list)

    def all_articles(self) -> List[Article]:
        company_articles = [a for section in self.company_news for a in section.articles]
        return [*self.international_news, *self.general_news, *company_articles]


@dataclass
class AggregateResult:
    international_news: List[Article]
    general_news: List[Article]
    company_news: List[CompanySection]
    trending_articles: List[Article] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "internationalNews": [a.to_dict() for a in self.international_news],
            "generalNews": [a.to_dict() for a in self.general_news],
            "companyNews": [s.to_dict() for s in self.company_news],
            "trendingArticles": [a.to_dict() for a in self.trending_articles],
        }
