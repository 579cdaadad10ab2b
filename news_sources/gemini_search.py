import asyncio
import json
import logging
from typing import Callable, Dict, List, Optional

from google import genai
from google.genai import types
from pydantic import BaseModel, Field, ValidationError, field_validator

from telco_news.config import SourceConfig
from telco_news.errors import SourceFetchError
from telco_news.models import (
    TRACKED_COMPANIES,
    Article,
    CompanySection,
    GroundingChunk,
    PrimaryNews,
)
from telco_news.source_base import BaseSource
from telco_news.text import extract_domain

logger = logging.getLogger(__name__)

SOURCE_NAME = "gemini"
BLOCKED_FINISH_REASONS = ("SAFETY", "RECITATION")


# Response schema. Unknown keys are ignored, missing required keys fail the fetch.
class SourcePayload(BaseModel):
    title: Optional[str] = ""
    uri: str

    @field_validator("title", mode="before")
    @classmethod
    def null_to_empty(cls, value):
        return "" if value is None else value


class ArticlePayload(BaseModel):
    title: str = Field(min_length=1)
    date: Optional[str] = ""
    summary: Optional[str] = ""
    takeaways: List[str] = Field(default_factory=list)
    source: SourcePayload

    @field_validator("date", "summary", mode="before")
    @classmethod
    def null_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("takeaways", mode="before")
    @classmethod
    def null_to_list(cls, value):
        return [] if value is None else value

    @field_validator("takeaways")
    @classmethod
    def keep_two_takeaways(cls, value: List[str]) -> List[str]:
        return value[:2]


class CompanySectionPayload(BaseModel):
    companyName: str
    articles: List[ArticlePayload] = Field(default_factory=list)


class NewsPayload(BaseModel):
    internationalNews: List[ArticlePayload]
    generalNews: List[ArticlePayload]
    companyNews: List[CompanySectionPayload]


def build_news_prompt(start_date: str, end_date: str) -> str:
    companies = ", ".join(TRACKED_COMPANIES)
    return f"""You are a world-class investigative intelligence AI. Your mission is to search Google News to uncover the MOST IMPORTANT and STRATEGICALLY RELEVANT telecommunications news from the Philippines between **{start_date} and {end_date}**.

**SEARCH QUALITY GUIDELINES:**
1. Date Filtering: Only use articles published between {start_date} and {end_date}. Use date operators in your queries (after:{start_date} before:{end_date}).
2. Source Quality: Prioritize reputable Philippine news sources like PhilStar, BusinessWorld, Manila Bulletin, Rappler, Inquirer, and official government sites (gov.ph, officialgazette.gov.ph).
3. Relevance Verification: For major stories, look for multiple sources reporting the same event.

**INCLUDE (High Importance):**
- Regulatory & policy shifts: new laws, DICT/NTC circulars, spectrum allocation, foreign ownership, national security reviews.
- Massive infrastructure projects & investments: multi-billion peso capex, subsea cable landings, fiber backbone expansions, data centers, satellite partnerships.
- Mergers, acquisitions & strategic alliances.
- Major financial results that deviate from trend; entry or exit of a major market player.
- Transformative technology deployments: large-scale 5G activations, Open RAN trials, cybersecurity incidents with national impact.

**EXCLUDE (Low Importance):**
- Routine corporate affairs: minor appointments, CSR events, standard industry awards, rebranding.
- Marketing & promotions: new plans, device bundles, celebrity endorsements, price adjustments.
- Minor operational updates and daily stock price changes.

**SEARCH STRATEGY:**
1. General industry: `philippine telecommunications news after:{start_date} before:{end_date}`, `DICT NTC policy regulation philippines after:{start_date} before:{end_date}`
2. Companies ({companies}): `"[Company Name]" philippines news after:{start_date} before:{end_date}`, `"[Company Name]" (investment OR expansion OR 5G OR fiber) after:{start_date} before:{end_date}`
3. Global news with Philippine impact: `"southeast asia" telecommunications philippines after:{start_date} before:{end_date}`
Use negative keywords to filter noise: `-promo -celebrity -award -csr`.

**OUTPUT:**
Your entire response MUST be a single, valid JSON object with no introductory text, comments, markdown or trailing commas.

The top-level object has three keys:
- "internationalNews": array of article objects for global news with Philippine impact ([] if none).
- "generalNews": array of article objects for general industry news ([] if none).
- "companyNews": array with EXACTLY one object for EACH of: {companies}. Each object has "companyName" and "articles" ([] if no important news).

Article object:
- "title": the exact title of the article.
- "date": the publication date (e.g. "October 22, 2025").
- "summary": 2-3 sentence summary.
- "takeaways": an array of exactly two distinct, insightful bullet points.
- "source": {{"title": source website name, "uri": the article URL from the search results}}.
"""


def build_generate_config() -> types.GenerateContentConfig:
    """Google Search grounding tool, low temperature for stable JSON."""
    return types.GenerateContentConfig(
        tools=[types.Tool(google_search=types.GoogleSearch())],
        temperature=0.2,
    )


def _default_client_factory(config: SourceConfig) -> genai.Client:
    return genai.Client(api_key=config.api_key)


def extract_json_object(text: str) -> str:
    """Slice from the first '{' to the last '}' to drop any prose or code fences."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise SourceFetchError(SOURCE_NAME, "Could not find a valid JSON object in the AI's response")
    return text[start:end + 1]


def _to_article(payload: ArticlePayload) -> Article:
    return Article(
        title=payload.title,
        url=payload.source.uri,
        published_date=payload.date,
        domain=extract_domain(payload.source.uri),
        excerpt=payload.summary,
        takeaways=list(payload.takeaways),
        source_title=payload.source.title,
    )


def _company_key(name: str) -> str:
    parts = name.lower().split()
    return parts[0] if parts else ""


def build_company_sections(sections: List[CompanySectionPayload]) -> List[CompanySection]:
    """One section per tracked company, in fixed order, whatever the model returned."""
    by_key: Dict[str, CompanySection] = {
        _company_key(name): CompanySection(company_name=name) for name in TRACKED_COMPANIES
    }
    for section in sections:
        target = by_key.get(_company_key(section.companyName))
        if target is None:
            logger.warning(f"Dropping untracked company section: {section.companyName}")
            continue
        target.articles.extend(_to_article(a) for a in section.articles)
    return list(by_key.values())


def parse_news_payload(text: str) -> NewsPayload:
    try:
        return NewsPayload.model_validate(json.loads(extract_json_object(text)))
    except json.JSONDecodeError as e:
        raise SourceFetchError(SOURCE_NAME, f"AI response is not valid JSON: {e}") from e
    except ValidationError as e:
        raise SourceFetchError(SOURCE_NAME, f"API response is not in the expected news format: {e}") from e


def _grounding_chunks(response) -> List[GroundingChunk]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = []
    for chunk in getattr(metadata, "grounding_chunks", None) or []:
        web = getattr(chunk, "web", None)
        if web is None:
            continue
        uri = getattr(web, "uri", "") or ""
        title = getattr(web, "title", "") or ""
        if uri and title:
            chunks.append(GroundingChunk(title=title, uri=uri))
    return chunks


def _finish_reason(response) -> str:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return ""
    reason = getattr(candidates[0], "finish_reason", None)
    return str(getattr(reason, "name", reason or ""))


class GeminiNewsSource(BaseSource):
    """Primary source: Gemini with Google Search grounding, bucketed JSON output."""

    API_KEY_ENV = "GEMINI_API_KEY"

    def __init__(self, config: SourceConfig, client_factory: Optional[Callable[[SourceConfig], object]] = None):
        super().__init__(config)
        self.client_factory = client_factory or _default_client_factory

    async def fetch(self, start_date: str, end_date: str) -> PrimaryNews:
        self.require_api_key()
        client = self.client_factory(self.config)
        prompt = build_news_prompt(start_date, end_date)

        logger.info(f"Fetching telco news from Gemini ({self.config.base_url})...")
        try:
            response = await asyncio.wait_for(
                client.aio.models.generate_content(
                    model=self.config.base_url,
                    contents=prompt,
                    config=build_generate_config(),
                ),
                timeout=self.config.timeout,
            )
        except asyncio.TimeoutError as e:
            raise SourceFetchError(SOURCE_NAME, f"Gemini request timed out after {self.config.timeout}s") from e
        except Exception as e:
            raise SourceFetchError(SOURCE_NAME, f"Gemini request failed: {e}") from e

        # None when the candidate was blocked or has no text part
        response_text = response.text

        if not response_text:
            reason = _finish_reason(response)
            if reason in BLOCKED_FINISH_REASONS:
                raise SourceFetchError(
                    SOURCE_NAME,
                    f"API response blocked due to: {reason}. Please try a different date range.",
                )
            raise SourceFetchError(SOURCE_NAME, "Received an empty response from the API")

        payload = parse_news_payload(response_text)
        news = PrimaryNews(
            international_news=[_to_article(a) for a in payload.internationalNews],
            general_news=[_to_article(a) for a in payload.generalNews],
            company_news=build_company_sections(payload.companyNews),
            grounding_chunks=_grounding_chunks(response),
        )
        logger.info(
            f"Gemini returned {len(news.all_articles())} articles "
            f"({len(news.grounding_chunks)} grounding chunks)"
        )
        return news
