import logging
import httpx
from typing import Optional, Dict, Any
from fake_useragent import UserAgent
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class HTTPClient:
    def __init__(self, timeout: float = DEFAULT_TIMEOUT, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.ua = UserAgent()
        self.timeout = timeout
        # Redirects are followed per request; URL repair walks them by hand.
        self.client = httpx.AsyncClient(follow_redirects=False, transport=transport)

    def _get_headers(self):
        return {
            "User-Agent": self.ua.random,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
            "DNT": "1",
            "Connection": "keep-alive",
        }

    async def get_json_response(
        self, url: str, params: Optional[Dict[str, Any]] = None, timeout: Optional[float] = None
    ) -> httpx.Response:
        """
        Single GET against a JSON API. No retries: callers decide how a
        failed source is handled. Transport errors and timeouts propagate.
        """
        response = await self.client.get(
            url,
            params=params,
            headers={"Accept": "application/json"},
            timeout=timeout or self.timeout,
        )
        logger.debug(f"GET {url} -> {response.status_code}")
        return response

    @retry(
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
        retry=retry_if_exception_type(httpx.ConnectError),
        reraise=True,
    )
    async def head(self, url: str, timeout: Optional[float] = None, follow_redirects: bool = False) -> httpx.Response:
        """HEAD request with browser-like headers, used for URL liveness checks."""
        return await self.client.head(
            url,
            headers=self._get_headers(),
            timeout=timeout or self.timeout,
            follow_redirects=follow_redirects,
        )

    @retry(
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
        retry=retry_if_exception_type(httpx.ConnectError),
        reraise=True,
    )
    async def get_page(self, url: str, timeout: Optional[float] = None) -> httpx.Response:
        """GET following redirects, for servers that reject HEAD."""
        return await self.client.get(
            url,
            headers=self._get_headers(),
            timeout=timeout or self.timeout,
            follow_redirects=True,
        )

    async def close(self):
        await self.client.aclose()
