"""News provider clients"""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from app.config import Settings
from app.errors import AuthenticationError, MissingCredential, ProviderHttpError, TransportError
from app.news.normalizer import provider_query
from app.news.parser import NEWSDATA_PROVIDER_NAME, parse_newsdata_response
from app.schemas.news import NewsItem

logger = logging.getLogger(__name__)

NEWSDATA_URL = "https://newsdata.io/api/1/news"

# NewsData.io returns this text with a 401 for an unknown key
INVALID_KEY_MESSAGE = "The provided API key is not valid"


class NewsProvider(Protocol):
    """Fetch-and-parse capability used by the search service."""

    name: str

    async def search(self, term: str) -> list[NewsItem]: ...

    async def aclose(self) -> None: ...


class NewsDataProvider:
    """NewsData.io `/news` endpoint client.

    Args:
        api_key: NewsData.io key. Checked on every call, before any request.
        client: optional shared ``httpx.AsyncClient``. When omitted one is
            created on first use and closed by ``aclose``.
    """

    name = NEWSDATA_PROVIDER_NAME

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = NEWSDATA_URL,
        language: str = "en",
        page_size: int = 10,
        categories: str = "business,technology",
        timeout: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._language = language
        self._page_size = page_size
        self._categories = categories
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    @classmethod
    def from_settings(cls, settings: Settings) -> NewsDataProvider:
        return cls(
            settings.newsdata_api_key,
            base_url=settings.newsdata_base_url,
            language=settings.news_language,
            page_size=settings.news_page_size,
            categories=settings.news_categories,
            timeout=settings.news_request_timeout_seconds,
        )

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    def build_params(self, term: str) -> dict[str, str | int]:
        return {
            "apikey": self._api_key,
            "q": provider_query(term),
            "language": self._language,
            "size": self._page_size,
            "category": self._categories,
        }

    async def fetch(self, term: str) -> str:
        """Call the provider once and return the raw body.

        Raises:
            MissingCredential: no API key configured.
            AuthenticationError: 401 with the provider's invalid-key message.
            ProviderHttpError: any other non-success status.
            TransportError: DNS/connect/reset failure, timeout or an unreadable
                response (bad encoding, redirect loop).
        """
        if not self._api_key:
            raise MissingCredential("NEWSDATA_API_KEY")

        params = self.build_params(term)
        logger.info("Fetching from %s with query: %s", self.name, params["q"])

        try:
            response = await self._get_client().get(
                self._base_url, params=params, timeout=self._timeout
            )
        except httpx.TimeoutException as exc:
            raise TransportError(f"{self.name} request timed out after {self._timeout}s") from exc
        except httpx.TransportError as exc:
            raise TransportError(f"{self.name} request failed: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"{self.name} response could not be read: {exc}") from exc

        if not response.is_success:
            body = response.text
            if response.status_code == 401 and INVALID_KEY_MESSAGE in body:
                raise AuthenticationError(self.name)
            raise ProviderHttpError(response.status_code, body)

        return response.text

    async def search(self, term: str) -> list[NewsItem]:
        text = await self.fetch(term)
        return parse_newsdata_response(text, provider_name=self.name)

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
