"""
REST API client for Thriphti.

Typed async wrappers over the backend's read endpoints, one resource object
per collection:

    async with ThriphtiApiClient() as client:
        events = await client.events.get_all()
        store = await client.stores.get_by_id("42")

Every call is a single request. There are no retries, no caching and no
timeouts; a failed request surfaces immediately as a FetchError.
"""

import asyncio
import logging
from typing import Any, Optional
from urllib.parse import quote

import aiohttp

from .config import get_api_config
from .models import Article, Event, Store

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """
    Raised when a backend request fails.

    str(error) is the fixed, human readable message for the operation
    (e.g. "Failed to fetch events"). status is the HTTP status code, or
    None when the request never got a response.
    """

    def __init__(self, message: str, status: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.url = url


class ThriphtiApiClient:
    """
    Async client for the Thriphti REST backend.

    Args:
        base_url: Backend root, e.g. "http://localhost:3000/api".
            Defaults to the configured ApiConfig.base_url.
        session: Optional aiohttp session to share. When omitted the client
            creates its own on first use and closes it in close().
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.base_url = (base_url or get_api_config().base_url).rstrip("/")
        self._session = session
        self._owns_session = session is None

        self.events = EventsResource(self)
        self.stores = StoresResource(self)
        self.articles = ArticlesResource(self)

    async def __aenter__(self) -> "ThriphtiApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(
                headers={"Accept": "application/json"},
                timeout=aiohttp.ClientTimeout(total=None),
            )
        return self._session

    async def get_json(self, path: str, error_message: str) -> Any:
        """
        GET a path under base_url and decode the JSON body.

        Args:
            path: Path starting with "/", e.g. "/events/featured"
            error_message: Message for the FetchError raised on failure

        Returns:
            The decoded JSON body

        Raises:
            FetchError: On a non-2xx status or a transport failure
        """
        url = f"{self.base_url}{path}"
        session = self._get_session()
        logger.debug(f"GET {url}")

        try:
            async with session.get(url) as response:
                if not 200 <= response.status < 300:
                    logger.warning(f"GET {url} returned HTTP {response.status}")
                    raise FetchError(error_message, status=response.status, url=url)
                return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Request failed for {url}: {e}")
            raise FetchError(error_message, url=url) from e


def _segment(value: str) -> str:
    """Quote a single path segment (ids, slugs, category names)."""
    return quote(str(value), safe="")


class _Resource:
    """Shared plumbing for one REST collection."""

    path: str

    def __init__(self, client: ThriphtiApiClient):
        self._client = client

    async def _fetch(self, suffix: str, error_message: str) -> Any:
        return await self._client.get_json(f"{self.path}{suffix}", error_message)


class EventsResource(_Resource):
    """/events"""

    path = "/events"

    async def get_all(self) -> list[Event]:
        data = await self._fetch("", "Failed to fetch events")
        return [Event.from_dict(item) for item in data]

    async def get_by_id(self, event_id: str) -> Event:
        data = await self._fetch(f"/{_segment(event_id)}", "Failed to fetch event")
        return Event.from_dict(data)

    async def get_featured(self) -> list[Event]:
        """Featured events; the backend does the filtering."""
        data = await self._fetch("/featured", "Failed to fetch featured events")
        return [Event.from_dict(item) for item in data]


class StoresResource(_Resource):
    """/stores"""

    path = "/stores"

    async def get_all(self) -> list[Store]:
        data = await self._fetch("", "Failed to fetch stores")
        return [Store.from_dict(item) for item in data]

    async def get_by_id(self, store_id: str) -> Store:
        data = await self._fetch(f"/{_segment(store_id)}", "Failed to fetch store")
        return Store.from_dict(data)

    async def get_featured(self) -> list[Store]:
        data = await self._fetch("/featured", "Failed to fetch featured stores")
        return [Store.from_dict(item) for item in data]


class ArticlesResource(_Resource):
    """/articles"""

    path = "/articles"

    async def get_all(self) -> list[Article]:
        data = await self._fetch("", "Failed to fetch articles")
        return [Article.from_dict(item) for item in data]

    async def get_by_slug(self, slug: str) -> Article:
        data = await self._fetch(f"/{_segment(slug)}", "Failed to fetch article")
        return Article.from_dict(data)

    async def get_by_category(self, category: str) -> list[Article]:
        data = await self._fetch(
            f"/category/{_segment(category)}", "Failed to fetch articles by category"
        )
        return [Article.from_dict(item) for item in data]

    async def get_featured(self) -> list[Article]:
        data = await self._fetch("/featured", "Failed to fetch featured articles")
        return [Article.from_dict(item) for item in data]
