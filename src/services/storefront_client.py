import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, List, Optional, TypeVar

import httpx

from config import settings
from models.blog import BlogPost, parse_blog_posts
from models.profile import ProducerDetail
from models.schemas import Producer, parse_producers

logger = logging.getLogger(__name__)

T = TypeVar("T")

PRODUCERS_LOAD_ERROR = "Impossible de charger les producteurs."
BLOG_LOAD_ERROR = "Erreur lors du chargement des articles."
PRODUCER_DETAIL_LOAD_ERROR = "Impossible de charger ce producteur."


class StorefrontAPIError(RuntimeError):
    """Raised when the storefront backend cannot be reached or answers badly."""


class StorefrontClient:
    """Read-only client for the public storefront endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = settings.http_timeout if timeout is None else timeout
        self._transport = transport

    async def _get_json(self, path: str, params: Optional[dict] = None) -> Any:
        url = f"{self.base_url}{path}"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.get(url, params=params)
                response.raise_for_status()
                return response.json()
            except httpx.HTTPError as e:
                logger.error(f"Storefront API error on {url}: {e}")
                raise StorefrontAPIError(f"GET {path} failed: {e}") from e
            except ValueError as e:
                logger.error(f"Storefront API returned invalid JSON on {url}: {e}")
                raise StorefrontAPIError(f"GET {path} returned invalid JSON") from e

    async def fetch_producers(self) -> List[Producer]:
        payload = await self._get_json(settings.producers_path)
        producers = parse_producers(payload)
        logger.info(f"Fetched {len(producers)} producers")
        return producers

    async def fetch_blog_posts(self) -> List[BlogPost]:
        payload = await self._get_json(settings.blog_posts_path, params={"ordering": "-published_at"})
        return parse_blog_posts(payload)

    async def fetch_producer_detail(self, producer_id: int) -> ProducerDetail:
        path = settings.producer_detail_path.format(producer_id=producer_id)
        payload = await self._get_json(path)
        if not isinstance(payload, dict):
            logger.warning(f"Producer {producer_id} payload is not an object")
            return ProducerDetail()
        return ProducerDetail.model_validate(payload)


@dataclass(frozen=True)
class LoadResult(Generic[T]):
    data: T
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CatalogLoader(Generic[T]):
    """Runs a one-time fetch for a mounted view.

    Once ``close`` has been called the view is gone: a response that arrives
    afterwards is dropped and ``load`` returns ``None``. Fetch failures become
    a ``LoadResult`` carrying the empty value and a user-facing message.
    """

    def __init__(self, fetch: Callable[[], Awaitable[T]], empty: T, error_message: str):
        self._fetch = fetch
        self._empty = empty
        self._error_message = error_message
        self._alive = True

    @property
    def alive(self) -> bool:
        return self._alive

    def close(self) -> None:
        self._alive = False

    async def load(self) -> Optional[LoadResult[T]]:
        try:
            data = await self._fetch()
        except StorefrontAPIError as e:
            if not self._alive:
                return None
            logger.warning(f"Load failed: {e}")
            return LoadResult(data=self._empty, error=self._error_message)
        if not self._alive:
            logger.info("View closed before the response arrived, discarding it")
            return None
        return LoadResult(data=data)

    def load_sync(self) -> Optional[LoadResult[T]]:
        return asyncio.run(self.load())


def producers_loader(client: Optional[StorefrontClient] = None) -> CatalogLoader[List[Producer]]:
    client = client or StorefrontClient()
    return CatalogLoader(client.fetch_producers, [], PRODUCERS_LOAD_ERROR)


def blog_loader(client: Optional[StorefrontClient] = None) -> CatalogLoader[List[BlogPost]]:
    client = client or StorefrontClient()
    return CatalogLoader(client.fetch_blog_posts, [], BLOG_LOAD_ERROR)


def producer_detail_loader(
    producer_id: int,
    client: Optional[StorefrontClient] = None,
) -> CatalogLoader[ProducerDetail]:
    client = client or StorefrontClient()
    return CatalogLoader(
        lambda: client.fetch_producer_detail(producer_id),
        ProducerDetail(),
        PRODUCER_DETAIL_LOAD_ERROR,
    )
