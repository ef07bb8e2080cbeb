from .storefront_client import CatalogLoader, LoadResult, StorefrontAPIError, StorefrontClient

__all__ = [
    "CatalogLoader",
    "LoadResult",
    "StorefrontAPIError",
    "StorefrontClient",
]
