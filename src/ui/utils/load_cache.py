from typing import Any, Callable, MutableMapping, Optional

from services.storefront_client import LoadResult


def cached_load(
    cache: MutableMapping[Any, LoadResult],
    key: Any,
    load: Callable[[], Optional[LoadResult]],
) -> Optional[LoadResult]:
    """Return the cached result for ``key`` or load it.

    Only successful results are kept, so a failed fetch is attempted again on
    the next call.
    """
    if key in cache:
        return cache[key]
    result = load()
    if result is not None and result.ok:
        cache[key] = result
    return result
