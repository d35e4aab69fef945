from datetime import timedelta
from typing import Any, Awaitable, Callable

from litestar.serialization import decode_json, encode_json
from litestar.stores.base import Store

from mcjars import logger
from mcjars.core.config import settings
from mcjars.core.store import root_store


class Cache:
    """
    Memoize-with-expiry on top of a Litestar store.
    Values must be JSON serializable; ``None`` results are cached too, so a
    missing build is not looked up again until the entry expires.
    """

    def __init__(self, store: Store, enabled: bool = True):
        self.store = store
        self.enabled = enabled

    async def use(self, key: str, fetcher: Callable[[], Awaitable[Any]], expires_in: timedelta) -> Any:
        if self.enabled:
            cached = await self.store.get(key)
            if cached is not None:
                return decode_json(cached)

        logger.debug(f"Cache miss for {key}")
        data = await fetcher()

        if self.enabled:
            await self.store.set(key, encode_json(data), expires_in=expires_in)
        return data

    async def delete(self, key: str) -> None:
        await self.store.delete(key)

    async def clear(self) -> None:
        await self.store.delete_all()


cache = Cache(root_store, enabled=settings.CACHE_ENABLED)
