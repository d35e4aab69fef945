from litestar.stores.base import Store
from litestar.stores.memory import MemoryStore
from litestar.stores.redis import RedisStore

from mcjars.core.config import settings

root_store: Store
if settings.REDIS_URL is None:
    root_store = MemoryStore()
else:
    root_store = RedisStore.with_client(url=settings.REDIS_URL)
