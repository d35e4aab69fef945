from mcjars.core.config import settings
from mcjars.core.store import root_store
from mcjars.core.cache import cache
