from dataclasses import asdict
from datetime import timedelta

from litestar import get, Controller
from litestar.di import Provide
from litestar.exceptions import NotFoundException, ValidationException
from sqlalchemy.ext.asyncio import AsyncSession

from mcjars.core import cache
from mcjars.core.utils import parse_server_type
from mcjars.db.session import get_db_session
from mcjars.enums import ServerType, VersionLocation
from mcjars.services.build_store import classify_version_location
from mcjars.services.stats_service import get_global_stats, get_type_stats, get_family_stats, get_version_stats, \
    get_type_history, get_version_history, validate_history_month

STATS_TTL = timedelta(minutes=30)


class StatsController(Controller):
    path = "/stats"
    tags = ["Stats"]
    dependencies = {
        "db": Provide(get_db_session),
    }

    async def _locate(self, server_type: ServerType, version: str, db: AsyncSession) -> VersionLocation:
        location = await classify_version_location(version, server_type, db)
        if location == VersionLocation.NONE:
            raise NotFoundException("Version not found")
        return location

    async def _history(self, server_type: ServerType, year: int, month: int, db: AsyncSession,
                       version: str | None = None) -> dict:
        error = validate_history_month(year, month)
        if error is not None:
            raise ValidationException(error)

        location = VersionLocation.NONE
        if version is not None:
            location = await self._locate(server_type, version, db)

        async def fetch() -> list[dict]:
            days = await get_type_history(server_type, year, month, db, version=version, location=location)
            return [asdict(day) for day in days]

        key = f"stats::{server_type.value}::{version or ''}::history::{year}-{month:02d}"
        return {"success": True, "stats": await cache.use(key, fetch, STATS_TTL)}

    @get("/")
    async def global_stats(self, db: AsyncSession) -> dict:
        async def fetch() -> dict:
            return asdict(await get_global_stats(db))

        return {"success": True, "stats": await cache.use("stats::all", fetch, timedelta(minutes=10))}

    @get("/version/{version:str}")
    async def version_stats(self, version: str, db: AsyncSession) -> dict:
        async def fetch() -> dict:
            return asdict(await get_version_stats(version, db))

        stats = await cache.use(f"stats::version::{version}", fetch, STATS_TTL)
        if not stats["builds"]:
            raise NotFoundException("Version not found")
        return {"success": True, "stats": stats}

    @get("/version/{version:str}/history/{year:int}/{month:int}")
    async def version_history(self, version: str, year: int, month: int, db: AsyncSession) -> dict:
        error = validate_history_month(year, month)
        if error is not None:
            raise ValidationException(error)

        async def fetch() -> list[dict]:
            return [asdict(day) for day in await get_version_history(version, year, month, db)]

        key = f"stats::version::{version}::history::{year}-{month:02d}"
        return {"success": True, "stats": await cache.use(key, fetch, STATS_TTL)}

    @get("/{type:str}")
    async def type_stats(self, type: str, db: AsyncSession) -> dict:
        server_type = parse_server_type(type)

        async def fetch() -> dict:
            return asdict(await get_type_stats(server_type, db))

        return {"success": True, "stats": await cache.use(f"stats::{server_type.value}", fetch, STATS_TTL)}

    @get("/{type:str}/history/{year:int}/{month:int}")
    async def type_history(self, type: str, year: int, month: int, db: AsyncSession) -> dict:
        return await self._history(parse_server_type(type), year, month, db)

    @get("/{type:str}/{version:str}")
    async def family_stats(self, type: str, version: str, db: AsyncSession) -> dict:
        server_type = parse_server_type(type)
        location = await self._locate(server_type, version, db)

        async def fetch() -> dict:
            return asdict(await get_family_stats(server_type, version, location, db))

        return {"success": True, "stats": await cache.use(f"stats::{server_type.value}::{version}", fetch, STATS_TTL)}

    @get("/{type:str}/{version:str}/history/{year:int}/{month:int}")
    async def family_history(self, type: str, version: str, year: int, month: int, db: AsyncSession) -> dict:
        return await self._history(parse_server_type(type), year, month, db, version=version)
