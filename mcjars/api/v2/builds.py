from datetime import timedelta

from litestar import get, Controller
from litestar.di import Provide
from litestar.exceptions import NotFoundException
from sqlalchemy.ext.asyncio import AsyncSession

from mcjars.core import cache
from mcjars.core.utils import parse_fields, pick_fields, parse_server_type
from mcjars.db.session import get_db_session
from mcjars.enums import ServerType, VersionLocation
from mcjars.schemas import BuildView
from mcjars.services.build_store import classify_version_location, list_builds_for_family, get_minecraft_version, \
    count_builds_per_type
from mcjars.services.version_service import list_version_listings


class BuildsController(Controller):
    path = "/builds"
    tags = ["Builds"]
    dependencies = {
        "db": Provide(get_db_session),
    }

    async def _family_builds(self, server_type: ServerType, version: str, db: AsyncSession) -> list[dict]:
        location = await classify_version_location(version, server_type, db)
        if location == VersionLocation.NONE:
            raise NotFoundException("Version not found")

        async def fetch() -> list[dict]:
            builds = await list_builds_for_family(server_type, version, location, db)
            return [BuildView.model_validate(build).to_dict() for build in builds]

        return await cache.use(f"builds::{server_type.value}::{version}", fetch, timedelta(minutes=10))

    @get("/version/{version:str}")
    async def count_version_builds(self, version: str, db: AsyncSession) -> dict:
        if await get_minecraft_version(version, db) is None:
            raise NotFoundException("Version not found")

        async def fetch() -> dict[str, int]:
            counts = await count_builds_per_type(version, db)
            return {server_type.value: count for server_type, count in counts.items()}

        builds = await cache.use(f"versions::{version}::all", fetch, timedelta(minutes=30))
        return {"success": True, "builds": builds}

    @get("/{type:str}")
    async def list_versions(self, type: str, db: AsyncSession, fields: str | None = None) -> dict:
        server_type = parse_server_type(type)

        async def fetch() -> dict[str, dict]:
            listings = await list_version_listings(server_type, db)
            return {version: listing.to_dict() for version, listing in listings.items()}

        versions = await cache.use(f"builds::{server_type.value}", fetch, timedelta(minutes=30))

        selected = parse_fields(fields)
        return {
            "success": True,
            "builds": {
                version: {**listing, "latest": pick_fields(listing["latest"], selected)}
                for version, listing in versions.items()
            },
        }

    @get("/{type:str}/{version:str}")
    async def list_family_builds(self, type: str, version: str, db: AsyncSession, fields: str | None = None) -> dict:
        builds = await self._family_builds(parse_server_type(type), version, db)
        selected = parse_fields(fields)
        return {"success": True, "builds": [pick_fields(build, selected) for build in builds]}

    @get("/{type:str}/{version:str}/changes")
    async def list_family_changes(self, type: str, version: str, db: AsyncSession) -> dict:
        builds = await self._family_builds(parse_server_type(type), version, db)
        return {
            "success": True,
            "changes": [{"id": build["id"], "changes": build["changes"]} for build in builds if build["changes"]],
        }
