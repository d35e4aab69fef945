from datetime import timedelta

from litestar import get, Controller
from litestar.di import Provide
from litestar.exceptions import NotFoundException
from sqlalchemy.ext.asyncio import AsyncSession

from mcjars.core import cache
from mcjars.core.utils import parse_fields, pick_fields
from mcjars.db.session import get_db_session
from mcjars.enums import ServerType, VersionLocation
from mcjars.schemas import BuildView, MinecraftVersionView
from mcjars.services.build_store import get_minecraft_version, count_builds_per_type, list_builds_for_family


class VersionController(Controller):
    path = "/version"
    tags = ["Versions"]
    dependencies = {
        "db": Provide(get_db_session),
    }

    async def _version(self, version: str, db: AsyncSession) -> dict:
        async def fetch() -> dict | None:
            found = await get_minecraft_version(version, db)
            return MinecraftVersionView.model_validate(found).to_dict() if found is not None else None

        data = await cache.use(f"version::{version}", fetch, timedelta(hours=3))
        if data is None:
            raise NotFoundException("Version not found")
        return data

    @get("/{version:str}")
    async def get_version(self, version: str, db: AsyncSession) -> dict:
        data = await self._version(version, db)

        async def fetch() -> dict[str, int]:
            counts = await count_builds_per_type(version, db)
            return {server_type.value: count for server_type, count in counts.items()}

        builds = await cache.use(f"versions::{version}::all", fetch, timedelta(minutes=30))
        return {"success": True, "version": {**data, "builds": builds}}

    @get("/{version:str}/builds")
    async def list_version_builds(self, version: str, db: AsyncSession, fields: str | None = None) -> dict:
        """Builds of every type for a Minecraft version, newest first."""
        await self._version(version, db)

        async def fetch() -> dict[str, list[dict]]:
            builds = {}
            for server_type in ServerType:
                found = await list_builds_for_family(server_type, version, VersionLocation.MINECRAFT, db)
                builds[server_type.value] = [BuildView.model_validate(build).to_dict() for build in found]
            return builds

        builds = await cache.use(f"builds::{version}::all", fetch, timedelta(hours=6))
        selected = parse_fields(fields)
        return {
            "success": True,
            "builds": {
                server_type: [pick_fields(build, selected) for build in type_builds]
                for server_type, type_builds in builds.items()
            },
        }
