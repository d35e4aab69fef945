import re
from datetime import timedelta

from litestar import get, Controller
from litestar.di import Provide
from litestar.exceptions import NotFoundException, ValidationException
from sqlalchemy.ext.asyncio import AsyncSession

from mcjars.core import cache
from mcjars.core.utils import parse_fields, pick_fields, parse_server_type
from mcjars.db.session import get_db_session
from mcjars.enums import VersionLocation
from mcjars.schemas import BuildView
from mcjars.services.build_store import classify_version_location, get_family_build, MAX_BUILD_ID

BUILD_NUMBER = re.compile(r"[0-9]+")


def parse_build_number(value: str) -> int | None:
    """``latest`` selects the newest build of the family, anything else must be a build number."""
    value = value.strip().lower()
    if value == "latest":
        return None
    if BUILD_NUMBER.fullmatch(value) is None:
        raise ValidationException("Invalid build")

    build_number = int(value)
    if not 0 < build_number < MAX_BUILD_ID:
        raise ValidationException("Invalid build")
    return build_number


class BuildsController(Controller):
    path = "/builds"
    tags = ["Builds"]
    dependencies = {
        "db": Provide(get_db_session),
    }

    @get("/{type:str}/{version:str}/{build:str}")
    async def get_family_build(self, type: str, version: str, build: str, db: AsyncSession,
                               fields: str | None = None) -> dict:
        server_type = parse_server_type(type)
        build_number = parse_build_number(build)

        location = await classify_version_location(version, server_type, db)
        if location == VersionLocation.NONE:
            raise NotFoundException("Version not found")

        async def fetch() -> dict | None:
            found = await get_family_build(server_type, version, location, build_number, db)
            return BuildView.model_validate(found).to_dict() if found is not None else None

        key = f"build::{server_type.value}::{version}::buildNumber.{'latest' if build_number is None else build_number}"
        data = await cache.use(key, fetch, timedelta(hours=3))
        if data is None:
            raise NotFoundException("Build not found")

        return {"success": True, "build": pick_fields(data, parse_fields(fields))}
