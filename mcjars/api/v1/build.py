from datetime import timedelta

from litestar import get, Controller
from litestar.di import Provide
from litestar.exceptions import NotFoundException, ValidationException
from sqlalchemy.ext.asyncio import AsyncSession

from mcjars.core import cache
from mcjars.core.utils import parse_fields, project_resolution
from mcjars.db.session import get_db_session
from mcjars.enums import LookupStatus
from mcjars.services.build_resolver import lookup_build


class BuildController(Controller):
    path = "/build"
    tags = ["Builds"]
    dependencies = {
        "db": Provide(get_db_session),
    }

    @get("/{build:str}")
    async def get_build(self, build: str, db: AsyncSession, fields: str | None = None) -> dict:
        token = build.strip().lower()

        async def fetch() -> dict:
            return (await lookup_build(token, db)).to_dict()

        lookup = await cache.use(f"build::{token}", fetch, timedelta(minutes=30))

        status = LookupStatus(lookup["status"])
        if status == LookupStatus.INVALID:
            raise ValidationException(lookup["error"])
        if status == LookupStatus.NOT_FOUND:
            raise NotFoundException("Build not found")

        return {"success": True, **project_resolution(lookup["resolution"], parse_fields(fields))}
