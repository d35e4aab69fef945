from datetime import timedelta

from litestar import post, Controller, Request
from litestar.di import Provide
from litestar.exceptions import NotFoundException, ValidationException, SerializationException
from pydantic import TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from mcjars import logger
from mcjars.core import cache
from mcjars.core.utils import parse_fields, project_resolution, format_validation_errors
from mcjars.db.session import get_db_session, session_config
from mcjars.schemas import BuildSearch, BuildSearchBatch
from mcjars.services.build_resolver import lookup_build_search, lookup_build_searches

SearchBatch = TypeAdapter(BuildSearchBatch)


def parse_search(body) -> BuildSearch | list[BuildSearch]:
    try:
        if isinstance(body, list):
            return SearchBatch.validate_python(body)
        return BuildSearch.model_validate(body)
    except ValidationError as e:
        raise ValidationException("Invalid search", extra=format_validation_errors(e))


class BuildSearchController(Controller):
    path = "/build"
    tags = ["Builds"]
    dependencies = {
        "db": Provide(get_db_session),
    }

    @post("/", status_code=200)
    async def search_build(self, request: Request, db: AsyncSession, fields: str | None = None) -> dict:
        try:
            body = await request.json()
        except SerializationException:
            raise ValidationException("Invalid JSON body")

        search = parse_search(body)
        selected = parse_fields(fields)

        if isinstance(search, list):
            return await self._search_batch(search, selected)

        async def fetch() -> dict | None:
            resolution = (await lookup_build_search(search, db)).resolution
            return resolution.to_dict() if resolution is not None else None

        resolution = await cache.use(f"search::{search.cache_key()}", fetch, timedelta(minutes=30))
        if resolution is None:
            raise NotFoundException("Build not found")

        return {"success": True, **project_resolution(resolution, selected)}

    async def _search_batch(self, searches: list[BuildSearch], fields: set[str]) -> dict:
        async def fetch() -> list[dict | None]:
            resolutions = await lookup_build_searches(searches, session_config.get_session)
            return [resolution.to_dict() if resolution is not None else None for resolution in resolutions]

        key = "search::batch::[" + ",".join(search.cache_key() for search in searches) + "]"
        resolutions = await cache.use(key, fetch, timedelta(minutes=30))
        logger.debug(f"Resolved {sum(r is not None for r in resolutions)} of {len(searches)} searches")

        return {
            "success": True,
            "builds": [
                project_resolution(resolution, fields) if resolution is not None else None
                for resolution in resolutions
            ],
        }
