from datetime import timedelta

from litestar import get, Controller
from litestar.di import Provide
from sqlalchemy.ext.asyncio import AsyncSession

from mcjars.core import cache
from mcjars.db.session import get_db_session
from mcjars.services.types_service import list_types


class TypesController(Controller):
    path = "/types"
    tags = ["Types"]
    dependencies = {
        "db": Provide(get_db_session),
    }

    @get("/")
    async def get_types(self, db: AsyncSession) -> dict:
        types = await cache.use("types::all", lambda: list_types(db), timedelta(minutes=30))
        return {"success": True, "types": types}
