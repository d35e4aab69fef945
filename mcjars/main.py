from dotenv import load_dotenv

load_dotenv()

from litestar import Litestar
from litestar.config.cors import CORSConfig
from litestar.exceptions import HTTPException
from litestar.logging import LoggingConfig
from litestar.openapi import OpenAPIConfig
from litestar.openapi.plugins import SwaggerRenderPlugin
from litestar.plugins.sqlalchemy import SQLAlchemyPlugin

from mcjars import logger
from mcjars.api import v1_router, v2_router
from mcjars.api.errors import http_exception_handler, internal_error_handler
from mcjars.core import settings, cache
from mcjars.db import Base
from mcjars.db.session import session_config


async def db_startup():
    async with session_config.get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Database ready, cache {'enabled' if cache.enabled else 'disabled'}")


logging_config = LoggingConfig(
    root={"level": settings.LOG_LEVEL, "handlers": ["queue_listener"]},
    loggers={"mcjars": {"level": settings.LOG_LEVEL, "handlers": ["queue_listener"], "propagate": False}},
    log_exceptions="debug",
)

cors_config = CORSConfig(allow_origins=["*"], allow_methods=["GET", "POST"])

app = Litestar(
    cors_config=cors_config,
    route_handlers=[v1_router, v2_router],
    on_startup=[db_startup],
    exception_handlers={
        HTTPException: http_exception_handler,
        Exception: internal_error_handler,
    },
    logging_config=logging_config,
    openapi_config=OpenAPIConfig(
        title="MCJars API",
        version="2.0.0",
        description="Catalog of Minecraft server builds: lookups by id or hash, version listings, install scripts and statistics.",
        render_plugins=[SwaggerRenderPlugin()],
        path="/docs"
    ),
    plugins=[SQLAlchemyPlugin(config=session_config)],
)
