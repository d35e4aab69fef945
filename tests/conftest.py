"""Configuration for pytest."""

import hashlib
import os
import tempfile
from collections.abc import AsyncGenerator
from datetime import datetime

# Settings are read on import, so the environment must be prepared first
_DATA_PATH = tempfile.mkdtemp(prefix="mcjars-tests-")
os.environ["DATA_PATH"] = _DATA_PATH
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DATA_PATH}/mcjars.db"
os.environ["CACHE_ENABLED"] = "false"
os.environ.pop("REDIS_URL", None)

import pytest_asyncio
from litestar.testing import AsyncTestClient
from sqlalchemy.ext.asyncio import AsyncSession

from mcjars.db import Base
from mcjars.db.session import session_config
from mcjars.enums import ServerType, MinecraftVersionType
from mcjars.main import app
from mcjars.models import Build, BuildHash, MinecraftVersion, ProjectVersion


class CatalogFactory:
    """Creates catalog rows and commits them so other sessions can read them."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._project_versions: set[tuple[ServerType, str]] = set()

    async def minecraft_version(self, version_id: str, java: int = 21, supported: bool = True,
                                created: datetime = datetime(2024, 1, 1),
                                type: MinecraftVersionType = MinecraftVersionType.RELEASE) -> MinecraftVersion:
        version = MinecraftVersion(id=version_id, type=type, supported=supported, java=java, created=created)
        self.session.add(version)
        await self.session.commit()
        return version

    async def project_version(self, server_type: ServerType, version_id: str) -> ProjectVersion:
        version = ProjectVersion(type=server_type, id=version_id)
        self.session.add(version)
        await self.session.commit()
        self._project_versions.add((server_type, version_id))
        return version

    async def build(self, server_type: ServerType, version_id: str | None = None,
                    project_version_id: str | None = None, build_number: int = 1, id: int | None = None,
                    jar_size: int | None = 1024, zip_size: int | None = None,
                    created: datetime | None = datetime(2024, 5, 1, 12, 0),
                    installation: list | None = None, changes: list[str] | None = None,
                    experimental: bool = False, with_hash: bool = True) -> Build:
        if project_version_id is not None and (server_type, project_version_id) not in self._project_versions:
            await self.project_version(server_type, project_version_id)

        build = Build(
            id=id,
            type=server_type,
            version_id=version_id,
            project_version_id=project_version_id,
            build_number=build_number,
            experimental=experimental,
            jar_url=f"https://cdn.example.com/{server_type.value.lower()}/{build_number}.jar",
            jar_size=jar_size,
            jar_location="server.jar",
            zip_url=None,
            zip_size=zip_size,
            installation=installation if installation is not None else [[{
                "type": "download",
                "file": "server.jar",
                "url": f"https://cdn.example.com/{server_type.value.lower()}/{build_number}.jar",
                "size": jar_size or 0,
            }]],
            changes=changes if changes is not None else [],
            created=created,
        )
        self.session.add(build)
        await self.session.flush()

        if with_hash:
            self.session.add(BuildHash(build_id=build.id, primary=True, **digests_for(build.id)))
        await self.session.commit()
        return build


def digests_for(build_id: int) -> dict[str, str]:
    payload = f"build-{build_id}".encode()
    return {name: hashlib.new(name, payload).hexdigest() for name in ("md5", "sha1", "sha224", "sha256", "sha384", "sha512")}


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[None, None]:
    """Fresh tables for every test."""
    engine = session_config.get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest_asyncio.fixture
async def db(database: None) -> AsyncGenerator[AsyncSession, None]:
    async with session_config.get_session() as session:
        yield session


@pytest_asyncio.fixture
async def catalog(db: AsyncSession) -> CatalogFactory:
    return CatalogFactory(db)


@pytest_asyncio.fixture
async def client(database: None) -> AsyncGenerator[AsyncTestClient, None]:
    async with AsyncTestClient(app=app) as test_client:
        yield test_client
