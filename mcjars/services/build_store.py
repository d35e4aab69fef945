from sqlalchemy import select, func, ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from mcjars.enums import ServerType, HashAlgorithm, VersionLocation, BuildFilterField, HashFilterField
from mcjars.models import Build, BuildHash, MinecraftVersion, ProjectVersion
from mcjars.schemas import BuildSearch

MAX_BUILD_ID = 2147483647


async def get_build_by_id(build_id: int, db: AsyncSession) -> Build | None:
    if build_id <= 0 or build_id >= MAX_BUILD_ID:
        return None
    return await db.get(Build, build_id)


async def get_build_by_hash(digest: str, db: AsyncSession) -> Build | None:
    algorithm = HashAlgorithm.detect(digest)
    if algorithm is None:
        return None

    result = await db.execute(
        select(Build)
        .join(BuildHash, BuildHash.build_id == Build.id)
        .where(getattr(BuildHash, algorithm.value) == digest)
        .limit(1)
    )
    return result.scalars().first()


async def get_minecraft_version(version_id: str, db: AsyncSession) -> MinecraftVersion | None:
    return await db.get(MinecraftVersion, version_id)


async def list_project_version_ids(server_type: ServerType, db: AsyncSession) -> list[str]:
    result = await db.execute(select(ProjectVersion.id).where(ProjectVersion.type == server_type))
    return list(result.scalars().all())


async def classify_version_location(version: str, server_type: ServerType, db: AsyncSession) -> VersionLocation:
    # Both id spaces are checked, a Minecraft version wins over a project version with the same id
    if await get_minecraft_version(version, db) is not None:
        return VersionLocation.MINECRAFT
    if await db.get(ProjectVersion, (server_type, version)) is not None:
        return VersionLocation.PROJECT
    return VersionLocation.NONE


def family_column(location: VersionLocation):
    if location == VersionLocation.MINECRAFT:
        return Build.version_id
    if location == VersionLocation.PROJECT:
        return Build.project_version_id
    raise ValueError(f"Version location {location} has no build column")


async def list_builds_for_family(server_type: ServerType, version: str, location: VersionLocation,
                                 db: AsyncSession) -> list[Build]:
    if location == VersionLocation.NONE:
        return []

    result = await db.execute(
        select(Build)
        .where(Build.type == server_type, family_column(location) == version)
        .order_by(Build.id.desc())
    )
    return list(result.scalars().all())


async def get_family_build(server_type: ServerType, version: str, location: VersionLocation,
                           build_number: int | None, db: AsyncSession) -> Build | None:
    """Newest build of a family, or the newest one carrying ``build_number`` when given."""
    if location == VersionLocation.NONE:
        return None

    query = select(Build).where(Build.type == server_type, family_column(location) == version)
    if build_number is not None:
        query = query.where(Build.build_number == build_number)

    result = await db.execute(query.order_by(Build.id.desc()).limit(1))
    return result.scalars().first()


async def fetch_candidate_family(server_type: ServerType, key: str, db: AsyncSession) -> list[Build]:
    """All builds of ``server_type`` whose COALESCE(version_id, project_version_id) equals ``key``."""
    result = await db.execute(
        select(Build)
        .where(Build.type == server_type, func.coalesce(Build.version_id, Build.project_version_id) == key)
        .order_by(Build.id.desc())
    )
    return list(result.scalars().all())


def _equals(column, value) -> ColumnElement[bool]:
    if value is None:
        return column.is_(None)
    return column == value


async def search_build(search: BuildSearch, db: AsyncSession) -> Build | None:
    predicates = [
        _equals(getattr(Build, field.value), getattr(search, field.value))
        for field in BuildFilterField
        if field.value in search.model_fields_set
    ]

    query = select(Build)
    if search.hash is not None:
        query = query.join(BuildHash, BuildHash.build_id == Build.id)
        predicates += [
            _equals(getattr(BuildHash, field.value), getattr(search.hash, field.value))
            for field in HashFilterField
            if field.value in search.hash.model_fields_set
        ]

    result = await db.execute(query.where(*predicates).order_by(Build.id.desc()).limit(1))
    return result.scalars().first()


async def count_builds_per_type(version: str, db: AsyncSession) -> dict[ServerType, int]:
    result = await db.execute(
        select(Build.type, func.count(Build.id))
        .where(Build.version_id == version)
        .group_by(Build.type)
    )
    counts = dict(result.tuples().all())
    return {server_type: counts.get(server_type, 0) for server_type in ServerType}
