import re

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from mcjars.enums import ServerType, MinecraftVersionType
from mcjars.models import Build, MinecraftVersion, ProjectVersion
from mcjars.schemas import BuildView, VersionListing

DEFAULT_JAVA_VERSION = 21

RELEASE_PREFIX = re.compile(r"^(?P<release>\d+(?:\.\d+)*)(?P<suffix>.*)$")


def project_version_sort_key(version: str) -> tuple[tuple[int, ...], bool, str]:
    """
    Sort key for project version ids such as "3.3.0" or "3.4.0-SNAPSHOT".
    Numeric parts compare numerically, a plain release sorts after a suffixed
    pre-release of the same number, and ids without a number sort first.
    """
    match = RELEASE_PREFIX.match(version)
    if match is None:
        return (), False, version

    release = tuple(int(part) for part in match.group("release").split("."))
    suffix = match.group("suffix")
    return release, suffix == "", suffix


def latest_project_version(versions: list[str]) -> str | None:
    return max(versions, key=project_version_sort_key, default=None)


def is_latest_project_version(version: str, versions: list[str]) -> bool:
    return version == latest_project_version(versions)


async def list_project_version_listings(server_type: ServerType, db: AsyncSession) -> dict[str, VersionListing]:
    summary = (
        select(
            ProjectVersion.id.label("version_id"),
            func.count(Build.id).label("builds"),
            func.max(Build.id).label("latest"),
            func.min(Build.created).label("created"),
        )
        .join(Build, (Build.project_version_id == ProjectVersion.id) & (Build.type == ProjectVersion.type))
        .where(ProjectVersion.type == server_type)
        .group_by(ProjectVersion.id)
    )
    rows = (await db.execute(summary)).all()
    latest_builds = await _get_builds([row.latest for row in rows], db)

    version_ids = [row.version_id for row in rows]
    ordered = sorted(rows, key=lambda row: project_version_sort_key(row.version_id))
    return {
        row.version_id: VersionListing(
            type=MinecraftVersionType.RELEASE,
            supported=is_latest_project_version(row.version_id, version_ids),
            java=DEFAULT_JAVA_VERSION,
            created=row.created,
            builds=row.builds,
            latest=BuildView.model_validate(latest_builds[row.latest]),
        )
        for row in ordered
    }


async def list_minecraft_version_listings(server_type: ServerType, db: AsyncSession) -> dict[str, VersionListing]:
    summary = (
        select(
            MinecraftVersion,
            func.count(Build.id).label("builds"),
            func.max(Build.id).label("latest"),
        )
        .join(Build, (Build.version_id == MinecraftVersion.id) & (Build.type == server_type))
        .group_by(MinecraftVersion.id)
        .order_by(MinecraftVersion.created.asc())
    )
    rows = (await db.execute(summary)).all()
    latest_builds = await _get_builds([row.latest for row in rows], db)

    return {
        row.MinecraftVersion.id: VersionListing(
            type=row.MinecraftVersion.type,
            supported=row.MinecraftVersion.supported,
            java=row.MinecraftVersion.java,
            created=row.MinecraftVersion.created,
            builds=row.builds,
            latest=BuildView.model_validate(latest_builds[row.latest]),
        )
        for row in rows
    }


async def list_version_listings(server_type: ServerType, db: AsyncSession) -> dict[str, VersionListing]:
    if server_type.uses_project_versions:
        return await list_project_version_listings(server_type, db)
    return await list_minecraft_version_listings(server_type, db)


async def _get_builds(build_ids: list[int], db: AsyncSession) -> dict[int, Build]:
    if not build_ids:
        return {}
    result = await db.execute(select(Build).where(Build.id.in_(build_ids)))
    return {build.id: build for build in result.scalars().all()}
