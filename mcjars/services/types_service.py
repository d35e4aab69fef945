from dataclasses import asdict

from sqlalchemy import select, func, distinct
from sqlalchemy.ext.asyncio import AsyncSession

from mcjars.core import settings
from mcjars.enums import ServerType
from mcjars.models import Build


def type_icon(server_type: ServerType) -> str:
    return f"{settings.S3_URL}/icons/{server_type.value.lower()}.png"


async def list_types(db: AsyncSession) -> dict[str, dict]:
    """Static metadata of every server type, merged with its build and version counts."""
    result = await db.execute(
        select(
            Build.type,
            func.count(distinct(Build.id)).label("builds"),
            func.count(distinct(Build.version_id)).label("minecraft_versions"),
            func.count(distinct(Build.project_version_id)).label("project_versions"),
        )
        .group_by(Build.type)
    )
    counts = {row.type: row for row in result.all()}

    types = {}
    for server_type in ServerType:
        row = counts.get(server_type)
        types[server_type.value] = {
            **asdict(server_type.info),
            "icon": type_icon(server_type),
            "builds": row.builds if row else 0,
            "versions": {
                "minecraft": row.minecraft_versions if row else 0,
                "project": row.project_versions if row else 0,
            },
        }
    return types
