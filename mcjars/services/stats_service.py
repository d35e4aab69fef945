import calendar
from datetime import datetime

from sqlalchemy import select, func, distinct, extract, ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from mcjars.enums import ServerType, VersionLocation
from mcjars.models import Build, BuildHash
from mcjars.schemas import SizeSummary, SizeStats, BuildStats, DailyBuildStats, GlobalStats
from mcjars.services.build_store import family_column

FIRST_HISTORY_YEAR = 2024


def jar_size_total(server_type: ServerType | None):
    """
    Jar sizes are summed over distinct values, so a jar shared by several builds counts once.
    Fabric jar sizes are summed without deduplication.
    """
    if server_type == ServerType.FABRIC:
        return func.sum(Build.jar_size)
    return func.sum(distinct(Build.jar_size))


def _size_columns(server_type: ServerType | None) -> list:
    return [
        func.count(Build.id).label("builds"),
        jar_size_total(server_type).label("total_jar"),
        func.sum(Build.zip_size).label("total_zip"),
        func.avg(Build.jar_size).label("average_jar"),
        func.avg(Build.zip_size).label("average_zip"),
    ]


def _to_stats(row) -> BuildStats:
    return BuildStats(
        builds=row.builds or 0,
        size=SizeStats(
            total=SizeSummary(jar=float(row.total_jar or 0), zip=float(row.total_zip or 0)),
            average=SizeSummary(jar=float(row.average_jar or 0), zip=float(row.average_zip or 0)),
        ),
    )


async def _aggregate(server_type: ServerType | None, predicates: list[ColumnElement[bool]],
                     db: AsyncSession) -> BuildStats:
    result = await db.execute(select(*_size_columns(server_type)).where(*predicates))
    return _to_stats(result.one())


async def get_type_stats(server_type: ServerType, db: AsyncSession) -> BuildStats:
    return await _aggregate(server_type, [Build.type == server_type], db)


async def get_family_stats(server_type: ServerType, version: str, location: VersionLocation,
                           db: AsyncSession) -> BuildStats:
    return await _aggregate(server_type, [Build.type == server_type, family_column(location) == version], db)


async def get_version_stats(version: str, db: AsyncSession) -> BuildStats:
    # Spans every type, so jar sizes are always deduplicated
    return await _aggregate(None, [Build.version_id == version], db)


async def get_global_stats(db: AsyncSession) -> GlobalStats:
    hashes = await db.scalar(select(func.count(BuildHash.id)))
    result = await db.execute(
        select(
            func.count(Build.id).label("builds"),
            jar_size_total(None).label("total_jar"),
            func.sum(Build.zip_size).label("total_zip"),
        )
    )
    row = result.one()

    return GlobalStats(
        builds=row.builds or 0,
        hashes=hashes or 0,
        total=SizeSummary(jar=float(row.total_jar or 0), zip=float(row.total_zip or 0)),
    )


def validate_history_month(year: int, month: int) -> str | None:
    """Returns an error message when the year/month pair is outside the recorded history."""
    if year < FIRST_HISTORY_YEAR or year > datetime.now().year:
        return "Invalid year"
    if month < 1 or month > 12:
        return "Invalid month"
    return None


def month_range(year: int, month: int) -> tuple[datetime, datetime]:
    start = datetime(year, month, 1)
    if month == 12:
        return start, datetime(year + 1, 1, 1)
    return start, datetime(year, month + 1, 1)


async def _history(server_type: ServerType | None, predicates: list[ColumnElement[bool]], year: int, month: int,
                   db: AsyncSession) -> list[DailyBuildStats]:
    start, end = month_range(year, month)
    day = extract("day", Build.created).label("day")

    predicates = [*predicates, Build.created >= start, Build.created < end]
    if server_type is not None:
        predicates.append(Build.type == server_type)

    result = await db.execute(select(day, *_size_columns(server_type)).where(*predicates).group_by(day))
    by_day = {int(row.day): _to_stats(row) for row in result.all()}

    empty = BuildStats(builds=0, size=SizeStats(total=SizeSummary(0, 0), average=SizeSummary(0, 0)))
    days = calendar.monthrange(year, month)[1]
    return [
        DailyBuildStats(day=number, builds=by_day.get(number, empty).builds, size=by_day.get(number, empty).size)
        for number in range(1, days + 1)
    ]


async def get_type_history(server_type: ServerType, year: int, month: int, db: AsyncSession,
                           version: str | None = None,
                           location: VersionLocation = VersionLocation.NONE) -> list[DailyBuildStats]:
    """
    Per-day build statistics of a type for one calendar month, optionally narrowed to a family.
    Every day of the month is present, days without builds report zeros.
    """
    predicates = []
    if version is not None:
        predicates.append(family_column(location) == version)
    return await _history(server_type, predicates, year, month, db)


async def get_version_history(version: str, year: int, month: int, db: AsyncSession) -> list[DailyBuildStats]:
    """Per-day build statistics of every type for one Minecraft version."""
    return await _history(None, [Build.version_id == version], year, month, db)
