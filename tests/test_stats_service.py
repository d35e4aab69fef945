from datetime import datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from mcjars.enums import ServerType, VersionLocation
from mcjars.services.stats_service import get_type_stats, get_family_stats, get_version_stats, get_global_stats, \
    get_type_history, get_version_history, validate_history_month, month_range
from tests.conftest import CatalogFactory


@pytest.mark.asyncio
async def test_paper_jar_sizes_are_deduplicated(catalog: CatalogFactory, db: AsyncSession):
    await catalog.minecraft_version("1.21")
    await catalog.build(ServerType.PAPER, version_id="1.21", jar_size=500, zip_size=10)
    await catalog.build(ServerType.PAPER, version_id="1.21", jar_size=500, zip_size=10)

    stats = await get_type_stats(ServerType.PAPER, db)

    assert stats.builds == 2
    assert stats.size.total.jar == 500
    assert stats.size.total.zip == 20
    assert stats.size.average.jar == 500


@pytest.mark.asyncio
async def test_fabric_jar_sizes_are_not_deduplicated(catalog: CatalogFactory, db: AsyncSession):
    await catalog.minecraft_version("1.21")
    await catalog.build(ServerType.FABRIC, version_id="1.21", jar_size=500)
    await catalog.build(ServerType.FABRIC, version_id="1.21", jar_size=500)

    stats = await get_type_stats(ServerType.FABRIC, db)

    assert stats.size.total.jar == 1000

    family = await get_family_stats(ServerType.FABRIC, "1.21", VersionLocation.MINECRAFT, db)
    assert family.size.total.jar == 1000


@pytest.mark.asyncio
async def test_version_stats_always_deduplicate(catalog: CatalogFactory, db: AsyncSession):
    await catalog.minecraft_version("1.21")
    await catalog.build(ServerType.FABRIC, version_id="1.21", jar_size=500)
    await catalog.build(ServerType.FABRIC, version_id="1.21", jar_size=500)
    await catalog.build(ServerType.PAPER, version_id="1.21", jar_size=700)

    stats = await get_version_stats("1.21", db)

    assert stats.builds == 3
    assert stats.size.total.jar == 1200


@pytest.mark.asyncio
async def test_empty_stats(db: AsyncSession):
    stats = await get_type_stats(ServerType.LEAVES, db)

    assert stats.builds == 0
    assert stats.size.total.jar == 0
    assert stats.size.average.zip == 0


@pytest.mark.asyncio
async def test_global_stats(catalog: CatalogFactory, db: AsyncSession):
    await catalog.build(ServerType.VANILLA, jar_size=100)
    await catalog.build(ServerType.VANILLA, jar_size=100, with_hash=False)
    await catalog.build(ServerType.PAPER, jar_size=300, zip_size=50)

    stats = await get_global_stats(db)

    assert stats.builds == 3
    assert stats.hashes == 2
    assert stats.total.jar == 400
    assert stats.total.zip == 50


@pytest.mark.asyncio
async def test_type_history_covers_every_day(catalog: CatalogFactory, db: AsyncSession):
    await catalog.build(ServerType.PAPER, created=datetime(2024, 2, 3, 8, 0), jar_size=10)
    await catalog.build(ServerType.PAPER, created=datetime(2024, 2, 3, 20, 0), jar_size=20)
    await catalog.build(ServerType.PAPER, created=datetime(2024, 2, 29, 23, 59), jar_size=30)
    await catalog.build(ServerType.PAPER, created=datetime(2024, 3, 1, 0, 0), jar_size=40)

    days = await get_type_history(ServerType.PAPER, 2024, 2, db)

    assert len(days) == 29
    assert [day.day for day in days] == list(range(1, 30))
    assert days[2].builds == 2
    assert days[2].size.total.jar == 30
    assert days[28].builds == 1
    assert sum(day.builds for day in days) == 3


@pytest.mark.asyncio
async def test_version_history_spans_every_type(catalog: CatalogFactory, db: AsyncSession):
    await catalog.minecraft_version("1.21")
    await catalog.minecraft_version("1.20.6")
    await catalog.build(ServerType.PAPER, version_id="1.21", created=datetime(2024, 6, 10, 8, 0), jar_size=50)
    await catalog.build(ServerType.FABRIC, version_id="1.21", created=datetime(2024, 6, 10, 9, 0), jar_size=50)
    await catalog.build(ServerType.PURPUR, version_id="1.21", created=datetime(2024, 6, 30, 23, 0), jar_size=70)
    await catalog.build(ServerType.PAPER, version_id="1.20.6", created=datetime(2024, 6, 10, 8, 0), jar_size=90)

    days = await get_version_history("1.21", 2024, 6, db)

    assert len(days) == 30
    assert days[9].builds == 2
    assert days[9].size.total.jar == 50
    assert days[29].builds == 1
    assert sum(day.builds for day in days) == 3


def test_validate_history_month():
    assert validate_history_month(2023, 5) == "Invalid year"
    assert validate_history_month(datetime.now().year + 1, 1) == "Invalid year"
    assert validate_history_month(2024, 0) == "Invalid month"
    assert validate_history_month(2024, 13) == "Invalid month"
    assert validate_history_month(2024, 12) is None


def test_month_range_wraps_year():
    assert month_range(2024, 12) == (datetime(2024, 12, 1), datetime(2025, 1, 1))
    assert month_range(2025, 2) == (datetime(2025, 2, 1), datetime(2025, 3, 1))
