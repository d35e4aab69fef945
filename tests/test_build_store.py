import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession

from mcjars.enums import ServerType, VersionLocation
from mcjars.models import Build, BuildHash
from mcjars.schemas import BuildSearch
from mcjars.services.build_store import get_build_by_id, get_build_by_hash, classify_version_location, \
    list_builds_for_family, get_family_build, fetch_candidate_family, search_build, count_builds_per_type
from tests.conftest import CatalogFactory, digests_for


def test_hashes_are_linked_by_column_only():
    assert not inspect(Build).relationships
    assert not inspect(BuildHash).relationships
    assert inspect(BuildHash).columns["build_id"].foreign_keys


@pytest.mark.asyncio
@pytest.mark.parametrize("build_id", [0, -5, 2147483647, 2**40])
async def test_out_of_range_ids_return_nothing(db: AsyncSession, build_id: int):
    assert await get_build_by_id(build_id, db) is None


@pytest.mark.asyncio
async def test_get_build_by_hash_every_algorithm(catalog: CatalogFactory, db: AsyncSession):
    build = await catalog.build(ServerType.PAPER, version_id=None, project_version_id=None)

    for digest in digests_for(build.id).values():
        found = await get_build_by_hash(digest, db)
        assert found is not None and found.id == build.id


@pytest.mark.asyncio
async def test_get_build_by_hash_rejects_bad_input(catalog: CatalogFactory, db: AsyncSession):
    build = await catalog.build(ServerType.PAPER)
    digest = digests_for(build.id)["sha256"]

    assert await get_build_by_hash(digest[:-1], db) is None
    assert await get_build_by_hash(digest.upper(), db) is None


@pytest.mark.asyncio
async def test_minecraft_version_wins_over_project_version(catalog: CatalogFactory, db: AsyncSession):
    await catalog.minecraft_version("1.21")
    await catalog.project_version(ServerType.VELOCITY, "1.21")
    await catalog.project_version(ServerType.VELOCITY, "3.4.0")

    assert await classify_version_location("1.21", ServerType.VELOCITY, db) == VersionLocation.MINECRAFT
    assert await classify_version_location("3.4.0", ServerType.VELOCITY, db) == VersionLocation.PROJECT
    assert await classify_version_location("3.4.0", ServerType.PAPER, db) == VersionLocation.NONE
    assert await classify_version_location("9.9.9", ServerType.PAPER, db) == VersionLocation.NONE


@pytest.mark.asyncio
async def test_family_builds_are_newest_first(catalog: CatalogFactory, db: AsyncSession):
    await catalog.minecraft_version("1.21")
    for build_number in (1, 2, 3):
        await catalog.build(ServerType.PAPER, version_id="1.21", build_number=build_number)

    builds = await list_builds_for_family(ServerType.PAPER, "1.21", VersionLocation.MINECRAFT, db)

    assert [build.build_number for build in builds] == [3, 2, 1]
    assert await list_builds_for_family(ServerType.PAPER, "1.21", VersionLocation.NONE, db) == []


@pytest.mark.asyncio
async def test_get_family_build(catalog: CatalogFactory, db: AsyncSession):
    await catalog.minecraft_version("1.21")
    for build_number in (10, 11, 12):
        await catalog.build(ServerType.PURPUR, version_id="1.21", build_number=build_number)

    latest = await get_family_build(ServerType.PURPUR, "1.21", VersionLocation.MINECRAFT, None, db)
    pinned = await get_family_build(ServerType.PURPUR, "1.21", VersionLocation.MINECRAFT, 11, db)
    missing = await get_family_build(ServerType.PURPUR, "1.21", VersionLocation.MINECRAFT, 99, db)

    assert latest.build_number == 12
    assert pinned.build_number == 11
    assert missing is None


@pytest.mark.asyncio
async def test_candidate_family_uses_coalesced_key(catalog: CatalogFactory, db: AsyncSession):
    await catalog.minecraft_version("1.21")
    by_version = await catalog.build(ServerType.SPONGE, version_id="1.21")
    by_project = await catalog.build(ServerType.SPONGE, project_version_id="1.21")
    await catalog.build(ServerType.SPONGE, version_id=None, project_version_id="12.0.0")
    await catalog.build(ServerType.PAPER, version_id="1.21")

    candidates = await fetch_candidate_family(ServerType.SPONGE, "1.21", db)

    assert [build.id for build in candidates] == [by_project.id, by_version.id]


@pytest.mark.asyncio
async def test_search_build_filters(catalog: CatalogFactory, db: AsyncSession):
    await catalog.minecraft_version("1.21")
    first = await catalog.build(ServerType.PAPER, version_id="1.21", build_number=1, jar_size=100)
    second = await catalog.build(ServerType.PAPER, version_id="1.21", build_number=2, jar_size=100)
    experimental = await catalog.build(ServerType.PAPER, version_id="1.21", build_number=3, experimental=True)

    assert (await search_build(BuildSearch(type=ServerType.PAPER, build_number=1), db)).id == first.id
    assert (await search_build(BuildSearch(jar_size=100), db)).id == second.id
    assert (await search_build(BuildSearch(experimental=True), db)).id == experimental.id
    assert await search_build(BuildSearch(type=ServerType.FOLIA), db) is None


@pytest.mark.asyncio
async def test_search_build_explicit_null(catalog: CatalogFactory, db: AsyncSession):
    await catalog.minecraft_version("1.21")
    with_zip = await catalog.build(ServerType.FORGE, version_id="1.21", zip_size=2048)
    without_zip = await catalog.build(ServerType.FORGE, version_id="1.21", zip_size=None)

    search = BuildSearch.model_validate({"type": "forge", "zipSize": None})
    assert (await search_build(search, db)).id == without_zip.id

    search = BuildSearch.model_validate({"type": "forge", "zipSize": 2048})
    assert (await search_build(search, db)).id == with_zip.id


@pytest.mark.asyncio
async def test_search_build_by_hash(catalog: CatalogFactory, db: AsyncSession):
    build = await catalog.build(ServerType.QUILT)
    await catalog.build(ServerType.QUILT)
    digests = digests_for(build.id)

    search = BuildSearch.model_validate({"hash": {"sha1": digests["sha1"], "md5": digests["md5"]}})
    assert (await search_build(search, db)).id == build.id

    search = BuildSearch.model_validate({"hash": {"sha1": digests["sha1"], "md5": "0" * 32}})
    assert await search_build(search, db) is None


@pytest.mark.asyncio
async def test_count_builds_per_type(catalog: CatalogFactory, db: AsyncSession):
    await catalog.minecraft_version("1.21")
    await catalog.build(ServerType.PAPER, version_id="1.21")
    await catalog.build(ServerType.PAPER, version_id="1.21")
    await catalog.build(ServerType.FABRIC, version_id="1.21")

    counts = await count_builds_per_type("1.21", db)

    assert counts[ServerType.PAPER] == 2
    assert counts[ServerType.FABRIC] == 1
    assert counts[ServerType.VANILLA] == 0
    assert set(counts) == set(ServerType)
