"""
Build resolution and "latest in family" matching.

A build's family is every build of the same server type sharing its
COALESCE(version_id, project_version_id) key. Arclight publishes several
mutually incompatible loader variants for one Minecraft version, so its
families are further narrowed to builds sharing the loader suffix of the
project version ("1.20.1-fabric", "1.20.1-forge", "1.20.1-neoforge").
"""
import asyncio
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from mcjars import logger
from mcjars.enums import ServerType, HashAlgorithm, LookupStatus, MinecraftVersionType
from mcjars.models import Build
from mcjars.schemas import BuildSearch, BuildView, FamilyVersion
from mcjars.services.build_store import get_build_by_id, get_build_by_hash, get_minecraft_version, \
    list_project_version_ids, fetch_candidate_family, search_build, MAX_BUILD_ID
from mcjars.services.version_service import is_latest_project_version, DEFAULT_JAVA_VERSION

LOADER_SUFFIXES = ("fabric", "forge", "neoforge")

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


@dataclass(frozen=True)
class BuildToken:
    build_id: int | None = None
    digest: str | None = None
    algorithm: HashAlgorithm | None = None


@dataclass
class BuildResolution:
    build: Build
    latest: Build
    version: FamilyVersion

    def to_dict(self) -> dict:
        return {
            "build": BuildView.model_validate(self.build).to_dict(),
            "latest": BuildView.model_validate(self.latest).to_dict(),
            "version": self.version.to_dict(),
        }


@dataclass
class BuildLookup:
    status: LookupStatus
    resolution: BuildResolution | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "error": self.error,
            "resolution": self.resolution.to_dict() if self.resolution is not None else None,
        }


def parse_build_token(token: str) -> BuildToken | None:
    """
    Disambiguate a path token: a lowercase hex string of a known digest length is a
    hash, a positive decimal integer is a build id, anything else is invalid.
    """
    token = token.strip().lower()

    algorithm = HashAlgorithm.detect(token)
    if algorithm is not None:
        return BuildToken(digest=token, algorithm=algorithm)

    if token.isascii() and token.isdigit():
        build_id = int(token)
        if 0 < build_id < MAX_BUILD_ID:
            return BuildToken(build_id=build_id)

    return None


def loader_suffix(project_version_id: str | None) -> str | None:
    if not project_version_id or "-" not in project_version_id:
        return None
    suffix = project_version_id.rsplit("-", 1)[1]
    return suffix if suffix in LOADER_SUFFIXES else None


def in_same_family(build: Build, candidate: Build) -> bool:
    if candidate.id == build.id:
        return True
    if candidate.type != build.type or candidate.family_key != build.family_key:
        return False
    if build.type != ServerType.ARCLIGHT:
        return True

    suffix = loader_suffix(build.project_version_id)
    # A build without a recognizable loader suffix keeps the whole candidate family
    return suffix is None or loader_suffix(candidate.project_version_id) == suffix


def filter_family(build: Build, candidates: list[Build]) -> list[Build]:
    family = [candidate for candidate in candidates if in_same_family(build, candidate)]
    if all(member.id != build.id for member in family):
        family.append(build)
    return family


async def describe_family(latest: Build, family: list[Build], db: AsyncSession) -> FamilyVersion:
    key = latest.family_key
    if key is None:
        return FamilyVersion(id=None, builds=len(family))

    if latest.version_id is not None:
        minecraft_version = await get_minecraft_version(latest.version_id, db)
        if minecraft_version is not None:
            return FamilyVersion(
                id=key,
                type=minecraft_version.type,
                java=minecraft_version.java,
                supported=minecraft_version.supported,
                created=minecraft_version.created,
                builds=len(family),
            )

    project_versions = await list_project_version_ids(latest.type, db)
    if key not in project_versions:
        return FamilyVersion(id=key, builds=len(family))

    created = [member.created for member in family if member.created is not None]
    return FamilyVersion(
        id=key,
        type=MinecraftVersionType.RELEASE,
        java=DEFAULT_JAVA_VERSION,
        supported=is_latest_project_version(key, project_versions),
        created=min(created, default=None),
        builds=len(family),
    )


async def resolve_family(build: Build, db: AsyncSession) -> BuildResolution:
    candidates = []
    if build.family_key is not None:
        candidates = await fetch_candidate_family(build.type, build.family_key, db)

    family = filter_family(build, candidates)
    latest = max(family, key=lambda member: member.id)
    version = await describe_family(latest, family, db)

    return BuildResolution(build=build, latest=latest, version=version)


async def _resolve(build: Build | None, db: AsyncSession) -> BuildLookup:
    if build is None:
        return BuildLookup(LookupStatus.NOT_FOUND)

    resolution = await resolve_family(build, db)
    logger.debug(f"Resolved build {build.id}, latest in family is {resolution.latest.id}")
    return BuildLookup(LookupStatus.FOUND, resolution)


async def find_build(token: str, db: AsyncSession) -> Build | None:
    parsed = parse_build_token(token)
    if parsed is None:
        return None
    if parsed.digest is not None:
        return await get_build_by_hash(parsed.digest, db)
    return await get_build_by_id(parsed.build_id, db)


async def lookup_build(token: str, db: AsyncSession) -> BuildLookup:
    if parse_build_token(token) is None:
        return BuildLookup(LookupStatus.INVALID, error="Invalid build identifier")
    return await _resolve(await find_build(token, db), db)


async def lookup_build_search(search: BuildSearch, db: AsyncSession) -> BuildLookup:
    return await _resolve(await search_build(search, db), db)


async def lookup_build_searches(searches: list[BuildSearch], session_factory: SessionFactory) -> list[BuildResolution | None]:
    """
    Resolve every search independently and concurrently, one session each.
    The result at index ``i`` belongs to ``searches[i]``; unresolved searches yield None.
    """
    async def resolve_one(search: BuildSearch) -> BuildResolution | None:
        async with session_factory() as session:
            lookup = await lookup_build_search(search, session)
        return lookup.resolution

    return list(await asyncio.gather(*(resolve_one(search) for search in searches)))
