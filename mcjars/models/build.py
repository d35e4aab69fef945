from datetime import datetime

from sqlalchemy import String, Enum, Boolean, Integer, DateTime, JSON, ForeignKey, ForeignKeyConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from mcjars.db import Base
from mcjars.enums import ServerType


class Build(Base):
    __tablename__ = "builds"
    __table_args__ = (
        ForeignKeyConstraint(
            ["type", "project_version_id"],
            ["project_versions.type", "project_versions.id"],
            ondelete="CASCADE",
        ),
        Index("builds_type_version_idx", "type", "version_id"),
        Index("builds_type_project_version_idx", "type", "project_version_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[ServerType] = mapped_column(Enum(ServerType), index=True)
    version_id: Mapped[str | None] = mapped_column(String(31), ForeignKey("minecraft_versions.id", ondelete="CASCADE"), index=True)
    project_version_id: Mapped[str | None] = mapped_column(String(31))
    experimental: Mapped[bool] = mapped_column(Boolean, default=False)

    build_number: Mapped[int] = mapped_column(Integer)
    jar_url: Mapped[str | None] = mapped_column(String(255))
    jar_size: Mapped[int | None] = mapped_column(Integer)
    jar_location: Mapped[str | None] = mapped_column(String(51))
    zip_url: Mapped[str | None] = mapped_column(String(255))
    zip_size: Mapped[int | None] = mapped_column(Integer)

    # Groups run one after another, the steps inside a group may run concurrently
    installation: Mapped[list[list[dict]]] = mapped_column(JSON, default=list)
    changes: Mapped[list[str]] = mapped_column(JSON, default=list)
    created: Mapped[datetime | None] = mapped_column(DateTime)

    @property
    def family_key(self) -> str | None:
        return self.version_id if self.version_id is not None else self.project_version_id


class BuildHash(Base):
    __tablename__ = "build_hashes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    build_id: Mapped[int] = mapped_column(Integer, ForeignKey("builds.id", ondelete="CASCADE"), index=True)
    primary: Mapped[bool] = mapped_column(Boolean, default=True)

    sha1: Mapped[str] = mapped_column(String(40), index=True)
    sha224: Mapped[str] = mapped_column(String(56), index=True)
    sha256: Mapped[str] = mapped_column(String(64), index=True)
    sha384: Mapped[str] = mapped_column(String(96), index=True)
    sha512: Mapped[str] = mapped_column(String(128), index=True)
    md5: Mapped[str] = mapped_column(String(32), index=True)
