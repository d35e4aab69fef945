from datetime import datetime

from pydantic import BaseModel, ConfigDict

from mcjars.enums import MinecraftVersionType
from mcjars.schemas.build import BuildView


class FamilyVersion(BaseModel):
    """Summary of the version a build family belongs to. Unknown metadata is left out."""
    id: str | None
    type: MinecraftVersionType | None = None
    java: int | None = None
    supported: bool | None = None
    created: datetime | None = None
    builds: int

    def to_dict(self) -> dict:
        return {"id": self.id, **self.model_dump(mode="json", exclude={"id"}, exclude_none=True)}


class MinecraftVersionView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: MinecraftVersionType
    supported: bool
    java: int
    created: datetime

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")


class VersionListing(BaseModel):
    type: MinecraftVersionType
    supported: bool
    java: int
    created: datetime | None
    builds: int
    latest: BuildView

    def to_dict(self) -> dict:
        data = self.model_dump(mode="json", exclude={"latest"})
        data["latest"] = self.latest.to_dict()
        return data
