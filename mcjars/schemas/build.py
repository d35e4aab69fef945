from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from mcjars.enums import ServerType


class DownloadStep(BaseModel):
    type: Literal["download"] = "download"
    file: str
    url: str
    size: int


class UnzipStep(BaseModel):
    type: Literal["unzip"] = "unzip"
    file: str
    location: str


class RemoveStep(BaseModel):
    type: Literal["remove"] = "remove"
    location: str


InstallStep = Annotated[Union[DownloadStep, UnzipStep, RemoveStep], Field(discriminator="type")]
Installation = TypeAdapter(list[list[InstallStep]])


class BuildView(BaseModel):
    """Public projection of a build, serialized with camelCase keys."""
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    type: ServerType
    version_id: str | None
    project_version_id: str | None
    build_number: int
    experimental: bool

    jar_url: str | None
    jar_size: int | None
    jar_location: str | None
    zip_url: str | None
    zip_size: int | None

    installation: list[list[InstallStep]]
    changes: list[str]
    created: datetime | None

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
