from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, StringConstraints, \
    field_validator, model_validator
from pydantic.alias_generators import to_camel

from mcjars.enums import ServerType

HEX_DIGEST = r"^[a-f0-9]+$"
MAX_BATCH_SIZE = 10

VersionString = Annotated[str, StringConstraints(max_length=31)]
ColumnInt = Annotated[StrictInt, Field(ge=-2**31, le=2**31 - 1)]


def _digest(length: int):
    return Annotated[str, StringConstraints(min_length=length, max_length=length, pattern=HEX_DIGEST)]


class HashSearch(BaseModel):
    primary: Optional[StrictBool] = None
    sha1: Optional[_digest(40)] = None
    sha224: Optional[_digest(56)] = None
    sha256: Optional[_digest(64)] = None
    sha384: Optional[_digest(96)] = None
    sha512: Optional[_digest(128)] = None
    md5: Optional[_digest(32)] = None

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value

    @model_validator(mode="after")
    def require_filter(self) -> "HashSearch":
        if not self.model_fields_set:
            raise ValueError("at least one hash field is required")
        return self


class BuildSearch(BaseModel):
    """
    Structured build filter. Every field that is present is ANDed as an equality filter;
    an explicit null on a nullable column matches rows where that column IS NULL.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[ColumnInt] = None
    type: Optional[ServerType] = None
    version_id: Optional[VersionString] = None
    project_version_id: Optional[VersionString] = None
    build_number: Optional[ColumnInt] = None
    experimental: Optional[StrictBool] = None
    hash: Optional[HashSearch] = None
    jar_url: Optional[StrictStr] = None
    jar_size: Optional[ColumnInt] = None
    zip_url: Optional[StrictStr] = None
    zip_size: Optional[ColumnInt] = None

    @field_validator("id", "type", "build_number", "experimental", "hash", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def require_filter(self) -> "BuildSearch":
        if not self.model_fields_set:
            raise ValueError("at least one filter is required")
        return self

    def cache_key(self) -> str:
        return self.model_dump_json(exclude_unset=True)


BuildSearchBatch = Annotated[list[BuildSearch], Field(min_length=1, max_length=MAX_BATCH_SIZE)]
