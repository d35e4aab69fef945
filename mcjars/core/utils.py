from litestar.exceptions import ValidationException
from pydantic import ValidationError

from mcjars.enums import ServerType


def parse_fields(fields: str | None) -> set[str]:
    """Comma separated field allowlist, empty when not given."""
    if not fields:
        return set()
    return {field.strip() for field in fields.split(",") if field.strip()}


def pick_fields(data: dict, fields: set[str]) -> dict:
    if not fields:
        return data
    return {key: value for key, value in data.items() if key in fields}


def parse_server_type(value: str) -> ServerType:
    server_type = ServerType.parse(value)
    if server_type is None:
        raise ValidationException("Invalid type")
    return server_type


def format_validation_errors(error: ValidationError) -> list[str]:
    messages = []
    for detail in error.errors(include_url=False):
        location = ".".join(str(part) for part in detail["loc"])
        messages.append(f"{location}: {detail['msg']}" if location else detail["msg"])
    return messages


def project_resolution(resolution: dict, fields: set[str]) -> dict:
    """Applies the field allowlist to both builds of a resolution."""
    return {
        "build": pick_fields(resolution["build"], fields),
        "latest": pick_fields(resolution["latest"], fields),
        "version": resolution["version"],
    }
