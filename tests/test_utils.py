import pytest
from litestar.exceptions import ValidationException
from pydantic import ValidationError

from mcjars.core.utils import parse_fields, pick_fields, parse_server_type, format_validation_errors
from mcjars.enums import ServerType
from mcjars.schemas import BuildSearch


def test_parse_fields():
    assert parse_fields(None) == set()
    assert parse_fields("") == set()
    assert parse_fields("id, buildNumber,,id") == {"id", "buildNumber"}


def test_pick_fields():
    data = {"id": 1, "type": "PAPER", "changes": []}

    assert pick_fields(data, set()) == data
    assert pick_fields(data, {"id", "missing"}) == {"id": 1}


def test_parse_server_type():
    assert parse_server_type(" neoforge ") == ServerType.NEOFORGE

    with pytest.raises(ValidationException) as error:
        parse_server_type("bukkit")
    assert error.value.detail == "Invalid type"


def test_format_validation_errors():
    with pytest.raises(ValidationError) as error:
        BuildSearch.model_validate({"hash": {"md5": "abc"}})

    messages = format_validation_errors(error.value)
    assert len(messages) == 1
    assert messages[0].startswith("hash.md5: ")
