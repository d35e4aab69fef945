import pytest

from mcjars.enums import HashAlgorithm
from mcjars.services.build_resolver import parse_build_token, loader_suffix


@pytest.mark.parametrize(
    "length, algorithm",
    [
        (32, HashAlgorithm.MD5),
        (40, HashAlgorithm.SHA1),
        (56, HashAlgorithm.SHA224),
        (64, HashAlgorithm.SHA256),
        (96, HashAlgorithm.SHA384),
        (128, HashAlgorithm.SHA512),
    ],
)
def test_hash_length_dispatch(length: int, algorithm: HashAlgorithm):
    token = parse_build_token("a" * length)
    assert token.algorithm == algorithm
    assert token.digest == "a" * length
    assert token.build_id is None


@pytest.mark.parametrize("length", [31, 33, 48, 63, 65, 127, 129])
def test_unknown_lengths_are_not_hashes(length: int):
    assert HashAlgorithm.detect("a" * length) is None
    assert parse_build_token("a" * length) is None


def test_hash_token_is_normalized():
    token = parse_build_token("  " + "ABCDEF12" * 8 + "\n")
    assert token.algorithm == HashAlgorithm.SHA256
    assert token.digest == "abcdef12" * 8


def test_non_hex_hash_is_invalid():
    assert parse_build_token("g" * 64) is None
    assert parse_build_token("z" * 32) is None


def test_numeric_token_is_build_id():
    assert parse_build_token("500").build_id == 500
    assert parse_build_token("2147483646").build_id == 2147483646


@pytest.mark.parametrize("value", ["0", "-1", "2147483647", "99999999999", "1.5", "", "latest", "١٢"])
def test_invalid_build_ids(value: str):
    assert parse_build_token(value) is None


def test_numeric_string_of_hash_length_is_a_hash():
    token = parse_build_token("1" * 32)
    assert token.algorithm == HashAlgorithm.MD5
    assert token.build_id is None


@pytest.mark.parametrize(
    "project_version, suffix",
    [
        ("1.20.1-fabric", "fabric"),
        ("1.20.1-forge", "forge"),
        ("1.20.1-neoforge", "neoforge"),
        ("1.20.1-quilt", None),
        ("1.20.1", None),
        (None, None),
        ("", None),
    ],
)
def test_loader_suffix(project_version, suffix):
    assert loader_suffix(project_version) == suffix
