import re
from enum import Enum
from typing import Optional

HEX_PATTERN = re.compile(r"^[a-f0-9]+$")


class HashAlgorithm(str, Enum):
    MD5 = "md5"
    SHA1 = "sha1"
    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"

    @staticmethod
    def from_length(length: int) -> Optional["HashAlgorithm"]:
        return ALGORITHMS_BY_LENGTH.get(length)

    @staticmethod
    def detect(value: str) -> Optional["HashAlgorithm"]:
        """
        Algorithm for a hex digest, chosen purely by its length.
        Returns None when the length is unknown or the value is not lowercase hex.
        """
        algorithm = HashAlgorithm.from_length(len(value))
        if algorithm is None or HEX_PATTERN.fullmatch(value) is None:
            return None
        return algorithm


HASH_LENGTHS: dict[HashAlgorithm, int] = {
    HashAlgorithm.MD5: 32,
    HashAlgorithm.SHA1: 40,
    HashAlgorithm.SHA224: 56,
    HashAlgorithm.SHA256: 64,
    HashAlgorithm.SHA384: 96,
    HashAlgorithm.SHA512: 128,
}

ALGORITHMS_BY_LENGTH: dict[int, HashAlgorithm] = {length: algorithm for algorithm, length in HASH_LENGTHS.items()}
