from enum import Enum


class BuildFilterField(str, Enum):
    """Build columns a structured search may filter on; values are model attribute names."""
    ID = "id"
    TYPE = "type"
    VERSION_ID = "version_id"
    PROJECT_VERSION_ID = "project_version_id"
    BUILD_NUMBER = "build_number"
    EXPERIMENTAL = "experimental"
    JAR_URL = "jar_url"
    JAR_SIZE = "jar_size"
    ZIP_URL = "zip_url"
    ZIP_SIZE = "zip_size"


class HashFilterField(str, Enum):
    PRIMARY = "primary"
    SHA1 = "sha1"
    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    MD5 = "md5"
