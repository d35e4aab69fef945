from enum import Enum


class VersionLocation(str, Enum):
    """Which catalog table a version string was found in for a given server type."""
    MINECRAFT = "minecraft"
    PROJECT = "project"
    NONE = "none"
