from enum import Enum

class MinecraftVersionType(str, Enum):
    RELEASE = "RELEASE"
    SNAPSHOT = "SNAPSHOT"
