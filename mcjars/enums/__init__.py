from mcjars.enums.server_type import ServerType, ServerTypeInfo, SERVER_TYPE_INFOS
from mcjars.enums.minecraft_version import MinecraftVersionType
from mcjars.enums.version_location import VersionLocation
from mcjars.enums.lookup_status import LookupStatus
from mcjars.enums.hash_algorithm import HashAlgorithm
from mcjars.enums.build_filter_field import BuildFilterField, HashFilterField
