from mcjars.models.minecraft_version import MinecraftVersion
from mcjars.models.project_version import ProjectVersion
from mcjars.models.build import Build, BuildHash
