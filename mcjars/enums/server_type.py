from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional

Category = Literal["modded", "plugins", "proxy"]
Compatibility = Literal[
    "spigot", "paper", "folia", "purpur",
    "fabric", "forge", "neoforge", "bungeecord",
    "velocity", "quilt", "sponge",
]


class ServerType(str, Enum):
    VANILLA = "VANILLA"
    PAPER = "PAPER"
    PUFFERFISH = "PUFFERFISH"
    SPIGOT = "SPIGOT"
    FOLIA = "FOLIA"
    PURPUR = "PURPUR"
    WATERFALL = "WATERFALL"
    VELOCITY = "VELOCITY"
    FABRIC = "FABRIC"
    BUNGEECORD = "BUNGEECORD"
    QUILT = "QUILT"
    FORGE = "FORGE"
    NEOFORGE = "NEOFORGE"
    MOHIST = "MOHIST"
    ARCLIGHT = "ARCLIGHT"
    SPONGE = "SPONGE"
    LEAVES = "LEAVES"
    CANVAS = "CANVAS"

    @property
    def info(self) -> "ServerTypeInfo":
        return SERVER_TYPE_INFOS[self]

    @property
    def uses_project_versions(self) -> bool:
        """Builds of these types are keyed by a project version instead of a Minecraft version."""
        return self in PROJECT_VERSION_TYPES

    @staticmethod
    def parse(value: str) -> Optional["ServerType"]:
        try:
            return ServerType(value.strip().upper())
        except ValueError:
            return None


@dataclass(frozen=True)
class ServerTypeInfo:
    name: str
    color: str
    homepage: str
    deprecated: bool
    experimental: bool
    description: str
    categories: list[Category] = field(default_factory=list)
    compatibility: list[Compatibility] = field(default_factory=list)


PROJECT_VERSION_TYPES = frozenset({ServerType.VELOCITY})

SERVER_TYPE_INFOS: dict[ServerType, ServerTypeInfo] = {
    ServerType.VANILLA: ServerTypeInfo(
        name="Vanilla",
        color="#3A8F2E",
        homepage="https://minecraft.net/en-us/download/server",
        deprecated=False,
        experimental=False,
        description="The official Minecraft server software.",
    ),
    ServerType.PAPER: ServerTypeInfo(
        name="Paper",
        color="#444444",
        homepage="https://papermc.io/software/paper",
        deprecated=False,
        experimental=False,
        description="A high performance fork of the Spigot Minecraft Server.",
        categories=["plugins"],
        compatibility=["spigot", "paper"],
    ),
    ServerType.PUFFERFISH: ServerTypeInfo(
        name="Pufferfish",
        color="#FFA647",
        homepage="https://pufferfish.host/downloads",
        deprecated=False,
        experimental=False,
        description="A fork of Paper that aims to be even more performant.",
        categories=["plugins"],
        compatibility=["spigot", "paper"],
    ),
    ServerType.SPIGOT: ServerTypeInfo(
        name="Spigot",
        color="#F7CF0D",
        homepage="https://www.spigotmc.org",
        deprecated=False,
        experimental=False,
        description="A high performance fork of the Bukkit Minecraft Server.",
        categories=["plugins"],
        compatibility=["spigot"],
    ),
    ServerType.FOLIA: ServerTypeInfo(
        name="Folia",
        color="#3C8C3C",
        homepage="https://papermc.io/software/folia",
        deprecated=False,
        experimental=True,
        description="A fork of Paper that uses regional multithreading for high player counts.",
        categories=["plugins"],
        compatibility=["folia"],
    ),
    ServerType.PURPUR: ServerTypeInfo(
        name="Purpur",
        color="#9E49D3",
        homepage="https://purpurmc.org",
        deprecated=False,
        experimental=False,
        description="A fork of Paper that aims to be more feature rich, adding patches from pufferfish too.",
        categories=["plugins"],
        compatibility=["spigot", "paper", "purpur"],
    ),
    ServerType.WATERFALL: ServerTypeInfo(
        name="Waterfall",
        color="#1E90FF",
        homepage="https://papermc.io/software/waterfall",
        deprecated=True,
        experimental=False,
        description="A fork of BungeeCord that aims to be more performant.",
        categories=["plugins", "proxy"],
        compatibility=["bungeecord"],
    ),
    ServerType.VELOCITY: ServerTypeInfo(
        name="Velocity",
        color="#1BBAE0",
        homepage="https://papermc.io/software/velocity",
        deprecated=False,
        experimental=False,
        description="A modern, high performance, extensible proxy server alternative for waterfall.",
        categories=["plugins", "proxy"],
        compatibility=["velocity"],
    ),
    ServerType.FABRIC: ServerTypeInfo(
        name="Fabric",
        color="#DBD0B4",
        homepage="https://fabricmc.net",
        deprecated=False,
        experimental=False,
        description="A lightweight and modular Minecraft server software.",
        categories=["modded"],
        compatibility=["fabric"],
    ),
    ServerType.BUNGEECORD: ServerTypeInfo(
        name="BungeeCord",
        color="#E8A317",
        homepage="https://www.spigotmc.org/wiki/bungeecord-installation",
        deprecated=False,
        experimental=False,
        description="A proxy server software for Minecraft.",
        categories=["plugins", "proxy"],
        compatibility=["bungeecord"],
    ),
    ServerType.QUILT: ServerTypeInfo(
        name="Quilt",
        color="#9722FF",
        homepage="https://quiltmc.org",
        deprecated=False,
        experimental=True,
        description="A fork of Fabric that aims to be more feature rich and have easier apis.",
        categories=["modded"],
        compatibility=["fabric", "quilt"],
    ),
    ServerType.FORGE: ServerTypeInfo(
        name="Forge",
        color="#DFA86A",
        homepage="https://files.minecraftforge.net/net/minecraftforge/forge",
        deprecated=False,
        experimental=False,
        description="The original Minecraft modding platform.",
        categories=["modded"],
        compatibility=["forge"],
    ),
    ServerType.NEOFORGE: ServerTypeInfo(
        name="NeoForge",
        color="#D7742F",
        homepage="https://neoforged.net",
        deprecated=False,
        experimental=False,
        description="A cousin of Forge that aims to be more performant and have better modding apis.",
        categories=["modded"],
        compatibility=["forge", "neoforge"],
    ),
    ServerType.MOHIST: ServerTypeInfo(
        name="Mohist",
        color="#2C73D2",
        homepage="https://mohistmc.com/software/mohist",
        deprecated=False,
        experimental=False,
        description="A variation of forge/neoforge that allows loading spigot plugins next to mods.",
        categories=["modded", "plugins"],
        compatibility=["forge", "spigot", "paper"],
    ),
    ServerType.ARCLIGHT: ServerTypeInfo(
        name="Arclight",
        color="#F4FDE5",
        homepage="https://github.com/IzzelAliz/Arclight",
        deprecated=False,
        experimental=False,
        description="A Bukkit server implementation utilizing Mixins for modding support.",
        categories=["modded", "plugins"],
        compatibility=["fabric", "spigot", "forge", "neoforge"],
    ),
    ServerType.SPONGE: ServerTypeInfo(
        name="Sponge",
        color="#F7CF0D",
        homepage="https://www.spongepowered.org",
        deprecated=False,
        experimental=False,
        description="A modding platform for Minecraft.",
        categories=["modded"],
        compatibility=["sponge"],
    ),
    ServerType.LEAVES: ServerTypeInfo(
        name="Leaves",
        color="#65A30D",
        homepage="https://leavesmc.org/software/leaves",
        deprecated=False,
        experimental=False,
        description="A fork of paper that aims to restore vanilla behavior and add new features.",
        categories=["plugins"],
        compatibility=["spigot", "paper"],
    ),
    ServerType.CANVAS: ServerTypeInfo(
        name="Canvas",
        color="#2E6BE6",
        homepage="https://canvasmc.io",
        deprecated=False,
        experimental=True,
        description="A fork of Folia that aims to squeeze even more performance out of regionized ticking.",
        categories=["plugins"],
        compatibility=["folia"],
    ),
}
