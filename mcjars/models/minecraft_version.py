from datetime import datetime

from sqlalchemy import String, Enum, Boolean, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from mcjars.db import Base
from mcjars.enums import MinecraftVersionType


class MinecraftVersion(Base):
    __tablename__ = "minecraft_versions"

    id: Mapped[str] = mapped_column(String(31), primary_key=True)
    type: Mapped[MinecraftVersionType] = mapped_column(Enum(MinecraftVersionType), index=True)
    supported: Mapped[bool] = mapped_column(Boolean)
    java: Mapped[int] = mapped_column(Integer, default=21, index=True)
    created: Mapped[datetime] = mapped_column(DateTime)
