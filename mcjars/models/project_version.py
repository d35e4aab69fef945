from sqlalchemy import String, Enum
from sqlalchemy.orm import Mapped, mapped_column

from mcjars.db import Base
from mcjars.enums import ServerType


class ProjectVersion(Base):
    __tablename__ = "project_versions"

    type: Mapped[ServerType] = mapped_column(Enum(ServerType), primary_key=True, index=True)
    id: Mapped[str] = mapped_column(String(31), primary_key=True)
