from mcjars.db.base import Base
