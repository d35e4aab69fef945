import logging

logger = logging.getLogger("mcjars")

from mcjars.db.session import get_db_session
