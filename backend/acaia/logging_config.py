"""
Logging setup
"""
import logging

from acaia.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None) -> None:
    """Configure the root logger once for the whole process"""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
    # SQL echo is controlled by SQL_ECHO on the engine
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
