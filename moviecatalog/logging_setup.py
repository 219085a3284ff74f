import logging
from typing import Optional

from moviecatalog.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """Configure console logging at `level`, or at CATALOG_LOG_LEVEL when none is given."""
    level_name = (level or get_settings().log_level).upper()
    level_value = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(level=level_value, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    # uvicorn's access log follows the catalog level
    logging.getLogger("uvicorn.access").setLevel(level_value)
