import logging
import os

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)


def load_env_file(override: bool = False) -> str:
    """
    Load the nearest .env up from the working directory into os.environ.

    Variables already set in the environment win unless override=True.
    Returns the path that was loaded, or "" when there is none.
    """
    path = find_dotenv(usecwd=True)
    if path:
        load_dotenv(dotenv_path=path, override=override)
        logger.debug(f"Loaded environment from {path}")
    return path


def env_flag(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}
