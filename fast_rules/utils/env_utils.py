import logging
import os
from typing import Optional

from dotenv import load_dotenv


def configure_env(env_file_name: Optional[str] = None) -> None:
    """
    Load environment variables (Mongo connection, cache and logging switches).

    Args:
        env_file_name: Optional environment file name. If None, tries `.env.<ENV>` and then `.env`.
    """
    if env_file_name is not None:
        load_dotenv(env_file_name, override=True)
        return

    environment = os.getenv("ENV", "debug")

    for env_file in [f".env.{environment}", ".env"]:
        if load_dotenv(env_file, override=True):
            logging.debug(f"Loaded {env_file} file successfully")
            break
    else:
        logging.debug("No env file found, using process environment only")
