from .env_utils import configure_env
from .logging import setup_logging, get_log_file_path

__all__ = [
    "configure_env",
    "setup_logging",
    "get_log_file_path",
]
