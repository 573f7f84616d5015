from .mongo import setup_mongo, set_db, get_mongo, get_db, clear

__all__ = [
    "setup_mongo",
    "set_db",
    "get_mongo",
    "get_db",
    "clear",
]
