from flask import current_app

from .base import Storage
from .memory import InMemoryStorage

EXTENSION_KEY = "pageflow.storage"


def init_storage(app, storage: Storage | None = None) -> Storage:
    if storage is None:
        if app.config.get("PAGEFLOW_STORAGE") == "memory":
            storage = InMemoryStorage()
        else:
            from .database import SQLAlchemyStorage
            storage = SQLAlchemyStorage()

    app.extensions[EXTENSION_KEY] = storage
    return storage


def get_storage() -> Storage:
    return current_app.extensions[EXTENSION_KEY]


__all__ = ["Storage", "InMemoryStorage", "init_storage", "get_storage"]
