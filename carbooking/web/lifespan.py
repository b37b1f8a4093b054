from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from loguru import logger

from carbooking.db.session_factory import create_engine, create_tables, get_db_session_factory
from carbooking.settings import StorageBackend, settings
from carbooking.storage import InMemoryStore, SQLStore, Storage, StorageKeys


async def _setup_storage(app: FastAPI) -> None:
    """
    Creates the key-value store selected in settings.

    For the SQL backend this creates the engine and the table and keeps
    the engine on the application state so it can be disposed. With
    ``reset_storage`` set, every stored key is dropped first.

    :param app: fastAPI application.
    """
    keys = StorageKeys(prefix=settings.storage_key_prefix)
    app.state.db_engine = None
    if settings.storage_backend == StorageBackend.SQL:
        engine = create_engine()
        await create_tables(engine)
        app.state.db_engine = engine
        store = SQLStore(get_db_session_factory(engine))
    else:
        store = InMemoryStore()
    storage = Storage(store, keys)
    if settings.reset_storage:
        await storage.clear()
        logger.warning("Storage reset: all stored keys removed")
    app.state.storage = storage
    logger.info("Storage ready: backend={}", settings.storage_backend.value)


@asynccontextmanager
async def lifespan_setup(
    app: FastAPI,
) -> AsyncGenerator[None, None]:  # pragma: no cover
    """
    Actions to run on application startup.

    This function uses fastAPI app to store data
    in the state, such as the storage.

    :param app: the fastAPI application.
    :return: function that actually performs actions.
    """
    await _setup_storage(app)

    yield
    if app.state.db_engine is not None:
        await app.state.db_engine.dispose()
