"""
The integrity-enforcing store: one Collection per entity over a shared engine.

Transactions are serialized by a store-wide lock whose wait is bounded by
settings.lock_timeout_seconds; database failures surface as StoreError
subclasses, never as raw SQLAlchemy exceptions.
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from estore.core.config import Settings, get_settings
from estore.core.errors import StoreError, TimeoutViolation
from estore.db.errors import translate_db_error
from estore.db.session import build_engine, build_session_factory, get_db, init_schema
from estore.entities import ENTITIES
from estore.services.collection import Collection

logger = logging.getLogger(__name__)


class Store:
    """Owns every entity collection and applies invariants on each mutation."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        engine: Optional[Engine] = None,
        create_schema: bool = True,
    ):
        self.settings = settings or get_settings()
        self.engine = engine or build_engine(self.settings)
        self._session_factory = build_session_factory(self.engine)
        self._lock = threading.RLock() if self.settings.serialize_transactions else None
        if create_schema:
            init_schema(self.engine)

        self.collections: dict[str, Collection] = {}
        for entity in ENTITIES.values():
            collection = Collection(self, entity)
            self.collections[entity.name] = collection
            setattr(self, entity.collection, collection)

    def collection(self, name: str) -> Collection:
        """Look up a collection by entity name ("Order") or collection name ("orders")."""
        if name in self.collections:
            return self.collections[name]
        for collection in self.collections.values():
            if collection.entity.collection == name:
                return collection
        raise KeyError(name)

    @contextmanager
    def transaction(self, entity: Optional[str] = None) -> Generator[Session, None, None]:
        """One atomic unit of work; errors are logged and re-raised as StoreError."""
        if self._lock is not None and not self._lock.acquire(timeout=self.settings.lock_timeout_seconds):
            logger.warning("Store lock wait exceeded %.3fs (%s)", self.settings.lock_timeout_seconds, entity)
            raise TimeoutViolation(
                f"Store lock not acquired within {self.settings.lock_timeout_seconds}s", entity
            )
        try:
            with get_db(self._session_factory) as db:
                yield db
        except StoreError as exc:
            logger.warning("%s rejected: %s", exc.kind, exc.message)
            raise
        except SQLAlchemyError as exc:
            error = translate_db_error(exc, entity)
            logger.warning("%s rejected at commit: %s", error.kind, error.message)
            raise error from exc
        finally:
            if self._lock is not None:
                self._lock.release()

    def dispose(self) -> None:
        self.engine.dispose()
