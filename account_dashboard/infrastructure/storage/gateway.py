"""Namespaced JSON key-value store with safe degradation to defaults"""

import json
import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from account_dashboard.infrastructure.observability.metrics import storage_error_counter
from account_dashboard.infrastructure.storage.models import KeyValueEntry


class StorageKey:
    """Stable collection key names"""

    ACCOUNTS = "accounts"
    CAMS = "cams"
    WEEKLY_REVIEWS = "weeklyReviews"

    ALL = (ACCOUNTS, CAMS, WEEKLY_REVIEWS)


class PersistenceGateway:
    """
    Reads and writes JSON values under namespaced keys.

    Never raises to callers:
    - No session factory (no backend) -> reads return the default, writes are dropped
    - Missing or non-JSON stored value -> default
    - Backend or serialization errors -> logged, default / dropped write
    """

    def __init__(self, session_factory: Optional[sessionmaker], namespace: str = "accountDash"):
        self.session_factory = session_factory
        self.namespace = namespace

    @property
    def available(self) -> bool:
        return self.session_factory is not None

    def storage_key(self, key: str) -> str:
        return f"{self.namespace}_{key}"

    def read(self, key: str, default: Any) -> Any:
        if not self.available:
            return default

        full_key = self.storage_key(key)
        try:
            with self.session_factory() as session:
                entry = session.get(KeyValueEntry, full_key)
                raw = entry.value if entry is not None else None
        except SQLAlchemyError as e:
            storage_error_counter.labels(operation="read").inc()
            logging.error(f"Error reading {full_key} from storage: {e}")
            return default

        if not raw:
            return default
        try:
            return json.loads(raw)
        except ValueError as e:
            storage_error_counter.labels(operation="read").inc()
            logging.error(f"Corrupt value stored under {full_key}: {e}")
            return default

    def write(self, key: str, value: Any) -> None:
        if not self.available:
            return

        full_key = self.storage_key(key)
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            storage_error_counter.labels(operation="write").inc()
            logging.error(f"Error serializing {full_key}: {e}")
            return

        try:
            with self.session_factory() as session:
                entry = session.get(KeyValueEntry, full_key)
                if entry is None:
                    session.add(KeyValueEntry(key=full_key, value=payload))
                else:
                    entry.value = payload
                session.commit()
        except SQLAlchemyError as e:
            storage_error_counter.labels(operation="write").inc()
            logging.error(f"Error writing {full_key} to storage: {e}")

    def remove(self, key: str) -> None:
        if not self.available:
            return

        full_key = self.storage_key(key)
        try:
            with self.session_factory() as session:
                entry = session.get(KeyValueEntry, full_key)
                if entry is not None:
                    session.delete(entry)
                    session.commit()
        except SQLAlchemyError as e:
            storage_error_counter.labels(operation="remove").inc()
            logging.error(f"Error removing {full_key} from storage: {e}")

    def clear(self) -> None:
        """Remove every collection in this namespace"""
        for key in StorageKey.ALL:
            self.remove(key)
