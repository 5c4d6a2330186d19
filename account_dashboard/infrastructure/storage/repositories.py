"""Data access layer for accounts, CAMs and weekly reviews"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import ValidationError

from account_dashboard.domain.models import CAM, Account, WeeklyReview
from account_dashboard.infrastructure.storage.gateway import PersistenceGateway, StorageKey
from account_dashboard.infrastructure.storage.records import (
    AccountRecord,
    CAMRecord,
    StoredRecord,
    WeeklyReviewRecord,
)
from account_dashboard.utils.date_utils import utcnow

Clock = Callable[[], datetime]


class CollectionRepository:
    """
    Whole-collection reads and writes of one record type under one key.

    Stored entries that fail validation are skipped on read but kept as-is
    on every write, so one bad record never takes the others with it.
    """

    key: str
    record_type: Type[StoredRecord]

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    def _entries(self) -> List[Any]:
        """Raw stored entries; [] when nothing (or no list) is stored"""
        raw = self.gateway.read(self.key, [])
        if not isinstance(raw, list):
            logging.error(f"Stored {self.key} is not a list, ignoring it")
            return []
        return raw

    def _validate(self, entry: Any) -> Optional[StoredRecord]:
        try:
            return self.record_type.model_validate(entry)
        except ValidationError as e:
            logging.error(f"Skipping stored {self.key} entry that does not match the expected shape: {e}")
            return None

    def _index_of(self, entries: List[Any], item_id: str) -> Optional[int]:
        return next(
            (i for i, e in enumerate(entries) if isinstance(e, dict) and e.get("id") == item_id),
            None,
        )

    def _to_json(self, item: Any) -> Dict[str, Any]:
        return self.record_type.from_domain(item).to_json()

    def _put(self, item_id: str, item: Any) -> None:
        """Replace the entry with item_id in place, or append it"""
        entries = self._entries()
        index = self._index_of(entries, item_id)
        if index is not None:
            entries[index] = self._to_json(item)
        else:
            entries.append(self._to_json(item))
        self.gateway.write(self.key, entries)

    def is_empty(self) -> bool:
        """True when no entries are stored at all, valid or not"""
        return not self._entries()

    def list_all(self) -> list:
        """Every stored item that passes validation, in stored order"""
        records = (self._validate(entry) for entry in self._entries())
        return [record.to_domain() for record in records if record is not None]

    def replace_all(self, items: list) -> None:
        """Commit the whole collection in a single write"""
        self.gateway.write(self.key, [self._to_json(i) for i in items])


class AccountRepository(CollectionRepository):
    """
    Repository for accounts.

    Lookups are linear scans over the stored list; every mutation rewrites
    the whole collection.
    """

    key = StorageKey.ACCOUNTS
    record_type = AccountRecord

    def __init__(self, gateway: PersistenceGateway, clock: Clock = utcnow):
        super().__init__(gateway)
        self.clock = clock

    def get_by_id(self, account_id: str) -> Optional[Account]:
        return next((a for a in self.list_all() if a.id == account_id), None)

    def upsert(self, account: Account) -> Account:
        """
        Insert or replace by id.

        Existing accounts keep their list position and get a fresh updated_at;
        new accounts are appended with created_at and updated_at set to now.
        """
        now = self.clock()
        if self._index_of(self._entries(), account.id) is not None:
            stored = replace(account, updated_at=now)
        else:
            stored = replace(account, created_at=now, updated_at=now)
        self._put(account.id, stored)
        return stored

    def remove(self, account_id: str) -> bool:
        """Drop an account; returns False when the id was not stored"""
        entries = self._entries()
        index = self._index_of(entries, account_id)
        if index is None:
            return False
        del entries[index]
        self.gateway.write(self.key, entries)
        return True


class CAMRepository(CollectionRepository):
    """Repository for collections account managers"""

    key = StorageKey.CAMS
    record_type = CAMRecord

    def list_all(self) -> List[CAM]:
        return super().list_all()


class WeeklyReviewRepository(CollectionRepository):
    """Repository for weekly rollups (write-mostly ledger)"""

    key = StorageKey.WEEKLY_REVIEWS
    record_type = WeeklyReviewRecord

    def save(self, review: WeeklyReview) -> WeeklyReview:
        """Insert or replace by id, keeping list position"""
        self._put(review.id, review)
        return review

    def list_for_account(self, account_id: str) -> List[WeeklyReview]:
        return [r for r in self.list_all() if r.account_id == account_id]
