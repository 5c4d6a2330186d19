"""Whole-dataset backup export and restore"""

import json
import logging
from datetime import datetime

from pydantic import ValidationError

from account_dashboard.infrastructure.observability.logging import log_import
from account_dashboard.infrastructure.observability.metrics import record_import
from account_dashboard.infrastructure.storage.gateway import PersistenceGateway, StorageKey
from account_dashboard.infrastructure.storage.records import BackupDocument
from account_dashboard.infrastructure.storage.repositories import Clock
from account_dashboard.utils.date_utils import utcnow


def backup_filename(now: datetime) -> str:
    """account-dashboard-backup-<YYYY-MM-DD>.json for the export date"""
    return f"account-dashboard-backup-{now.date().isoformat()}.json"


class BackupCodec:
    """Exports every stored collection as one JSON document and restores it"""

    def __init__(self, gateway: PersistenceGateway, clock: Clock = utcnow):
        self.gateway = gateway
        self.clock = clock

    def export_data(self) -> str:
        """Pretty-printed {accounts, cams, weeklyReviews, exportedAt} document"""
        data = {
            "accounts": self.gateway.read(StorageKey.ACCOUNTS, []),
            "cams": self.gateway.read(StorageKey.CAMS, []),
            "weeklyReviews": self.gateway.read(StorageKey.WEEKLY_REVIEWS, []),
            "exportedAt": self.clock().isoformat(),
        }
        return json.dumps(data, indent=2)

    def import_data(self, text: str) -> bool:
        """
        Restore collections from an exported document.

        Requirements:
        - Malformed JSON or invalid collections -> False, nothing written
        - Each present collection is written independently; absent ones stay untouched
        - Unknown top-level keys are ignored
        - Never raises
        """
        try:
            document = BackupDocument.model_validate(json.loads(text))
        except (ValueError, TypeError, RecursionError, ValidationError) as e:
            logging.error(f"Error importing data: {e}")
            record_import(False)
            log_import(False, [])
            return False

        collections = []
        if document.accounts is not None:
            self.gateway.write(StorageKey.ACCOUNTS, [a.to_json() for a in document.accounts])
            collections.append(StorageKey.ACCOUNTS)
        if document.cams is not None:
            self.gateway.write(StorageKey.CAMS, [c.to_json() for c in document.cams])
            collections.append(StorageKey.CAMS)
        if document.weekly_reviews is not None:
            self.gateway.write(
                StorageKey.WEEKLY_REVIEWS, [r.to_json() for r in document.weekly_reviews]
            )
            collections.append(StorageKey.WEEKLY_REVIEWS)

        record_import(True)
        log_import(True, collections)
        return True
