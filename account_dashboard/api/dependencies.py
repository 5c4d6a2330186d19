"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends

from account_dashboard.config import settings
from account_dashboard.infrastructure.storage.backup import BackupCodec
from account_dashboard.infrastructure.storage.gateway import PersistenceGateway
from account_dashboard.infrastructure.storage.repositories import (
    AccountRepository,
    CAMRepository,
    Clock,
    WeeklyReviewRepository,
)
from account_dashboard.infrastructure.storage.session import init_storage
from account_dashboard.services.review_service import DecisionReviewService
from account_dashboard.utils.date_utils import utcnow


def get_clock() -> Clock:
    """Source of "now" for repositories and views"""
    return utcnow


def get_gateway() -> PersistenceGateway:
    """Provide the storage gateway bound to the configured backend"""
    return PersistenceGateway(init_storage(), settings.storage_namespace)


def get_account_repository(
    gateway: PersistenceGateway = Depends(get_gateway),
    clock: Clock = Depends(get_clock),
) -> AccountRepository:
    return AccountRepository(gateway, clock)


def get_cam_repository(gateway: PersistenceGateway = Depends(get_gateway)) -> CAMRepository:
    return CAMRepository(gateway)


def get_weekly_review_repository(
    gateway: PersistenceGateway = Depends(get_gateway),
) -> WeeklyReviewRepository:
    return WeeklyReviewRepository(gateway)


def get_review_service(
    accounts: AccountRepository = Depends(get_account_repository),
) -> DecisionReviewService:
    return DecisionReviewService(accounts, reviewer=settings.reviewer_name)


def get_backup_codec(
    gateway: PersistenceGateway = Depends(get_gateway),
    clock: Clock = Depends(get_clock),
) -> BackupCodec:
    return BackupCodec(gateway, clock)
