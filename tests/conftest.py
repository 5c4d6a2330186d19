"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime, timezone
from typing import Optional
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from account_dashboard.api.dependencies import get_clock, get_gateway
from account_dashboard.api.main import create_app
from account_dashboard.domain.models import (
    Account,
    AccountStatus,
    Decision,
    DecisionCategory,
    HealthFactors,
    HealthScore,
    RiskLevel,
)
from account_dashboard.infrastructure.storage.gateway import PersistenceGateway
from account_dashboard.infrastructure.storage.repositories import AccountRepository
from account_dashboard.infrastructure.storage.session import build_session_factory

# Wednesday; the current week runs Mon 2024-12-09 .. Sun 2024-12-15
FIXED_NOW = datetime(2024, 12, 11, 10, 0, tzinfo=timezone.utc)


def _make_decision(
    id: str,
    day: date,
    category: DecisionCategory = DecisionCategory.ACTION_PLAN,
    **overrides,
) -> Decision:
    fields = dict(
        id=id,
        date=day,
        category=category,
        title=f"Decision {id}",
        description="Call the AP contact",
        rationale="Payment is late",
    )
    fields.update(overrides)
    return Decision(**fields)


def _make_score(score: int, day: date) -> HealthScore:
    return HealthScore(
        score=score,
        date=day,
        factors=HealthFactors(
            payment_behavior=score,
            communication_quality=score,
            risk_level=score,
            trend_direction=score,
        ),
    )


def _make_account(
    id: str,
    name: Optional[str] = None,
    risk_level: RiskLevel = RiskLevel.MEDIUM,
    ar_balance: float = 1000,
    **overrides,
) -> Account:
    fields = dict(
        id=id,
        name=name or f"Account {id}",
        ar_balance=ar_balance,
        days_past_due=0,
        status=AccountStatus.ACTIVE,
        risk_level=risk_level,
        cam_owner="Sarah Johnson",
    )
    fields.update(overrides)
    return Account(**fields)


@pytest.fixture
def make_account():
    return _make_account


@pytest.fixture
def make_decision():
    return _make_decision


@pytest.fixture
def make_score():
    return _make_score


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def session_factory(tmp_path) -> sessionmaker:
    """Fresh SQLite file per test"""
    return build_session_factory(f"sqlite:///{tmp_path / 'test.db'}")


@pytest.fixture
def gateway(session_factory: sessionmaker) -> PersistenceGateway:
    return PersistenceGateway(session_factory, namespace="test")


@pytest.fixture
def account_repo(gateway: PersistenceGateway) -> AccountRepository:
    return AccountRepository(gateway, clock=lambda: FIXED_NOW)


@pytest.fixture
def sample_accounts() -> list[Account]:
    """Portfolio spread across risk levels, owners and decision recency"""
    return [
        _make_account(
            "acc-1",
            name="Sunrise Healthcare Group",
            risk_level=RiskLevel.HIGH,
            ar_balance=255000,
            days_past_due=45,
            decisions=(
                _make_decision("dec-1-1", date(2024, 12, 9), DecisionCategory.RISK_URGENCY),
                _make_decision("dec-1-2", date(2024, 12, 2)),
            ),
            health_scores=(
                _make_score(45, date(2024, 12, 9)),
                _make_score(55, date(2024, 12, 2)),
            ),
        ),
        _make_account(
            "acc-2",
            name="Meadowbrook Senior Living",
            risk_level=RiskLevel.LOW,
            ar_balance=42000,
            days_past_due=15,
            cam_owner="Mike Chen",
            decisions=(_make_decision("dec-2-1", date(2024, 11, 20)),),
            health_scores=(_make_score(88, date(2024, 12, 9)),),
        ),
        _make_account(
            "acc-3",
            name="Metro Hospital Network",
            risk_level=RiskLevel.CRITICAL,
            ar_balance=575000,
            days_past_due=90,
            status=AccountStatus.COLLECTIONS,
            decisions=(_make_decision("dec-3-1", date(2024, 12, 5), DecisionCategory.STATUS),),
            health_scores=(
                _make_score(22, date(2024, 12, 2)),
                _make_score(15, date(2024, 12, 9)),
            ),
        ),
        _make_account(
            "acc-4",
            name="Valley Care Associates",
            risk_level=RiskLevel.MEDIUM,
            ar_balance=43000,
            days_past_due=22,
            status=AccountStatus.PAYMENT_PLAN,
            cam_owner="Emily Rodriguez",
        ),
    ]


@pytest.fixture
def client(gateway: PersistenceGateway) -> TestClient:
    """Create FastAPI test client with test storage and a fixed clock"""
    app = create_app()
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)
    return TestClient(app)
