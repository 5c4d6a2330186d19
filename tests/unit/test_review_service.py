"""Unit tests for the decision workflow service and first-run seeding"""

from datetime import date

import pytest

from account_dashboard.domain.exceptions import (
    AccountNotFoundError,
    DecisionNotFoundError,
    InvalidDecisionError,
)
from account_dashboard.domain.models import (
    DecisionCategory,
    DecisionDraft,
    ReviewStatus,
    StaticContext,
)
from account_dashboard.infrastructure.storage.gateway import PersistenceGateway, StorageKey
from account_dashboard.infrastructure.storage.repositories import AccountRepository, CAMRepository
from account_dashboard.infrastructure.storage.seed import (
    SAMPLE_ACCOUNTS,
    SAMPLE_CAMS,
    initialize_sample_data,
)
from account_dashboard.services.review_service import DecisionReviewService


@pytest.fixture
def service(account_repo: AccountRepository, sample_accounts) -> DecisionReviewService:
    account_repo.replace_all(sample_accounts)
    return DecisionReviewService(account_repo, reviewer="Team Lead")


def test_review_is_persisted(service: DecisionReviewService, account_repo: AccountRepository, now):
    reviewed = service.review("acc-3", "dec-3-1", ReviewStatus.FAIL, "Escalate sooner")

    stored = account_repo.get_by_id("acc-3")
    assert stored.decisions[0] == reviewed
    assert stored.decisions[0].reviewed_by == "Team Lead"
    assert stored.decisions[0].review_notes == "Escalate sooner"
    assert stored.updated_at == now


def test_review_unknown_targets_save_nothing(service, account_repo, sample_accounts):
    with pytest.raises(AccountNotFoundError):
        service.review("nope", "dec-1-1", ReviewStatus.PASS)
    with pytest.raises(DecisionNotFoundError):
        service.review("acc-1", "nope", ReviewStatus.PASS)

    assert account_repo.list_all() == sample_accounts


def test_record_decision_prepends(service, account_repo):
    draft = DecisionDraft(
        date=date(2024, 12, 11),
        category=DecisionCategory.SPECIAL_ARRANGEMENT,
        title="Net 15",
        description="Shorten terms from net 30",
        rationale="Repeated late payments",
    )

    decision = service.record_decision("acc-2", draft)

    stored = account_repo.get_by_id("acc-2")
    assert [d.id for d in stored.decisions] == [decision.id, "dec-2-1"]
    assert stored.decisions[0].review_status is None


def test_record_decision_rejects_blank_fields(service, account_repo, sample_accounts):
    draft = DecisionDraft(
        date=date(2024, 12, 11),
        category=DecisionCategory.ACTION_PLAN,
        title="Call AP",
        description=" ",
        rationale="Late",
    )

    with pytest.raises(InvalidDecisionError):
        service.record_decision("acc-1", draft)
    assert account_repo.list_all() == sample_accounts


def test_update_static_context(service, account_repo):
    context = StaticContext(background="Regional chain", key_contacts="AP: Jane")

    service.update_static_context("acc-4", context)

    assert account_repo.get_by_id("acc-4").static_context == context


def test_seed_runs_once(gateway: PersistenceGateway):
    accounts, cams = AccountRepository(gateway), CAMRepository(gateway)

    assert initialize_sample_data(accounts, cams) is True
    assert initialize_sample_data(accounts, cams) is False
    assert len(accounts.list_all()) == len(SAMPLE_ACCOUNTS)
    assert len(cams.list_all()) == len(SAMPLE_CAMS)


def test_seed_skipped_without_backend():
    gateway = PersistenceGateway(None)

    assert initialize_sample_data(AccountRepository(gateway), CAMRepository(gateway)) is False


def test_seed_leaves_unreadable_accounts_alone(gateway: PersistenceGateway):
    gateway.write(StorageKey.ACCOUNTS, [{"id": "legacy", "arBalance": -5}])

    assert initialize_sample_data(AccountRepository(gateway), CAMRepository(gateway)) is False
    assert gateway.read(StorageKey.ACCOUNTS, []) == [{"id": "legacy", "arBalance": -5}]


def test_review_keeps_other_stored_entries(service, gateway):
    raw = gateway.read(StorageKey.ACCOUNTS, [])
    raw[3]["arBalance"] = -1
    gateway.write(StorageKey.ACCOUNTS, raw)

    service.review("acc-1", "dec-1-1", ReviewStatus.PASS)

    stored = gateway.read(StorageKey.ACCOUNTS, [])
    assert [e["id"] for e in stored] == ["acc-1", "acc-2", "acc-3", "acc-4"]
    assert stored[3] == raw[3]
    assert stored[0]["decisions"][0]["reviewStatus"] == "pass"
