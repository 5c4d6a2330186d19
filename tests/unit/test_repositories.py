"""Unit tests for collection repositories"""

from datetime import date

from account_dashboard.domain.models import CAM, WeeklyReview
from account_dashboard.infrastructure.storage.gateway import StorageKey
from account_dashboard.infrastructure.storage.repositories import (
    AccountRepository,
    CAMRepository,
    WeeklyReviewRepository,
)


def test_empty_store_lists_nothing(account_repo: AccountRepository):
    assert account_repo.list_all() == []
    assert account_repo.get_by_id("acc-1") is None


def test_replace_all_round_trips_domain_objects(account_repo: AccountRepository, sample_accounts):
    account_repo.replace_all(sample_accounts)

    assert account_repo.list_all() == sample_accounts


def test_stored_json_is_camel_case_without_absent_optionals(account_repo, gateway, make_account):
    account_repo.replace_all([make_account("a")])

    stored = gateway.read(StorageKey.ACCOUNTS, [])[0]

    assert stored["arBalance"] == 1000
    assert stored["camOwner"] == "Sarah Johnson"
    assert stored["staticContext"]["paymentPatterns"] == ""
    assert "parentId" not in stored
    assert "facilities" not in stored


def test_upsert_new_account_stamps_both_timestamps(account_repo: AccountRepository, make_account, now):
    stored = account_repo.upsert(make_account("a"))

    assert stored.created_at == now
    assert stored.updated_at == now
    assert account_repo.get_by_id("a") == stored


def test_upsert_existing_keeps_position_and_refreshes_updated_at(
    account_repo: AccountRepository, sample_accounts, now
):
    account_repo.replace_all(sample_accounts)
    changed = sample_accounts[1].touched(None)

    account_repo.upsert(changed)

    stored = account_repo.list_all()
    assert [a.id for a in stored] == ["acc-1", "acc-2", "acc-3", "acc-4"]
    assert stored[1].updated_at == now


def test_remove(account_repo: AccountRepository, sample_accounts):
    account_repo.replace_all(sample_accounts)

    assert account_repo.remove("acc-2") is True
    assert account_repo.remove("acc-2") is False
    assert [a.id for a in account_repo.list_all()] == ["acc-1", "acc-3", "acc-4"]


def test_invalid_stored_shape_reads_as_empty(account_repo: AccountRepository, gateway):
    gateway.write(StorageKey.ACCOUNTS, [{"id": "broken"}])

    assert account_repo.list_all() == []
    assert account_repo.is_empty() is False


def _store_with_one_invalid(account_repo, gateway, sample_accounts) -> list:
    """Sample accounts where acc-2 carries an out-of-range health score"""
    account_repo.replace_all(sample_accounts)
    raw = gateway.read(StorageKey.ACCOUNTS, [])
    raw[1]["healthScores"][0]["score"] = 101
    gateway.write(StorageKey.ACCOUNTS, raw)
    return raw


def test_invalid_record_is_skipped_not_the_collection(account_repo, gateway, sample_accounts):
    _store_with_one_invalid(account_repo, gateway, sample_accounts)

    assert [a.id for a in account_repo.list_all()] == ["acc-1", "acc-3", "acc-4"]
    assert account_repo.get_by_id("acc-2") is None


def test_upsert_keeps_records_that_fail_validation(account_repo, gateway, sample_accounts, make_account):
    raw = _store_with_one_invalid(account_repo, gateway, sample_accounts)

    account_repo.upsert(make_account("new-1"))

    stored = gateway.read(StorageKey.ACCOUNTS, [])
    assert [e["id"] for e in stored] == ["acc-1", "acc-2", "acc-3", "acc-4", "new-1"]
    assert stored[1] == raw[1]


def test_remove_keeps_records_that_fail_validation(account_repo, gateway, sample_accounts):
    raw = _store_with_one_invalid(account_repo, gateway, sample_accounts)

    assert account_repo.remove("acc-4") is True

    stored = gateway.read(StorageKey.ACCOUNTS, [])
    assert [e["id"] for e in stored] == ["acc-1", "acc-2", "acc-3"]
    assert stored[1] == raw[1]


def test_non_list_value_reads_as_empty(account_repo: AccountRepository, gateway):
    gateway.write(StorageKey.ACCOUNTS, {"acc-1": {}})

    assert account_repo.list_all() == []


def test_cam_repository(gateway):
    cams = CAMRepository(gateway)
    cams.replace_all([CAM(id="cam-1", name="Mike Chen")])

    assert cams.list_all() == [CAM(id="cam-1", name="Mike Chen")]


def test_weekly_reviews_save_and_filter_by_account(gateway, make_decision, now):
    reviews = WeeklyReviewRepository(gateway)
    first = WeeklyReview(
        id="wr-1",
        account_id="acc-1",
        week_of=date(2024, 12, 9),
        decisions=(make_decision("d1", date(2024, 12, 10)),),
        created_at=now,
    )
    reviews.save(first)
    reviews.save(WeeklyReview(id="wr-2", account_id="acc-2", week_of=date(2024, 12, 9)))
    reviews.save(WeeklyReview(id="wr-1", account_id="acc-1", week_of=date(2024, 12, 9), notes="updated"))

    assert [r.id for r in reviews.list_all()] == ["wr-1", "wr-2"]
    assert [r.notes for r in reviews.list_for_account("acc-1")] == ["updated"]
