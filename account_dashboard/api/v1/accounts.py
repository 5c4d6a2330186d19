"""/v1/accounts - account listing, detail, decisions and weekly reviews"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from account_dashboard.api.dependencies import (
    get_account_repository,
    get_clock,
    get_review_service,
    get_weekly_review_repository,
)
from account_dashboard.api.v1.schemas import (
    AccountListItem,
    DecisionCreateRequest,
    ReviewRequest,
    TimelineEntryResponse,
    WeeklyReviewCreateRequest,
)
from account_dashboard.config import settings
from account_dashboard.domain.exceptions import (
    AccountNotFoundError,
    DecisionNotFoundError,
    InvalidDecisionError,
)
from account_dashboard.domain.health import build_timeline, health_trend, latest_health_score
from account_dashboard.domain.models import (
    ALL,
    Account,
    AccountStatus,
    FilterState,
    RiskLevel,
    SortDirection,
    SortField,
    WeeklyReview,
)
from account_dashboard.domain.views import filter_accounts, sort_accounts
from account_dashboard.infrastructure.storage.records import (
    AccountRecord,
    DecisionRecord,
    HealthScoreRecord,
    StaticContextRecord,
    WeeklyReviewRecord,
)
from account_dashboard.infrastructure.storage.repositories import (
    AccountRepository,
    Clock,
    WeeklyReviewRepository,
)
from account_dashboard.services.review_service import DecisionReviewService, generate_id
from account_dashboard.utils.date_utils import is_within, week_bounds

router = APIRouter()


def _list_item(account: Account) -> AccountListItem:
    latest = latest_health_score(account.health_scores)
    return AccountListItem(
        **AccountRecord.from_domain(account).model_dump(),
        current_health_score=latest.score if latest else None,
        health_trend=health_trend(account.health_scores, settings.trend_threshold),
    )


def _require_account(accounts: AccountRepository, account_id: str) -> Account:
    account = accounts.get_by_id(account_id)
    if account is None:
        raise HTTPException(status_code=404, detail="Account not found")
    return account


@router.get("/accounts", response_model=List[AccountListItem], response_model_exclude_none=True)
def list_accounts(
    risk_level: Optional[RiskLevel] = Query(None, alias="riskLevel"),
    status: Optional[AccountStatus] = Query(None),
    cam_owner: Optional[str] = Query(None, alias="camOwner"),
    q: str = Query("", description="Case-insensitive match on account name or CAM"),
    sort: SortField = Query(SortField.RISK_LEVEL),
    direction: SortDirection = Query(SortDirection.ASC),
    accounts: AccountRepository = Depends(get_account_repository),
):
    """
    List accounts filtered and sorted for the account table.

    Unknown enum values are rejected here (422) before reaching the view engine.
    """
    filters = FilterState(
        risk_level=risk_level or ALL,
        status=status or ALL,
        cam_owner=cam_owner or ALL,
        search_query=q,
    )
    visible = sort_accounts(filter_accounts(accounts.list_all(), filters), sort, direction)
    return [_list_item(a) for a in visible]


@router.get("/accounts/{account_id}", response_model=AccountRecord, response_model_exclude_none=True)
def get_account(account_id: str, accounts: AccountRepository = Depends(get_account_repository)):
    return AccountRecord.from_domain(_require_account(accounts, account_id))


@router.put("/accounts/{account_id}", response_model=AccountRecord, response_model_exclude_none=True)
def upsert_account(
    account_id: str,
    body: AccountRecord,
    accounts: AccountRepository = Depends(get_account_repository),
):
    """Create or replace an account; timestamps are managed by the repository"""
    if body.id != account_id:
        raise HTTPException(status_code=400, detail="Account ID in body does not match path")
    return AccountRecord.from_domain(accounts.upsert(body.to_domain()))


@router.delete("/accounts/{account_id}", status_code=204)
def delete_account(account_id: str, accounts: AccountRepository = Depends(get_account_repository)):
    if not accounts.remove(account_id):
        raise HTTPException(status_code=404, detail="Account not found")
    return Response(status_code=204)


@router.get(
    "/accounts/{account_id}/timeline",
    response_model=List[TimelineEntryResponse],
    response_model_exclude_none=True,
)
def get_timeline(account_id: str, accounts: AccountRepository = Depends(get_account_repository)):
    """Decisions newest first, each with the health score in effect on its date"""
    account = _require_account(accounts, account_id)
    return [
        TimelineEntryResponse(
            decision=DecisionRecord.from_domain(entry.decision),
            health_score=(
                HealthScoreRecord.from_domain(entry.health_score) if entry.health_score else None
            ),
            trend=entry.trend,
        )
        for entry in build_timeline(account.decisions, account.health_scores, settings.trend_threshold)
    ]


@router.post(
    "/accounts/{account_id}/decisions",
    response_model=DecisionRecord,
    response_model_exclude_none=True,
    status_code=201,
)
def create_decision(
    account_id: str,
    body: DecisionCreateRequest,
    service: DecisionReviewService = Depends(get_review_service),
    clock: Clock = Depends(get_clock),
):
    try:
        decision = service.record_decision(account_id, body.to_draft(clock().date()))
    except AccountNotFoundError:
        raise HTTPException(status_code=404, detail="Account not found")
    except InvalidDecisionError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return DecisionRecord.from_domain(decision)


@router.put("/accounts/{account_id}/context", response_model=AccountRecord, response_model_exclude_none=True)
def update_context(
    account_id: str,
    body: StaticContextRecord,
    service: DecisionReviewService = Depends(get_review_service),
):
    try:
        account = service.update_static_context(account_id, body.to_domain())
    except AccountNotFoundError:
        raise HTTPException(status_code=404, detail="Account not found")
    return AccountRecord.from_domain(account)


@router.post(
    "/accounts/{account_id}/decisions/{decision_id}/review",
    response_model=DecisionRecord,
    response_model_exclude_none=True,
)
def review_decision(
    account_id: str,
    decision_id: str,
    body: ReviewRequest,
    service: DecisionReviewService = Depends(get_review_service),
):
    """Team-lead pass/fail verdict; re-reviewing overwrites the previous verdict"""
    try:
        decision = service.review(account_id, decision_id, body.status, body.notes)
    except (AccountNotFoundError, DecisionNotFoundError) as e:
        logging.warning(f"Review target missing: {e}")
        raise HTTPException(status_code=404, detail=str(e))
    return DecisionRecord.from_domain(decision)


@router.get(
    "/accounts/{account_id}/weekly-reviews",
    response_model=List[WeeklyReviewRecord],
    response_model_exclude_none=True,
)
def list_weekly_reviews(
    account_id: str,
    reviews: WeeklyReviewRepository = Depends(get_weekly_review_repository),
):
    return [WeeklyReviewRecord.from_domain(r) for r in reviews.list_for_account(account_id)]


@router.post(
    "/weekly-reviews",
    response_model=WeeklyReviewRecord,
    response_model_exclude_none=True,
    status_code=201,
)
def create_weekly_review(
    body: WeeklyReviewCreateRequest,
    accounts: AccountRepository = Depends(get_account_repository),
    reviews: WeeklyReviewRepository = Depends(get_weekly_review_repository),
    clock: Clock = Depends(get_clock),
):
    """Snapshot the account's decisions for one Monday-start week"""
    account = _require_account(accounts, body.account_id)
    now = clock()
    monday, sunday = week_bounds(body.week_of or now.date())

    review = reviews.save(
        WeeklyReview(
            id=generate_id(),
            account_id=account.id,
            week_of=monday,
            decisions=tuple(d for d in account.decisions if is_within(d.date, monday, sunday)),
            notes=body.notes,
            next_steps=body.next_steps,
            created_at=now,
        )
    )
    return WeeklyReviewRecord.from_domain(review)
