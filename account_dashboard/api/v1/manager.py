"""/v1/manager - team-lead review queue and CAM performance"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from account_dashboard.api.dependencies import get_account_repository, get_clock
from account_dashboard.api.v1.schemas import (
    AccountSummary,
    DecisionEntryResponse,
    ReviewCountsResponse,
    ReviewSummaryResponse,
)
from account_dashboard.domain.models import ALL
from account_dashboard.domain.review import (
    TimeRange,
    decisions_in_range,
    summarize_reviews,
    time_range_bounds,
)
from account_dashboard.domain.views import critical_accounts
from account_dashboard.infrastructure.storage.records import DecisionRecord
from account_dashboard.infrastructure.storage.repositories import AccountRepository, Clock

router = APIRouter()


@router.get(
    "/manager/decisions",
    response_model=List[DecisionEntryResponse],
    response_model_exclude_none=True,
)
def list_decisions(
    time_range: TimeRange = Query(TimeRange.THIS_WEEK, alias="range"),
    cam_owner: Optional[str] = Query(None, alias="camOwner"),
    accounts: AccountRepository = Depends(get_account_repository),
    clock: Clock = Depends(get_clock),
):
    """Decisions made in the selected window, newest first"""
    start, end = time_range_bounds(time_range, clock())
    return [
        DecisionEntryResponse(
            account_id=e.account_id,
            account_name=e.account_name,
            cam_owner=e.cam_owner,
            decision=DecisionRecord.from_domain(e.decision),
        )
        for e in decisions_in_range(accounts.list_all(), start, end, cam_owner or ALL)
    ]


@router.get("/manager/summary", response_model=ReviewSummaryResponse)
def get_summary(
    time_range: TimeRange = Query(TimeRange.THIS_WEEK, alias="range"),
    cam_owner: Optional[str] = Query(None, alias="camOwner"),
    accounts: AccountRepository = Depends(get_account_repository),
    clock: Clock = Depends(get_clock),
):
    """Pass/fail/pending review counts overall and per CAM"""
    start, end = time_range_bounds(time_range, clock())
    summary = summarize_reviews(
        decisions_in_range(accounts.list_all(), start, end, cam_owner or ALL)
    )
    return ReviewSummaryResponse(
        start=start,
        end=end,
        overall=ReviewCountsResponse.model_validate(summary.overall, from_attributes=True),
        by_cam={
            cam: ReviewCountsResponse.model_validate(counts, from_attributes=True)
            for cam, counts in summary.by_cam.items()
        },
    )


@router.get("/manager/critical-accounts", response_model=List[AccountSummary])
def list_critical_accounts(
    cam_owner: Optional[str] = Query(None, alias="camOwner"),
    accounts: AccountRepository = Depends(get_account_repository),
):
    return [
        AccountSummary(id=a.id, name=a.name, cam_owner=a.cam_owner, risk_level=a.risk_level)
        for a in critical_accounts(accounts.list_all(), cam_owner or ALL)
    ]
