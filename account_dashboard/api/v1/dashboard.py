"""/v1/dashboard - headline stats and the weekly decision prompt"""

from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from account_dashboard.api.dependencies import get_account_repository, get_clock
from account_dashboard.api.v1.schemas import (
    AccountSummary,
    DashboardStatsResponse,
    WeeklyPromptResponse,
)
from account_dashboard.domain.models import ALL
from account_dashboard.domain.views import (
    accounts_needing_decisions,
    calculate_dashboard_stats,
    cam_owners,
    is_review_urgent,
)
from account_dashboard.infrastructure.storage.repositories import AccountRepository, Clock

router = APIRouter()


@router.get("/dashboard/stats", response_model=DashboardStatsResponse)
def get_stats(
    accounts: AccountRepository = Depends(get_account_repository),
    clock: Clock = Depends(get_clock),
):
    """Totals over the full, unfiltered account collection"""
    stats = calculate_dashboard_stats(accounts.list_all(), clock())
    return DashboardStatsResponse(**asdict(stats))


@router.get("/dashboard/weekly-prompt", response_model=WeeklyPromptResponse)
def get_weekly_prompt(
    cam_owner: Optional[str] = Query(None, alias="camOwner"),
    accounts: AccountRepository = Depends(get_account_repository),
    clock: Clock = Depends(get_clock),
):
    """
    Accounts with no decision yet this week.

    urgent flips on at the Tuesday EOD deadline and stays on through Sunday.
    """
    now = clock()
    pending = accounts_needing_decisions(accounts.list_all(), now, cam_owner or ALL)
    return WeeklyPromptResponse(
        count=len(pending),
        urgent=is_review_urgent(now),
        accounts=[
            AccountSummary(id=a.id, name=a.name, cam_owner=a.cam_owner, risk_level=a.risk_level)
            for a in pending
        ],
    )


@router.get("/dashboard/cam-owners", response_model=List[str])
def get_cam_owners(accounts: AccountRepository = Depends(get_account_repository)):
    return cam_owners(accounts.list_all())
