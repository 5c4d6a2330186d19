"""Derived views over the account collection - filtering, sorting and dashboard rollups"""

import locale
import math
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from account_dashboard.domain.health import latest_health_score
from account_dashboard.domain.models import (
    ALL,
    RISK_RANK,
    Account,
    DashboardStats,
    FacilityTotals,
    FilterState,
    RiskLevel,
    SortDirection,
    SortField,
)
from account_dashboard.utils.date_utils import is_within, tuesday_deadline, week_bounds


def _matches_query(account: Account, query: str) -> bool:
    needle = query.lower()
    return needle in account.name.lower() or needle in account.cam_owner.lower()


def filter_accounts(accounts: Iterable[Account], filters: FilterState) -> List[Account]:
    """
    Keep accounts matching every active criterion, preserving input order.

    Requirements:
    - ALL disables a criterion, other values must match exactly
    - Non-empty search query is a case-insensitive substring of name or CAM owner
    """
    result = []
    for account in accounts:
        if filters.risk_level != ALL and account.risk_level != filters.risk_level:
            continue
        if filters.status != ALL and account.status != filters.status:
            continue
        if filters.cam_owner != ALL and account.cam_owner != filters.cam_owner:
            continue
        if filters.search_query and not _matches_query(account, filters.search_query):
            continue
        result.append(account)
    return result


def _sort_key(field: SortField):
    if field == SortField.NAME:
        return lambda a: locale.strxfrm(a.name.casefold())
    if field == SortField.AR_BALANCE:
        return lambda a: a.ar_balance
    if field == SortField.DAYS_PAST_DUE:
        return lambda a: a.days_past_due
    if field == SortField.RISK_LEVEL:
        return lambda a: RISK_RANK[a.risk_level]
    if field == SortField.HEALTH_SCORE:
        return _current_score
    raise ValueError(f"Unsupported sort field: {field}")


def _current_score(account: Account) -> int:
    latest = latest_health_score(account.health_scores)
    return latest.score if latest else 0


def sort_accounts(
    accounts: Iterable[Account],
    field: SortField = SortField.RISK_LEVEL,
    direction: SortDirection = SortDirection.ASC,
) -> List[Account]:
    """
    Stable sort on a single field.

    Risk level ascending means most urgent first (critical -> low).
    Accounts without health scores sort as score 0.
    Equal keys keep their input order in both directions.
    """
    return sorted(accounts, key=_sort_key(field), reverse=direction == SortDirection.DESC)


def calculate_dashboard_stats(accounts: List[Account], now: datetime) -> DashboardStats:
    """
    Aggregate headline numbers for the dashboard.

    Requirements:
    - Average health uses each account's latest score; accounts without scores are excluded
    - Average is 0 for an empty population (rounded half-up like the dashboard shows it)
    - Decisions this week = decisions dated within the trailing 7 days, both ends inclusive
    """
    risk_counts = {level: 0 for level in RiskLevel}
    for account in accounts:
        risk_counts[account.risk_level] += 1

    latest_scores = [
        latest.score
        for latest in (latest_health_score(a.health_scores) for a in accounts)
        if latest is not None
    ]
    average = (
        int(math.floor(sum(latest_scores) / len(latest_scores) + 0.5))
        if latest_scores
        else 0
    )

    today = now.date()
    week_ago = today - timedelta(days=7)
    recent_decisions = sum(
        1
        for account in accounts
        for decision in account.decisions
        if is_within(decision.date, week_ago, today)
    )

    return DashboardStats(
        total_accounts=len(accounts),
        total_ar_balance=sum(a.ar_balance for a in accounts),
        critical_accounts=risk_counts[RiskLevel.CRITICAL],
        high_risk_accounts=risk_counts[RiskLevel.HIGH],
        medium_risk_accounts=risk_counts[RiskLevel.MEDIUM],
        low_risk_accounts=risk_counts[RiskLevel.LOW],
        average_health_score=average,
        decisions_this_week=recent_decisions,
    )


def needs_decision_this_week(account: Account, now: datetime) -> bool:
    """True when no decision is dated inside the Monday-Sunday week containing now"""
    monday, sunday = week_bounds(now.date())
    return not any(is_within(d.date, monday, sunday) for d in account.decisions)


def accounts_needing_decisions(
    accounts: Iterable[Account], now: datetime, cam_owner: str = ALL
) -> List[Account]:
    return [
        a
        for a in accounts
        if (cam_owner == ALL or a.cam_owner == cam_owner) and needs_decision_this_week(a, now)
    ]


def is_review_urgent(now: datetime) -> bool:
    """Weekly decisions are due EOD Tuesday; urgent from Tuesday through Sunday"""
    return now.weekday() == 1 or now >= tuesday_deadline(now)


def cam_owners(accounts: Iterable[Account]) -> List[str]:
    return sorted({a.cam_owner for a in accounts})


def critical_accounts(accounts: Iterable[Account], cam_owner: str = ALL) -> List[Account]:
    """Critical and high risk accounts, most urgent first"""
    flagged = [
        a
        for a in accounts
        if a.risk_level in (RiskLevel.CRITICAL, RiskLevel.HIGH)
        and (cam_owner == ALL or a.cam_owner == cam_owner)
    ]
    return sort_accounts(flagged, SortField.RISK_LEVEL, SortDirection.ASC)


def facility_totals(account: Account) -> Optional[FacilityTotals]:
    """
    Roll up facility figures for a parent account.

    Read-only: the parent's own ar_balance/days_past_due are left as stored,
    so callers can compare the two to spot drift.
    """
    if not account.is_parent or not account.facilities:
        return None
    return FacilityTotals(
        ar_balance=sum(f.ar_balance for f in account.facilities),
        max_days_past_due=max(f.days_past_due for f in account.facilities),
    )
