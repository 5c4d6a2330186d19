"""Decision review rules - review transitions, manager time windows and pass/fail rollups"""

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from account_dashboard.domain.exceptions import (
    AccountNotFoundError,
    DecisionNotFoundError,
    InvalidDecisionError,
)
from account_dashboard.domain.models import (
    ALL,
    Account,
    Decision,
    DecisionDraft,
    DecisionEntry,
    ReviewCounts,
    ReviewStatus,
    ReviewSummary,
)
from account_dashboard.utils.date_utils import is_within, week_bounds


class TimeRange(str, Enum):
    THIS_WEEK = "this_week"
    LAST_WEEK = "last_week"
    LAST_2_WEEKS = "last_2_weeks"
    LAST_MONTH = "last_month"


def time_range_bounds(time_range: TimeRange, now: datetime) -> Tuple[date, date]:
    """
    Inclusive Monday-start date window for a manager time range.

    - this_week:    current Monday..Sunday
    - last_week:    previous Monday..Sunday
    - last_2_weeks: previous Monday..current Sunday
    - last_month:   Monday four weeks back..current Sunday
    """
    monday, sunday = week_bounds(now.date())
    week = timedelta(weeks=1)

    if time_range == TimeRange.THIS_WEEK:
        return monday, sunday
    if time_range == TimeRange.LAST_WEEK:
        return monday - week, sunday - week
    if time_range == TimeRange.LAST_2_WEEKS:
        return monday - week, sunday
    if time_range == TimeRange.LAST_MONTH:
        return monday - 4 * week, sunday
    raise ValueError(f"Unsupported time range: {time_range}")


def decisions_in_range(
    accounts: Iterable[Account],
    start: date,
    end: date,
    cam_owner: str = ALL,
) -> List[DecisionEntry]:
    """Decisions dated within [start, end] across accounts, newest first"""
    entries = [
        DecisionEntry(
            account_id=account.id,
            account_name=account.name,
            cam_owner=account.cam_owner,
            decision=decision,
        )
        for account in accounts
        if cam_owner == ALL or account.cam_owner == cam_owner
        for decision in account.decisions
        if is_within(decision.date, start, end)
    ]
    return sorted(entries, key=lambda e: e.decision.date, reverse=True)


def summarize_reviews(entries: Iterable[DecisionEntry]) -> ReviewSummary:
    """Pass/fail/pending counts overall and per CAM owner"""
    overall = ReviewCounts()
    by_cam: Dict[str, ReviewCounts] = {}

    for entry in entries:
        status = entry.decision.effective_review_status
        overall.add(status)
        by_cam.setdefault(entry.cam_owner, ReviewCounts()).add(status)

    return ReviewSummary(overall=overall, by_cam=by_cam)


def apply_review(
    accounts: List[Account],
    account_id: str,
    decision_id: str,
    status: ReviewStatus,
    reviewer: str,
    now: datetime,
    notes: Optional[str] = None,
) -> Tuple[List[Account], Decision]:
    """
    Return a new account list with one decision reviewed.

    Re-reviewing overwrites any earlier verdict. The owning account's
    updated_at is set to now.

    Raises:
        AccountNotFoundError: account_id is not in the collection
        DecisionNotFoundError: the account holds no such decision
    """
    index = next((i for i, a in enumerate(accounts) if a.id == account_id), None)
    if index is None:
        raise AccountNotFoundError(account_id)

    account = accounts[index]
    reviewed = None
    decisions = []
    for decision in account.decisions:
        if reviewed is None and decision.id == decision_id:
            decision = decision.with_review(status, reviewer, now, notes)
            reviewed = decision
        decisions.append(decision)

    if reviewed is None:
        raise DecisionNotFoundError(account_id, decision_id)

    updated = list(accounts)
    updated[index] = account.with_decisions(decisions).touched(now)
    return updated, reviewed


def build_decision(draft: DecisionDraft, decision_id: str) -> Decision:
    """
    Turn a draft into a decision record.

    Raises:
        InvalidDecisionError: title, description or rationale is blank
    """
    missing = [
        name
        for name in ("title", "description", "rationale")
        if not getattr(draft, name).strip()
    ]
    if missing:
        raise InvalidDecisionError(f"Missing required fields: {', '.join(missing)}")

    return Decision(
        id=decision_id,
        date=draft.date,
        category=draft.category,
        title=draft.title.strip(),
        description=draft.description.strip(),
        rationale=draft.rationale.strip(),
        expected_outcome=(draft.expected_outcome or "").strip() or None,
        created_by=draft.created_by,
    )
