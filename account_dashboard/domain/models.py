"""Domain models - frozen dataclasses representing accounts and their history"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Dict, Optional, Tuple


class RiskLevel(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AccountStatus(str, Enum):
    ACTIVE = "active"
    ON_HOLD = "on_hold"
    PAYMENT_PLAN = "payment_plan"
    LEGAL = "legal"
    COLLECTIONS = "collections"
    WRITE_OFF = "write_off"
    CLOSED = "closed"


class DecisionCategory(str, Enum):
    STATUS = "status"
    ACTION_PLAN = "action_plan"
    RISK_URGENCY = "risk_urgency"
    SPECIAL_ARRANGEMENT = "special_arrangement"


class ReviewStatus(str, Enum):
    PENDING = "pending"
    PASS = "pass"
    FAIL = "fail"


class SortField(str, Enum):
    NAME = "name"
    AR_BALANCE = "arBalance"
    DAYS_PAST_DUE = "daysPastDue"
    RISK_LEVEL = "riskLevel"
    HEALTH_SCORE = "healthScore"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


# Lower rank = more urgent
RISK_RANK = {
    RiskLevel.CRITICAL: 0,
    RiskLevel.HIGH: 1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.LOW: 3,
}


@dataclass(frozen=True)
class StaticContext:
    """Slow-changing qualitative background for an account"""

    background: str = ""
    payment_patterns: str = ""
    relationship_notes: str = ""
    key_contacts: str = ""


@dataclass(frozen=True)
class Facility:
    """Sub-unit of a parent account with its own AR figures"""

    id: str
    name: str
    ar_balance: float
    days_past_due: int


@dataclass(frozen=True)
class HealthFactors:
    payment_behavior: int
    communication_quality: int
    risk_level: int
    trend_direction: int


@dataclass(frozen=True)
class HealthScore:
    """Point-in-time health snapshot (0-100)"""

    score: int
    date: date
    factors: HealthFactors


@dataclass(frozen=True)
class Decision:
    """Recorded managerial decision with optional outcome and review"""

    id: str
    date: date
    category: DecisionCategory
    title: str
    description: str
    rationale: str
    expected_outcome: Optional[str] = None
    actual_outcome: Optional[str] = None
    outcome_date: Optional[date] = None
    created_by: Optional[str] = None
    review_status: Optional[ReviewStatus] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None

    @property
    def effective_review_status(self) -> ReviewStatus:
        """Absent review status means the decision is still pending"""
        return self.review_status or ReviewStatus.PENDING

    def with_review(
        self,
        status: ReviewStatus,
        reviewer: str,
        reviewed_at: datetime,
        notes: Optional[str] = None,
    ) -> "Decision":
        return replace(
            self,
            review_status=status,
            reviewed_by=reviewer,
            reviewed_at=reviewed_at,
            review_notes=notes,
        )


@dataclass(frozen=True)
class Account:
    """
    Collections account.

    A parent's ar_balance/days_past_due are stored independently of its
    facilities and are never reconciled automatically.
    """

    id: str
    name: str
    ar_balance: float
    days_past_due: int
    status: AccountStatus
    risk_level: RiskLevel
    cam_owner: str
    is_parent: bool = False
    parent_id: Optional[str] = None
    facilities: Optional[Tuple[Facility, ...]] = None
    credit_limit: Optional[float] = None
    static_context: StaticContext = field(default_factory=StaticContext)
    decisions: Tuple[Decision, ...] = ()
    health_scores: Tuple[HealthScore, ...] = ()
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def with_decision(self, decision: Decision) -> "Account":
        """Prepend a decision (newest first by convention)"""
        return replace(self, decisions=(decision,) + tuple(self.decisions))

    def with_decisions(self, decisions) -> "Account":
        return replace(self, decisions=tuple(decisions))

    def with_static_context(self, context: StaticContext) -> "Account":
        return replace(self, static_context=context)

    def touched(self, now: datetime) -> "Account":
        return replace(self, updated_at=now)


@dataclass(frozen=True)
class CAM:
    """Collections Account Manager, referenced from accounts by name"""

    id: str
    name: str
    email: Optional[str] = None


@dataclass(frozen=True)
class WeeklyReview:
    """Weekly rollup for one account"""

    id: str
    account_id: str
    week_of: date
    decisions: Tuple[Decision, ...] = ()
    notes: str = ""
    next_steps: str = ""
    created_at: Optional[datetime] = None


ALL = "all"


@dataclass(frozen=True)
class FilterState:
    """List filters; ALL disables a criterion"""

    risk_level: str = ALL
    status: str = ALL
    cam_owner: str = ALL
    search_query: str = ""


@dataclass
class DashboardStats:
    total_accounts: int
    total_ar_balance: float
    critical_accounts: int
    high_risk_accounts: int
    medium_risk_accounts: int
    low_risk_accounts: int
    average_health_score: int
    decisions_this_week: int


@dataclass
class FacilityTotals:
    ar_balance: float
    max_days_past_due: int


@dataclass
class TimelineEntry:
    """Decision annotated with the health score in effect on its date"""

    decision: Decision
    health_score: Optional[HealthScore]
    trend: Optional[Trend]


@dataclass
class DecisionEntry:
    """Decision flattened with the account it belongs to"""

    account_id: str
    account_name: str
    cam_owner: str
    decision: Decision


@dataclass
class ReviewCounts:
    total: int = 0
    passed: int = 0
    failed: int = 0
    pending: int = 0

    def add(self, status: ReviewStatus) -> None:
        self.total += 1
        if status == ReviewStatus.PASS:
            self.passed += 1
        elif status == ReviewStatus.FAIL:
            self.failed += 1
        else:
            self.pending += 1


@dataclass
class ReviewSummary:
    overall: ReviewCounts
    by_cam: Dict[str, ReviewCounts]


@dataclass
class DecisionDraft:
    """User-supplied fields for a new decision"""

    date: date
    category: DecisionCategory
    title: str
    description: str
    rationale: str
    expected_outcome: Optional[str] = None
    created_by: Optional[str] = None
