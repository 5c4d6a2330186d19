"""Pydantic records for the persisted JSON layout (camelCase, absent optionals omitted)"""

from dataclasses import asdict
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from account_dashboard.domain.models import (
    CAM,
    Account,
    AccountStatus,
    Decision,
    DecisionCategory,
    Facility,
    HealthFactors,
    HealthScore,
    ReviewStatus,
    RiskLevel,
    StaticContext,
    WeeklyReview,
)


class StoredRecord(BaseModel):
    """Base for persisted records; accepts both camelCase and snake_case keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @classmethod
    def from_domain(cls, obj: Any) -> "StoredRecord":
        return cls.model_validate(asdict(obj))

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class StaticContextRecord(StoredRecord):
    background: str = ""
    payment_patterns: str = ""
    relationship_notes: str = ""
    key_contacts: str = ""

    def to_domain(self) -> StaticContext:
        return StaticContext(
            background=self.background,
            payment_patterns=self.payment_patterns,
            relationship_notes=self.relationship_notes,
            key_contacts=self.key_contacts,
        )


class FacilityRecord(StoredRecord):
    id: str
    name: str
    ar_balance: float = Field(ge=0)
    days_past_due: int = Field(ge=0)

    def to_domain(self) -> Facility:
        return Facility(
            id=self.id,
            name=self.name,
            ar_balance=self.ar_balance,
            days_past_due=self.days_past_due,
        )


class HealthFactorsRecord(StoredRecord):
    payment_behavior: int = Field(ge=0, le=100)
    communication_quality: int = Field(ge=0, le=100)
    risk_level: int = Field(ge=0, le=100)
    trend_direction: int = Field(ge=0, le=100)

    def to_domain(self) -> HealthFactors:
        return HealthFactors(
            payment_behavior=self.payment_behavior,
            communication_quality=self.communication_quality,
            risk_level=self.risk_level,
            trend_direction=self.trend_direction,
        )


class HealthScoreRecord(StoredRecord):
    score: int = Field(ge=0, le=100)
    date: date
    factors: HealthFactorsRecord

    def to_domain(self) -> HealthScore:
        return HealthScore(score=self.score, date=self.date, factors=self.factors.to_domain())


class DecisionRecord(StoredRecord):
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

    def to_domain(self) -> Decision:
        return Decision(
            id=self.id,
            date=self.date,
            category=self.category,
            title=self.title,
            description=self.description,
            rationale=self.rationale,
            expected_outcome=self.expected_outcome,
            actual_outcome=self.actual_outcome,
            outcome_date=self.outcome_date,
            created_by=self.created_by,
            review_status=self.review_status,
            reviewed_by=self.reviewed_by,
            reviewed_at=self.reviewed_at,
            review_notes=self.review_notes,
        )


class AccountRecord(StoredRecord):
    id: str
    name: str
    is_parent: bool = False
    parent_id: Optional[str] = None
    facilities: Optional[List[FacilityRecord]] = None
    ar_balance: float = Field(ge=0)
    days_past_due: int = Field(ge=0)
    credit_limit: Optional[float] = None
    status: AccountStatus
    risk_level: RiskLevel
    cam_owner: str
    static_context: StaticContextRecord = Field(default_factory=StaticContextRecord)
    decisions: List[DecisionRecord] = Field(default_factory=list)
    health_scores: List[HealthScoreRecord] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_domain(self) -> Account:
        return Account(
            id=self.id,
            name=self.name,
            is_parent=self.is_parent,
            parent_id=self.parent_id,
            facilities=(
                tuple(f.to_domain() for f in self.facilities)
                if self.facilities is not None
                else None
            ),
            ar_balance=self.ar_balance,
            days_past_due=self.days_past_due,
            credit_limit=self.credit_limit,
            status=self.status,
            risk_level=self.risk_level,
            cam_owner=self.cam_owner,
            static_context=self.static_context.to_domain(),
            decisions=tuple(d.to_domain() for d in self.decisions),
            health_scores=tuple(h.to_domain() for h in self.health_scores),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class CAMRecord(StoredRecord):
    id: str
    name: str
    email: Optional[str] = None

    def to_domain(self) -> CAM:
        return CAM(id=self.id, name=self.name, email=self.email)


class WeeklyReviewRecord(StoredRecord):
    id: str
    account_id: str
    week_of: date
    decisions: List[DecisionRecord] = Field(default_factory=list)
    notes: str = ""
    next_steps: str = ""
    created_at: Optional[datetime] = None

    def to_domain(self) -> WeeklyReview:
        return WeeklyReview(
            id=self.id,
            account_id=self.account_id,
            week_of=self.week_of,
            decisions=tuple(d.to_domain() for d in self.decisions),
            notes=self.notes,
            next_steps=self.next_steps,
            created_at=self.created_at,
        )


class BackupDocument(StoredRecord):
    """Whole-dataset export; absent collections stay None"""

    accounts: Optional[List[AccountRecord]] = None
    cams: Optional[List[CAMRecord]] = None
    weekly_reviews: Optional[List[WeeklyReviewRecord]] = None
    exported_at: Optional[datetime] = None
