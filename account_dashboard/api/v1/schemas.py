"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from account_dashboard.domain.models import (
    DecisionCategory,
    DecisionDraft,
    ReviewStatus,
    RiskLevel,
    Trend,
)
from account_dashboard.infrastructure.storage.records import (
    AccountRecord,
    DecisionRecord,
    HealthScoreRecord,
)


class ApiSchema(BaseModel):
    """camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AccountListItem(AccountRecord):
    """Account row with its latest health score and list-view trend"""

    current_health_score: Optional[int] = None
    health_trend: Optional[Trend] = None


class DecisionCreateRequest(ApiSchema):
    """Request body for POST /v1/accounts/{account_id}/decisions"""

    decision_date: Optional[date] = Field(None, alias="date", description="Defaults to today")
    category: DecisionCategory = DecisionCategory.ACTION_PLAN
    title: str = Field(..., min_length=1, description="Short decision headline")
    description: str = Field(..., min_length=1)
    rationale: str = Field(..., min_length=1, description="Why the decision was made")
    expected_outcome: Optional[str] = None
    created_by: Optional[str] = None

    def to_draft(self, default_date: date) -> DecisionDraft:
        return DecisionDraft(
            date=self.decision_date or default_date,
            category=self.category,
            title=self.title,
            description=self.description,
            rationale=self.rationale,
            expected_outcome=self.expected_outcome,
            created_by=self.created_by,
        )


class ReviewRequest(ApiSchema):
    """Request body for POST /v1/accounts/{account_id}/decisions/{decision_id}/review"""

    status: ReviewStatus
    notes: Optional[str] = None

    @field_validator("status")
    @classmethod
    def must_be_verdict(cls, value: ReviewStatus) -> ReviewStatus:
        if value == ReviewStatus.PENDING:
            raise ValueError("status must be 'pass' or 'fail'")
        return value


class WeeklyReviewCreateRequest(ApiSchema):
    """Request body for POST /v1/weekly-reviews"""

    account_id: str = Field(..., min_length=1)
    week_of: Optional[date] = None
    notes: str = ""
    next_steps: str = ""


class TimelineEntryResponse(ApiSchema):
    decision: DecisionRecord
    health_score: Optional[HealthScoreRecord] = None
    trend: Optional[Trend] = None


class DashboardStatsResponse(ApiSchema):
    """Response for GET /v1/dashboard/stats"""

    total_accounts: int
    total_ar_balance: float
    critical_accounts: int
    high_risk_accounts: int
    medium_risk_accounts: int
    low_risk_accounts: int
    average_health_score: int
    decisions_this_week: int


class AccountSummary(ApiSchema):
    id: str
    name: str
    cam_owner: str
    risk_level: RiskLevel


class WeeklyPromptResponse(ApiSchema):
    """Response for GET /v1/dashboard/weekly-prompt"""

    count: int
    urgent: bool
    accounts: List[AccountSummary]


class DecisionEntryResponse(ApiSchema):
    account_id: str
    account_name: str
    cam_owner: str
    decision: DecisionRecord


class ReviewCountsResponse(ApiSchema):
    total: int
    passed: int
    failed: int
    pending: int


class ReviewSummaryResponse(ApiSchema):
    """Response for GET /v1/manager/summary"""

    start: date
    end: date
    overall: ReviewCountsResponse
    by_cam: Dict[str, ReviewCountsResponse]


class ImportResponse(ApiSchema):
    imported: bool
