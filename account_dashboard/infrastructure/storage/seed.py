"""First-run demonstration dataset"""

import logging
from datetime import date, datetime, timezone
from typing import Optional

from account_dashboard.domain.models import (
    CAM,
    Account,
    AccountStatus,
    Decision,
    DecisionCategory,
    Facility,
    HealthFactors,
    HealthScore,
    RiskLevel,
    StaticContext,
)
from account_dashboard.infrastructure.storage.repositories import AccountRepository, CAMRepository

SAMPLE_CAMS = [
    CAM(id="cam-1", name="Sarah Johnson", email="sarah.j@example.com"),
    CAM(id="cam-2", name="Mike Chen", email="mike.c@example.com"),
    CAM(id="cam-3", name="Emily Rodriguez", email="emily.r@example.com"),
]


def _decision(
    id: str,
    day: str,
    category: DecisionCategory,
    title: str,
    description: str,
    rationale: str,
    expected_outcome: Optional[str] = None,
    actual_outcome: Optional[str] = None,
) -> Decision:
    decided_on = date.fromisoformat(day)
    return Decision(
        id=id,
        date=decided_on,
        category=category,
        title=title,
        description=description,
        rationale=rationale,
        expected_outcome=expected_outcome,
        actual_outcome=actual_outcome,
        outcome_date=decided_on if actual_outcome else None,
    )


def _score(score: int, day: str, payment: int, communication: int, risk: int, trend: int) -> HealthScore:
    return HealthScore(
        score=score,
        date=date.fromisoformat(day),
        factors=HealthFactors(
            payment_behavior=payment,
            communication_quality=communication,
            risk_level=risk,
            trend_direction=trend,
        ),
    )


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


SAMPLE_ACCOUNTS = [
    Account(
        id="acc-1",
        name="Sunrise Healthcare Group",
        is_parent=True,
        facilities=(
            Facility(id="fac-1-1", name="Sunrise Medical Center", ar_balance=125000, days_past_due=45),
            Facility(id="fac-1-2", name="Sunrise Nursing Home", ar_balance=87000, days_past_due=62),
            Facility(id="fac-1-3", name="Sunrise Rehab Center", ar_balance=43000, days_past_due=30),
        ),
        ar_balance=255000,
        days_past_due=45,
        credit_limit=300000,
        status=AccountStatus.ACTIVE,
        risk_level=RiskLevel.HIGH,
        cam_owner="Sarah Johnson",
        static_context=StaticContext(
            background="Healthcare system with 3 facilities, acquired by private equity in 2023.",
            payment_patterns="Weekly payer until Aug 2024; now sporadic partial payments.",
            relationship_notes="CFO is responsive but under pressure from owners. Best reached Tue-Thu.",
            key_contacts="Janet Williams (CFO)\nTom Martinez (AP Manager)",
        ),
        decisions=(
            _decision(
                "dec-1-1", "2024-12-09", DecisionCategory.RISK_URGENCY,
                "Elevated to High Risk",
                "Moved from Medium to High risk on deteriorating payment pattern.",
                "Three consecutive months of partial payments; AR up 40% since September.",
                "Increased payment monitoring and weekly check-ins",
                "CFO committed to a payment plan discussion",
            ),
            _decision(
                "dec-1-2", "2024-12-02", DecisionCategory.ACTION_PLAN,
                "Proposed Payment Plan",
                "Offered $50K/month for 6 months to clear the backlog.",
                "Based on historical payment capacity and current AR aging.",
                "Plan acceptance and first payment by 12/15",
            ),
        ),
        health_scores=(
            _score(45, "2024-12-09", 30, 60, 35, 55),
            _score(55, "2024-12-02", 45, 65, 45, 65),
            _score(62, "2024-11-25", 55, 70, 55, 68),
        ),
        created_at=_ts("2024-01-15T10:00:00"),
        updated_at=_ts("2024-12-09T14:30:00"),
    ),
    Account(
        id="acc-2",
        name="Meadowbrook Senior Living",
        ar_balance=42000,
        days_past_due=15,
        credit_limit=75000,
        status=AccountStatus.ACTIVE,
        risk_level=RiskLevel.LOW,
        cam_owner="Mike Chen",
        static_context=StaticContext(
            background="Family-owned single-site senior living facility, stable occupancy.",
            payment_patterns="Consistent bi-weekly payments; never past 30 DPD.",
            relationship_notes="Owner prefers phone calls over email.",
            key_contacts="Mary Thompson (Owner)",
        ),
        decisions=(
            _decision(
                "dec-2-1", "2024-12-09", DecisionCategory.STATUS,
                "Routine Review - No Changes",
                "Account continues to perform well.",
                "Payment behavior consistent with historical patterns.",
                "Continued good standing",
                "Payment received as expected",
            ),
        ),
        health_scores=(_score(88, "2024-12-09", 90, 85, 90, 87),),
        created_at=_ts("2024-03-20T09:00:00"),
        updated_at=_ts("2024-12-09T11:00:00"),
    ),
    Account(
        id="acc-3",
        name="Metro Hospital Network",
        is_parent=True,
        facilities=(
            Facility(id="fac-3-1", name="Metro General Hospital", ar_balance=340000, days_past_due=90),
            Facility(id="fac-3-2", name="Metro Urgent Care East", ar_balance=78000, days_past_due=75),
            Facility(id="fac-3-3", name="Metro Urgent Care West", ar_balance=65000, days_past_due=60),
            Facility(id="fac-3-4", name="Metro Specialty Clinic", ar_balance=92000, days_past_due=85),
        ),
        ar_balance=575000,
        days_past_due=90,
        credit_limit=500000,
        status=AccountStatus.COLLECTIONS,
        risk_level=RiskLevel.CRITICAL,
        cam_owner="Sarah Johnson",
        static_context=StaticContext(
            background="Hospital network that lost a major insurance contract; restructuring.",
            payment_patterns="No regular payments since September; one partial payment in October.",
            relationship_notes="Interim CFO hard to reach; communication through formal channels.",
            key_contacts="Robert Kim (Interim CFO)\nLegal Dept",
        ),
        decisions=(
            _decision(
                "dec-3-1", "2024-12-09", DecisionCategory.STATUS,
                "Escalated to Collections",
                "Moved to formal collections; legal review initiated.",
                "No payment in 60+ days; AR exceeds credit limit.",
                "Legal demand letter and potential service suspension",
            ),
            _decision(
                "dec-3-2", "2024-11-18", DecisionCategory.SPECIAL_ARRANGEMENT,
                "Prepayment Requirement",
                "All new shift requests require 50% prepayment.",
                "Limit AR growth while serving existing commitments.",
                "Reduced new shift volume",
                "Shift volume down 60%, no new AR added",
            ),
        ),
        health_scores=(
            _score(15, "2024-12-09", 5, 20, 10, 25),
            _score(22, "2024-12-02", 10, 25, 15, 38),
            _score(35, "2024-11-25", 20, 40, 25, 55),
        ),
        created_at=_ts("2023-06-10T08:00:00"),
        updated_at=_ts("2024-12-09T16:45:00"),
    ),
    Account(
        id="acc-4",
        name="Valley Care Associates",
        is_parent=True,
        facilities=(
            Facility(id="fac-4-1", name="Valley Medical Plaza", ar_balance=28000, days_past_due=22),
            Facility(id="fac-4-2", name="Valley Home Health", ar_balance=15000, days_past_due=18),
        ),
        ar_balance=43000,
        days_past_due=22,
        credit_limit=100000,
        status=AccountStatus.PAYMENT_PLAN,
        risk_level=RiskLevel.MEDIUM,
        cam_owner="Emily Rodriguez",
        static_context=StaticContext(
            background="Regional provider hit by delayed Medicare reimbursements.",
            payment_patterns="On a $8K/week payment plan since Nov 2024.",
            relationship_notes="Controller gives advance notice of payment issues.",
            key_contacts="Lisa Park (Controller)",
        ),
        decisions=(
            _decision(
                "dec-4-1", "2024-11-11", DecisionCategory.SPECIAL_ARRANGEMENT,
                "Payment Plan Approved",
                "Approved $8K/week plan until Medicare reimbursements resume.",
                "Temporary cash flow gap with a strong payment history.",
                "AR below $30K by end of January",
            ),
        ),
        health_scores=(
            _score(68, "2024-12-09", 65, 85, 60, 62),
            _score(60, "2024-11-25", 55, 80, 55, 50),
        ),
        created_at=_ts("2024-02-01T12:00:00"),
        updated_at=_ts("2024-12-09T10:15:00"),
    ),
]


def initialize_sample_data(accounts: AccountRepository, cams: CAMRepository) -> bool:
    """Seed demo accounts and CAMs when nothing is stored under accounts; returns True if seeded"""
    if not accounts.gateway.available or not accounts.is_empty():
        return False

    accounts.replace_all(SAMPLE_ACCOUNTS)
    cams.replace_all(SAMPLE_CAMS)
    logging.info("Seeded sample data", extra={"accounts": len(SAMPLE_ACCOUNTS), "cams": len(SAMPLE_CAMS)})
    return True
