"""Decision workflow - recording decisions, editing context, and team-lead reviews"""

import uuid
from typing import Optional

from account_dashboard.domain.exceptions import AccountNotFoundError
from account_dashboard.domain.models import Account, Decision, DecisionDraft, ReviewStatus, StaticContext
from account_dashboard.domain.review import apply_review, build_decision
from account_dashboard.infrastructure.observability.logging import log_review
from account_dashboard.infrastructure.observability.metrics import record_decision, record_review
from account_dashboard.infrastructure.storage.repositories import AccountRepository


def generate_id() -> str:
    return uuid.uuid4().hex


class DecisionReviewService:
    """Mutations on an account's decision history, persisted through the account repository"""

    def __init__(self, accounts: AccountRepository, reviewer: str):
        self.accounts = accounts
        self.reviewer = reviewer

    def _require_account(self, account_id: str) -> Account:
        account = self.accounts.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def review(
        self,
        account_id: str,
        decision_id: str,
        status: ReviewStatus,
        notes: Optional[str] = None,
    ) -> Decision:
        """
        Record a team-lead verdict on a decision.

        Flow:
        1. Load the full account collection
        2. Apply the verdict (raises AccountNotFoundError / DecisionNotFoundError, nothing saved)
        3. Upsert the reviewed account; other stored entries are left untouched
        """
        updated, reviewed = apply_review(
            self.accounts.list_all(),
            account_id,
            decision_id,
            status,
            reviewer=self.reviewer,
            now=self.accounts.clock(),
            notes=notes,
        )
        self.accounts.upsert(next(a for a in updated if a.id == account_id))

        record_review(status.value)
        log_review(account_id, decision_id, status.value, self.reviewer, notes)
        return reviewed

    def record_decision(self, account_id: str, draft: DecisionDraft) -> Decision:
        """Validate a draft, prepend it to the account's decisions and save"""
        account = self._require_account(account_id)
        decision = build_decision(draft, generate_id())
        self.accounts.upsert(account.with_decision(decision))
        record_decision(decision.category.value)
        return decision

    def update_static_context(self, account_id: str, context: StaticContext) -> Account:
        account = self._require_account(account_id)
        return self.accounts.upsert(account.with_static_context(context))
