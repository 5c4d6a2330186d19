"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class AccountNotFoundError(DomainException):
    """No account with the requested id"""

    def __init__(self, account_id: str):
        super().__init__(f"Account not found: {account_id}")
        self.account_id = account_id


class DecisionNotFoundError(DomainException):
    """Account exists but holds no decision with the requested id"""

    def __init__(self, account_id: str, decision_id: str):
        super().__init__(f"Decision {decision_id} not found on account {account_id}")
        self.account_id = account_id
        self.decision_id = decision_id


class InvalidDecisionError(DomainException):
    """Decision draft is missing required fields"""

    pass
