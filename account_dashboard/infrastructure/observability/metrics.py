"""Prometheus metrics for decision activity, review outcomes, and storage health"""

from prometheus_client import Counter, Histogram

# Decision metrics
decision_counter = Counter(
    "account_dashboard_decision_total",
    "Decisions recorded on accounts",
    ["category"],  # status | action_plan | risk_urgency | special_arrangement
)

review_counter = Counter(
    "account_dashboard_review_total",
    "Team-lead reviews applied to decisions",
    ["outcome"],  # pass | fail | pending
)

# Backup metrics
backup_import_counter = Counter(
    "account_dashboard_backup_import_total",
    "Backup import attempts",
    ["result"],  # success | failure
)

# Storage health
storage_error_counter = Counter(
    "account_dashboard_storage_errors_total",
    "Storage reads or writes that fell back to defaults",
    ["operation"],  # read | write | remove
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_decision(category: str) -> None:
    decision_counter.labels(category=category).inc()


def record_review(outcome: str) -> None:
    review_counter.labels(outcome=outcome).inc()


def record_import(success: bool) -> None:
    backup_import_counter.labels(result="success" if success else "failure").inc()
