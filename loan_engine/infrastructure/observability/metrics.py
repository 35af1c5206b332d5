"""Prometheus metrics for monitoring lending volume, payments and delinquency"""

from prometheus_client import Counter, Histogram

# Loan metrics
loan_counter = Counter(
    "loan_engine_loans_created_total",
    "Total loans created",
)

principal_issued_counter = Counter(
    "loan_engine_principal_issued_cents_total",
    "Principal lent out, in cents",
)

# Payment metrics
payment_counter = Counter(
    "loan_engine_payments_total",
    "Payment attempts by outcome",
    ["outcome"],  # applied | amount_mismatch | no_rows_affected | error
)

# Delinquency metrics
delinquency_check_counter = Counter(
    "loan_engine_delinquency_checks_total",
    "Delinquency evaluations by result",
    ["result"],  # delinquent | current
)

# Transaction metrics
rollback_counter = Counter(
    "loan_engine_transaction_rollbacks_total",
    "Units of work rolled back",
    ["unit"],
)

workflow_duration_histogram = Histogram(
    "loan_engine_workflow_duration_seconds",
    "Workflow execution time",
    ["workflow"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_loan_created(principal_cents: int) -> None:
    loan_counter.inc()
    principal_issued_counter.inc(principal_cents)


def record_payment(outcome: str) -> None:
    payment_counter.labels(outcome=outcome).inc()


def record_delinquency_check(delinquent: bool) -> None:
    result = "delinquent" if delinquent else "current"
    delinquency_check_counter.labels(result=result).inc()
