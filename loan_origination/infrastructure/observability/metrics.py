"""Prometheus metrics for registrations, logins, loan bookings and credit scores"""

from prometheus_client import Counter, Histogram
from loan_origination.domain.models import LoanStatus

# Registry metrics
registration_counter = Counter(
    "loan_origination_registrations_total",
    "User registration attempts",
    ["outcome"],  # created | conflict
)

login_counter = Counter(
    "loan_origination_logins_total",
    "Login attempts",
    ["outcome"],  # success | not_registered | wrong_password
)

# Loan booking metrics
loan_booking_counter = Counter(
    "loan_origination_loan_bookings_total",
    "Loan bookings created",
    ["loan_type"],
)

loan_status_counter = Counter(
    "loan_origination_loan_status_updates_total",
    "Loan status updates",
    ["status"],
)

loan_amount_histogram = Histogram(
    "loan_origination_loan_amount",
    "Requested loan amounts",
    buckets=[10_000, 50_000, 100_000, 500_000, 1_000_000, 5_000_000],
)

# Credit score metrics
credit_score_counter = Counter(
    "loan_origination_credit_scores_total",
    "Credit scores generated by category",
    ["category"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_loan_booking(loan_type: str, loan_amount: float) -> None:
    """Record a new booking by product and amount"""
    loan_booking_counter.labels(loan_type=loan_type).inc()
    loan_amount_histogram.observe(loan_amount)


def record_status_update(loan_status: str) -> None:
    """Record a status write; statuses outside the known lifecycle are counted under 'other'"""
    known = {s.value for s in LoanStatus}
    loan_status_counter.labels(status=loan_status if loan_status in known else "other").inc()
