"""Prometheus metrics for login outcomes, onboarding and token rejections"""

from prometheus_client import Counter, Histogram

# Auth metrics
login_counter = Counter(
    "lms_login_total",
    "Login attempts",
    ["outcome"],  # success | invalid_credentials | locked
)

registration_counter = Counter(
    "lms_registration_total",
    "Lender onboarding attempts",
    ["outcome"],  # created | weak_password | conflict
)

token_rejection_counter = Counter(
    "lms_token_rejections_total",
    "Tokens rejected during validation",
    ["reason"],  # EmptySecretError | MalformedTokenError | InvalidSignatureError | ...
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_login(outcome: str) -> None:
    login_counter.labels(outcome=outcome).inc()


def record_registration(outcome: str) -> None:
    registration_counter.labels(outcome=outcome).inc()


def record_token_rejection(error: Exception) -> None:
    """Count a rejected token under its error class name"""
    token_rejection_counter.labels(reason=type(error).__name__).inc()
