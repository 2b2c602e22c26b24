from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

http_requests_total = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "path", "status"]
)
http_request_duration_seconds = Histogram(
    "http_request_duration_seconds", "HTTP request duration", ["method", "path"]
)
tier_lookups_total = Counter(
    "tier_lookups_total", "Tier table lookups served over HTTP", ["endpoint", "outcome"]
)
plan_changes_total = Counter(
    "plan_changes_total", "Subscription plan catalog changes", ["action"]
)

def observe_request(method, path_template, status, seconds):
    http_requests_total.labels(method, path_template, status).inc()
    http_request_duration_seconds.labels(method, path_template).observe(seconds)

def increment_tier_lookup(endpoint, outcome):
    tier_lookups_total.labels(endpoint, outcome).inc()

def increment_plan_change(action):
    plan_changes_total.labels(action).inc()

def metrics_endpoint():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
