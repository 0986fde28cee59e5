from fastapi import Request
from fastapi.responses import JSONResponse
from prometheus_client import Counter
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from fleetflow.core.environment import get_auth_rate_limit, get_rate_limit_default
from fleetflow.core.prometheus_metrics import REGISTRY

AUTH_RATE_LIMIT = get_auth_rate_limit()

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[get_rate_limit_default()],
)

# Metric for monitoring
rate_limit_exceeded_counter = Counter(
    'fleetflow_rate_limit_exceeded_total',
    'Total rate limit violations',
    ['endpoint'],
    registry=REGISTRY
)


def custom_rate_limit_exceeded(request: Request, exc: RateLimitExceeded):
    rate_limit_exceeded_counter.labels(endpoint=request.url.path).inc()

    return JSONResponse(
        status_code=429,
        content={
            "error": "Rate limit exceeded. Please try again later.",
            "limit": str(exc.detail),
            "retry_after": 60,
        },
    )
