import functools
import logging
from time import perf_counter

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware

from doc_registry.errors import RegistryError

logger = logging.getLogger(__name__)

REGISTRY_OPERATIONS = Counter(
    "registry_operations_total",
    "Registry operations by outcome (ok or error code)",
    ["operation", "outcome"],
)
REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "path"],
)


def tracked(operation: str):
    """Count each call of a registry operation by outcome.

    Rejections are logged at warning level and re-raised unchanged.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                result = func(*args, **kwargs)
            except RegistryError as exc:
                REGISTRY_OPERATIONS.labels(operation, exc.code).inc()
                logger.warning("%s rejected: %s", operation, exc.code)
                raise
            REGISTRY_OPERATIONS.labels(operation, "ok").inc()
            return result

        return wrapper

    return decorator


class ObservabilityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        started = perf_counter()
        response = await call_next(request)
        route = request.scope.get("route")
        path = getattr(route, "path", request.url.path)
        REQUEST_DURATION.labels(request.method, path).observe(perf_counter() - started)
        return response
