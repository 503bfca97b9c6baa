"""
HTTP middleware: request auditing and response hardening.

AuditMiddleware gives every request an id (taken from an incoming
X-Request-ID header or generated), exposes it to the logging filter for
the duration of the request, and writes one audit line per request with
method, path, status, duration, client address and whether a bearer
token was sent. Token values are never logged.
"""
import time
import uuid
from typing import Callable, Dict

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from interview_coach.core.logging_config import get_logger, request_id_var

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Probed by load balancers; logged at DEBUG only
QUIET_PATHS = frozenset({"/health", "/health/ready", "/api/auth/health"})

SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


def _incoming_request_id(request: Request) -> str:
    supplied = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if supplied and len(supplied) <= 64 and supplied.replace("-", "").isalnum():
        return supplied
    return uuid.uuid4().hex[:12]


class AuditMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log its outcome."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = _incoming_request_id(request)
        token = request_id_var.set(request_id)
        started = time.perf_counter()

        has_bearer = request.headers.get("authorization", "").lower().startswith("bearer ")
        client = request.client.host if request.client else "unknown"
        summary = f"{request.method} {request.url.path} client={client} bearer={'yes' if has_bearer else 'no'}"

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"FAILED {summary} after {time.perf_counter() - started:.3f}s: {e}")
            raise
        finally:
            request_id_var.reset(token)

        elapsed = time.perf_counter() - started
        line = f"{summary} status={response.status_code} duration={elapsed:.3f}s id={request_id}"
        if request.url.path in QUIET_PATHS:
            logger.debug(line)
        elif response.status_code >= 500:
            logger.error(line)
        elif response.status_code >= 400:
            logger.warning(line)
        else:
            logger.info(line)

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{elapsed:.3f}s"
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Add hardening headers to every response.

    Auth responses carry bearer tokens, so they are also marked no-store.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        if request.url.path.startswith("/api/auth/"):
            response.headers["Cache-Control"] = "no-store"
        return response
