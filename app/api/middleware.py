"""API middleware: correlation ID, actor context, request log."""

import json
import logging
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.core.context import DEFAULT_ACTOR, actor_ctx, correlation_id_ctx

logger = logging.getLogger(__name__)

ACTOR_HEADER = "X-Actor-Name"
CORRELATION_HEADER = "X-Correlation-ID"
MAX_ACTOR_LENGTH = 100


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Generate or preserve correlation ID; attach to request.state, response header, and logging context."""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        correlation_id_ctx.set(correlation_id)

        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class ActorContextMiddleware(BaseHTTPMiddleware):
    """
    Read X-Actor-Name (caller-supplied, not authenticated); default 'system'.
    Return 400 if it is longer than the audit store accepts. Attach to request.state and logging context.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        actor = (request.headers.get(ACTOR_HEADER) or "").strip() or DEFAULT_ACTOR
        if len(actor) > MAX_ACTOR_LENGTH:
            return JSONResponse(
                status_code=400,
                content={"detail": f"{ACTOR_HEADER} must be at most {MAX_ACTOR_LENGTH} characters"},
            )
        request.state.actor = actor
        actor_ctx.set(actor)
        return await call_next(request)


class RequestLogMiddleware(BaseHTTPMiddleware):
    """After response: log structured request line (correlation_id, actor, path, method, status_code)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        request_log = {
            "event": "request_completed",
            "correlation_id": getattr(request.state, "correlation_id", None),
            "actor": getattr(request.state, "actor", None),
            "path": request.url.path,
            "method": request.method,
            "status_code": response.status_code,
        }
        logger.info(json.dumps(request_log))
        return response
