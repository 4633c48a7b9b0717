"""
Elite Logistic Backend — Request ID Middleware
================================================

What:  Gives every request a short correlation ID and echoes it back.
Why:   Error bodies and log lines carry the same ID, so a failed create in
       the web client can be matched to the server log entry.
How:   Reuses an incoming X-Request-ID header or generates one, stores it in
       a ContextVar and on request.state, and sets it on the response.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on the same event loop each see their own ID.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns `X-Request-ID` to each request/response pair."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars is plenty for correlating log lines
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
