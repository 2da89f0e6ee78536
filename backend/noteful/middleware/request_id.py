"""
Noteful Backend — Request ID Middleware
=========================================

What:  Correlation id per request, echoed in X-Request-ID, in error bodies and
       on every log line written while the request is handled.
How:   A client-supplied X-Request-ID is reused when it looks like an id
       (letters, digits, '.', '_', '-', at most 64 chars). Anything else is
       replaced by 8 hex characters of a uuid4, so a header cannot inject
       text into log lines.

    RequestIDMiddleware   sets request_id_var for the request
    RequestIDLogFilter    copies request_id_var onto each LogRecord
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_CLIENT_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(header_value: Optional[str]) -> str:
    """The client's id if it is safe to log, otherwise a fresh one."""
    if header_value and _CLIENT_ID.fullmatch(header_value):
        return header_value
    return uuid.uuid4().hex[:8]


class RequestIDLogFilter(logging.Filter):
    """Adds `request_id` to every record ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("") or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        # Not reset afterwards: the 500 handler runs outside this middleware
        # and still needs the id
        request_id_var.set(rid)
        request.state.request_id = rid
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
