"""
Student Records API - Request Logging Middleware
==================================================

What:  One log line per request: method, path, status, duration, request ID,
       client IP, and the student id when the route carries one.
Level: 5xx → ERROR, 4xx → WARNING, otherwise INFO.

Request bodies are never logged; login, register, update and delete bodies
all carry passwords.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from student_api.middleware.request_id import request_id_var

logger = logging.getLogger("student_api.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request after the response is produced. Skips /health."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        if path == "/health":
            return await call_next(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        # Filled in by the router once the route has matched
        student_id = request.scope.get("path_params", {}).get("student_id")

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] student=%s from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            student_id or "-",
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "student_id": student_id,
            },
        )

        return response
