"""Request context middleware.

Forwards or generates X-Request-ID, bounds the request by a timeout (504)
and writes one access log line per request. Client-provided IDs are
sanitized (length and character set) before they reach the logs.
Raw ASGI (no BaseHTTPMiddleware) so streaming and background tasks work.
"""

import asyncio
import json
import logging
import re
import time
import uuid
from typing import Callable

logger = logging.getLogger("crm_search.access")

REQUEST_ID_MAX_LENGTH = 64
REQUEST_ID_ALLOWED_PATTERN = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(REQUEST_ID_MAX_LENGTH) + r"}$"
)


def _get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def sanitize_request_id(raw: str | None) -> str:
    """Return raw if safe to log; otherwise a new UUID."""
    if not raw or not REQUEST_ID_ALLOWED_PATTERN.match(raw.strip()):
        return str(uuid.uuid4())
    return raw.strip()


def _timeout_body(timeout_seconds: int, request_id: str) -> bytes:
    return json.dumps(
        {
            "error": "GATEWAY_TIMEOUT",
            "message": f"Request timed out after {timeout_seconds} seconds",
            "details": {"timeout_seconds": timeout_seconds, "request_id": request_id},
        }
    ).encode()


def RequestContextMiddleware(
    app: Callable,
    header_name: str = "X-Request-ID",
    timeout_seconds: int | None = None,
) -> Callable:
    """Attach a request ID to scope state and the response; log the outcome."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = sanitize_request_id(_get_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id
        id_header = (header_name.encode(), request_id.encode())
        started = time.perf_counter()
        status_code = 500
        response_started = False

        async def send_wrapper(message: dict) -> None:
            nonlocal status_code, response_started
            if message["type"] == "http.response.start":
                status_code = message["status"]
                response_started = True
                message["headers"] = [*message.get("headers", []), id_header]
            await send(message)

        try:
            if timeout_seconds:
                await asyncio.wait_for(
                    app(scope, receive, send_wrapper), timeout=float(timeout_seconds)
                )
            else:
                await app(scope, receive, send_wrapper)
        except asyncio.TimeoutError:
            logger.warning(
                "Request timed out after %ss: %s %s request_id=%s",
                timeout_seconds,
                scope.get("method", ""),
                scope.get("path", ""),
                request_id,
            )
            if not response_started:
                status_code = 504
                await send({
                    "type": "http.response.start",
                    "status": 504,
                    "headers": [(b"content-type", b"application/json"), id_header],
                })
                await send({
                    "type": "http.response.body",
                    "body": _timeout_body(timeout_seconds, request_id),
                })
        finally:
            logger.info(
                "%s %s -> %d (%.1fms) request_id=%s",
                scope.get("method", ""),
                scope.get("path", ""),
                status_code,
                (time.perf_counter() - started) * 1000,
                request_id,
            )

    return asgi_app
