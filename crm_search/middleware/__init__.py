"""HTTP middleware: request ID, timeout and access log in one raw ASGI layer."""

from crm_search.middleware.request_context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
