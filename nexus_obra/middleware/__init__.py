"""Raw ASGI middleware: request id, security headers, access log."""

from nexus_obra.middleware.access_log import AccessLogMiddleware
from nexus_obra.middleware.request_id import RequestIDMiddleware
from nexus_obra.middleware.security_headers import SecurityHeadersMiddleware

__all__ = ["AccessLogMiddleware", "RequestIDMiddleware", "SecurityHeadersMiddleware"]
