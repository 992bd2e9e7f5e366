"""Access log middleware: one line per HTTP request. Raw ASGI."""

import logging
import time
from typing import Callable

logger = logging.getLogger("nexus_obra.access")


def AccessLogMiddleware(app: Callable) -> Callable:
    """Log method, path, status, duration and request id once the response starts."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        started = time.perf_counter()
        status_code = 500

        async def send_and_record(message: dict) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await app(scope, receive, send_and_record)
        finally:
            client = scope.get("client")
            logger.info(
                "%s %s %s %.1fms ip=%s request_id=%s",
                scope["method"],
                scope["path"],
                status_code,
                (time.perf_counter() - started) * 1000,
                client[0] if client else "-",
                scope.get("state", {}).get("request_id", "-"),
            )

    return asgi_app
