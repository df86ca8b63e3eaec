import logging
import time

from fastapi import Request

from app.core.config import SLOW_REQUEST_MS

logger = logging.getLogger("access")


async def request_logging_middleware(request: Request, call_next):
    started = time.perf_counter()

    response = await call_next(request)

    elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
    slow = elapsed_ms > SLOW_REQUEST_MS
    level = logging.WARNING if response.status_code >= 500 or slow else logging.INFO

    logger.log(
        level,
        "slow request" if slow else "",
        extra={
            "client_addr": request.client.host if request.client else "unknown",
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time_ms": elapsed_ms,
        },
    )

    response.headers["X-Process-Time-Ms"] = str(elapsed_ms)
    return response
