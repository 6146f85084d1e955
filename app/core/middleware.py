import logging
import time

from fastapi import Request

logger = logging.getLogger("cybershield.requests")

# Probes hit these constantly; logged at DEBUG only
_QUIET_PATHS = {"/health"}


async def request_logger(request: Request, call_next):
    """Log each request with status and latency; expose it as X-Process-Time."""
    start = time.perf_counter()
    path = request.url.path

    response = await call_next(request)

    elapsed = time.perf_counter() - start
    if response.status_code >= 500:
        log = logger.error
    elif path in _QUIET_PATHS:
        log = logger.debug
    else:
        log = logger.info
    log(f"{request.method} {path} [{response.status_code}] ({elapsed * 1000:.1f} ms)")

    response.headers["X-Process-Time"] = f"{elapsed:.6f}"
    return response
