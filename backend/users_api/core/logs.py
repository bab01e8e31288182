import logging
import time

from fastapi import Request

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

request_log = logging.getLogger("users_api.request")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


async def log_requests(request: Request, call_next):
    """
    Outermost HTTP middleware: one line when a request starts, one when it
    finishes, with the status code and the total time spent in auth,
    validation, the handler and the store.
    """
    target = request.url.path + (f"?{request.url.query}" if request.url.query else "")
    request_log.info("[Request] %s %s - Start", request.method, target)
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        request_log.info(
            "[Request] %s %s - Completed %d in %.0fms", request.method, target, status_code, elapsed_ms
        )
