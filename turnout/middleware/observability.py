import logging
import time

from fastapi import FastAPI, Request

from turnout.middleware.request_id import get_request_id
from turnout.observability.logging import log_event

logger = logging.getLogger("turnout.observability")

OPTIONAL_STATE_KEYS = ("maintenance", "maintenance_kind", "error_code")


def _elapsed_ms(start: float) -> int:
    return int(round((time.perf_counter() - start) * 1000))


def install_observability_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def observability_middleware(request: Request, call_next):  # type: ignore[override]
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            log_event(
                logger,
                {
                    "event": "request.failed",
                    "request_id": get_request_id(request),
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": 500,
                    "latency_ms": _elapsed_ms(start),
                    "error_code": getattr(request.state, "error_code", "INTERNAL_ERROR"),
                },
                level=logging.ERROR,
            )
            raise

        completed_event = {
            "event": "request.completed",
            "request_id": get_request_id(request),
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "latency_ms": _elapsed_ms(start),
        }
        for key in OPTIONAL_STATE_KEYS:
            value = getattr(request.state, key, None)
            if value is not None:
                completed_event[key] = value

        log_event(logger, completed_event)
        return response
