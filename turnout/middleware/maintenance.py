import logging
import os
from pathlib import Path

from fastapi import FastAPI
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from turnout.api.exception_handlers import error_response
from turnout.domain.types import RequestView
from turnout.maintenance.errors import MaintenanceConfigError
from turnout.maintenance.interceptor import Interceptor
from turnout.middleware.request_id import get_request_id
from turnout.observability.logging import log_event
from turnout.responses.composer import negotiate

logger = logging.getLogger("turnout.maintenance")


def resolve_app_root(app: ASGIApp | None = None, app_root: Path | str | None = None) -> Path:
    if app_root is not None:
        return Path(app_root)
    configured = os.getenv("TURNOUT_APP_ROOT", "").strip()
    if configured:
        return Path(configured)
    root = getattr(app, "root", None)
    if root is not None:
        return Path(str(root))
    return Path(".")


def request_view_from_request(request: Request) -> RequestView:
    return RequestView(
        path=request.url.path,
        client_host=request.client.host if request.client else "",
        accept=request.headers.get("accept"),
    )


class MaintenanceMiddleware(BaseHTTPMiddleware):
    """Serve the maintenance page instead of calling the app while tmp/maintenance.yml exists."""

    def __init__(self, app: ASGIApp, app_root: Path | str | None = None) -> None:
        super().__init__(app)
        self.interceptor = Interceptor(resolve_app_root(app, app_root))

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        view = request_view_from_request(request)
        try:
            maintenance_response = await run_in_threadpool(self.interceptor.intercept, view)
        except (MaintenanceConfigError, FileNotFoundError) as exc:
            code = "MAINTENANCE_CONFIG_ERROR" if isinstance(exc, MaintenanceConfigError) else "MAINTENANCE_TEMPLATE_MISSING"
            log_event(
                logger,
                {
                    "event": "maintenance.config_error",
                    "request_id": get_request_id(request),
                    "path": view.path,
                    "error_code": code,
                    "error": str(exc),
                },
                level=logging.ERROR,
            )
            return error_response(
                request,
                code=code,
                message="Maintenance mode is misconfigured.",
                status_code=500,
            )

        if maintenance_response is None:
            return await call_next(request)

        request.state.maintenance = True
        request.state.maintenance_kind = negotiate(view.accept).value
        log_event(
            logger,
            {
                "event": "maintenance.blocked",
                "request_id": get_request_id(request),
                "method": request.method,
                "path": view.path,
                "kind": request.state.maintenance_kind,
                "status_code": maintenance_response.status_code,
            },
        )
        return Response(
            content=maintenance_response.body,
            status_code=maintenance_response.status_code,
            headers=maintenance_response.headers,
        )


def install_maintenance_middleware(app: FastAPI, app_root: Path | str | None = None) -> None:
    """Install before the request-id and observability middlewares so they wrap it."""
    app.add_middleware(MaintenanceMiddleware, app_root=resolve_app_root(app, app_root))
