import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request

from turnout.api.exception_handlers import install_exception_handlers
from turnout.middleware.maintenance import install_maintenance_middleware, resolve_app_root
from turnout.middleware.observability import install_observability_middleware
from turnout.middleware.request_id import install_request_id_middleware
from turnout.observability.logging import log_event, setup_logging
from turnout.schemas import HealthResponse
from turnout.settings.store import SettingsStore

logger = logging.getLogger("turnout.app")


def create_app(app_root: Path | str | None = None) -> FastAPI:
    load_dotenv()
    setup_logging()
    root = resolve_app_root(app_root=app_root)
    store = SettingsStore(root)

    app = FastAPI(title="turnout", version="0.1.0")
    # Order matters: the last installed middleware runs first.
    install_maintenance_middleware(app, app_root=root)
    install_observability_middleware(app)
    install_request_id_middleware(app)
    install_exception_handlers(app)

    @app.get("/health", response_model=HealthResponse)
    def health(request: Request) -> HealthResponse:
        maintenance = store.is_active()
        request.state.maintenance = maintenance
        return HealthResponse(status="ok", maintenance=maintenance)

    @app.get("/")
    def index() -> dict[str, str]:
        return {"status": "ok"}

    log_event(logger, {"event": "app.created", "app_root": str(root)})
    return app
