import re
from uuid import uuid4

from fastapi import FastAPI, Request

SAFE_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{8,64}$")
REQUEST_ID_HEADER = "X-Request-Id"
UNKNOWN_REQUEST_ID = "unknown-request-id"


def get_request_id(request: Request) -> str:
    value = getattr(request.state, "request_id", "")
    return value if isinstance(value, str) and value else UNKNOWN_REQUEST_ID


def install_request_id_middleware(app: FastAPI) -> None:
    """Must be installed last so it wraps the maintenance response too."""

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):  # type: ignore[override]
        incoming = request.headers.get(REQUEST_ID_HEADER, "")
        request.state.request_id = incoming if SAFE_REQUEST_ID_PATTERN.fullmatch(incoming) else uuid4().hex

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        return response
