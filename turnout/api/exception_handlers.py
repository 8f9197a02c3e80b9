from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from turnout.middleware.request_id import get_request_id
from turnout.schemas import ErrorResponse


def error_response(request: Request, *, code: str, message: str, status_code: int) -> JSONResponse:
    request.state.error_code = code
    body = ErrorResponse(code=code, message=message, request_id=get_request_id(request)).model_dump()
    return JSONResponse(status_code=status_code, content=body)


def install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_failed_handler(request: Request, exc: RequestValidationError):  # noqa: ARG001
        return error_response(
            request,
            code="REQUEST_VALIDATION_FAILED",
            message="Request validation failed.",
            status_code=422,
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):  # noqa: ARG001
        return error_response(
            request,
            code="INTERNAL_ERROR",
            message="Internal server error.",
            status_code=500,
        )
