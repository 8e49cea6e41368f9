from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from commodities_pulse.schemas import ErrorCode, ErrorDetail, ErrorResponse


class UpstreamError(Exception):
    """Transport-level failure talking to the market-data provider."""


def http_error(
    code: ErrorCode, message: str, http_status=status.HTTP_400_BAD_REQUEST, hint: str | None = None
):
    detail = ErrorDetail(code=code, message=message, hint=hint)
    return HTTPException(status_code=http_status, detail=detail.model_dump(mode="json"))


def envelope_from_http_exception(exc: HTTPException) -> ErrorResponse:
    d = exc.detail
    if isinstance(d, dict) and "code" in d and "message" in d:
        return ErrorResponse(error=d)  # already our shape
    code = ErrorCode.NOT_FOUND if exc.status_code == 404 else ErrorCode.INTERNAL_ERROR
    return ErrorResponse(error=ErrorDetail(code=code, message=str(d), hint=None))


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    envelope = envelope_from_http_exception(exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope.model_dump(mode="json"),
        headers=getattr(exc, "headers", None),
    )
