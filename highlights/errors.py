# highlights/errors.py
# Error taxonomy for the lookup service. Every HighlightsError is rendered by
# main.highlights_error_handler as {"error": message, "detail"?: detail}.

from __future__ import annotations

from fastapi import Request, status
from fastapi.responses import JSONResponse

from highlights.schemas import ErrorResponse


class HighlightsError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Unexpected server error"

    def __init__(self, message: str | None = None, detail: str | None = None):
        if message is not None:
            self.message = message
        self.detail = detail
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.message, detail=self.detail)


class InvalidYearError(HighlightsError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid or missing year"


class MissingCredentialError(HighlightsError):
    """Operator has to set the credential; never retried."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, setting: str):
        super().__init__(f"Server missing {setting}")
        self.setting = setting


class UpstreamError(HighlightsError):
    status_code = status.HTTP_502_BAD_GATEWAY
    message = "Upstream error"


class NoContentError(UpstreamError):
    message = "No content returned"


class EmptyContentError(UpstreamError):
    message = "Empty content"


class UnexpectedServerError(HighlightsError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Unexpected server error"


async def highlights_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, HighlightsError):
        exc = UnexpectedServerError()
    body = exc.to_response().model_dump(exclude_none=True)
    return JSONResponse(status_code=exc.status_code, content=body)
