import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ForecastError(Exception):
    """Base class for every failure the forecast pipeline can surface.

    Each subclass carries the HTTP status the API answers with; the message
    is what the dashboard shows in its notification toast.
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ForecastError):
    """A required filter is missing or invalid, so no request was issued."""
    status_code = status.HTTP_400_BAD_REQUEST


class InsufficientHistoryError(ValidationError):
    """Not enough stored history to fit a statistical model."""


class UpstreamError(ForecastError):
    """The generative backend was unreachable, unconfigured or answered with an error."""
    status_code = status.HTTP_502_BAD_GATEWAY


class ParseError(ForecastError):
    """The backend answered, but not with a usable forecast."""
    status_code = status.HTTP_502_BAD_GATEWAY


def register_error_handlers(app: FastAPI) -> None:
    """Maps pipeline errors to the `{"error": message}` body the dashboard expects."""

    @app.exception_handler(ForecastError)
    async def handle_forecast_error(request: Request, exc: ForecastError):
        logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
