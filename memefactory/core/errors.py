"""Error taxonomy for request handling.

Every failure is raised as a ``MemeFactoryError`` subclass and converted into
an HTTP response by ``memefactory_error_handler`` at the app boundary.
"""

from typing import Any

from fastapi import Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from memefactory.core.logging import get_logger

logger = get_logger(__name__)


class MemeFactoryError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> Response:
        return PlainTextResponse(self.message, status_code=self.status_code)


class MissingInputError(MemeFactoryError):
    """A required request field is missing or empty."""

    status_code = 400


class MissingConfigurationError(MemeFactoryError):
    """A provider credential is not configured."""

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Missing {setting_name}")
        self.setting_name = setting_name


class UpstreamHTTPError(MemeFactoryError):
    """A provider answered with a non-2xx status."""

    status_code = 502

    def __init__(self, message: str, upstream_status: int | None = None) -> None:
        super().__init__(message)
        self.upstream_status = upstream_status


class EmptyGenerationError(MemeFactoryError):
    """The language model returned no usable text."""


class MissingOutputError(MemeFactoryError):
    """A finished media task carried no recognizable asset URL."""


class TaskFailedError(MemeFactoryError):
    """The media provider reported the task as failed or cancelled."""

    def __init__(self, task_id: str, task_details: dict[str, Any] | None = None) -> None:
        super().__init__(f"Runway task {task_id} failed")
        self.task_id = task_id
        self.task_details = task_details

    def to_response(self) -> Response:
        return JSONResponse(
            status_code=self.status_code,
            content=self.task_details or {"error": "Runway task failed"},
        )


class TaskTimeoutError(MemeFactoryError):
    """The media task did not reach a terminal status in time."""

    def __init__(self, task_id: str, waited_seconds: float) -> None:
        super().__init__(f"Runway task {task_id} did not finish within {waited_seconds:.0f}s")
        self.task_id = task_id

    def to_response(self) -> Response:
        return JSONResponse(status_code=self.status_code, content={"error": self.message})


async def memefactory_error_handler(request: Request, exc: MemeFactoryError) -> Response:
    """Render a MemeFactoryError as its HTTP response."""
    logger.bind(path=request.url.path, status=exc.status_code, error=exc.message).warning(
        "request_failed"
    )
    return exc.to_response()


async def unhandled_error_handler(request: Request, exc: Exception) -> Response:
    """Catch-all for anything that escaped the taxonomy."""
    logger.bind(path=request.url.path, error=str(exc)).exception("request_unhandled_error")
    return JSONResponse(status_code=500, content={"error": str(exc) or "Server error"})
