from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class InvalidDateRangeError(Exception):
    """Raised when a shift range starts after it ends."""


class ScheduleRequestError(Exception):
    """Raised when a schedule cannot be requested with the given shifts and staff."""


class ScheduleGenerationError(Exception):
    """Raised when the generative model fails or returns an unusable payload."""


# Mapping of custom exceptions to HTTP status codes
CUSTOM_ERRORS: dict[type[Exception], int] = {
    InvalidDateRangeError: 400,
    ScheduleRequestError: 400,
    ScheduleGenerationError: 502,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exc_class, status_code in CUSTOM_ERRORS.items():

        async def _handler(
            request: Request, exc: Exception, status_code: int = status_code
        ) -> JSONResponse:
            return JSONResponse(status_code=status_code, content={"detail": str(exc)})

        app.add_exception_handler(exc_class, _handler)
