from typing import Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

logger = logging.getLogger("convcheck.errors")


class ConvCheckError(Exception):
    """Base class for every failure the harness reports."""


class RateFetchError(ConvCheckError):
    """The rate provider could not be reached or answered with a non-2xx status."""

    def __init__(self, url: str, status: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status = status
        self.reason = reason
        if status is not None:
            msg = f"Failed: HTTP error code: {status} for {url}"
        else:
            msg = f"Failed to fetch rates from {url}: {reason}"
        super().__init__(msg)


class RateLookupError(ConvCheckError):
    """A currency code is missing from the fetched table or has an unusable rate."""

    def __init__(self, currency: str, detail: str = "not present in rate table"):
        self.currency = currency
        super().__init__(f"{currency}: {detail}")


class ValidationRejected(ConvCheckError):
    """The amount falls outside what the page accepts.

    Not a failure: callers assert that ``displayed`` (the text read from the
    page, None when no error was shown) equals ``message`` verbatim.
    """

    def __init__(self, message: str, amount: object = None, displayed: Optional[str] = None):
        self.message = message
        self.amount = amount
        self.displayed = displayed
        super().__init__(message)

    @property
    def matches(self) -> bool:
        return self.displayed == self.message


class ResultParseError(ConvCheckError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Failed to parse conversion result: {text!r}")


class ElementTimeout(ConvCheckError):
    def __init__(self, selector: str, timeout_ms: Optional[int] = None):
        self.selector = selector
        self.timeout_ms = timeout_ms
        super().__init__(f"{selector} not ready within {timeout_ms} ms")


class ToleranceMismatch(ConvCheckError, AssertionError):
    """Displayed result and expected conversion are not equivalent."""

    def __init__(self, actual: float, expected: float, context: str = ""):
        self.actual = actual
        self.expected = expected
        prefix = f"{context}: " if context else ""
        super().__init__(
            f"{prefix}displayed {actual!r} != expected {expected!r} "
            f"(abs diff {abs(actual - expected)!r})"
        )


# Handlers for the rate stub service


def http_error_handler(request: Request, exc: StarletteHTTPException):  # type: ignore
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        detail = f"No route for {request.method} {request.url.path}"
    else:
        detail = exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "http_error", "detail": detail},
        headers=getattr(exc, "headers", None),
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=422,
        content={
            "error": "validation_error",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )
