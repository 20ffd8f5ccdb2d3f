"""Exceptions raised for classified responses that callers choose to escalate."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Type

from .models import ClassifiedResponse, ResponseStatus


@dataclass(eq=False)
class ContentfulResponseError(RuntimeError):
    """Raised when a classified response does not describe a usable resource."""

    response: ClassifiedResponse

    def __post_init__(self) -> None:
        super().__init__(self.best_available_message())

    def best_available_message(self) -> str:
        if self.response.error_message:
            return self.response.error_message
        text = self.response.raw.text if self.response.raw.content else ""
        preview = text[:500].replace("\n", " ").strip()
        if preview:
            return preview
        return f"The following error was received: HTTP {self.response.status_code}"

    def __str__(self) -> str:  # noqa: D401 - simple representation
        return f"HTTP status code: {self.response.status_code}\nMessage: {self.best_available_message()}"


class BadRequest(ContentfulResponseError):
    """400"""


class Unauthorized(ContentfulResponseError):
    """401"""


class AccessDenied(ContentfulResponseError):
    """403"""


class NotFound(ContentfulResponseError):
    """404"""


class Conflict(ContentfulResponseError):
    """409, usually a version mismatch on update."""


class UnprocessableEntity(ContentfulResponseError):
    """422"""


class RateLimitExceeded(ContentfulResponseError):
    """429"""


class ServerError(ContentfulResponseError):
    """500"""


class BadGateway(ContentfulResponseError):
    """502"""


class ServiceUnavailable(ContentfulResponseError):
    """503"""


class UnparsableJson(ContentfulResponseError):
    """Body could not be decoded as JSON."""


class UnparsableResource(ContentfulResponseError):
    """Body is JSON but carries no Contentful system properties."""


_ERRORS_BY_STATUS: Dict[int, Type[ContentfulResponseError]] = {
    400: BadRequest,
    401: Unauthorized,
    403: AccessDenied,
    404: NotFound,
    409: Conflict,
    422: UnprocessableEntity,
    429: RateLimitExceeded,
    500: ServerError,
    502: BadGateway,
    503: ServiceUnavailable,
}


def error_for_status(status_code: int) -> Type[ContentfulResponseError]:
    return _ERRORS_BY_STATUS.get(status_code, ContentfulResponseError)


def error_for_response(response: ClassifiedResponse) -> ContentfulResponseError:
    """Build the exception that best describes an error-like classified response."""
    error_class = error_for_status(response.status_code)
    if error_class is ContentfulResponseError:
        if response.status is ResponseStatus.UNPARSABLE_JSON:
            error_class = UnparsableJson
        elif response.status is ResponseStatus.NOT_CONTENTFUL:
            error_class = UnparsableResource
    return error_class(response)
