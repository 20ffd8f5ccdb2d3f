from __future__ import annotations

import pytest
from requests import Response

from contentful_response import errors
from contentful_response.models import ClassifiedResponse, ResponseStatus


def _classified(
    status_code: int,
    status: ResponseStatus,
    error_message: str | None = None,
    content: bytes = b"",
) -> ClassifiedResponse:
    raw = Response()
    raw.status_code = status_code
    raw._content = content
    raw.encoding = "utf-8"
    return ClassifiedResponse(raw=raw, status=status, error_message=error_message)


@pytest.mark.parametrize(
    ("status_code", "error_class"),
    [
        (400, errors.BadRequest),
        (401, errors.Unauthorized),
        (403, errors.AccessDenied),
        (404, errors.NotFound),
        (409, errors.Conflict),
        (422, errors.UnprocessableEntity),
        (429, errors.RateLimitExceeded),
        (500, errors.ServerError),
        (502, errors.BadGateway),
        (503, errors.ServiceUnavailable),
        (418, errors.ContentfulResponseError),
    ],
)
def test_error_for_status(status_code: int, error_class: type) -> None:
    assert errors.error_for_status(status_code) is error_class


def test_raise_for_error_uses_status_class() -> None:
    result = _classified(404, ResponseStatus.CONTENTFUL_ERROR, error_message="The resource could not be found.")

    with pytest.raises(errors.NotFound) as excinfo:
        result.raise_for_error()

    assert excinfo.value.response is result
    assert "404" in str(excinfo.value)
    assert "The resource could not be found." in str(excinfo.value)


def test_unparsable_success_raises_unparsable_json() -> None:
    result = _classified(200, ResponseStatus.UNPARSABLE_JSON, error_message="Expecting value", content=b"<html>")

    with pytest.raises(errors.UnparsableJson):
        result.raise_for_error()


def test_not_contentful_success_raises_unparsable_resource() -> None:
    result = _classified(200, ResponseStatus.NOT_CONTENTFUL, error_message="No contentful system properties found in object")

    with pytest.raises(errors.UnparsableResource):
        result.raise_for_error()


def test_message_falls_back_to_body_preview() -> None:
    result = _classified(500, ResponseStatus.CONTENTFUL_ERROR, content=b"Internal\nServer Error")

    error = errors.error_for_response(result)

    assert isinstance(error, errors.ServerError)
    assert error.best_available_message() == "Internal Server Error"


def test_message_falls_back_to_status_line() -> None:
    result = _classified(418, ResponseStatus.CONTENTFUL_ERROR)

    error = errors.error_for_response(result)

    assert error.best_available_message() == "The following error was received: HTTP 418"
    assert error.args == ("The following error was received: HTTP 418",)
