"""Result types produced by response classification."""
from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from requests import PreparedRequest, Request, Response


class ResponseStatus(str, Enum):
    """Closed set of outcomes a classified response can have."""

    OK = "ok"
    SERVICE_UNAVAILABLE = "service_unavailable"
    NO_CONTENT = "no_content"
    UNPARSABLE_JSON = "unparsable_json"
    CONTENTFUL_ERROR = "contentful_error"
    NOT_CONTENTFUL = "not_contentful"


SUCCESS_STATUSES = frozenset({ResponseStatus.OK, ResponseStatus.NO_CONTENT})


@dataclass(frozen=True, slots=True)
class ClassifiedResponse:
    """Answer from the Contentful API, triaged for the resource builder.

    ``object`` holds the decoded JSON body on the parsing paths, ``True`` for an
    empty 204 answer and the decoder exception when the body is not JSON.
    ``error_message`` is only set for error-like statuses.
    """

    raw: Response
    status: ResponseStatus
    object: Any = None
    error_message: Optional[str] = None
    request: Optional[Request | PreparedRequest] = None

    @property
    def status_code(self) -> int:
        return self.raw.status_code

    @property
    def is_success(self) -> bool:
        return self.status in SUCCESS_STATUSES

    @property
    def is_error(self) -> bool:
        return not self.is_success

    def raise_for_error(self) -> "ClassifiedResponse":
        """Raise the matching ContentfulResponseError for error statuses, else return self."""
        from .errors import error_for_response

        if self.is_error:
            raise error_for_response(self)
        return self

    def to_dict(self) -> Dict[str, Any]:
        summary: Dict[str, Any] = {
            "status": self.status.value,
            "status_code": self.status_code,
            "error_message": self.error_message,
        }
        if self.status is not ResponseStatus.UNPARSABLE_JSON:
            try:
                json.dumps(self.object)
            except (TypeError, ValueError):
                summary["object"] = repr(self.object)
            else:
                summary["object"] = self.object
        return summary
