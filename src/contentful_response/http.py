"""Triage of raw HTTP responses from the Contentful Management API."""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional

from requests import PreparedRequest, Request, Response

from .config import ClassifierConfig
from .decompression import DecompressionError, DecompressorRegistry
from .models import ClassifiedResponse, ResponseStatus

logger = logging.getLogger(__name__)

JsonDecoder = Callable[[str], Any]
OriginRequest = Optional[Request | PreparedRequest]

NO_CONTENT_SENTINEL = True


class ResponseClassifier:
    """Turns a requests.Response into a ClassifiedResponse.

    Classification never raises for server payloads; every failure is carried by
    the returned status and error message.
    """

    def __init__(
        self,
        config: Optional[ClassifierConfig] = None,
        decoder: JsonDecoder = json.loads,
        decompressors: Optional[DecompressorRegistry] = None,
    ) -> None:
        self._config = config or ClassifierConfig()
        self._decoder = decoder
        self._decompressors = decompressors or DecompressorRegistry.for_encodings(
            self._config.decompress_encodings
        )

    def classify(self, raw: Response, request: OriginRequest = None) -> ClassifiedResponse:
        result = self._classify(raw, request)
        if result.status in (
            ResponseStatus.SERVICE_UNAVAILABLE,
            ResponseStatus.UNPARSABLE_JSON,
            ResponseStatus.NOT_CONTENTFUL,
        ):
            logger.warning(
                "Response %s classified as %s: %s",
                raw.status_code,
                result.status.value,
                result.error_message,
            )
        else:
            logger.debug("Response %s classified as %s", raw.status_code, result.status.value)
        return result

    def _classify(self, raw: Response, request: OriginRequest) -> ClassifiedResponse:
        if raw.status_code == 503:
            return ClassifiedResponse(
                raw=raw,
                request=request,
                status=ResponseStatus.SERVICE_UNAVAILABLE,
                error_message=self._config.service_unavailable_message,
            )

        body = raw.content or b""
        if not body and raw.status_code == 204:
            return ClassifiedResponse(
                raw=raw,
                request=request,
                status=ResponseStatus.NO_CONTENT,
                object=NO_CONTENT_SENTINEL,
            )

        try:
            payload = self._decode(raw, body)
        except (DecompressionError, LookupError, RecursionError, ValueError) as exc:
            return ClassifiedResponse(
                raw=raw,
                request=request,
                status=ResponseStatus.UNPARSABLE_JSON,
                object=exc,
                error_message=str(exc),
            )

        sys_properties = payload.get("sys") if isinstance(payload, dict) else None
        if not sys_properties:
            return ClassifiedResponse(
                raw=raw,
                request=request,
                status=ResponseStatus.NOT_CONTENTFUL,
                object=payload,
                error_message=self._config.not_contentful_message,
            )

        if isinstance(sys_properties, dict) and sys_properties.get("type") == "Error":
            return ClassifiedResponse(
                raw=raw,
                request=request,
                status=ResponseStatus.CONTENTFUL_ERROR,
                object=payload,
                error_message=payload.get("message"),
            )

        return ClassifiedResponse(raw=raw, request=request, status=ResponseStatus.OK, object=payload)

    def _decode(self, raw: Response, body: bytes) -> Any:
        content_encoding = raw.headers.get("Content-Encoding")
        inflated = self._decompressors.for_encoding(content_encoding).decompress(body)
        text = inflated.decode(raw.encoding or self._config.default_encoding)
        return self._decoder(text)


_DEFAULT_CLASSIFIER = ResponseClassifier()


def classify_response(raw: Response, request: OriginRequest = None) -> ClassifiedResponse:
    """Classify ``raw`` with the default configuration."""
    return _DEFAULT_CLASSIFIER.classify(raw, request)
