"""CLI entrypoint for classifying captured Contentful responses."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

import typer
from requests import Response

from .config import ClassifierConfig, load_config
from .http import ResponseClassifier


def _configure_logging() -> None:
    env_level = os.getenv("CONTENTFUL_RESPONSE_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, env_level, None)
    if not isinstance(level, int):
        level = logging.INFO
        logging.warning(
            "Unrecognized CONTENTFUL_RESPONSE_LOG_LEVEL '%s'; defaulting to INFO",
            env_level,
        )
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s - %(message)s")


_configure_logging()

app = typer.Typer(help="Contentful Management API response triage")


def _attach_captured_body(response: Response, body: bytes) -> None:
    # requests exposes no public setter for an already-read body.
    response._content = body


def _build_response(body: bytes, status_code: int, headers: List[str], encoding: Optional[str]) -> Response:
    response = Response()
    response.status_code = status_code
    _attach_captured_body(response, body)
    response.encoding = encoding
    for header in headers:
        name, separator, value = header.partition(":")
        if not separator or not name.strip():
            raise typer.BadParameter(f"Header '{header}' must look like 'Name: value'", param_hint="--header")
        response.headers[name.strip()] = value.strip()
    return response


@app.command("classify")
def classify(
    body_file: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False, help="Captured response body"),
    status_code: int = typer.Option(200, "--status-code", "-s", help="HTTP status code of the captured response"),
    header: List[str] = typer.Option([], "--header", "-H", help="Response header as 'Name: value' (repeatable)"),
    encoding: Optional[str] = typer.Option(None, help="Declared charset of the body"),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, help="Path to classifier config YAML"),
) -> None:
    """Classify a response body stored on disk and print the outcome as JSON."""

    classifier_config = load_config(config) if config else ClassifierConfig()
    classifier = ResponseClassifier(classifier_config)
    raw = _build_response(body_file.read_bytes(), status_code, header, encoding)
    result = classifier.classify(raw)

    typer.echo(json.dumps(result.to_dict(), indent=2))
    if result.is_error:
        raise typer.Exit(code=1)


@app.callback()
def main() -> None:
    """Contentful Management API response triage."""


if __name__ == "__main__":
    app()
