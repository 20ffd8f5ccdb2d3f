"""Configuration loading utilities for response classification."""
from __future__ import annotations

import codecs
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel, Field, validator

from .decompression import KNOWN_DECOMPRESSORS

SERVICE_UNAVAILABLE_MESSAGE = "Service Unavailable, contentful.com API seems to be down"
NOT_CONTENTFUL_MESSAGE = "No contentful system properties found in object"


class ClassifierConfig(BaseModel):
    service_unavailable_message: str = Field(
        SERVICE_UNAVAILABLE_MESSAGE,
        description="Error message attached to 503 responses",
    )
    not_contentful_message: str = Field(
        NOT_CONTENTFUL_MESSAGE,
        description="Error message attached to JSON bodies without a sys object",
    )
    default_encoding: str = Field(
        "utf-8",
        description="Text encoding used when the response does not declare one",
    )
    decompress_encodings: list[str] = Field(
        default_factory=lambda: ["gzip"],
        description="Content-Encoding values reversed before JSON decoding",
    )

    @validator("default_encoding")
    def validate_default_encoding(cls, value: str) -> str:  # noqa: D417 - pydantic validator signature
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"Unknown text encoding '{value}'") from exc
        return value

    @validator("decompress_encodings")
    def validate_decompress_encodings(cls, value: list[str]) -> list[str]:
        unknown = [encoding for encoding in value if encoding not in KNOWN_DECOMPRESSORS]
        if unknown:
            supported = ", ".join(sorted(KNOWN_DECOMPRESSORS))
            raise ValueError(f"Unsupported decompress_encodings {unknown}; expected any of: {supported}")
        return value

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ClassifierConfig":
        return cls.model_validate(raw)

    @classmethod
    def from_yaml(cls, path: Path) -> "ClassifierConfig":
        data = yaml.safe_load(path.read_text()) or {}
        return cls.from_dict(data)


def load_config(path: str | Path) -> ClassifierConfig:
    """Load a ClassifierConfig from a YAML file."""
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    return ClassifierConfig.from_yaml(config_path)
