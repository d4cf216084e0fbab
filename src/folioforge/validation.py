"""Validation utilities for FolioForge request payloads."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

import jsonschema

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "generation_request.schema.json"


@lru_cache(maxsize=1)
def _load_schema() -> dict[str, object]:
    return json.loads(_SCHEMA_PATH.read_text())


def validate_generation_payload(data: dict[str, object]) -> None:
    """Validate a generation payload against generation_request.schema.json.

    Parameters
    ----------
    data:
        The request payload dictionary to validate.

    Raises
    ------
    jsonschema.ValidationError
        If the data does not conform to the schema.
    """
    jsonschema.validate(data, _load_schema())
