"""Helpers that turn multipart form fields into validated core inputs."""

import json
from typing import Any, TypeVar

from fastapi import UploadFile
from pydantic import BaseModel, ValidationError

from src.catalog.core.errors import InvalidInputError

ModelT = TypeVar("ModelT", bound=BaseModel)


def describe_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


def build_input(model: type[ModelT], values: dict[str, Any]) -> ModelT:
    """Validate ``values`` into ``model``, reporting failures as InvalidInput."""
    try:
        return model.model_validate(values)
    except ValidationError as e:
        raise InvalidInputError(describe_validation_error(e)) from e


def parse_variants(raw: str | None) -> list[dict[str, Any]] | None:
    """Decode the ``variants`` form field, a JSON array of variant objects."""
    if raw is None:
        return None
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidInputError("variants must be a JSON array") from e
    if not isinstance(decoded, list) or not all(isinstance(item, dict) for item in decoded):
        raise InvalidInputError("variants must be a JSON array of objects")
    return decoded


def read_upload(upload: UploadFile | None) -> bytes | None:
    if upload is None:
        return None
    return upload.file.read()
