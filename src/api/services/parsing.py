"""
Validation of provider output against pydantic models.
"""

from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ValidationError

from src.story.errors import ProviderResponseError

ModelT = TypeVar("ModelT", bound=BaseModel)

# Keep error messages readable when a response is badly off-schema
MAX_REPORTED_ERRORS = 3


def summarize_validation_error(error: ValidationError) -> str:
    """Render the first few pydantic errors as 'loc: msg' pairs."""
    parts = []
    for item in error.errors()[:MAX_REPORTED_ERRORS]:
        location = ".".join(str(p) for p in item.get("loc", ())) or "(root)"
        parts.append(f"{location}: {item.get('msg', 'invalid')}")
    remaining = error.error_count() - len(parts)
    if remaining > 0:
        parts.append(f"... and {remaining} more")
    return "; ".join(parts)


def parse_provider_object(model: Type[ModelT], data: Dict[str, Any], schema_name: str) -> ModelT:
    """
    Validate a decoded provider object.

    Raises:
        ProviderResponseError: data does not satisfy the model (missing
            fields, extra fields, wrong types, list bounds)
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ProviderResponseError(schema_name, summarize_validation_error(e)) from e
