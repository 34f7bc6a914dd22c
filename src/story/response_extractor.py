"""
Provider response text extraction.

Normalizes the Responses API result into one text string. Accepts both
SDK objects (attribute access) and plain dicts (as produced by
model_dump() or test fixtures).

Known shapes:
- flat:   {"output_text": "..."}
- nested: {"output": [{"content": [{"text": "..."}, {"text": {"value": "..."}}]}]}
"""

from typing import Any, List

from .errors import UnrecognizedResponseError

_MISSING = object()


def _field(obj: Any, name: str) -> Any:
    """Read a key from a dict or an attribute from an object."""
    if obj is None:
        return _MISSING
    if isinstance(obj, dict):
        return obj.get(name, _MISSING)
    return getattr(obj, name, _MISSING)


def _entry_text(entry: Any) -> str:
    text = _field(entry, "text")
    if isinstance(text, str):
        return text
    value = _field(text, "value")
    if isinstance(value, str):
        return value
    return ""


def _collect_output_text(items: List[Any]) -> str:
    parts = []
    for item in items:
        content = _field(item, "content")
        if not isinstance(content, (list, tuple)):
            continue
        for entry in content:
            parts.append(_entry_text(entry))
    return "".join(parts)


def decode_response_text(response: Any) -> str:
    """
    Decode provider response text, failing on unknown shapes.

    Args:
        response: SDK response object or dict

    Returns:
        str: The flat output_text when present, otherwise the concatenated
            text of every content entry of every output item, in order.

    Raises:
        UnrecognizedResponseError: Neither output_text nor an output list
            is present.
    """
    output_text = _field(response, "output_text")
    if isinstance(output_text, str):
        return output_text

    output = _field(response, "output")
    if isinstance(output, (list, tuple)):
        return _collect_output_text(output)

    raise UnrecognizedResponseError(type(response).__name__)


def extract_response_text(response: Any) -> str:
    """Lenient variant of decode_response_text: unknown shapes yield ""."""
    try:
        return decode_response_text(response)
    except UnrecognizedResponseError:
        return ""
