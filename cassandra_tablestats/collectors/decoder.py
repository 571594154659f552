"""Jolokia response decoding."""

import json
from typing import Any, Dict

from ..utils.metrics import AttributeMap, AttributeValue, ResponseDocument
from .errors import PayloadError, RemoteError


def _attribute_map(attributes: Any) -> AttributeMap:
    # Beans whose value is not an object carry no attributes
    if not isinstance(attributes, dict):
        return {}
    return {str(k): AttributeValue.from_json(v) for k, v in attributes.items()}


def _reject_constant(name: str):
    raise PayloadError(f"Failed to decode response: invalid JSON constant {name}")


def _require_int(payload: Dict[str, Any], key: str) -> int:
    value = payload.get(key, 0)
    # bool is a subclass of int
    if not isinstance(value, int) or isinstance(value, bool):
        raise PayloadError(f"Invalid {key} in response: {value!r}")
    return value


def _optional_text(value: Any):
    if value is None:
        return None
    return value if isinstance(value, str) else json.dumps(value)


def parse_document(payload: Dict[str, Any]) -> ResponseDocument:
    """
    Build a ResponseDocument from a decoded JSON object without status checks.

    Args:
        payload: Top-level JSON object

    Returns:
        ResponseDocument: Structured document

    Raises:
        PayloadError: If status or timestamp are not integers
    """
    status = _require_int(payload, "status")
    timestamp = _require_int(payload, "timestamp")

    beans = payload.get("value") or {}
    if not isinstance(beans, dict):
        beans = {}

    request = payload.get("request")
    return ResponseDocument(
        status=status,
        timestamp=timestamp,
        value={str(key): _attribute_map(attrs) for key, attrs in beans.items()},
        error=_optional_text(payload.get("error")),
        error_type=_optional_text(payload.get("error_type")),
        stacktrace=_optional_text(payload.get("stacktrace")),
        request=request if isinstance(request, dict) else {},
    )


def decode_response(body: bytes) -> ResponseDocument:
    """
    Decode a Jolokia read response body.

    Args:
        body: Raw HTTP response body

    Returns:
        ResponseDocument: Successful document, possibly without beans

    Raises:
        PayloadError: If the body is not a JSON object
        RemoteError: If the agent reported an error
    """
    try:
        payload = json.loads(body, parse_constant=_reject_constant)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise PayloadError(f"Failed to decode response: {e}") from e

    if not isinstance(payload, dict):
        raise PayloadError(f"Expected a JSON object, got {type(payload).__name__}")

    document = parse_document(payload)
    if not document.ok:
        message = document.error or f"agent returned status {document.status}"
        if document.error_type:
            message = f"{document.error_type}: {message}"
        raise RemoteError(
            message,
            status=document.status,
            error_type=document.error_type,
            stacktrace=document.stacktrace,
        )

    return document
