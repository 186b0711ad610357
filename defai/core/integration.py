"""Helpers for validating responses returned by external integrations."""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

from defai.core.errors import UpstreamError
from defai.core.logging import get_logger

log = get_logger("integration")


def parse_integration_message(message: Any) -> Optional[Dict[str, Any]]:
    """Decode a (possibly double) JSON encoded error message.

    Returns None when the message is absent or cannot be decoded; a broken
    message never masks the status code check.
    """
    if not message or not isinstance(message, str):
        return None
    try:
        decoded = json.loads(message)
        if isinstance(decoded, str):
            decoded = json.loads(decoded)
    except (TypeError, ValueError):
        return None
    return decoded if isinstance(decoded, dict) else None


def extract_error_payload(output: Any) -> Optional[Dict[str, Any]]:
    """Find the detail/errors payload carried by an integration output."""
    if not isinstance(output, Mapping):
        return None
    if "message" in output:
        return parse_integration_message(output.get("message"))
    if "errors" in output or "detail" in output:
        return dict(output)
    return None


def check_integration_errors(response: Mapping[str, Any], integration_name: str) -> None:
    """Raise UpstreamError if an integration response reports a failure.

    A status code in [400, 600) fails, and so does a non-empty ``errors``
    payload even when the status code looks fine.
    """
    payload = extract_error_payload(response.get("output"))
    status_code = response.get("statusCode")
    detail = payload.get("detail") if payload else None
    errors = payload.get("errors") if payload else None

    parts = []
    if status_code and 400 <= status_code < 600:
        parts.append(f"{integration_name} responded with an error status code: {status_code}")
        if detail:
            parts.append(f"Details:\n{detail}")

    if errors:
        parts.append(f"Details:\n{json.dumps(errors, indent=2)}")

    if parts:
        message = "\n\n".join(parts)
        log.debug(f"{integration_name} error response: {dict(response)}")
        raise UpstreamError(
            integration_name,
            message,
            status_code=status_code,
            detail=detail,
            errors=errors,
        )


def clean_query_params(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop unset (None or empty string) query parameters."""
    return {key: value for key, value in params.items() if value is not None and value != ""}
