"""
Response envelope handling shared by the Files and Auth APIs.

Every Smartling API answers with ``{"response": {"code": ..., "data": ...}}``
on success and ``{"response": {"errors": [{"message": ...}]}}`` on failure.
"""

import json
from typing import Any, Optional

import httpx

from .errors import MalformedResponseError, RemoteApiError

SUCCESS_CODE = "SUCCESS"


def _decode(body: str) -> Optional[dict]:
    try:
        decoded = json.loads(body)
    except ValueError:
        return None
    if not isinstance(decoded, dict) or not isinstance(decoded.get("response"), dict):
        return None
    return decoded["response"]


def raise_for_error(response: httpx.Response) -> None:
    """Raise the matching error for a response with status code >= 400."""
    if response.status_code < 400:
        return

    body = response.text
    envelope = _decode(body)
    errors = envelope.get("errors") if envelope else None
    if not errors or not isinstance(errors, list):
        raise MalformedResponseError(status_code=response.status_code, body=body)

    raise RemoteApiError(
        response.status_code,
        [error if isinstance(error, dict) else {"message": str(error)} for error in errors],
    )


def unwrap(response: httpx.Response) -> Any:
    """Return ``response.data`` of a successful envelope, or True when it carries none."""
    body = response.text
    envelope = _decode(body)
    if envelope is None or envelope.get("code") != SUCCESS_CODE:
        raise MalformedResponseError(status_code=response.status_code, body=body)

    data = envelope.get("data")
    return data if data is not None else True
