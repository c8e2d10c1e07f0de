"""Invitation link codec.

An invitation travels as the ``c_i`` query parameter of an absolute URI:
JSON document -> UTF-8 -> Base64 -> URL escape. Decoding runs the same
pipeline backwards.
"""

import base64
import binascii
import json
from typing import Any
from urllib.parse import quote, unquote, urlsplit

from ..errors import MalformedPayloadError
from ..models import CONNECTION_INVITATION_TYPE, ConnectionInvitation

INVITATION_PARAMETER = "c_i"
UNSPECIFIED_LABEL = "[unspecified]"


def is_absolute_uri(text: str | None) -> bool:
    """True for a single token with a scheme and a host."""
    if not text:
        return False
    candidate = text.strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        return False
    try:
        parts = urlsplit(candidate)
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc)


def encode_invitation(endpoint: str, payload: dict[str, Any]) -> str:
    """Embed payload into endpoint as the c_i parameter."""
    raw = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    encoded = quote(base64.b64encode(raw).decode("ascii"), safe="")
    separator = "&" if urlsplit(endpoint).query else "?"
    return f"{endpoint}{separator}{INVITATION_PARAMETER}={encoded}"


def _extract_parameter(uri: str) -> str:
    try:
        query = urlsplit(uri.strip()).query
    except ValueError as e:
        raise MalformedPayloadError(f"Invalid invitation URI: {e}") from e

    # Split by hand: parse_qs would turn Base64 '+' into spaces
    for pair in query.split("&"):
        name, _, value = pair.partition("=")
        if name == INVITATION_PARAMETER and value:
            return unquote(value)
    raise MalformedPayloadError(f"No '{INVITATION_PARAMETER}' parameter in URI")


def _b64decode(value: str) -> bytes:
    padded = value + "=" * (-len(value) % 4)
    try:
        return base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError):
        pass
    try:
        return base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as e:
        raise MalformedPayloadError(f"Invitation is not valid Base64: {e}") from e


def decode_invitation(uri: str) -> dict[str, Any]:
    """Decode the c_i parameter of uri into its JSON document."""
    raw = _b64decode(_extract_parameter(uri))
    try:
        payload = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise MalformedPayloadError(f"Invitation is not UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise MalformedPayloadError(f"Invitation is not JSON: {e}") from e

    if not isinstance(payload, dict) or not isinstance(payload.get("@type"), str):
        raise MalformedPayloadError("Invitation has no '@type' discriminator")
    return payload


def decode_connection_invitation(uri: str) -> ConnectionInvitation:
    """Decode uri and require a connection invitation payload."""
    payload = decode_invitation(uri)
    if payload["@type"] != CONNECTION_INVITATION_TYPE:
        raise MalformedPayloadError(f"Unsupported invitation type {payload['@type']}")
    return ConnectionInvitation.from_dict(payload)


def parse_label(uri: str) -> str:
    """Label of the inviting party, or '[unspecified]'."""
    payload = decode_invitation(uri)
    if payload["@type"] == CONNECTION_INVITATION_TYPE:
        return payload.get("label") or UNSPECIFIED_LABEL
    return UNSPECIFIED_LABEL
