from __future__ import annotations

import base64
import json
from typing import Any


class AuthDecodeError(ValueError):
    pass


class CredentialDecodeError(ValueError):
    pass


def _b64decode_text(value: str) -> str:
    # Line breaks from wrapped output (base64(1), openssl) are dropped; any other
    # character outside the base64 alphabet is an error, not skipped.
    # binascii.Error, UnicodeDecodeError and non-ASCII input all surface as ValueError.
    unwrapped = value.replace("\r", "").replace("\n", "")
    raw = base64.b64decode(unwrapped, validate=True)
    return raw.decode("utf-8")


def decode_gcp_credentials(credentials_b64: str) -> dict[str, Any]:
    """Decode a base64 service-account key into its JSON key info."""

    try:
        info = json.loads(_b64decode_text(credentials_b64))
    except ValueError as exc:
        raise AuthDecodeError("gcp_credentials_b64 is not a base64-encoded JSON key") from exc

    if not isinstance(info, dict):
        raise AuthDecodeError("gcp_credentials_b64 must decode to a JSON object")
    return info


def decode_workload_credentials(credentials_b64: str) -> str:
    try:
        return _b64decode_text(credentials_b64)
    except ValueError as exc:
        raise CredentialDecodeError("workload_access_credentials_b64 is not valid base64") from exc
