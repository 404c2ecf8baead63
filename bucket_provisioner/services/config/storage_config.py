from __future__ import annotations

import os
from dataclasses import dataclass
from typing import ClassVar, Optional


@dataclass(frozen=True)
class StorageConfig:
    """Runtime configuration for Cloud Storage API calls.

    `api_endpoint` is only needed when talking to something other than the public
    JSON API, e.g. "http://localhost:4443" for a local emulator.
    """

    api_endpoint: Optional[str] = None
    _DEFAULT_TIMEOUT_SECONDS: ClassVar[float] = 60.0
    timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS

    @staticmethod
    def from_env(
        *,
        endpoint_env: str = "GCS_API_ENDPOINT",
        timeout_env: str = "GCS_TIMEOUT_SECONDS",
    ) -> "StorageConfig":
        endpoint = (os.getenv(endpoint_env) or "").strip()

        timeout_raw = os.getenv(timeout_env)
        timeout_seconds = StorageConfig._DEFAULT_TIMEOUT_SECONDS
        if timeout_raw:
            try:
                timeout_seconds = float(timeout_raw)
            except ValueError as exc:
                raise ValueError(f"Invalid {timeout_env}; must be a number") from exc
            if timeout_seconds <= 0:
                raise ValueError(f"Invalid {timeout_env}; must be greater than zero")

        return StorageConfig(
            api_endpoint=endpoint.rstrip("/") or None,
            timeout_seconds=timeout_seconds,
        )
