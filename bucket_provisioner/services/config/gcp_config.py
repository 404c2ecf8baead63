from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from google.oauth2 import service_account

from bucket_provisioner.services.credentials import AuthDecodeError, decode_gcp_credentials


@dataclass(frozen=True)
class GcpConfig:
    """Provider authentication for a single provisioning call.

    Built per request from caller-supplied key material and passed explicitly to the
    storage client; nothing is read from ambient application default credentials.
    """

    project: str
    # Service-account key material; never part of repr() or logs.
    credentials_info: dict[str, Any] = field(repr=False)

    _SCOPES: ClassVar[tuple[str, ...]] = ("https://www.googleapis.com/auth/devstorage.full_control",)

    @staticmethod
    def from_inputs(*, credentials_b64: str, project: str) -> "GcpConfig":
        return GcpConfig(project=project, credentials_info=decode_gcp_credentials(credentials_b64))

    def credentials(self) -> service_account.Credentials:
        try:
            return service_account.Credentials.from_service_account_info(
                self.credentials_info,
                scopes=list(self._SCOPES),
            )
        except ValueError as exc:
            raise AuthDecodeError("gcp_credentials_b64 does not contain a usable service-account key") from exc
