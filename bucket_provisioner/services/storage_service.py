from __future__ import annotations

import logging
from typing import Any, Optional

from google.api_core.client_options import ClientOptions
from google.api_core.exceptions import NotFound
from google.cloud import storage
from google.cloud.storage.constants import PUBLIC_ACCESS_PREVENTION_ENFORCED

from bucket_provisioner.models.bucket import BucketState
from bucket_provisioner.services.config import GcpConfig, StorageConfig


logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    pass


class BucketLocationConflictError(ProviderError):
    pass


class GcsBucketService:
    """Bucket-level (control plane) operations against Cloud Storage.

    Every provider failure is re-raised as `ProviderError` with the API message kept
    in the text, so callers can surface it verbatim.
    """

    _DELETE_CHUNK_SIZE = 100

    def __init__(self, gcp: GcpConfig, config: StorageConfig, *, client: Optional[storage.Client] = None) -> None:
        self._gcp = gcp
        self._config = config
        self._storage_client = client

    def _client(self) -> storage.Client:
        if self._storage_client is None:
            client_options = ClientOptions(api_endpoint=self._config.api_endpoint) if self._config.api_endpoint else None
            self._storage_client = storage.Client(
                project=self._gcp.project,
                credentials=self._gcp.credentials(),
                client_options=client_options,
            )
        return self._storage_client

    @staticmethod
    def state_of(bucket: Any) -> BucketState:
        return BucketState(
            name=bucket.name,
            location=bucket.location,
            public_access_prevention=bucket.iam_configuration.public_access_prevention,
        )

    def get_bucket(self, name: str) -> Optional[Any]:
        client = self._client()
        try:
            return client.get_bucket(name, timeout=self._config.timeout_seconds)
        except NotFound:
            return None
        except Exception as exc:
            logger.exception("GCS get_bucket failed")
            raise ProviderError(f"Failed to read bucket {name}: {exc}") from exc

    def create_bucket(self, name: str, *, location: str) -> Any:
        client = self._client()
        try:
            bucket = client.bucket(name)
            bucket.iam_configuration.public_access_prevention = PUBLIC_ACCESS_PREVENTION_ENFORCED
            return client.create_bucket(
                bucket,
                project=self._gcp.project,
                location=location,
                timeout=self._config.timeout_seconds,
            )
        except Exception as exc:
            logger.exception("GCS create_bucket failed")
            raise ProviderError(f"Failed to create bucket {name} in {location}: {exc}") from exc

    def enforce_public_access_prevention(self, bucket: Any) -> Any:
        try:
            bucket.iam_configuration.public_access_prevention = PUBLIC_ACCESS_PREVENTION_ENFORCED
            bucket.patch(timeout=self._config.timeout_seconds)
            return bucket
        except Exception as exc:
            logger.exception("GCS bucket patch failed")
            raise ProviderError(f"Failed to enforce public access prevention on {bucket.name}: {exc}") from exc

    def delete_bucket(self, name: str) -> Optional[int]:
        """Delete a bucket and everything in it.

        Objects are removed first (every generation, so versioned buckets empty out too),
        then the bucket itself. Listing is consumed in chunks so a large bucket is never
        held in memory at once; each object is still its own DELETE request.

        Returns:
            The number of objects deleted, or None if the bucket did not exist.
        """

        bucket = self.get_bucket(name)
        if bucket is None:
            return None

        deleted = 0
        try:
            pending: list[Any] = []
            for blob in self._client().list_blobs(bucket, versions=True, timeout=self._config.timeout_seconds):
                pending.append(blob)
                if len(pending) >= self._DELETE_CHUNK_SIZE:
                    deleted += self._delete_blobs(bucket, pending)
                    pending = []
            if pending:
                deleted += self._delete_blobs(bucket, pending)

            bucket.delete(timeout=self._config.timeout_seconds)
        except NotFound:
            # Removed concurrently; nothing left to converge.
            pass
        except Exception as exc:
            logger.exception("GCS delete_bucket failed")
            raise ProviderError(f"Failed to delete bucket {name}: {exc}") from exc

        return deleted

    def _delete_blobs(self, bucket: Any, blobs: list[Any]) -> int:
        # on_error only sees NotFound: an object that is already gone counts as deleted.
        bucket.delete_blobs(
            blobs,
            on_error=lambda blob: None,
            preserve_generation=True,
            timeout=self._config.timeout_seconds,
        )
        return len(blobs)
