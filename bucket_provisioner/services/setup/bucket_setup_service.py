from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from google.cloud.storage.constants import PUBLIC_ACCESS_PREVENTION_ENFORCED
from pydantic import SecretStr

from bucket_provisioner.models.bucket import (
    BucketInputs,
    BucketOutputs,
    BucketPlan,
    BucketTeardown,
    ReconcileAction,
)
from bucket_provisioner.services.config import GcpConfig, StorageConfig
from bucket_provisioner.services.credentials import decode_workload_credentials
from bucket_provisioner.services.naming import bucket_name_for
from bucket_provisioner.services.storage_service import BucketLocationConflictError, GcsBucketService


logger = logging.getLogger(__name__)

StorageFactory = Callable[[GcpConfig, StorageConfig], GcsBucketService]


@dataclass(frozen=True)
class DesiredBucket:
    name: str
    location: str
    public_access_prevention: str = PUBLIC_ACCESS_PREVENTION_ENFORCED


class BucketSetupService:
    """Converges one storage bucket to its desired state.

    Reconcile is explicit: read the current bucket, compare it with the desired
    attributes, then create, patch, or leave it alone. Location is immutable, so a
    bucket that already exists elsewhere is reported as a conflict rather than replaced.

    All caller input is decoded and validated before the first API call, so a bad
    credential or resource name never leaves a half-provisioned bucket behind.
    """

    def __init__(self, *, config: StorageConfig, storage_factory: StorageFactory = GcsBucketService) -> None:
        self._config = config
        self._storage_factory = storage_factory

    def provision(self, inputs: BucketInputs) -> BucketOutputs:
        gcp, desired = self._prepare(inputs)
        workload_credentials = decode_workload_credentials(inputs.workload_access_credentials_b64.get_secret_value())

        storage = self._storage_factory(gcp, self._config)
        current = storage.get_bucket(desired.name)
        action = self._diff(current, desired)
        logger.info("Reconciling bucket %s in %s (action=%s)", desired.name, desired.location, action)

        if action == "conflict":
            raise BucketLocationConflictError(
                f"Bucket {desired.name} already exists in {current.location}; "
                f"location is immutable and cannot become {desired.location}"
            )
        if action == "create":
            storage.create_bucket(desired.name, location=desired.location)
        elif action == "update":
            storage.enforce_public_access_prevention(current)

        return BucketOutputs(
            bucket=desired.name,
            region=desired.location,
            credentials=SecretStr(workload_credentials),
        )

    def plan(self, inputs: BucketInputs) -> BucketPlan:
        gcp, desired = self._prepare(inputs)

        storage = self._storage_factory(gcp, self._config)
        current = storage.get_bucket(desired.name)
        return BucketPlan(
            bucket=desired.name,
            region=desired.location,
            action=self._diff(current, desired),
            current=GcsBucketService.state_of(current) if current is not None else None,
        )

    def teardown(self, inputs: BucketInputs) -> BucketTeardown:
        gcp, desired = self._prepare(inputs)

        storage = self._storage_factory(gcp, self._config)
        objects_deleted = storage.delete_bucket(desired.name)
        if objects_deleted is None:
            logger.info("Bucket %s does not exist; nothing to tear down", desired.name)
            return BucketTeardown(bucket=desired.name, deleted=False)

        logger.info("Deleted bucket %s (%d objects)", desired.name, objects_deleted)
        return BucketTeardown(bucket=desired.name, deleted=True, objects_deleted=objects_deleted)

    # -----------------
    # Private helpers
    # -----------------

    @staticmethod
    def _prepare(inputs: BucketInputs) -> tuple[GcpConfig, DesiredBucket]:
        gcp = GcpConfig.from_inputs(
            credentials_b64=inputs.gcp_credentials_b64.get_secret_value(),
            project=inputs.gcp_project,
        )
        name = bucket_name_for(
            app_name=inputs.app_name,
            env_name=inputs.env_name,
            resource_name=inputs.resource_name,
        )
        return gcp, DesiredBucket(name=name, location=inputs.bucket_location)

    @staticmethod
    def _diff(current: Optional[Any], desired: DesiredBucket) -> ReconcileAction:
        if current is None:
            return "create"
        # The API reports locations upper-cased ("US-CENTRAL1"); callers may not.
        if (current.location or "").upper() != desired.location.upper():
            return "conflict"
        if current.iam_configuration.public_access_prevention != desired.public_access_prevention:
            return "update"
        return "noop"
