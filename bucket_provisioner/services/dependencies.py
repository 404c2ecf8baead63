from __future__ import annotations

from bucket_provisioner.services.config import StorageConfig
from bucket_provisioner.services.setup.bucket_setup_service import BucketSetupService


def get_storage_config() -> StorageConfig:
    return StorageConfig.from_env()


def get_bucket_setup_service() -> BucketSetupService:
    """FastAPI dependency provider for a BucketSetupService instance."""

    return BucketSetupService(config=get_storage_config())
