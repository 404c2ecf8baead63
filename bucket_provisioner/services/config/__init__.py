"""Configuration package (Facade).

Re-exports the public config types so callers import from a single, stable path
instead of the module that happens to define each one:

    from bucket_provisioner.services.config import GcpConfig, StorageConfig
"""

from bucket_provisioner.services.config.gcp_config import GcpConfig
from bucket_provisioner.services.config.storage_config import StorageConfig

__all__ = ["GcpConfig", "StorageConfig"]
