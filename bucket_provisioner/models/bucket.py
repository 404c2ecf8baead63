from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, SecretStr, field_serializer

DEFAULT_BUCKET_LOCATION = "US"

ReconcileAction = Literal["create", "update", "noop", "conflict"]


class BucketInputs(BaseModel):
    """The flat input map supplied by the orchestrator for one bucket binding."""

    gcp_credentials_b64: SecretStr = Field(..., description="Base64 service-account key used to call the API")
    gcp_project: str = Field(..., min_length=1)
    bucket_location: str = Field(default=DEFAULT_BUCKET_LOCATION, min_length=1)
    app_name: str = Field(..., min_length=1)
    env_name: str = Field(..., min_length=1)
    resource_name: str = Field(..., min_length=1, description="Dot-delimited name; the 4th segment is the resource id")
    workload_access_credentials_b64: SecretStr = Field(..., description="Base64 credentials handed to the workload")


class BucketOutputs(BaseModel):
    bucket: str
    region: str
    credentials: SecretStr

    @field_serializer("credentials", when_used="json")
    def reveal_credentials(self, value: SecretStr) -> str:
        # Only the JSON sent back to the orchestrator carries the plain value; repr() stays masked.
        return value.get_secret_value()


class BucketState(BaseModel):
    name: str
    location: str
    public_access_prevention: Optional[str] = None


class BucketPlan(BaseModel):
    bucket: str
    region: str
    action: ReconcileAction
    current: Optional[BucketState] = None


class BucketTeardown(BaseModel):
    bucket: str
    deleted: bool
    objects_deleted: int = 0
