from __future__ import annotations

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from bucket_provisioner.models.bucket import BucketInputs, BucketOutputs, BucketPlan, BucketTeardown
from bucket_provisioner.services.dependencies import get_bucket_setup_service
from bucket_provisioner.services.setup.bucket_setup_service import BucketSetupService

router = APIRouter(prefix="/bucket", tags=["bucket"])


@router.post("", response_model=BucketOutputs)
async def provision_bucket(
    payload: BucketInputs,
    svc: BucketSetupService = Depends(get_bucket_setup_service),
) -> BucketOutputs:
    return await run_in_threadpool(svc.provision, payload)


@router.post("/plan", response_model=BucketPlan)
async def plan_bucket(
    payload: BucketInputs,
    svc: BucketSetupService = Depends(get_bucket_setup_service),
) -> BucketPlan:
    return await run_in_threadpool(svc.plan, payload)


@router.post("/teardown", response_model=BucketTeardown)
async def teardown_bucket(
    payload: BucketInputs,
    svc: BucketSetupService = Depends(get_bucket_setup_service),
) -> BucketTeardown:
    return await run_in_threadpool(svc.teardown, payload)
