from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from bucket_provisioner.routes.bucket import router as bucket_router
from bucket_provisioner.services.credentials import AuthDecodeError, CredentialDecodeError
from bucket_provisioner.services.naming import MalformedResourceNameError
from bucket_provisioner.services.storage_service import BucketLocationConflictError, ProviderError


def _ensure_logging() -> None:
    formatter = logging.Formatter("%(levelname)s: %(message)s")
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    else:
        root.setLevel(logging.INFO)
        for handler in root.handlers:
            handler.setFormatter(formatter)


@asynccontextmanager
async def lifespan(app: FastAPI):
    _ensure_logging()
    yield


app = FastAPI(lifespan=lifespan)

app.include_router(bucket_router)


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies without echoing the submitted values.

    The default handler returns each error's `input`, which for a missing field is the
    whole body, credentials included.
    """
    errors = [{key: value for key, value in error.items() if key != "input"} for error in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(errors), "error": type(exc).__name__},
    )


@app.exception_handler(AuthDecodeError)
@app.exception_handler(CredentialDecodeError)
@app.exception_handler(MalformedResourceNameError)
async def input_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Reject caller input that could not be decoded or parsed.

    Raised before any Cloud Storage call is made, so nothing was provisioned.

    Returns:
        422 Unprocessable Entity with a JSON body: {"detail": "...", "error": "<ErrorClass>"}
    """
    return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, exc)


@app.exception_handler(BucketLocationConflictError)
async def location_conflict_handler(request: Request, exc: BucketLocationConflictError) -> JSONResponse:
    return _error_response(status.HTTP_409_CONFLICT, exc)


@app.exception_handler(ProviderError)
async def provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
    """Map Cloud Storage failures (permission, quota, name collision) to 502 Bad Gateway."""
    return _error_response(status.HTTP_502_BAD_GATEWAY, exc)


@app.get("/")
async def root():
    return {"message": "Bucket provisioner is running."}
