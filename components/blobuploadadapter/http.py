
from __future__ import annotations

import io
import logging
import time
import uuid

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.responses import JSONResponse

from .contracts import ErrorPayload, MetaPayload, UWFResponse
from .errors import InvalidArgument
from .store import S3Store

logger = logging.getLogger("blobupload.http")

META_HEADER_PREFIX = "x-meta-"


def _meta(store: S3Store, request: Request) -> MetaPayload:
    return MetaPayload(
        request_id=request.headers.get("x-request-id") or str(uuid.uuid4()),
        bucket=store.bucket,
        adapter=store.adapter,
    )


def _uwf_ok(result, meta: MetaPayload, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    body = UWFResponse(ok=True, result=result, meta=meta)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _uwf_err(e: Exception, meta: MetaPayload, upstream_status: int) -> JSONResponse:
    if isinstance(e, InvalidArgument):
        t, code, status_code = "VALIDATION", "BLOB_VALIDATION", status.HTTP_400_BAD_REQUEST
    else:
        t, code, status_code = "UPSTREAM", "BLOB_UPSTREAM", upstream_status
    err = ErrorPayload(type=t, code=code, message=str(e) or type(e).__name__)
    body = UWFResponse(ok=False, error=err, meta=meta)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def metadata_from_headers(request: Request) -> dict:
    return {
        name[len(META_HEADER_PREFIX):]: value
        for name, value in request.headers.items()
        if name.startswith(META_HEADER_PREFIX) and len(name) > len(META_HEADER_PREFIX)
    }


def router(store: S3Store) -> APIRouter:
    r = APIRouter(tags=["blobupload"])

    @r.get("/healthz")
    async def healthz(request: Request):
        t0 = time.time()
        meta = _meta(store, request)
        try:
            await store.ping()
        except Exception as e:
            meta.duration_ms = int((time.time() - t0) * 1000)
            logger.debug("healthz failed bucket=%s request_id=%s", store.bucket, meta.request_id)
            return _uwf_err(e, meta, status.HTTP_503_SERVICE_UNAVAILABLE)
        meta.duration_ms = int((time.time() - t0) * 1000)
        return _uwf_ok({"bucket": store.bucket}, meta)

    @r.put("/objects/{key:path}")
    async def put_object(key: str, request: Request):
        t0 = time.time()
        meta = _meta(store, request)
        raw = await request.body()
        metadata = metadata_from_headers(request)
        try:
            await store.upload_with_metadata(key, io.BytesIO(raw), metadata)
        except Exception as e:
            meta.duration_ms = int((time.time() - t0) * 1000)
            return _uwf_err(e, meta, status.HTTP_502_BAD_GATEWAY)
        meta.duration_ms = int((time.time() - t0) * 1000)
        return _uwf_ok({"key": key, "size": len(raw), "metadata": metadata}, meta, status.HTTP_201_CREATED)

    return r


def make_app(store: S3Store) -> FastAPI:
    app = FastAPI(title="BlobUploadAdapter", version="0.1")
    app.include_router(router(store))
    return app
