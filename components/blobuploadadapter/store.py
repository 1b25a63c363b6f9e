
from __future__ import annotations
import asyncio
import logging
from contextlib import contextmanager
from typing import Any, Mapping, Optional, Tuple

from opentelemetry import trace
from pydantic import ValidationError

from .contracts import ApiOption, UploadRequest
from .errors import InvalidArgument, InvalidConfiguration
from .ports import BlobStorePort, S3API

log = logging.getLogger("blobupload")
tracer = trace.get_tracer("blobupload")

@contextmanager
def _span(name: str, **attrs):
    with tracer.start_as_current_span(name) as span:
        for k, v in attrs.items():
            if v is not None:
                span.set_attribute(f"blob.{k}", v)
        yield span

class S3Store(BlobStorePort):
    """Health-checkable upload surface over a single S3 bucket.

    The store validates its inputs and forwards to the injected client.
    Client errors are raised to the caller untouched; there is no retry
    and no timeout here (wrap calls in ``asyncio.wait_for`` for that).
    """

    adapter = "s3"

    def __init__(self, client: S3API, bucket: str, *api_opts: ApiOption):
        if not bucket:
            raise InvalidConfiguration("bucket name cannot be empty")
        self._client = client
        self._bucket = bucket
        self._api_opts: Tuple[ApiOption, ...] = tuple(api_opts)

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def api_opts(self) -> Tuple[ApiOption, ...]:
        return self._api_opts

    async def ping(self) -> None:
        with _span("blob.ping", bucket=self._bucket, adapter=self.adapter):
            try:
                await asyncio.to_thread(self._client.head_bucket, Bucket=self._bucket)
            except Exception as e:
                log.warning("blob.ping err bucket=%s error=%s", self._bucket, type(e).__name__)
                raise
        log.info("blob.ping ok bucket=%s", self._bucket)

    async def upload(self, key: str, body: Any) -> None:
        await self.upload_with_metadata(key, body, {})

    async def upload_with_metadata(
        self, key: str, body: Any, metadata: Optional[Mapping[str, str]] = None
    ) -> None:
        req = self._validate(key, body, metadata)
        params = req.to_put_object_params(self._bucket)
        for opt in self._api_opts:
            opt(params)

        with _span("blob.upload", bucket=self._bucket, key=key, adapter=self.adapter,
                   metadata_keys=len(req.metadata)):
            try:
                await asyncio.to_thread(self._client.put_object, **params)
            except Exception as e:
                log.warning("blob.upload err bucket=%s key=%s error=%s", self._bucket, key, type(e).__name__)
                raise
        log.info("blob.upload ok bucket=%s key=%s metadata_keys=%s", self._bucket, key, len(req.metadata))

    def _validate(self, key: str, body: Any, metadata: Optional[Mapping[str, str]]) -> UploadRequest:
        if not key:
            log.info("blob.upload rejected bucket=%s reason=empty key", self._bucket)
            raise InvalidArgument("key cannot be empty")
        if body is None:
            log.info("blob.upload rejected bucket=%s key=%s reason=missing body", self._bucket, key)
            raise InvalidArgument("body cannot be None")
        try:
            if metadata is None:
                metadata = {}
            elif isinstance(metadata, Mapping):
                metadata = dict(metadata)
            return UploadRequest(key=key, body=body, metadata=metadata)
        except ValidationError as e:
            log.info("blob.upload rejected bucket=%s key=%s reason=invalid request", self._bucket, key)
            raise InvalidArgument(f"invalid upload request: {e}") from e
