
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

OPERATIONS = ("head_bucket", "put_object")


@dataclass
class RecordedCall:
    operation: str
    params: Dict[str, Any]
    body_bytes: Optional[bytes] = None


class RecordingS3Client:
    """In-process stand-in for the boto3 S3 client.

    Records every call and replays programmed outcomes. Without programming,
    every operation succeeds with an empty response. Safe to call from the
    worker threads ``asyncio.to_thread`` uses.
    """

    def __init__(self):
        self.calls: List[RecordedCall] = []
        self._results: Dict[str, Any] = {}
        self._errors: Dict[str, BaseException] = {}
        self._lock = threading.RLock()

    def respond_with(self, operation: str, value: Dict[str, Any]) -> "RecordingS3Client":
        self._check_op(operation)
        with self._lock:
            self._errors.pop(operation, None)
            self._results[operation] = value
        return self

    def fail_with(self, operation: str, exc: BaseException) -> "RecordingS3Client":
        self._check_op(operation)
        with self._lock:
            self._errors[operation] = exc
        return self

    def calls_for(self, operation: str) -> List[RecordedCall]:
        with self._lock:
            return [c for c in self.calls if c.operation == operation]

    def call_count(self, operation: str) -> int:
        return len(self.calls_for(operation))

    # ---- S3API ----

    def head_bucket(self, **kwargs: Any) -> Dict[str, Any]:
        return self._call("head_bucket", kwargs)

    def put_object(self, **kwargs: Any) -> Dict[str, Any]:
        body = kwargs.get("Body")
        if hasattr(body, "read"):
            body_bytes = body.read()  # an upload consumes the stream once
        elif isinstance(body, (bytes, bytearray)):
            body_bytes = bytes(body)
        elif isinstance(body, str):
            body_bytes = body.encode("utf-8")
        else:
            body_bytes = None
        return self._call("put_object", kwargs, body_bytes)

    def _call(self, operation: str, params: Dict[str, Any], body_bytes: Optional[bytes] = None) -> Dict[str, Any]:
        with self._lock:
            self.calls.append(RecordedCall(operation=operation, params=dict(params), body_bytes=body_bytes))
            err = self._errors.get(operation)
            result = self._results.get(operation, {})
        if err is not None:
            raise err
        return result

    @staticmethod
    def _check_op(operation: str) -> None:
        if operation not in OPERATIONS:
            raise ValueError(f"unknown operation: {operation}")
