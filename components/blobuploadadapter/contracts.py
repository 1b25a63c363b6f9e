
from __future__ import annotations
from typing import Any, Callable, Dict, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, constr

# Opaque per-call modifier applied to the PutObject parameter dict before dispatch.
ApiOption = Callable[[Dict[str, Any]], None]

# ---------- Upload ----------

class UploadRequest(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, strict=True)

    key: constr(strict=True, min_length=1)
    body: Any  # bytes or a binary file-like object, read once by the backend
    metadata: Dict[str, str] = Field(default_factory=dict)

    def to_put_object_params(self, bucket: str) -> Dict[str, Any]:
        return {
            "Bucket": bucket,
            "Key": self.key,
            "Body": self.body,
            "Metadata": dict(self.metadata),
        }

# ---------- Unified Wire Format (UWF) ----------

class ErrorPayload(BaseModel):
    type: Literal["VALIDATION", "UPSTREAM"]
    code: constr(strip_whitespace=True, min_length=1)
    message: str

class MetaPayload(BaseModel):
    request_id: Optional[str] = None
    bucket: Optional[str] = None
    adapter: Optional[str] = None
    duration_ms: Optional[int] = None

class UWFResponse(BaseModel):
    ok: bool
    result: Optional[Any] = None
    error: Optional[ErrorPayload] = None
    meta: MetaPayload = Field(default_factory=MetaPayload)
