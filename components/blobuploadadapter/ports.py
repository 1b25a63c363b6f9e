
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

@runtime_checkable
class S3API(Protocol):
    """The slice of the S3 client the store calls. A boto3 ``s3`` client fits as-is."""

    def head_bucket(self, **kwargs: Any) -> Dict[str, Any]: ...

    def put_object(self, **kwargs: Any) -> Dict[str, Any]: ...


class BlobStorePort(ABC):
    @abstractmethod
    async def ping(self) -> None:
        """Check connection health by probing the configured bucket."""

    @abstractmethod
    async def upload(self, key: str, body: Any) -> None: ...

    @abstractmethod
    async def upload_with_metadata(
        self, key: str, body: Any, metadata: Optional[Mapping[str, str]] = None
    ) -> None: ...
