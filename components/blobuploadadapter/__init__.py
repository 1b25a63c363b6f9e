from __future__ import annotations
from typing import Optional

import boto3
from botocore.config import Config as BotoConfig

from .contracts import *
from .errors import *
from .ports import BlobStorePort, S3API
from .store import S3Store
from .fakes import RecordingS3Client, RecordedCall
from .config import UploadSettings

def make_store_from_env(*api_opts, settings: Optional[UploadSettings] = None) -> S3Store:
    cfg = settings or UploadSettings()
    if not cfg.S3_BUCKET:
        raise InvalidConfiguration("S3_BUCKET is required")
    client = boto3.client(
        "s3",
        region_name=cfg.AWS_REGION,
        endpoint_url=cfg.S3_ENDPOINT_URL,
        config=BotoConfig(s3={"addressing_style": "path" if cfg.S3_FORCE_PATH_STYLE else "auto"}),
    )
    return S3Store(client, cfg.S3_BUCKET, *api_opts)
