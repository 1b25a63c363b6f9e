
from __future__ import annotations
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class UploadSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    S3_BUCKET: Optional[str] = None
    AWS_REGION: Optional[str] = None
    S3_ENDPOINT_URL: Optional[str] = None  # MinIO / other S3-compatible hosts
    S3_FORCE_PATH_STYLE: bool = Field(default=False)
