from pathlib import Path
import sys

import pytest

# Ensure project root is on sys.path before tests import modules
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

SETTINGS_ENV = ("S3_BUCKET", "AWS_REGION", "S3_ENDPOINT_URL", "S3_FORCE_PATH_STYLE")


@pytest.fixture(autouse=True)
def _clean_upload_env(monkeypatch, tmp_path):
    # keep UploadSettings independent of the developer's shell and .env
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
