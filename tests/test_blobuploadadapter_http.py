import logging

from fastapi.testclient import TestClient

from components.blobuploadadapter.fakes import RecordingS3Client
from components.blobuploadadapter.http import make_app
from components.blobuploadadapter.store import S3Store


def make_client():
    s3 = RecordingS3Client()
    store = S3Store(s3, "test_bucket")
    return TestClient(make_app(store)), s3


def test_healthz_ok():
    client, s3 = make_client()
    r = client.get("/healthz", headers={"X-Request-Id": "req-1"})
    assert r.status_code == 200, r.text

    data = r.json()
    assert data["ok"] is True
    assert data["result"] == {"bucket": "test_bucket"}
    assert data["meta"]["request_id"] == "req-1"
    assert data["meta"]["adapter"] == "s3"
    assert s3.call_count("head_bucket") == 1


def test_healthz_backend_down_is_503():
    client, s3 = make_client()
    s3.fail_with("head_bucket", ConnectionError("no route to host"))

    r = client.get("/healthz")
    assert r.status_code == 503
    data = r.json()
    assert data["ok"] is False
    assert data["error"]["type"] == "UPSTREAM"
    assert data["error"]["message"] == "no route to host"


def test_put_object_with_metadata_headers():
    client, s3 = make_client()
    r = client.put(
        "/objects/images/cat.png",
        content=b"\x89PNG-bytes",
        headers={"X-Meta-Owner": "alice", "Content-Type": "application/octet-stream"},
    )
    assert r.status_code == 201, r.text
    data = r.json()
    assert data["result"] == {"key": "images/cat.png", "size": 10, "metadata": {"owner": "alice"}}

    call = s3.calls_for("put_object")[0]
    assert call.params["Bucket"] == "test_bucket"
    assert call.params["Key"] == "images/cat.png"
    assert call.params["Metadata"] == {"owner": "alice"}
    assert call.body_bytes == b"\x89PNG-bytes"


def test_put_object_empty_key_is_400():
    client, s3 = make_client()
    r = client.put("/objects/", content=b"data")
    assert r.status_code == 400
    assert r.json()["error"]["type"] == "VALIDATION"
    assert s3.call_count("put_object") == 0


def test_put_object_backend_failure_is_502():
    client, s3 = make_client()
    s3.fail_with("put_object", RuntimeError("AccessDenied"))

    r = client.put("/objects/key_1", content=b"my_body")
    assert r.status_code == 502
    assert r.json()["error"]["code"] == "BLOB_UPSTREAM"


def test_healthz_failure_logs_one_warning(caplog):
    client, s3 = make_client()
    s3.fail_with("head_bucket", ConnectionError("no route to host"))

    with caplog.at_level(logging.DEBUG, logger="blobupload"):
        r = client.get("/healthz")
    assert r.status_code == 503
    warnings = [rec for rec in caplog.records if rec.levelno >= logging.WARNING]
    assert len(warnings) == 1
    assert warnings[0].name == "blobupload"
