"""End-to-end requests through the FastAPI app."""

from __future__ import annotations

import hashlib

from config.settings import settings
from controller.controller_dependencies import get_cdn_service
from main import app
from repository.blob_repository import RedisBlobRepository
from repository.registry_repository import MemoryResourceRegistry
from service.cdn_service import CdnService

CONTENT = (b"0123456789" * 100)[:1000]
H = hashlib.sha256(CONTENT).hexdigest()


def _upload(client, path: str = "/", content: bytes = CONTENT, content_type: str = "image/png"):
    return client.put(path, content=content, headers={"Content-Type": content_type})


def test_healthz(client):
    res = client.get("/healthz")
    assert res.status_code == 200
    assert res.json() == {"ok": True}


def test_put_stores_and_returns_url(client):
    res = _upload(client)
    assert res.status_code == 200
    assert res.json() == {"hash": H, "url": f"https://cdn.nodesite.eu/{H}.png"}
    assert res.headers["access-control-allow-origin"] == "*"
    assert res.headers["access-control-allow-methods"] == "PUT"


def test_get_by_hash(client):
    _upload(client)
    res = client.get(f"/{H}.png")
    assert res.status_code == 200
    assert res.content == CONTENT
    assert res.headers["content-type"] == "image/png"
    assert res.headers["accept-ranges"] == "bytes"
    assert res.headers["access-control-allow-methods"] == "GET, PUT"


def test_range_request_is_partial(client):
    _upload(client)
    res = client.get(f"/{H}.html", headers={"Range": "bytes=0-99"})
    assert res.status_code == 206
    assert res.headers["content-range"] == "bytes 0-99/1000"
    assert len(res.content) == 100
    assert res.content == CONTENT[:100]


def test_head_is_headers_only(client):
    _upload(client)
    res = client.head(f"/{H}.png")
    assert res.status_code == 200
    assert res.content == b""
    assert res.headers["content-length"] == "1000"
    assert res.headers["content-type"] == "image/png"


def test_delete_without_body_is_headers_only(client):
    _upload(client)
    res = client.delete(f"/{H}.png")
    assert res.status_code == 200
    assert res.content == b""


def test_post_with_body_stores(client):
    res = client.post("/anything.txt", content=b"posted", headers={"Content-Type": "text/plain"})
    assert res.status_code == 200
    assert res.json()["hash"] == hashlib.sha256(b"posted").hexdigest()
    assert client.get("/anything.txt").content == b"posted"


def test_unresolved_path_is_404(client):
    res = client.get("/unknownhash64charstring")
    assert res.status_code == 404
    assert res.json() == {"error": 404, "url": "/unknownhash64charstring"}
    assert res.headers["access-control-allow-origin"] == "*"


def test_404_url_keeps_query(client):
    res = client.get("/missing.html?v=2")
    assert res.json() == {"error": 404, "url": "/missing.html?v=2"}


def test_unknown_hash_is_404(client):
    uri = "/" + "e" * 64 + ".png"
    res = client.get(uri)
    assert res.status_code == 404
    assert res.json() == {"error": 404, "url": uri}
    assert res.headers["access-control-allow-origin"] == "*"


def test_registered_path_round_trip(client):
    _upload(client, "/site/index.html", b"<h1>hi</h1>", "text/html")
    _upload(client, "/site/index.html", b"<h1>changed</h1>", "text/html")
    res = client.get("/site/index.html")
    assert res.status_code == 200
    assert res.content == b"<h1>hi</h1>"
    assert res.headers["content-type"] == "text/html; charset=utf-8"


def test_put_prefix_registers_stripped_path(client):
    res = client.put("/put/docs/readme.txt", content=b"read me")
    assert res.status_code == 200
    assert client.get("/docs/readme.txt").content == b"read me"


def test_put_route_accepts_empty_body(client):
    res = client.put("/put")
    assert res.status_code == 200
    assert res.json()["hash"] == hashlib.sha256(b"").hexdigest()


def test_root_is_never_served(client):
    _upload(client, "/")
    assert client.get("/").status_code == 404


def test_upload_too_large(client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_MB", 0)
    res = client.put("/big.bin", content=b"x")
    assert res.status_code == 413
    assert res.json() == {"error": 413, "url": "/big.bin", "message": "Upload too large"}
    assert res.headers["access-control-allow-origin"] == "*"


def test_blob_store_failure_is_502(client, broken_redis):
    app.dependency_overrides[get_cdn_service] = lambda: CdnService(
        RedisBlobRepository(client=broken_redis),
        MemoryResourceRegistry(),
        cdn_host=settings.CDN_NAME,
    )
    res = client.get("/" + "a" * 64)
    assert res.status_code == 502
    assert res.json()["error"] == 502
    assert res.headers["access-control-allow-origin"] == "*"

    res = client.put("/x.bin", content=b"payload")
    assert res.status_code == 502


def test_cors_preflight(client):
    res = client.options(
        "/anything",
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "PUT",
        },
    )
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "*"


def test_404_url_is_the_uri_as_sent(client):
    res = client.get("/missing%20file.html")
    assert res.status_code == 404
    assert res.json() == {"error": 404, "url": "/missing%20file.html"}


def test_encoded_query_mark_stays_in_registered_path(client):
    res = client.put("/report%3Fdraft.txt", content=b"draft")
    assert res.status_code == 200
    assert client.get("/report").status_code == 404
    assert client.get("/report%3Fdraft.txt").content == b"draft"


def test_put_prefix_keeps_encoded_path(client):
    client.put("/put/notes%23one.txt", content=b"first note")
    assert client.get("/notes").status_code == 404
    assert client.get("/notes%23one.txt").content == b"first note"


def test_healthz_is_never_a_registered_path(client):
    res = client.put("/healthz", content=b"not a health report")
    assert res.status_code == 200
    health = client.get("/healthz")
    assert health.status_code == 200
    assert health.json() == {"ok": True}
