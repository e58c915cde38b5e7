"""Tests for the key extraction HTTP API."""

import base64

import pytest
from fastapi.testclient import TestClient

from mfckeys.main import app


@pytest.fixture
def client():
    return TestClient(app)


def upload(data: bytes):
    return {"file": ("card.mfd", data, "application/octet-stream")}


class TestHealth:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestDecodeFile:
    def test_decode_1k(self, client, dump_1k):
        resp = client.post("/api/keys/decode/file", files=upload(dump_1k))
        assert resp.status_code == 200
        body = resp.json()
        assert body["uid"] == "deadbeef"
        assert body["card"] == "1K"
        assert len(body["keys"]) == 16
        assert body["keys"][0]["key_a"] == "a0a1a2a3a4a5"

    def test_decode_4k(self, client, dump_4k):
        body = client.post("/api/keys/decode/file", files=upload(dump_4k)).json()
        assert body["card"] == "4K"
        assert [k["sector"] for k in body["keys"]] == list(range(40))

    def test_wrong_size(self, client):
        resp = client.post("/api/keys/decode/file", files=upload(bytes(1023)))
        assert resp.status_code == 400
        assert "not the correct size" in resp.json()["detail"]


class TestExportFile:
    def test_proxmark_default(self, client, dump_1k):
        resp = client.post("/api/keys/export/file", files=upload(dump_1k))
        assert resp.status_code == 200
        body = resp.json()
        assert body["uid"] == "deadbeef"
        (f,) = body["files"]
        assert f["filename"] == "deadbeef.bin"
        assert f["size"] == 192
        data = base64.b64decode(f["data"])
        assert data[:6] == bytes.fromhex("A0A1A2A3A4A5")
        assert data[96:102] == bytes.fromhex("B0B1B2B3B4B5")

    def test_mfoc(self, client, dump_1k):
        resp = client.post("/api/keys/export/file", params={"fmt": "mfoc"}, files=upload(dump_1k))
        names = [f["filename"] for f in resp.json()["files"]]
        assert names == ["adeadbeef.dump", "bdeadbeef.dump"]

    def test_unknown_format(self, client, dump_1k):
        resp = client.post("/api/keys/export/file", params={"fmt": "eml"}, files=upload(dump_1k))
        assert resp.status_code == 422

    def test_wrong_size(self, client):
        resp = client.post("/api/keys/export/file", files=upload(bytes(4097)))
        assert resp.status_code == 400
