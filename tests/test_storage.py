"""Tests for the Supabase Storage client."""

import json

import httpx
import pytest

from speech_tts.tools.storage import StorageError, SupabaseStorage

SUPABASE_URL = "https://project.supabase.co"


class StorageAPI:
    """In-memory stand-in for the Storage REST API behind httpx.MockTransport."""

    def __init__(self, buckets=None, fail=None):
        self.buckets = list(buckets or [])
        self.fail = fail or {}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/storage/v1/bucket" and request.method == "GET":
            if "list" in self.fail:
                return httpx.Response(500, json={"message": self.fail["list"]})
            return httpx.Response(200, json=[{"id": b, "name": b} for b in self.buckets])

        if path == "/storage/v1/bucket" and request.method == "POST":
            if "create" in self.fail:
                return httpx.Response(400, json={"message": self.fail["create"]})
            self.buckets.append(json.loads(request.content)["name"])
            return httpx.Response(200, json={"name": self.buckets[-1]})

        if path.startswith("/storage/v1/object/") and request.method == "POST":
            if "upload" in self.fail:
                return httpx.Response(409, json={"error": self.fail["upload"]})
            return httpx.Response(200, json={"Key": path})

        return httpx.Response(404, json={"message": "not found"})


def make_storage(api, bucket="audio"):
    client = httpx.Client(transport=httpx.MockTransport(api))
    return SupabaseStorage(SUPABASE_URL, "service-key", bucket=bucket, client=client)


class TestStorageSetup:
    """Tests for client construction."""

    def test_missing_credentials_rejected(self):
        """Test that URL and key are required."""
        with pytest.raises(ValueError, match="SUPABASE_URL"):
            SupabaseStorage("", "key")

        with pytest.raises(ValueError, match="SUPABASE_URL"):
            SupabaseStorage(SUPABASE_URL, None)

    def test_auth_headers_sent(self):
        """Test that every request carries the apikey and bearer token."""
        api = StorageAPI()
        make_storage(api).list_buckets()

        request = api.requests[0]
        assert request.headers["apikey"] == "service-key"
        assert request.headers["authorization"] == "Bearer service-key"


class TestEnsureBucket:
    """Tests for ensure_bucket."""

    def test_existing_bucket_not_recreated(self):
        api = StorageAPI(buckets=["audio"])

        created = make_storage(api).ensure_bucket()

        assert created is False
        assert [r.method for r in api.requests] == ["GET"]

    def test_missing_bucket_created_public(self):
        api = StorageAPI(buckets=["images"])

        created = make_storage(api).ensure_bucket()

        assert created is True
        body = json.loads(api.requests[1].content)
        assert body == {"id": "audio", "name": "audio", "public": True}

    def test_list_failure(self):
        api = StorageAPI(fail={"list": "permission denied"})

        with pytest.raises(StorageError, match="Failed to list buckets: permission denied"):
            make_storage(api).ensure_bucket()

    def test_create_failure(self):
        api = StorageAPI(fail={"create": "quota exceeded"})

        with pytest.raises(StorageError, match="Failed to create audio bucket: quota exceeded"):
            make_storage(api).ensure_bucket()


class TestUpload:
    """Tests for uploads and public URLs."""

    def test_upload_file(self, tmp_path):
        """Test the object path, headers and returned public URL."""
        audio = tmp_path / "clip.mp3"
        audio.write_bytes(b"ID3data")
        api = StorageAPI(buckets=["audio"])

        url = make_storage(api).upload_file(str(audio))

        request = api.requests[0]
        assert request.url.path.startswith("/storage/v1/object/audio/audio/")
        assert request.url.path.endswith("-clip.mp3")
        assert request.headers["content-type"] == "audio/mpeg"
        assert request.headers["x-upsert"] == "false"
        assert request.content == b"ID3data"

        object_path = request.url.path[len("/storage/v1/object/audio/"):]
        assert url == f"{SUPABASE_URL}/storage/v1/object/public/audio/{object_path}"

    def test_unknown_extension_defaults_to_wav(self, tmp_path):
        audio = tmp_path / "clip.rawaudio"
        audio.write_bytes(b"data")
        api = StorageAPI()

        make_storage(api).upload_file(str(audio))

        assert api.requests[0].headers["content-type"] == "audio/wav"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            make_storage(StorageAPI()).upload_file(str(tmp_path / "nope.wav"))

    def test_upload_failure(self, tmp_path):
        audio = tmp_path / "clip.wav"
        audio.write_bytes(b"data")
        api = StorageAPI(fail={"upload": "The resource already exists"})

        with pytest.raises(StorageError, match="Failed to upload file to Supabase: The resource"):
            make_storage(api).upload_file(str(audio))

    def test_transport_error_wrapped(self):
        """Test that connection errors surface as StorageError."""

        def broken(request):
            raise httpx.ConnectError("connection refused")

        with pytest.raises(StorageError, match="connection refused"):
            make_storage(broken).list_buckets()

    def test_public_url_trailing_slash(self):
        storage = SupabaseStorage(SUPABASE_URL + "/", "k")

        assert storage.get_public_url("audio", "a b.wav") == (
            f"{SUPABASE_URL}/storage/v1/object/public/audio/a%20b.wav"
        )


class TestClientLifecycle:
    """Tests for closing the HTTP client."""

    def test_owned_client_closed_on_exit(self):
        with SupabaseStorage(SUPABASE_URL, "k") as storage:
            assert not storage._client.is_closed

        assert storage._client.is_closed

    def test_caller_client_left_open(self):
        client = httpx.Client(transport=httpx.MockTransport(StorageAPI()))

        with SupabaseStorage(SUPABASE_URL, "k", client=client):
            pass

        assert not client.is_closed
        client.close()
