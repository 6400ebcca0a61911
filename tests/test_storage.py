from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

import httpx

from countdown_tracker.exceptions import ConflictError, StoreError
from countdown_tracker.models import Snapshot, WeightEntry
from countdown_tracker.storage import LocalCache, RemoteStore

BLOB_URL = "https://blob.example.com/tracker.json"


class TestLocalCache(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.cache = LocalCache(Path(self.tmp.name))

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_missing_file_is_empty(self) -> None:
        self.assertTrue(self.cache.load().is_empty)

    def test_save_then_load(self) -> None:
        snapshot = Snapshot(weight_entries=[WeightEntry(date="2026-01-06", weight=88.5)])
        self.assertIsNone(self.cache.save(snapshot))
        self.assertTrue(self.cache.file_path.exists())
        self.assertEqual(self.cache.load().weight_entries[0].weight, 88.5)
        self.assertTrue(self.cache.clear())
        self.assertFalse(self.cache.clear())

    def test_pending_file_is_separate(self) -> None:
        pending = LocalCache(Path(self.tmp.name), file_name=LocalCache.PENDING_FILE_NAME)
        pending.save(Snapshot(weight_entries=[WeightEntry(date="2026-01-06", weight=88)]))
        self.assertEqual(pending.file_path.name, "pending.json")
        self.assertTrue(self.cache.load().is_empty)

    def test_corrupt_file_is_empty(self) -> None:
        self.cache.file_path.write_text("{not json")
        self.assertTrue(self.cache.load().is_empty)


class RecordingTransport:
    """Serves canned responses and records each request."""

    def __init__(self, *responses: httpx.Response):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responses.pop(0)

    def store(self, token: str | None = None) -> RemoteStore:
        return RemoteStore(BLOB_URL, token=token, client=httpx.Client(transport=httpx.MockTransport(self)))


class TestRemoteStore(unittest.TestCase):
    def test_load_keeps_etag(self) -> None:
        body = {"activityEntries": [], "weightEntries": [{"date": "2026-01-06T00:00:00Z", "weight": 90}]}
        transport = RecordingTransport(httpx.Response(200, json=body, headers={"ETag": '"v1"'}))
        snapshot = transport.store(token="secret").load()
        self.assertEqual(snapshot.version, '"v1"')
        self.assertEqual(snapshot.weight_entries[0].weight, 90)
        request = transport.requests[0]
        self.assertEqual(request.headers["Authorization"], "Bearer secret")
        self.assertEqual(request.headers["Cache-Control"], "no-store")

    def test_missing_blob_is_empty(self) -> None:
        snapshot = RecordingTransport(httpx.Response(404)).store().load()
        self.assertTrue(snapshot.is_empty)
        self.assertIsNone(snapshot.version)

    def test_load_errors(self) -> None:
        with self.assertRaises(StoreError):
            RecordingTransport(httpx.Response(500, text="boom")).store().load()
        with self.assertRaises(StoreError):
            RecordingTransport(httpx.Response(200, text="not json")).store().load()

    def test_transport_failure_is_store_error(self) -> None:
        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        store = RemoteStore(BLOB_URL, client=httpx.Client(transport=httpx.MockTransport(fail)))
        with self.assertRaises(StoreError):
            store.load()

    def test_update_is_conditional_on_etag(self) -> None:
        transport = RecordingTransport(httpx.Response(200, headers={"ETag": '"v2"'}))
        snapshot = Snapshot(weight_entries=[WeightEntry(date="2026-01-06", weight=88)], version='"v1"')
        self.assertEqual(transport.store().save(snapshot), '"v2"')

        (update,) = transport.requests
        self.assertEqual(update.method, "PUT")
        self.assertEqual(update.headers["If-Match"], '"v1"')
        self.assertNotIn("If-None-Match", update.headers)
        self.assertEqual(json.loads(update.content)["weightEntries"][0]["weight"], 88)

    def test_create_only_after_missing_blob(self) -> None:
        transport = RecordingTransport(httpx.Response(404), httpx.Response(201, headers={"ETag": '"v1"'}))
        store = transport.store()
        self.assertEqual(store.save(store.load()), '"v1"')
        create = transport.requests[1]
        self.assertEqual(create.headers["If-None-Match"], "*")
        self.assertNotIn("If-Match", create.headers)

    def test_blob_without_etag_is_written_unconditionally(self) -> None:
        transport = RecordingTransport(
            httpx.Response(200, json={"activityEntries": [], "weightEntries": []}),
            httpx.Response(200),
        )
        store = transport.store()
        snapshot = store.load()
        self.assertIsNone(snapshot.version)
        self.assertIsNone(store.save(snapshot))
        write = transport.requests[1]
        self.assertNotIn("If-None-Match", write.headers)
        self.assertNotIn("If-Match", write.headers)

    def test_precondition_failure_is_conflict(self) -> None:
        store = RecordingTransport(httpx.Response(412)).store()
        with self.assertRaises(ConflictError) as ctx:
            store.save(Snapshot(version='"old"'))
        self.assertEqual(ctx.exception.status_code, 409)

    def test_other_write_failures(self) -> None:
        store = RecordingTransport(httpx.Response(503, text="down")).store()
        with self.assertRaises(StoreError) as ctx:
            store.save(Snapshot())
        self.assertNotIsInstance(ctx.exception, ConflictError)


if __name__ == "__main__":
    unittest.main(verbosity=2)
