"""Key-value store backends."""

from __future__ import annotations

import httpx
import pytest

from captcha_race.core import Settings, StorageUnavailable
from captcha_race.storage import (
    CloudflareKVStore,
    MemoryKeyValueStore,
    SQLKeyValueStore,
    build_store,
)

VALUE_PATH = "/client/v4/accounts/acct/storage/kv/namespaces/ns1/values/board"


def test_memory_store_get_and_put():
    store = MemoryKeyValueStore()

    assert store.get("board") is None
    store.put("board", "[]")
    store.put("board", "[1]")
    assert store.get("board") == "[1]"


class TestSQLStore:
    @pytest.fixture
    def url(self, tmp_path):
        return f"sqlite:///{tmp_path / 'nested' / 'kv.db'}"

    def test_round_trip_and_overwrite(self, url):
        store = SQLKeyValueStore(url)
        store.setup()

        assert store.get("board") is None
        store.put("board", '[{"captchaSeconds": 1}]')
        store.put("board", '[{"captchaSeconds": 2}]')
        assert store.get("board") == '[{"captchaSeconds": 2}]'
        store.close()

    def test_values_survive_a_new_engine(self, url):
        first = SQLKeyValueStore(url)
        first.setup()
        first.put("board", "persisted")
        first.close()

        second = SQLKeyValueStore(url)
        second.setup()
        assert second.get("board") == "persisted"
        second.close()

    def test_missing_table_is_unavailable(self, url, tmp_path):
        (tmp_path / "nested").mkdir()
        store = SQLKeyValueStore(url)

        with pytest.raises(StorageUnavailable):
            store.get("board")
        store.close()


class TestCloudflareStore:
    def make_store(self, handler):
        client = httpx.Client(transport=httpx.MockTransport(handler))
        return CloudflareKVStore("acct", "ns1", "secret-token", client=client)

    def test_absent_key_is_none(self):
        store = self.make_store(lambda request: httpx.Response(404, json={"success": False}))

        assert store.get("board") is None

    def test_get_returns_body_text(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(200, text='[{"captchaSeconds": 4}]')

        store = self.make_store(handler)

        assert store.get("board") == '[{"captchaSeconds": 4}]'
        assert seen == {"path": VALUE_PATH, "auth": "Bearer secret-token"}

    def test_put_sends_whole_value(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = request.content.decode("utf-8")
            return httpx.Response(200, json={"success": True})

        store = self.make_store(handler)
        store.put("board", "[]")

        assert seen == {"method": "PUT", "path": VALUE_PATH, "body": "[]"}

    @pytest.mark.parametrize("status", [401, 500, 503])
    def test_error_statuses_are_unavailable(self, status):
        store = self.make_store(lambda request: httpx.Response(status))

        with pytest.raises(StorageUnavailable):
            store.get("board")
        with pytest.raises(StorageUnavailable):
            store.put("board", "[]")

    def test_transport_errors_are_unavailable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        store = self.make_store(handler)

        with pytest.raises(StorageUnavailable, match="connection refused"):
            store.get("board")

    def test_missing_credentials_are_reported(self):
        with pytest.raises(StorageUnavailable, match="CLOUDFLARE_API_TOKEN"):
            CloudflareKVStore("acct", "ns1", None)


class TestBuildStore:
    def test_memory(self):
        assert isinstance(build_store(Settings(store="memory")), MemoryKeyValueStore)

    def test_sqlite(self, tmp_path):
        store = build_store(Settings(store="sqlite", database_url=f"sqlite:///{tmp_path / 'kv.db'}"))

        assert isinstance(store, SQLKeyValueStore)
        store.close()

    def test_cloudflare(self):
        store = build_store(
            Settings(
                store="cloudflare",
                cloudflare_account_id="acct",
                cloudflare_namespace_id="ns1",
                cloudflare_api_token="token",
            )
        )

        assert isinstance(store, CloudflareKVStore)
        store.close()

    def test_cloudflare_without_credentials(self):
        settings = Settings(
            store="cloudflare",
            cloudflare_account_id=None,
            cloudflare_namespace_id=None,
            cloudflare_api_token=None,
        )

        with pytest.raises(StorageUnavailable, match="misconfigured"):
            build_store(settings)

    def test_unknown_backend(self):
        with pytest.raises(StorageUnavailable, match="Unknown LEADERBOARD_STORE"):
            build_store(Settings(store="redis"))
