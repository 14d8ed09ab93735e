"""Shared fixtures for the leaderboard test suite."""

from __future__ import annotations

import os
from typing import Iterator, Optional

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("LEADERBOARD_STORE", "memory")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from captcha_race.app import create_app  # noqa: E402
from captcha_race.core import Settings, StorageUnavailable  # noqa: E402
from captcha_race.services import LeaderboardService  # noqa: E402
from captcha_race.storage import KeyValueStore, MemoryKeyValueStore  # noqa: E402

TEST_KEY = "captcha-race-leaderboard"


class FlakyStore(KeyValueStore):
    """Memory store whose reads or writes can be switched off."""

    name = "flaky"

    def __init__(self, fail_get: bool = False, fail_put: bool = False) -> None:
        self.inner = MemoryKeyValueStore()
        self.fail_get = fail_get
        self.fail_put = fail_put
        self.puts = 0

    def get(self, key: str) -> Optional[str]:
        if self.fail_get:
            raise StorageUnavailable("store offline")
        return self.inner.get(key)

    def put(self, key: str, value: str) -> None:
        if self.fail_put:
            raise StorageUnavailable("store offline")
        self.puts += 1
        self.inner.put(key, value)



class BrokenStore(MemoryKeyValueStore):
    """Store failing with an error outside the storage contract."""

    name = "broken"

    def get(self, key: str) -> Optional[str]:
        raise RuntimeError("driver crashed")

@pytest.fixture
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def service(store: MemoryKeyValueStore) -> LeaderboardService:
    return LeaderboardService(store, key=TEST_KEY, limit=25)


@pytest.fixture
def settings() -> Settings:
    return Settings(store="memory", leaderboard_key=TEST_KEY, leaderboard_limit=25)


def make_client(store: KeyValueStore, settings: Settings, **kwargs) -> TestClient:
    return TestClient(create_app(store=store, settings=settings), **kwargs)


@pytest.fixture
def client(store: MemoryKeyValueStore, settings: Settings) -> Iterator[TestClient]:
    with make_client(store, settings) as test_client:
        yield test_client
