from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[2]))

from backend.app.services.access_gate import (
    ONE_WEEK_SECONDS,
    KeyValidityCache,
    require_author_key,
    resolve_data_source,
)
from backend.app.services.errors import AuthorKeyRequiredError, StoreError


class FakeStore:
    def __init__(self, result=True, exc=None):
        self.result = result
        self.exc = exc
        self.calls = []

    def validate_key(self, key):
        self.calls.append(key)
        if self.exc is not None:
            raise self.exc
        return self.result


@pytest.mark.parametrize("key", [None, ""])
def test_missing_key_uses_sample_without_calling_store(key):
    store = FakeStore()

    assert resolve_data_source(key, store).use_sample is True
    assert store.calls == []


def test_valid_key_uses_real_data():
    store = FakeStore(result=True)

    assert resolve_data_source("secret", store).use_sample is False
    assert store.calls == ["secret"]


@pytest.mark.parametrize("result", [False, None, "true", 1])
def test_anything_but_true_uses_sample(result):
    assert resolve_data_source("secret", FakeStore(result=result)).use_sample is True


@pytest.mark.parametrize("exc", [StoreError("db down"), ConnectionError("network"), RuntimeError("boom")])
def test_validation_failure_uses_sample(exc):
    assert resolve_data_source("secret", FakeStore(exc=exc)).use_sample is True


def test_every_call_revalidates():
    store = FakeStore()
    for _ in range(3):
        resolve_data_source("secret", store)

    assert store.calls == ["secret", "secret", "secret"]


def test_require_author_key_rejects_writes():
    with pytest.raises(AuthorKeyRequiredError) as excinfo:
        require_author_key(None, FakeStore(), action="create transactions")
    assert "Valid author key is required to create transactions" in str(excinfo.value)

    with pytest.raises(AuthorKeyRequiredError):
        require_author_key("wrong", FakeStore(result=False))

    with pytest.raises(AuthorKeyRequiredError):
        require_author_key("secret", FakeStore(exc=StoreError("db down")))

    require_author_key("secret", FakeStore(result=True))


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_key_cache_memoizes_positive_results_for_ttl():
    clock = FakeClock()
    cache = KeyValidityCache(clock=clock)
    store = FakeStore(result=True)

    assert cache.is_valid("secret", store) is True
    clock.now += ONE_WEEK_SECONDS - 1
    assert cache.is_valid("secret", store) is True
    assert store.calls == ["secret"]

    clock.now += 2
    assert cache.is_valid("secret", store) is True
    assert store.calls == ["secret", "secret"]


def test_key_cache_never_caches_rejections():
    cache = KeyValidityCache(clock=FakeClock())
    store = FakeStore(result=False)

    assert cache.is_valid("wrong", store) is False
    assert cache.is_valid("wrong", store) is False
    assert store.calls == ["wrong", "wrong"]
    assert cache.is_valid(None, store) is False


def test_key_cache_forget():
    cache = KeyValidityCache(clock=FakeClock())
    store = FakeStore(result=True)

    cache.is_valid("secret", store)
    cache.forget("secret")
    cache.is_valid("secret", store)

    assert store.calls == ["secret", "secret"]
