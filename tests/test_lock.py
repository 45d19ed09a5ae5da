# ==============================================================================
# Tests for DynamoDBLock
# ==============================================================================
"""
Unit tests for the distributed lock.

Tests cover:
- Mutual exclusion between owners
- Expired locks becoming available, non-expiring locks staying held
- Owner-checked release vs force release
- restore_lock() for releasing from another handle
- get(callback) and the context manager protocol
- Dedicated lock tables and prefixes

All tests use moto via the `store` fixture from conftest.py.
"""

import pytest

from dynacache.base import Lock
from dynacache.exceptions import LockNotAcquiredError
from dynacache.infrastructure.dynamodb import DynamoDBLock, DynamoDBStore, create_table

from conftest import START_TIME, TABLE

# ==============================================================================
# Handles
# ==============================================================================


class TestLockHandle:
    def test_lock_is_a_lock(self, store):
        assert isinstance(store.lock("job"), Lock)

    def test_handle_writes_nothing(self, store, raw_item):
        store.lock("job", 10)
        assert raw_item("job") is None

    def test_generated_owners_are_distinct(self, store):
        assert store.lock("job").owner != store.lock("job").owner

    def test_explicit_owner(self, store):
        assert store.lock("job", 10, "worker-1").owner == "worker-1"

    def test_lock_shares_store_table(self, store):
        lock = store.lock("job")
        assert isinstance(lock, DynamoDBLock)
        assert lock._table is store.table

    def test_restore_lock(self, store):
        lock = store.restore_lock("job", "worker-1")
        assert lock.owner == "worker-1"
        assert lock.seconds == 0


# ==============================================================================
# acquire
# ==============================================================================


class TestAcquire:
    def test_acquire_free_lock(self, store, raw_item):
        lock = store.lock("job", 10, "worker-1")
        assert lock.acquire() is True

        item = raw_item("job")
        assert item["value"] == {"S": "worker-1"}
        assert item["expires_at"] == {"N": str(START_TIME + 10)}

    def test_second_owner_is_refused(self, store):
        assert store.lock("job", 10, "worker-1").acquire() is True
        assert store.lock("job", 10, "worker-2").acquire() is False

    def test_same_owner_cannot_reacquire_live_lock(self, store):
        lock = store.lock("job", 10)
        assert lock.acquire() is True
        assert lock.acquire() is False

    def test_expired_lock_can_be_taken(self, store, clock):
        assert store.lock("job", 10, "worker-1").acquire() is True
        clock.advance(11)
        second = store.lock("job", 10, "worker-2")
        assert second.acquire() is True
        assert second.get_current_owner() == "worker-2"

    def test_lock_without_ttl_has_no_expiration(self, store, raw_item):
        store.lock("job", 0, "worker-1").acquire()
        assert "expires_at" not in raw_item("job")

    def test_lock_without_ttl_is_never_stolen(self, store, clock):
        assert store.lock("job", 0, "worker-1").acquire() is True
        clock.advance(10**8)
        assert store.lock("job", 10, "worker-2").acquire() is False

    def test_live_cache_entry_blocks_lock_with_same_name(self, store):
        store.put("job", 1, 60)
        assert store.lock("job", 10).acquire() is False


# ==============================================================================
# release / force_release
# ==============================================================================


class TestRelease:
    def test_owner_can_release(self, store, raw_item):
        lock = store.lock("job", 10)
        lock.acquire()
        assert lock.release() is True
        assert raw_item("job") is None

    def test_release_allows_next_owner(self, store):
        first = store.lock("job", 0, "worker-1")
        first.acquire()
        first.release()
        assert store.lock("job", 0, "worker-2").acquire() is True

    def test_other_owner_cannot_release(self, store, raw_item):
        store.lock("job", 10, "worker-1").acquire()
        assert store.lock("job", 10, "worker-2").release() is False
        assert raw_item("job")["value"] == {"S": "worker-1"}

    def test_release_after_takeover_is_refused(self, store, clock):
        first = store.lock("job", 10, "worker-1")
        first.acquire()
        clock.advance(11)
        store.lock("job", 10, "worker-2").acquire()

        assert first.release() is False
        assert store.lock("job").get_current_owner() == "worker-2"

    def test_release_free_lock(self, store):
        assert store.lock("job").release() is False

    def test_force_release_ignores_owner(self, store, raw_item):
        store.lock("job", 0, "worker-1").acquire()
        assert store.lock("job", 0, "admin").force_release() is True
        assert raw_item("job") is None

    def test_force_release_free_lock(self, store):
        assert store.lock("job").force_release() is True

    def test_restored_lock_releases(self, store):
        original = store.lock("job", 0)
        original.acquire()

        restored = store.restore_lock("job", original.owner)
        assert restored.release() is True
        assert store.lock("job").get_current_owner() is None


# ==============================================================================
# Ownership
# ==============================================================================


class TestOwnership:
    def test_current_owner(self, store):
        lock = store.lock("job", 10, "worker-1")
        assert lock.get_current_owner() is None
        lock.acquire()
        assert lock.get_current_owner() == "worker-1"

    def test_expired_lock_has_no_owner(self, store, clock):
        store.lock("job", 10, "worker-1").acquire()
        clock.advance(10)
        assert store.lock("job").get_current_owner() is None

    def test_is_owned_by_current_process(self, store):
        mine = store.lock("job", 10, "worker-1")
        theirs = store.lock("job", 10, "worker-2")
        mine.acquire()
        assert mine.is_owned_by_current_process() is True
        assert theirs.is_owned_by_current_process() is False


# ==============================================================================
# get() and Context Manager
# ==============================================================================


class TestGetAndContextManager:
    def test_get_without_callback(self, store):
        lock = store.lock("job", 10)
        assert lock.get() is True
        assert lock.get() is False

    def test_get_runs_callback_and_releases(self, store):
        lock = store.lock("job", 10)
        seen = []

        def work():
            seen.append(lock.get_current_owner())
            return "done"

        assert lock.get(work) == "done"
        assert seen == [lock.owner]
        assert lock.get_current_owner() is None

    def test_get_releases_on_error(self, store):
        lock = store.lock("job", 10)

        def fail():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            lock.get(fail)
        assert lock.get_current_owner() is None

    def test_get_does_not_run_callback_when_held(self, store):
        store.lock("job", 10, "worker-1").acquire()
        called = []
        assert store.lock("job", 10, "worker-2").get(lambda: called.append(1)) is False
        assert called == []

    def test_context_manager(self, store):
        lock = store.lock("job", 10)
        with lock as held:
            assert held is lock
            assert lock.is_owned_by_current_process()
        assert lock.get_current_owner() is None

    def test_context_manager_when_held(self, store):
        store.lock("job", 10, "worker-1").acquire()
        with pytest.raises(LockNotAcquiredError) as exc_info:
            with store.lock("job", 10, "worker-2"):
                pass
        assert exc_info.value.owner == "worker-1"


# ==============================================================================
# Tables and Prefixes
# ==============================================================================


class TestLockPlacement:
    def test_prefix_applies_to_lock_names(self, dynamodb_client, clock, raw_item):
        store = DynamoDBStore(dynamodb_client, TABLE, prefix="app", clock=clock)
        lock = store.lock("job", 10)
        assert lock.name == "app:job"
        lock.acquire()
        assert raw_item("app:job") is not None

    def test_dedicated_lock_table(self, dynamodb_client, clock, raw_item):
        create_table(dynamodb_client, "locks")
        store = DynamoDBStore(dynamodb_client, TABLE, lock_table="locks", clock=clock)

        store.put("job", 1, 60)
        lock = store.lock("job", 10, "worker-1")
        assert lock.acquire() is True

        assert raw_item("job", table="locks")["value"] == {"S": "worker-1"}
        assert store.get("job") == 1
        assert lock.release() is True
        assert raw_item("job", table="locks") is None
