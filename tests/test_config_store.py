"""Tests for the in-memory ConfigStore."""

import dataclasses
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from riskconfig.interfaces import ConfigRecord
from riskconfig.services import ConfigStore
from riskconfig.testing import FakeClock


class TestSave:
    """Tests for ConfigStore.save()."""

    def test_first_save_sets_equal_timestamps(self, store, clock):
        """A new key gets created_at == updated_at == now."""
        record = store.save("a", {"x": 1})

        assert isinstance(record, ConfigRecord)
        assert record.resource_id == "a"
        assert record.config == {"x": 1}
        assert record.created_at == record.updated_at == clock.now
        assert record.is_update is False

    def test_second_save_keeps_created_at(self, store, clock):
        """Saving again preserves created_at and advances updated_at."""
        first = store.save("a", {"x": 1})
        clock.advance(seconds=5)
        second = store.save("a", {"x": 2})

        assert second.created_at == first.created_at
        assert second.updated_at == first.created_at + timedelta(seconds=5)
        assert second.config == {"x": 2}
        assert second.is_update is True

    def test_update_replaces_config_wholesale(self, store, clock):
        """Fields missing from the new payload are dropped, not merged."""
        store.save("a", {"x": 1, "nested": {"keep": True}})
        clock.advance()
        record = store.save("a", {"y": 2})

        assert record.config == {"y": 2}
        assert store.get("a").config == {"y": 2}

    def test_frozen_clock_still_advances_updated_at(self, store):
        """A clock that does not move still yields a later updated_at."""
        first = store.save("a", {"x": 1})
        second = store.save("a", {"x": 1})
        third = store.save("a", {"x": 1})

        assert second.updated_at > first.updated_at
        assert third.updated_at > second.updated_at
        assert third.created_at == first.created_at
        assert second.is_update is True

    def test_clock_going_backwards_is_ignored(self, store, clock):
        """updated_at never moves backwards."""
        first = store.save("a", {"x": 1})
        clock.advance(seconds=-60)
        second = store.save("a", {"x": 2})

        assert second.updated_at > first.updated_at

    def test_identical_save_is_idempotent_on_config(self, store, clock):
        """Saving the same payload twice leaves config unchanged."""
        first = store.save("a", {"x": 1})
        clock.advance()
        second = store.save("a", {"x": 1})

        assert second.config == first.config
        assert second.updated_at >= first.updated_at

    def test_caller_mutation_does_not_leak_into_store(self, store):
        """The store keeps its own copy of the payload."""
        payload = {"limits": {"max": 10}}
        store.save("a", payload)
        payload["limits"]["max"] = 999

        assert store.get("a").config == {"limits": {"max": 10}}

    def test_mutating_returned_record_does_not_change_store(self, store):
        """Records handed out by save/get/get_all are copies."""
        saved = store.save("a", {"x": 1, "nested": {"y": 2}})
        saved.config["x"] = 99

        fetched = store.get("a")
        fetched.config["nested"]["y"] = 42
        store.get_all()[0].config.clear()

        assert store.get("a").config == {"x": 1, "nested": {"y": 2}}

    def test_returned_record_timestamps_are_read_only(self, store, clock):
        record = store.save("a", {"x": 1})

        with pytest.raises(dataclasses.FrozenInstanceError):
            record.created_at = clock.now - timedelta(days=1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.updated_at = clock.now + timedelta(days=1)
        assert store.get("a").created_at == clock.now

    def test_keys_are_independent(self, store, clock):
        store.save("a", {"x": 1})
        clock.advance()
        b = store.save("b", {"x": 2})

        assert b.is_update is False
        assert store.get("a").config == {"x": 1}


class TestLookup:
    """Tests for get(), exists() and get_all()."""

    def test_get_unknown_key_returns_none(self, store):
        assert store.get("never-saved") is None

    def test_exists_unknown_key_is_false(self, store):
        assert store.exists("never-saved") is False
        assert "never-saved" not in store

    def test_exists_after_save(self, store):
        store.save("a", {"x": 1})
        assert store.exists("a") is True
        assert "a" in store

    def test_get_all_empty_store(self, store):
        """getAll on an empty store returns an empty list."""
        assert store.get_all() == []
        assert len(store) == 0

    def test_get_all_returns_each_key_once_with_latest_config(self, store, clock):
        store.save("a", {"x": 1})
        store.save("b", {"x": 2})
        clock.advance()
        store.save("a", {"x": 3})

        records = store.get_all()
        assert [r.resource_id for r in records] == ["a", "b"]
        assert {r.resource_id: r.config for r in records} == {
            "a": {"x": 3},
            "b": {"x": 2},
        }
        assert store.count() == 2

    def test_get_all_reflects_deletes(self, store):
        store.save("a", {"x": 1})
        store.save("b", {"x": 2})
        store.delete("a")

        assert [r.resource_id for r in store.get_all()] == ["b"]


class TestDelete:
    """Tests for ConfigStore.delete()."""

    def test_delete_absent_key_returns_none(self, store):
        store.save("a", {"x": 1})

        assert store.delete("missing") is None
        assert store.count() == 1

    def test_delete_returns_record_before_deletion(self, store, clock):
        store.save("a", {"x": 1})
        clock.advance()
        latest = store.save("a", {"x": 2})

        deleted = store.delete("a")
        assert deleted == latest
        assert deleted.config == {"x": 2}
        assert store.get("a") is None
        assert store.exists("a") is False

    def test_save_after_delete_starts_fresh(self, store, clock):
        """A deleted key is created anew on the next save."""
        first = store.save("a", {"x": 1})
        store.delete("a")
        clock.advance(seconds=10)
        record = store.save("a", {"x": 2})

        assert record.is_update is False
        assert record.created_at > first.created_at


class TestConfigRecord:
    """Tests for the ConfigRecord dataclass."""

    def test_timestamps_are_required(self):
        """No independent timestamp defaults that could disagree."""
        with pytest.raises(TypeError):
            ConfigRecord("a", {"x": 1})

    def test_single_timestamp_is_not_an_update(self, clock):
        record = ConfigRecord("a", {"x": 1}, created_at=clock.now, updated_at=clock.now)
        assert record.is_update is False


class TestScenario:
    """End-to-end store scenario."""

    def test_save_update_delete(self):
        clock = FakeClock()
        store = ConfigStore(clock=clock)

        created = store.save("a", {"x": 1})
        assert created.created_at == created.updated_at
        assert created.config == {"x": 1}

        clock.advance()
        updated = store.save("a", {"x": 2})
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at
        assert updated.config == {"x": 2}

        deleted = store.delete("a")
        assert deleted.config == {"x": 2}
        assert store.get("a") is None


class TestConcurrency:
    """Store access from several threads."""

    def test_concurrent_saves_keep_every_key(self):
        store = ConfigStore()

        def save(i):
            return store.save(f"key-{i % 10}", {"i": i})

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(save, range(200)))

        assert store.count() == 10
        for record in store.get_all():
            assert record.updated_at >= record.created_at

    def test_default_clock_is_timezone_aware(self):
        record = ConfigStore().save("a", {"x": 1})
        assert record.created_at.tzinfo is not None
