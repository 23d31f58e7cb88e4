"""Tests for session models and result types."""

import pytest

from pyyeelight import (
    CommandError,
    CommandResult,
    ConnectionHealth,
    CronResult,
    Property,
    YeelightProtocolError,
)
from pyyeelight.methods import CronType
from pyyeelight.models import PropertyStore


class TestPropertyStore:
    """Tests for PropertyStore."""

    def test_get_unknown(self):
        store = PropertyStore()
        assert store.get(Property.POWER) is None
        assert store.get("power", "off") == "off"

    def test_enum_and_name_are_the_same_key(self):
        store = PropertyStore({"power": "on"})
        assert store.get(Property.POWER) == "on"
        assert Property.POWER in store
        assert "bright" not in store

    def test_set_rejects_none(self):
        store = PropertyStore()
        with pytest.raises(ValueError):
            store.set(Property.NAME, None)

    def test_update_skips_none(self):
        store = PropertyStore({"power": "on"})
        store.update({"power": None, Property.BRIGHTNESS: "40"})
        assert store.snapshot() == {"power": "on", "bright": "40"}
        assert len(store) == 2

    def test_snapshot_is_a_copy(self):
        store = PropertyStore({"power": "on"})
        snapshot = store.snapshot()
        snapshot["power"] = "off"
        assert store.get("power") == "on"
        assert list(store) == ["power"]


class TestConnectionHealth:
    """Tests for ConnectionHealth."""

    def test_counters(self):
        health = ConnectionHealth()
        health.record_connect()
        health.record_notification()
        health.record_reconnect()
        health.record_error(YeelightProtocolError("bad line"))
        health.record_error(ValueError("bad result"))
        assert health.connected_at is not None
        assert health.last_message_time is not None
        assert health.notification_count == 1
        assert health.reconnect_count == 1
        assert health.error_count == 2
        assert health.parse_error_count == 1
        assert health.last_error == "bad result"


class TestCommandResult:
    """Tests for CommandResult and CronResult."""

    def test_ok(self):
        assert CommandResult(id=1, result=["ok"]).is_ok()

    def test_not_ok(self):
        assert not CommandResult(id=1, result=["no"]).is_ok()
        assert not CommandResult(id=1, result=[]).is_ok()
        assert not CommandResult(id=1).is_ok()
        assert not CommandResult(
            id=1, result=["ok"], error=CommandError(code=-1, message="x")
        ).is_ok()

    def test_music_response_is_ok(self):
        assert CommandResult(id=1, is_music_response=True).is_ok()

    def test_cron_result_from_dict(self):
        cron = CronResult.from_dict({"type": 0, "delay": "15"})
        assert cron.type == CronType.POWER_OFF
        assert cron.delay == 15
        assert cron.mix == 0
