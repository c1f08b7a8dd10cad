"""
Unit tests for the HealthStatus value.
"""

import dataclasses

import pytest

from health.status import HealthState, HealthStatus


class TestFactories:
    """Tests for the HealthStatus factory methods."""

    def test_up_without_message(self):
        status = HealthStatus.up()

        assert status.state == HealthState.UP
        assert status.message is None
        assert status.details == {}

    def test_up_with_message(self):
        assert HealthStatus.up("all good").message == "all good"

    def test_down(self):
        status = HealthStatus.down("Connection failed")

        assert status.state == HealthState.DOWN
        assert status.message == "Connection failed"

    def test_degraded(self):
        status = HealthStatus.degraded("replica lagging")

        assert status.state == HealthState.DEGRADED
        assert status.message == "replica lagging"

    def test_down_with_error_captures_error_type_and_text(self):
        status = HealthStatus.down_with_error("Check failed", ConnectionError("refused"))

        assert status.state == HealthState.DOWN
        assert status.message == "Check failed"
        assert status.details == {
            "error": "ConnectionError",
            "errorMessage": "refused",
        }


class TestDerivedFlags:
    """is_up / is_down follow the state and nothing else."""

    @pytest.mark.parametrize(
        "status, is_up, is_down",
        [
            (HealthStatus.up(), True, False),
            (HealthStatus.down("x"), False, True),
            (HealthStatus.degraded("x"), False, False),
        ],
    )
    def test_flags(self, status, is_up, is_down):
        assert status.is_up is is_up
        assert status.is_down is is_down


class TestImmutability:
    """Tests that a status cannot change after creation."""

    def test_fields_cannot_be_reassigned(self):
        status = HealthStatus.up()

        with pytest.raises(dataclasses.FrozenInstanceError):
            status.state = HealthState.DOWN

    def test_with_detail_returns_a_new_status(self):
        original = HealthStatus.up()

        enriched = original.with_detail("connections", 12)

        assert enriched.details == {"connections": 12}
        assert original.details == {}
        assert enriched.state == HealthState.UP

    def test_with_detail_keeps_existing_details_in_order(self):
        status = HealthStatus.degraded("slow").with_detail("p99_ms", 950).with_detail("pool", "primary")

        assert list(status.details) == ["p99_ms", "pool"]


class TestToDict:
    """Tests for the serialized form."""

    def test_up_serializes_status_only(self):
        assert HealthStatus.up().to_dict() == {"status": "UP"}

    def test_message_is_included_when_present(self):
        assert HealthStatus.down("disk full").to_dict() == {
            "status": "DOWN",
            "message": "disk full",
        }

    def test_details_are_merged_flat(self):
        status = HealthStatus.down_with_error("Check failed", ValueError("bad"))

        assert status.to_dict() == {
            "status": "DOWN",
            "message": "Check failed",
            "error": "ValueError",
            "errorMessage": "bad",
        }

    def test_key_order_is_status_message_then_details(self):
        status = HealthStatus.degraded("slow").with_detail("latency_ms", 3100)

        assert list(status.to_dict()) == ["status", "message", "latency_ms"]


class TestConstruction:
    """Tests for state and details normalization on construction."""

    def test_state_name_is_coerced_to_enum(self):
        status = HealthStatus("UP")

        assert status.state is HealthState.UP
        assert status.to_dict() == {"status": "UP"}

    def test_unknown_state_is_rejected(self):
        with pytest.raises(ValueError):
            HealthStatus("SIDEWAYS")

    def test_none_details_become_empty(self):
        status = HealthStatus(HealthState.UP, details=None)

        assert status.details == {}
        assert status.to_dict() == {"status": "UP"}

    def test_details_are_copied(self):
        details = {"pool": 4}
        status = HealthStatus(HealthState.UP, details=details)

        details["pool"] = 0

        assert status.details == {"pool": 4}
