from __future__ import annotations

import pytest

from profitbase.throttle import ThrottleGate


class TestThrottleGate:
    def test_default_interval_is_one_second(self):
        assert ThrottleGate().min_interval == 1

    def test_first_request_is_not_delayed(self, fake_time):
        gate = ThrottleGate()

        gate.wait()

        assert gate.is_request_allowed()
        fake_time.sleep.assert_not_called()

    def test_request_right_after_previous_sleeps(self, fake_time):
        gate = ThrottleGate()
        gate.record()

        gate.wait()

        fake_time.sleep.assert_called_once_with(1)

    def test_no_sleep_once_interval_elapsed(self, fake_time):
        gate = ThrottleGate()
        fake_time.monotonic.return_value = 100.0
        gate.record()
        fake_time.monotonic.return_value = 101.0

        gate.wait()

        fake_time.sleep.assert_not_called()

    def test_sleeps_full_interval_not_remaining_time(self, fake_time):
        gate = ThrottleGate()
        fake_time.monotonic.return_value = 100.0
        gate.record()
        fake_time.monotonic.return_value = 100.9

        gate.wait()

        fake_time.sleep.assert_called_once_with(1)

    def test_custom_interval(self, fake_time):
        gate = ThrottleGate(min_interval=2)
        fake_time.monotonic.return_value = 100.0
        gate.record()
        fake_time.monotonic.return_value = 101.5

        gate.wait()

        fake_time.sleep.assert_called_once_with(2)

    def test_zero_interval_disables_throttling(self, fake_time):
        gate = ThrottleGate(min_interval=0)
        gate.record()

        gate.wait()
        gate.record()
        gate.wait()

        fake_time.sleep.assert_not_called()

    def test_interval_can_be_changed(self, fake_time):
        gate = ThrottleGate()
        gate.record()
        gate.min_interval = 3

        gate.wait()

        fake_time.sleep.assert_called_once_with(3)

    def test_negative_interval_rejected(self):
        with pytest.raises(ValueError, match="min_interval must be >= 0"):
            ThrottleGate(min_interval=-1)

        gate = ThrottleGate()
        with pytest.raises(ValueError):
            gate.min_interval = -0.5
        assert gate.min_interval == 1

    def test_record_stores_current_time(self, fake_time):
        gate = ThrottleGate()
        assert gate.last_request_at is None

        fake_time.monotonic.return_value = 42.0
        gate.record()

        assert gate.last_request_at == 42.0
