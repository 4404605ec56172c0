"""Tests for wait_for_state."""

import pytest

from ghrest.core.errors import StateChangeTimeoutError
from ghrest.core.polling import wait_for_state


def scripted(*states):
    remaining = list(states)

    def fetch():
        return {"state": remaining.pop(0) if len(remaining) > 1 else remaining[0]}

    return fetch


def state_of(item):
    return item["state"]


class TestWaitForState:
    def test_returns_immediately_when_settled(self, clock):
        result = wait_for_state(scripted("Available"), state_of, {"Starting"}, delay=10)
        assert result == {"state": "Available"}
        assert clock.sleeps == []

    def test_polls_until_settled(self, clock):
        fetch = scripted("Queued", "Starting", "Starting", "Available")
        result = wait_for_state(fetch, state_of, {"Queued", "Starting"}, delay=10)
        assert result["state"] == "Available"
        assert clock.sleeps == [10, 10, 10]

    def test_timeout_raises_with_last_state(self, clock):
        fetch = scripted("Starting")
        with pytest.raises(StateChangeTimeoutError) as info:
            wait_for_state(fetch, state_of, {"Starting"}, delay=10, timeout=35)
        assert info.value.last_state == "Starting"
        assert info.value.timeout == 35
        assert clock.sleeps == [10, 10, 10]

    def test_zero_timeout_means_unbounded(self, clock):
        fetch = scripted(*(["Provisioning"] * 50), "Available")
        result = wait_for_state(fetch, state_of, {"Provisioning"}, delay=1, timeout=0)
        assert result["state"] == "Available"
        assert len(clock.sleeps) == 50
