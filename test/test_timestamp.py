"""Tests for the epoch-seconds clock."""

import math

from aws_utils.shared import timestamp


def test_in_seconds_returns_unix_timestamp(monkeypatch) -> None:
    test_time = 1_700_000_000.789
    monkeypatch.setattr(timestamp.time, "time", lambda: test_time)

    assert timestamp.in_seconds() == math.floor(test_time)


def test_in_seconds_is_int() -> None:
    assert isinstance(timestamp.in_seconds(), int)
