import math

import pytest

from widget_core.widget.rate_limiter import RateLimiter


def test_first_send_is_allowed():
    limiter = RateLimiter(3000)
    assert limiter.admit(0).allowed
    assert limiter.last_accepted_at is None


def test_denied_within_interval():
    limiter = RateLimiter(3000)
    limiter.record(0)
    decision = limiter.admit(500)
    assert not decision.allowed
    assert decision.wait_seconds == 3
    assert limiter.admit(2001).wait_seconds == 1
    assert limiter.admit(3000).allowed


def test_admit_does_not_update_state():
    limiter = RateLimiter(3000)
    limiter.record(1000)
    limiter.admit(1500)
    limiter.admit(5000)
    assert limiter.last_accepted_at == 1000


def test_wait_seconds_rounds_up():
    limiter = RateLimiter(3000)
    limiter.record(10_000)
    for dt in range(1, 3000, 137):
        decision = limiter.admit(10_000 + dt)
        assert not decision.allowed
        assert decision.wait_seconds == math.ceil((3000 - dt) / 1000)
        assert decision.wait_seconds >= 1


def test_zero_interval_always_allows():
    limiter = RateLimiter(0)
    limiter.record(5)
    assert limiter.admit(5).allowed


def test_negative_interval_rejected():
    with pytest.raises(ValueError):
        RateLimiter(-1)
