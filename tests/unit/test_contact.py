"""Unit tests for contact.py"""

import pytest

from mdblog.contact import (
    MSG_BAD_EMAIL, MSG_RATE_LIMITED, MSG_REQUIRED, MSG_SEND_FAILED,
    ContactMessage, RateLimiter, submit_contact, validate_contact,
)
from mdblog.errors import ContactError


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


VALID = {"name": "Ada", "email": "ada@example.com", "subject": "Hi", "message": "Hello!"}


def test_validate_contact_ok():
    msg = validate_contact({**VALID, "name": "  Ada  "})
    assert isinstance(msg, ContactMessage)
    assert msg.name == "Ada"


@pytest.mark.parametrize("field", ["name", "email", "subject", "message"])
def test_validate_contact_required(field):
    with pytest.raises(ContactError, match=MSG_REQUIRED):
        validate_contact({**VALID, field: "   "})
    with pytest.raises(ContactError, match=MSG_REQUIRED):
        validate_contact({k: v for k, v in VALID.items() if k != field})


@pytest.mark.parametrize("email", ["ada", "ada@example", "a da@example.com", "@example.com"])
def test_validate_contact_bad_email(email):
    with pytest.raises(ContactError) as exc:
        validate_contact({**VALID, "email": email})
    assert exc.value.message == MSG_BAD_EMAIL
    assert exc.value.status == 400


def test_rate_limiter_window():
    clock = FakeClock()
    limiter = RateLimiter(max_requests=2, window=60, clock=clock)
    assert limiter.allow("1.2.3.4")
    assert limiter.allow("1.2.3.4")
    assert not limiter.allow("1.2.3.4")
    assert limiter.allow("5.6.7.8")
    clock.now += 60
    assert limiter.allow("1.2.3.4")


def test_rate_limiter_prune():
    clock = FakeClock()
    limiter = RateLimiter(clock=clock)
    limiter.allow("a")
    clock.now += 3600
    assert limiter.prune() == 1


def test_rate_limiter_sweeps_lapsed_clients():
    """allow() evicts clients whose window has passed, without a manual prune()."""
    clock = FakeClock()
    limiter = RateLimiter(window=3600, clock=clock)
    for i in range(1000):
        limiter.allow(f"10.0.{i // 256}.{i % 256}")
    assert len(limiter._counts) == 1000
    clock.now += 10_000
    assert limiter.allow("x")
    assert list(limiter._counts) == ["x"]


def test_rate_limiter_sweep_keeps_active_clients():
    clock = FakeClock()
    limiter = RateLimiter(max_requests=1, window=60, clock=clock)
    limiter.allow("old")
    clock.now += 30
    limiter.allow("recent")
    clock.now += 30
    assert not limiter.allow("recent")
    assert set(limiter._counts) == {"recent"}


def test_submit_contact_sends():
    sent = []
    msg = submit_contact(VALID, "ip", RateLimiter(), sent.append)
    assert sent == [msg]


def test_submit_contact_rate_limited():
    limiter = RateLimiter(max_requests=1, clock=FakeClock())
    submit_contact(VALID, "ip", limiter, lambda m: None)
    with pytest.raises(ContactError) as exc:
        submit_contact(VALID, "ip", limiter, lambda m: None)
    assert exc.value.status == 429
    assert exc.value.message == MSG_RATE_LIMITED


def test_submit_contact_send_failure_is_generic(caplog):
    """Delivery errors surface as a fixed message and are logged."""
    def boom(_):
        raise ConnectionError("smtp down")

    with pytest.raises(ContactError) as exc:
        submit_contact(VALID, "ip", RateLimiter(), boom)
    assert exc.value.status == 500
    assert exc.value.message == MSG_SEND_FAILED
    assert "smtp down" in caplog.text
