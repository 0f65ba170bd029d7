"""Contact form submissions: validation, per-client rate limiting, and hand-off to a sender"""

import logging
import re
import time
from dataclasses import dataclass, field
from typing import Any, Callable

from pydantic import BaseModel, ValidationError, field_validator

from mdblog.errors import ContactError


logger = logging.getLogger("mdblog.contact")

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

MSG_REQUIRED = "All fields are required"
MSG_BAD_EMAIL = "Invalid email address"
MSG_RATE_LIMITED = "Rate limit exceeded. Please try again later."
MSG_SEND_FAILED = "Failed to send message. Please try again later or contact directly via email."


class ContactMessage(BaseModel):
    name: str
    email: str
    subject: str
    message: str

    @field_validator("name", "email", "subject", "message")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError(MSG_REQUIRED)
        return v

    @field_validator("email")
    @classmethod
    def _valid_email(cls, v: str) -> str:
        if not EMAIL_RE.match(v):
            raise ValueError(MSG_BAD_EMAIL)
        return v


@dataclass
class RateLimiter:
    """Fixed-window counter: at most max_requests per client per window seconds.

    Lapsed clients are swept at most once per window, on the next allow() call.
    """
    max_requests: int = 5
    window: float = 3600.0
    clock: Callable[[], float] = time.monotonic
    _counts: dict[str, tuple[int, float]] = field(default_factory=dict)
    _last_sweep: float | None = None

    def allow(self, client: str) -> bool:
        now = self.clock()
        if self._last_sweep is None:
            self._last_sweep = now
        elif now - self._last_sweep >= self.window:
            self.prune()
            self._last_sweep = now
        count, started = self._counts.get(client, (0, now))
        if now - started >= self.window:
            count, started = 0, now
        if count >= self.max_requests:
            return False
        self._counts[client] = (count + 1, started)
        return True

    def prune(self) -> int:
        """Drop clients whose window has lapsed. Returns the number removed."""
        now = self.clock()
        stale = [c for c, (_, started) in self._counts.items() if now - started >= self.window]
        for c in stale:
            del self._counts[c]
        return len(stale)


def validate_contact(payload: dict[str, Any]) -> ContactMessage:
    """Validate a raw form payload. Raises ContactError with a user-facing message."""
    values = {k: payload.get(k) for k in ContactMessage.model_fields}
    if any(not isinstance(v, str) or not v.strip() for v in values.values()):
        raise ContactError(MSG_REQUIRED)
    try:
        return ContactMessage(**values)
    except ValidationError as e:
        # blanks are ruled out above, so only the email check can fail here
        raise ContactError(MSG_BAD_EMAIL) from e


def submit_contact(
    payload: dict[str, Any],
    client: str,
    limiter: RateLimiter,
    send: Callable[[ContactMessage], None],
    ) -> ContactMessage:
    """Rate-limit, validate, and deliver one submission through send().

    Any failure raised by send() is logged and surfaced as a ContactError with a
    fixed message; there is no retry.
    """
    if not limiter.allow(client or "unknown"):
        raise ContactError(MSG_RATE_LIMITED, status=429)
    message = validate_contact(payload)
    try:
        send(message)
    except Exception as e:
        logger.error("contact delivery failed: %s", e)
        raise ContactError(MSG_SEND_FAILED, status=500) from e
    return message
