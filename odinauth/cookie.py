"""Signed cookie encoding and verification.

A cookie binds a user, a role string and an issue timestamp to the client's
user agent::

    cookie_for("secret", "login_name", "role1,role2,role3", "netcat")
    #=> 'bG9naW5fbmFtZQ,cm9sZTEscm9sZTIscm9sZTM,1337357638,<64 hex chars>'

Verification runs parse -> decode -> recompute -> compare -> time window and
stops at the first failing stage.
"""

from __future__ import annotations

import binascii
import dataclasses
import hmac
import re
import time
from typing import Optional

from pydantic import BaseModel

from .errors import CookieError, ExpiredError, FormatError, FutureError, SignatureError
from .logging_config import get_logger
from .message import Text, b64_decode, b64_encode
from .signing import hmac_digest, hmac_for

logger = get_logger(__name__)

MAX_AGE_SECONDS = 24 * 60 * 60  # cookie older than 24h is discarded
CLOCK_SKEW_SECONDS = 5 * 60

COOKIE_RE = re.compile(
    r"\s*([A-Za-z0-9_-]*),([A-Za-z0-9_-]*),([0-9]{1,20}),([0-9a-f]+)\s*"
)


def to_text(value: bytes) -> str:
    """Decode a field as UTF-8, keeping undecodable bytes as surrogate escapes."""
    return value.decode("utf-8", "surrogateescape")


class ParsedCookie(BaseModel):
    """Decoded cookie fields, held only while verifying."""

    model_config = {"frozen": True}

    user: bytes
    roles: bytes
    timestamp: int
    signature: str


@dataclasses.dataclass(frozen=True)
class CookieCheck:
    """Outcome of :func:`check_cookie`: either user/roles or the error."""

    user: Optional[str] = None
    roles: Optional[str] = None
    error: Optional[CookieError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def reason(self) -> Optional[str]:
        return self.error.reason if self.error is not None else None


def _now() -> int:
    return int(time.time())


def cookie_for(
    secret: Text,
    user: Text,
    roles: Text,
    user_agent: Text,
    timestamp: Optional[int] = None,
) -> str:
    """Build a signed cookie value. ``timestamp`` defaults to the current time."""
    if timestamp is None:
        timestamp = _now()
    signature = hmac_for(secret, user, roles, timestamp, user_agent)
    return ",".join([b64_encode(user), b64_encode(roles), str(int(timestamp)), signature])


def _decode_field(value: str, name: str) -> bytes:
    try:
        return b64_decode(value)
    except (binascii.Error, ValueError) as exc:
        raise FormatError(f"Cannot decode {name} field") from exc


def parse_cookie(cookie: str) -> ParsedCookie:
    """Split and decode a cookie without checking its signature.

    Raises FormatError when the value is not four comma separated fields with
    the expected alphabets or when the user/roles fields do not decode.
    """
    match = COOKIE_RE.fullmatch(cookie or "")
    if match is None:
        raise FormatError("Wrong cookie format")
    user_b64, roles_b64, ts, signature = match.groups()
    return ParsedCookie(
        user=_decode_field(user_b64, "user"),
        roles=_decode_field(roles_b64, "roles"),
        timestamp=int(ts),
        signature=signature,
    )


def _signatures_match(secret: Text, received: str, expected: str) -> bool:
    # Double HMAC over the ASCII hex strings, compared in constant time.
    received_mac = hmac_digest(secret, received.encode("ascii"))
    expected_mac = hmac_digest(secret, expected.encode("ascii"))
    return hmac.compare_digest(received_mac, expected_mac)


def _verify(
    secret: Text,
    cookie: str,
    user_agent: Text,
    max_age: int,
    clock_skew: int,
    now: Optional[int],
) -> ParsedCookie:
    parsed = parse_cookie(cookie)
    expected = hmac_for(secret, parsed.user, parsed.roles, parsed.timestamp, user_agent)

    if not _signatures_match(secret, parsed.signature, expected):
        raise SignatureError("Invalid signature")

    if now is None:
        now = _now()
    if parsed.timestamp < now - max_age:
        raise ExpiredError("Cookie is old")
    if parsed.timestamp > now + clock_skew:
        raise FutureError("Cookie is in future")

    return parsed


def verify_cookie(
    secret: Text,
    cookie: str,
    user_agent: Text,
    max_age: int = MAX_AGE_SECONDS,
    clock_skew: int = CLOCK_SKEW_SECONDS,
    now: Optional[int] = None,
    raw: bool = False,
) -> tuple[Text, Text]:
    """Verify a cookie presented by ``user_agent`` and return ``(user, roles)``.

    The time window is checked against ``now`` (default: the current time)
    at each call, not against the issue time.

    With ``raw=True`` user and roles come back as the exact signed bytes;
    otherwise as text, where bytes that are not UTF-8 survive as surrogate
    escapes (``to_bytes`` restores them).

    Raises:
        FormatError: malformed cookie
        SignatureError: signature does not match
        ExpiredError: timestamp older than ``now - max_age``
        FutureError: timestamp newer than ``now + clock_skew``
    """
    try:
        parsed = _verify(secret, cookie, user_agent, max_age, clock_skew, now)
    except CookieError as exc:
        logger.debug(f"Cookie rejected ({exc.reason}): {exc}")
        raise
    if raw:
        return parsed.user, parsed.roles
    return to_text(parsed.user), to_text(parsed.roles)


def check_cookie(
    secret: Text,
    cookie: Optional[str],
    user_agent: Text,
    max_age: int = MAX_AGE_SECONDS,
    clock_skew: int = CLOCK_SKEW_SECONDS,
    now: Optional[int] = None,
) -> CookieCheck:
    """Like :func:`verify_cookie` but returns a :class:`CookieCheck` instead of raising."""
    try:
        user, roles = verify_cookie(
            secret,
            cookie or "",
            user_agent,
            max_age=max_age,
            clock_skew=clock_skew,
            now=now,
        )
    except CookieError as exc:
        return CookieCheck(error=exc)
    return CookieCheck(user=user, roles=roles)
