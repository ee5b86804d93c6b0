"""HMAC-SHA256 calculation for OdinAuth cookies."""

from __future__ import annotations

import hashlib
import hmac

from .message import Text, canonical_message, to_bytes


def hmac_hex(secret: Text, message: bytes) -> str:
    """Return the lowercase hex HMAC-SHA256 of ``message`` under ``secret``."""
    return hmac.new(to_bytes(secret), message, hashlib.sha256).hexdigest()


def hmac_digest(secret: Text, message: bytes) -> bytes:
    return hmac.new(to_bytes(secret), message, hashlib.sha256).digest()


def hmac_for(secret: Text, user: Text, roles: Text, timestamp: int, user_agent: Text) -> str:
    """Signature of a cookie for the given fields.

    >>> len(hmac_for("secret", "login_name", "role1,role2,role3", 1337357387, "netcat"))
    64
    """
    return hmac_hex(secret, canonical_message(user, roles, timestamp, user_agent))
