"""Canonical message for OdinAuth signatures.

The signed message is ``b64(user),b64(roles),timestamp,b64(user_agent)``
where ``b64`` is URL-safe base64 with the ``=`` padding stripped. Encoding
each free-form field first keeps commas in the input from colliding with
the field separator.
"""

from __future__ import annotations

import base64
from typing import Union

Text = Union[str, bytes]


def to_bytes(value: Text) -> bytes:
    """Encode text as UTF-8; surrogate escapes map back to the original bytes."""
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8", "surrogateescape")


def b64_encode(data: Text) -> str:
    return base64.urlsafe_b64encode(to_bytes(data)).rstrip(b"=").decode("ascii")


def b64_decode(s: str) -> bytes:
    pad = 4 - (len(s) % 4)
    if pad != 4:
        s += "=" * pad
    return base64.urlsafe_b64decode(s)


def canonical_message(user: Text, roles: Text, timestamp: int, user_agent: Text) -> bytes:
    """Return the exact bytes that get signed for a cookie."""
    return ",".join(
        [
            b64_encode(user),
            b64_encode(roles),
            str(int(timestamp)),
            b64_encode(user_agent),
        ]
    ).encode("ascii")
