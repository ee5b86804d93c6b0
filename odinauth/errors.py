"""Errors raised while verifying an OdinAuth cookie."""

from __future__ import annotations


class CookieError(ValueError):
    """Base class: the cookie failed verification."""

    reason = "invalid"


class FormatError(CookieError):
    """Cookie does not have the four-field shape or a field fails to decode."""

    reason = "format"


class SignatureError(CookieError):
    """Signature does not match the cookie fields and user agent."""

    reason = "signature"


class ExpiredError(CookieError):
    """Cookie timestamp is older than the allowed maximum age."""

    reason = "expired"


class FutureError(CookieError):
    """Cookie timestamp is further in the future than the allowed clock skew."""

    reason = "future"
