"""OdinAuth core package.

Modules:
- message: canonical message building and base64url helpers
- signing: HMAC-SHA256 calculation
- cookie: cookie encoding and verification
- errors: verification error taxonomy
- config: INI parsing and config object
- middleware: Starlette middleware checking the cookie on each request
- app: demo FastAPI app protected by the middleware
"""

from .cookie import CookieCheck, ParsedCookie, check_cookie, cookie_for, parse_cookie, verify_cookie
from .errors import CookieError, ExpiredError, FormatError, FutureError, SignatureError
from .signing import hmac_for, hmac_hex

__version__ = "0.2.1"

__all__ = [
    "CookieCheck",
    "CookieError",
    "ExpiredError",
    "FormatError",
    "FutureError",
    "ParsedCookie",
    "SignatureError",
    "check_cookie",
    "cookie_for",
    "hmac_for",
    "hmac_hex",
    "parse_cookie",
    "verify_cookie",
]
