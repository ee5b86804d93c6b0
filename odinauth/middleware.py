"""HTTP integration: check the OdinAuth cookie on incoming requests."""

from __future__ import annotations

from typing import Iterable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .config import CookieConfig
from .cookie import check_cookie, cookie_for
from .logging_config import get_logger

logger = get_logger(__name__)


class OdinAuthMiddleware(BaseHTTPMiddleware):
    """Reject requests without a valid cookie for the presenting user agent.

    On success the decoded user and role string are stored on
    ``request.state.user`` and ``request.state.roles``.
    """

    def __init__(self, app, config: CookieConfig, exempt_paths: Iterable[str] = ()):
        super().__init__(app)
        self.config = config
        self.exempt_paths = frozenset(exempt_paths)

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        cookie = request.cookies.get(self.config.cookie_name)
        user_agent = request.headers.get("user-agent", "")
        result = check_cookie(
            self.config.secret,
            cookie,
            user_agent,
            max_age=self.config.max_age,
            clock_skew=self.config.clock_skew,
        )
        if not result.ok:
            client_ip = request.client.host if request.client else "unknown"
            logger.info(
                f"Rejected {request.method} {request.url.path} from {client_ip}: {result.reason}"
            )
            return JSONResponse(
                {"detail": "Authentication required", "reason": result.reason},
                status_code=401,
            )

        request.state.user = result.user
        request.state.roles = result.roles
        return await call_next(request)


def set_auth_cookie(
    response: Response,
    config: CookieConfig,
    user: str,
    roles: str,
    user_agent: str,
) -> str:
    """Issue a fresh cookie on ``response`` and return its value."""
    value = cookie_for(config.secret, user, roles, user_agent)
    response.set_cookie(
        key=config.cookie_name,
        value=value,
        max_age=config.max_age,
        httponly=True,
        samesite="lax",
    )
    return value
