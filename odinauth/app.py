"""Demo FastAPI app protected by :class:`OdinAuthMiddleware`.

Exposes:
- GET /health   (no cookie needed)
- GET /whoami   (decoded user and roles)
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request

from .config import OdinAuthConfig
from .logging_config import get_logger
from .middleware import OdinAuthMiddleware

logger = get_logger(__name__)


def create_app(config: OdinAuthConfig) -> FastAPI:
    app = FastAPI(title="OdinAuth", docs_url=None, redoc_url=None, openapi_url=None)
    app.add_middleware(
        OdinAuthMiddleware,
        config=config.cookie,
        exempt_paths=("/health",),
    )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/whoami")
    def whoami(request: Request):
        roles = request.state.roles
        return {
            "user": request.state.user,
            "roles": [role for role in roles.split(",") if role],
        }

    return app


def run_server(config: OdinAuthConfig, host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Run the demo app with Uvicorn."""
    import uvicorn

    effective_host = host or config.server.host
    effective_port = port or config.server.port
    logger.info(f"Serving on http://{effective_host}:{effective_port}/whoami")
    uvicorn.run(
        create_app(config),
        host=effective_host,
        port=effective_port,
        log_level="info",
        log_config=None,
    )
