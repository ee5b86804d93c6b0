"""OdinAuth CLI entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from odinauth import __version__
from odinauth.config import DEFAULT_CONFIG_PATH, CookieConfig, OdinAuthConfig, load_config, write_config
from odinauth.cookie import CLOCK_SKEW_SECONDS, MAX_AGE_SECONDS, check_cookie, cookie_for
from odinauth.logging_config import setup_logging
from odinauth.signing import hmac_for


app = typer.Typer(add_completion=False, help="OdinAuth signed cookie CLI")


def _ensure_config(config_path: Optional[Path]) -> OdinAuthConfig:
    try:
        return load_config(config_path)
    except FileNotFoundError:
        typer.echo("[ERROR] config.ini not found. Run: odinauth init --secret <secret>", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


def _cookie_config(secret: Optional[str], config_path: Optional[Path]) -> CookieConfig:
    if secret:
        return CookieConfig(secret=secret)
    return _ensure_config(config_path).cookie


@app.command()
def init(
    secret: str = typer.Option(..., "--secret", help="Shared secret"),
    max_age: int = typer.Option(MAX_AGE_SECONDS, "--max-age", help="Maximum cookie age in seconds"),
    clock_skew: int = typer.Option(CLOCK_SKEW_SECONDS, "--clock-skew", help="Allowed clock skew in seconds"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config.ini"),
) -> None:
    """Initialize config.ini with the shared secret."""
    path = write_config(config_path or DEFAULT_CONFIG_PATH, secret, max_age=max_age, clock_skew=clock_skew)
    typer.echo(f"[OK] Config created at {path}")


@app.command("hmac")
def hmac_command(
    user: str,
    roles: str,
    timestamp: int,
    user_agent: str,
    secret: Optional[str] = typer.Option(None, "--secret", help="Shared secret (overrides config.ini)"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config.ini"),
) -> None:
    """Print the signature for the given cookie fields."""
    cookie = _cookie_config(secret, config_path)
    typer.echo(hmac_for(cookie.secret, user, roles, timestamp, user_agent))


@app.command()
def cookie(
    user: str,
    roles: str,
    user_agent: str,
    timestamp: Optional[int] = typer.Option(None, "--timestamp", help="Issue time (default: now)"),
    secret: Optional[str] = typer.Option(None, "--secret", help="Shared secret (overrides config.ini)"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config.ini"),
) -> None:
    """Print a signed cookie for USER with ROLES, bound to USER_AGENT."""
    config = _cookie_config(secret, config_path)
    typer.echo(cookie_for(config.secret, user, roles, user_agent, timestamp=timestamp))


@app.command()
def check(
    value: str,
    user_agent: str,
    secret: Optional[str] = typer.Option(None, "--secret", help="Shared secret (overrides config.ini)"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config.ini"),
) -> None:
    """Verify a cookie presented by USER_AGENT; print user and roles."""
    config = _cookie_config(secret, config_path)
    result = check_cookie(
        config.secret,
        value,
        user_agent,
        max_age=config.max_age,
        clock_skew=config.clock_skew,
    )
    if not result.ok:
        typer.echo(f"[ERROR] {result.reason}: {result.error}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"user: {result.user}")
    typer.echo(f"roles: {result.roles}")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Server host"),
    port: Optional[int] = typer.Option(None, "--port", help="Server port"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config.ini"),
) -> None:
    """Start the demo app that requires a valid cookie."""
    from odinauth.app import run_server

    config = _ensure_config(config_path)
    setup_logging(config.logging.level)
    try:
        run_server(config, host=host, port=port)
    except KeyboardInterrupt:
        pass


@app.command()
def version() -> None:
    """Show the OdinAuth version."""
    typer.echo(__version__)


if __name__ == "__main__":
    app()
