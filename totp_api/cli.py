"""Click CLI for the TOTP API."""

from __future__ import annotations

import json
import logging
import time

import click
import uvicorn
from dotenv import load_dotenv

from .config import get_settings
from .engine import compute
from .errors import InvalidSecret

load_dotenv()

logger = logging.getLogger(__name__)


@click.group()
def cli() -> None:
    """TOTP API command line."""


@cli.command("serve")
@click.option("--host", default=None, help="Interface to bind")
@click.option("--port", type=int, default=None, help="Port to listen on")
@click.option("--log-level", default=None, help="Logging level, e.g. INFO")
def serve_cmd(host: str | None, port: int | None, log_level: str | None) -> None:
    """Run the HTTP API with uvicorn."""
    settings = get_settings()
    host = host or settings.host
    port = port or settings.port
    level = (log_level or settings.log_level).upper()

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logger.info("TOTP API server starting on %s:%d", host, port)
    logger.info("Endpoints:")
    logger.info("  GET  /api/totp?secret=YOUR_SECRET")
    logger.info('  POST /api/totp {"secret":"YOUR_SECRET"}')
    logger.info("  GET  /health")

    from .api import app

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=level.lower(),
        timeout_keep_alive=settings.keep_alive_timeout,
    )


@cli.command("code")
@click.argument("secret")
@click.option(
    "--at",
    "at_time",
    type=click.FloatRange(min=0),
    default=None,
    help="Unix timestamp to compute the code for (default: now)",
)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output the API response envelope as JSON",
)
def code_cmd(secret: str, at_time: float | None, output_json: bool) -> None:
    """Print the TOTP code for SECRET."""
    try:
        result = compute(secret, time.time() if at_time is None else at_time)
    except InvalidSecret as e:
        if output_json:
            click.echo(json.dumps({"success": False, "error": e.message}))
            raise SystemExit(1)
        raise click.ClickException(e.message)

    if output_json:
        click.echo(
            json.dumps(
                {"success": True, "code": result.code, "remaining": result.remaining}
            )
        )
    else:
        click.echo(f"{result.code} ({result.remaining}s remaining)")


if __name__ == "__main__":
    cli()
