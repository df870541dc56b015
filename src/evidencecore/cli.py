"""evidencectl: offline helpers for evidence hashes, signatures and config."""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from pathlib import Path

import click

from evidencecore import __version__
from evidencecore.codec import split_hash
from evidencecore.config import EngineConfig
from evidencecore.errors import EvidenceError
from evidencecore.signatures import SignatureComponents


def handle_error(error: Exception, debug: bool) -> None:
    """Handle errors with structured output.

    Args:
        error: The exception that occurred
        debug: Whether to show full traceback
    """
    if debug:
        traceback.print_exc()
    else:
        click.echo(f"Error: {error}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Show full tracebacks on error")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=lambda: os.getenv("EVIDENCECORE_LOG_LEVEL", "WARNING"),
    help="Logging level",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, log_level: str) -> None:
    """Evidence lifecycle helpers."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command(name="split-hash")
@click.argument("hash_value")
@click.pass_context
def split_hash_command(ctx: click.Context, hash_value: str) -> None:
    """Split a 32-byte hex hash into the two ledger hash fragments."""
    try:
        click.echo(json.dumps(split_hash(hash_value)))
    except EvidenceError as e:
        handle_error(e, ctx.obj["debug"])


@cli.group()
def signature() -> None:
    """Encode and decode signature tokens."""
    pass


@signature.command(name="encode")
@click.option("--v", "v", type=int, required=True, help="Recovery id (1-255)")
@click.option("--r", "r", required=True, help="r component, 32-byte hex")
@click.option("--s", "s", required=True, help="s component, 32-byte hex")
@click.pass_context
def signature_encode(ctx: click.Context, v: int, r: str, s: str) -> None:
    """Pack (v, r, s) into a base64 token."""
    try:
        click.echo(SignatureComponents.from_dict({"v": v, "r": r, "s": s}).serialize())
    except EvidenceError as e:
        handle_error(e, ctx.obj["debug"])


@signature.command(name="decode")
@click.argument("token")
@click.pass_context
def signature_decode(ctx: click.Context, token: str) -> None:
    """Unpack a base64 token into (v, r, s)."""
    try:
        components = SignatureComponents.deserialize(token)
        click.echo(json.dumps(components.to_dict(), indent=2, sort_keys=True))
    except EvidenceError as e:
        handle_error(e, ctx.obj["debug"])


@cli.group()
def config() -> None:
    """Inspect engine configuration."""
    pass


@config.command(name="show")
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="YAML configuration file (default: environment)",
)
@click.pass_context
def config_show(ctx: click.Context, config_path: Path | None) -> None:
    """Print the effective configuration as JSON."""
    try:
        engine_config = EngineConfig.from_yaml(config_path) if config_path else EngineConfig.from_env()
        click.echo(json.dumps(engine_config.to_dict(), indent=2, sort_keys=True))
    except EvidenceError as e:
        handle_error(e, ctx.obj["debug"])


def main() -> None:
    """Entry point for the evidencectl console script."""
    cli(obj={})


if __name__ == "__main__":
    main()
