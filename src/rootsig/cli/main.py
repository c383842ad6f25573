# SPDX-License-Identifier: MPL-2.0
"""Main CLI entry point."""
import sys

import click

from rootsig.cli.verify import EXIT_MALFORMED, verify
from rootsig.config import configure_logging, get_settings
from rootsig.core.crypto import PUBLIC_KEY_SIZE, decode_key_id, public_bytes
from rootsig.core.exceptions import ConfigurationError, MalformedInputError


@click.group()  # type: ignore[misc]
@click.pass_context
def cli(ctx: click.Context) -> None:
    """rootsig CLI."""
    try:
        settings = get_settings()
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(EXIT_MALFORMED)
    configure_logging(settings)
    ctx.obj = {"settings": settings}


@cli.command()  # type: ignore[misc]
def version() -> None:
    """Show version information."""
    from rootsig import __version__

    click.echo(f"rootsig v{__version__}")


@cli.command("decode-kid")  # type: ignore[misc]
@click.argument("kid")
def decode_kid(kid: str) -> None:
    """Check a NaCl key identifier and print its raw key bytes."""
    try:
        key = decode_key_id(kid)
    except MalformedInputError as e:
        click.echo(f"Error: {e.message} ({type(e).__name__})", err=True)
        sys.exit(EXIT_MALFORMED)
    click.echo(f"Type: ed25519 ({PUBLIC_KEY_SIZE} bytes)")
    click.echo(f"Public Key: {public_bytes(key).hex()}")


cli.add_command(verify)


if __name__ == "__main__":
    cli()
