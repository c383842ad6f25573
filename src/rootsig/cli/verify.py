# SPDX-License-Identifier: MPL-2.0
"""
CLI Commands for Verifying Signed Messages

Each command verifies one signature scheme against a single expected signer
and exits with 0 when the message is authentic, 1 when it was rejected and 2
when the input could not be decoded.
"""

import sys
from pathlib import Path
from typing import Optional

import click

from ..core.encoding import decode_base64, decode_hex
from ..core.exceptions import MalformedInputError
from ..core.verification import KEYBASE_ROOT_KID, Scheme, VerificationResult, check, verify_file

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_MALFORMED = 2

output_option = click.option(
    '--output', '-o', type=click.Choice(['text', 'json', 'raw']),
    default='text', help='Output format (raw writes only the verified bytes)'
)


def _report(result: VerificationResult, source: str, output: str) -> None:
    """Print ``result`` and exit with its status code."""
    if output == 'json':
        click.echo(result.to_json())
    elif output == 'raw':
        if result.is_valid:
            stream = click.get_binary_stream('stdout')
            stream.write(result.plaintext or b'')
            stream.flush()
        else:
            click.echo(f"Error: {result.error}", err=True)
    else:
        click.echo(f"Message: {source}")
        click.echo(f"Scheme: {result.scheme}")
        click.echo(f"Status: {'✓ VALID' if result.is_valid else '✗ INVALID'}")
        if result.is_valid:
            click.echo("\nPlaintext:")
            click.echo((result.plaintext or b'').decode('utf-8', errors='replace'))
        else:
            label = 'Malformed input' if result.error_kind == 'malformed' else 'Rejected'
            click.echo(f"\n{label}:")
            click.echo(f"  ✗ {result.error}")

    if result.is_valid:
        sys.exit(EXIT_OK)
    sys.exit(EXIT_MALFORMED if result.error_kind == 'malformed' else EXIT_REJECTED)


def _pgp_key_path(ctx: click.Context, key_path: Optional[str]) -> str:
    if key_path:
        return key_path
    settings = ctx.obj['settings'] if ctx.obj else None
    if settings is None or settings.pgp_key is None:
        click.echo("Error: --key is required (or set ROOTSIG_PGP_KEY)", err=True)
        sys.exit(EXIT_MALFORMED)
    return str(settings.pgp_key)


def _root_kid(ctx: click.Context, kid: Optional[str]) -> str:
    if kid:
        return kid
    settings = ctx.obj['settings'] if ctx.obj else None
    return settings.root_kid if settings is not None else KEYBASE_ROOT_KID


# Click command group
@click.group()
def verify():
    """Verify signed messages against a single expected signer."""
    pass


@verify.command()
@click.argument('message_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--key', '-k', 'key_path', type=click.Path(dir_okay=False),
              help='Path to the signer\'s PGP certificate')
@output_option
@click.pass_context
def pgp(ctx: click.Context, message_file: str, key_path: Optional[str], output: str):
    """Verify an inline or cleartext-signed OpenPGP message."""
    result = verify_file(Scheme.PGP, message_file, _pgp_key_path(ctx, key_path))
    _report(result, message_file, output)


@verify.command('pgp-detached')
@click.argument('payload_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--signature', '-s', 'signature_path', required=True,
              type=click.Path(exists=True, dir_okay=False),
              help='Path to the detached OpenPGP signature')
@click.option('--key', '-k', 'key_path', type=click.Path(dir_okay=False),
              help='Path to the signer\'s PGP certificate')
@output_option
@click.pass_context
def pgp_detached(ctx: click.Context, payload_file: str, signature_path: str,
                 key_path: Optional[str], output: str):
    """Verify a detached OpenPGP signature over a payload file."""
    result = verify_file(Scheme.PGP_DETACHED, payload_file,
                         _pgp_key_path(ctx, key_path), signature_path)
    _report(result, payload_file, output)


@verify.command()
@click.argument('envelope_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--kid', help='Signer key identifier (default: ROOTSIG_ROOT_KID)')
@output_option
@click.pass_context
def kbsig(ctx: click.Context, envelope_file: str, kid: Optional[str], output: str):
    """Verify a base64 kbsig envelope."""
    result = verify_file(Scheme.KBSIG, envelope_file, _root_kid(ctx, kid))
    _report(result, envelope_file, output)


@verify.command()
@click.argument('payload_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--signature', '-s', 'signature_path', required=True,
              type=click.Path(exists=True, dir_okay=False),
              help='Path to the detached Ed25519 signature')
@click.option('--signature-encoding', type=click.Choice(['raw', 'hex', 'base64']),
              default='raw', help='How the signature file is encoded')
@click.option('--kid', help='Signer key identifier (default: ROOTSIG_ROOT_KID)')
@output_option
@click.pass_context
def nacl(ctx: click.Context, payload_file: str, signature_path: str,
         signature_encoding: str, kid: Optional[str], output: str):
    """Verify a raw Ed25519 signature over a payload file."""
    payload = Path(payload_file).read_bytes()
    raw = Path(signature_path).read_bytes()
    try:
        if signature_encoding == 'hex':
            signature = decode_hex(raw.decode('ascii', errors='replace'))
        elif signature_encoding == 'base64':
            signature = decode_base64(raw)
        else:
            signature = raw
    except MalformedInputError as e:
        result = VerificationResult(is_valid=False, scheme=Scheme.NACL.value,
                                    error=e.message, error_kind='malformed')
    else:
        result = check(Scheme.NACL, payload, _root_kid(ctx, kid), signature)
    _report(result, payload_file, output)
