#!/usr/bin/env python
"""Command-line interface for rejson.

This module provides the main CLI entry point for the rejson tool,
handling command-line argument parsing and orchestrating encryption,
decryption, key generation and the environment and Kubernetes outputs.
"""

import sys
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

import click
from icecream import ic
from rich.markup import escape

from rejson import __version__, console, env, keystore
from rejson.crypto.keys import Key, KeyPair
from rejson.document import SecretsFile
from rejson.exceptions import RejsonError
from rejson.kube import SecretsManifest
from rejson.transforms import compact, decrypt, encrypt, load_private_key


@contextmanager
def error_boundary() -> Generator[None, None, None]:
    """Report rejson errors on the console and exit with status 1."""
    try:
        yield
    except RejsonError as e:
        console.error(escape(str(e)))
        sys.exit(1)


keydir_option = click.option(
    "--keydir",
    "-k",
    envvar=keystore.KEYDIR_ENV,
    default=keystore.DEFAULT_KEYDIR,
    show_default=True,
    type=click.Path(file_okay=False),
    help="Directory containing private keys, one file per public key.",
)

key_from_stdin_option = click.option(
    "--key-from-stdin",
    is_flag=True,
    default=False,
    help="Read the private key from stdin instead of the key directory.",
)

output_option = click.option(
    "--output",
    "--out",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write to FILE rather than stdout.",
)

file_argument = click.argument("file", type=click.Path(dir_okay=False))


def read_private_key(secrets_file: SecretsFile, keydir: str, key_from_stdin: bool) -> Key:
    """Read the private key for a secrets file from stdin or the key directory."""
    if key_from_stdin:
        return keystore.read_private_key_from(click.get_text_stream("stdin"))
    return load_private_key(secrets_file, keydir)


def load_decrypted(file: str, keydir: str, key_from_stdin: bool) -> SecretsFile:
    """Load a secrets file and decrypt every encrypted value in it."""
    secrets_file = SecretsFile.load(file)
    private_key = read_private_key(secrets_file, keydir, key_from_stdin)
    secrets_file.transform(decrypt(secrets_file, private_key))
    return secrets_file


def emit(text: str, output: str | None) -> None:
    """Write command output to a file, or to stdout when no file is given."""
    if output is None:
        click.echo(text)
        return
    try:
        Path(output).write_text(f"{text}\n", encoding="utf-8")
    except OSError as err:
        raise click.ClickException(f"Cannot write to output path '{output}': {err.strerror}") from err
    console.success(f"Wrote {console.highlight(output)}")


class AliasedGroup(click.Group):
    """A click group that also accepts short aliases for its commands."""

    aliases = {"e": "encrypt", "d": "decrypt", "g": "keygen"}

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        return super().get_command(ctx, self.aliases.get(cmd_name, cmd_name))

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        cmd_name, cmd, args = super().resolve_command(ctx, args)
        return (cmd.name if cmd else cmd_name), cmd, args


@click.group(cls=AliasedGroup, help="Manage secrets in EJSON files", invoke_without_command=True)
@click.option("--version", "-v", required=False, is_flag=True, help="print version")
@click.option("--debug", required=False, is_flag=True, help="print debug information")
@click.pass_context
def cli(ctx: click.Context, version: bool, debug: bool) -> None:
    """Process global options before dispatching to a subcommand.

    Args:
        ctx: The click context.
        version: Print version and exit.
        debug: Enable debug output.

    """
    if not debug:
        ic.disable()

    if version:
        click.echo(__version__)
        ctx.exit()

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command(name="encrypt")
@click.argument("files", type=click.Path(dir_okay=False), nargs=-1, required=True)
def encrypt_command(files: tuple[str, ...]) -> None:
    """Encrypt one or more EJSON files in place.

    Multi-line values are compacted onto a single line first. Values that
    are already encrypted are left untouched.
    """
    with error_boundary():
        for file in files:
            console.step(f"Encrypting {file}")
            secrets_file = SecretsFile.load(file)
            secrets_file.transform(compact())
            secrets_file.transform(encrypt(secrets_file))
            written = secrets_file.save(file)
            click.echo(f"Wrote {written} bytes to {file}")


@cli.command(name="decrypt")
@file_argument
@keydir_option
@key_from_stdin_option
@output_option
def decrypt_command(file: str, keydir: str, key_from_stdin: bool, output: str | None) -> None:
    """Decrypt an EJSON file, printing the full decrypted document.

    The private key for the file's public key must be present in the key
    directory unless --key-from-stdin is given.
    """
    with error_boundary():
        secrets_file = load_decrypted(file, keydir, key_from_stdin)
        emit(secrets_file.dumps(), output)


@cli.command(name="keygen")
@keydir_option
@click.option("--write", "-w", is_flag=True, default=False, help="Write the private key to the key directory.")
def keygen_command(keydir: str, write: bool) -> None:
    """Generate a new EJSON key pair."""
    keys = KeyPair.generate()
    click.echo("Public Key:")
    click.echo(keys.public_key)

    if not write:
        click.echo("Private Key:")
        click.echo(keys.private_key)
        return

    with error_boundary():
        path = keystore.write_private_key(keydir, keys)
        console.summary_panel("Key Pair Created", {"Public key": keys.public_key, "Private key file": str(path)})


@cli.command(name="env")
@file_argument
@keydir_option
@key_from_stdin_option
@output_option
def env_command(file: str, keydir: str, key_from_stdin: bool, output: str | None) -> None:
    """Print shell export statements for the file's "environment" values."""
    with error_boundary():
        secrets_file = load_decrypted(file, keydir, key_from_stdin)
        if secrets_file.children(env.ENVIRONMENT_FIELD) is None:
            console.warning(f"No '{env.ENVIRONMENT_FIELD}' object found in {file}")
        emit(env.render(secrets_file), output)


@cli.command(name="kube-secrets")
@file_argument
@keydir_option
@key_from_stdin_option
def kube_secrets_command(file: str, keydir: str, key_from_stdin: bool) -> None:
    """Print Kubernetes Secret manifests for the file's "kubernetes" values."""
    with error_boundary():
        manifest = SecretsManifest.from_secrets_file(load_decrypted(file, keydir, key_from_stdin))
        if not len(manifest):
            console.warning(f"No Kubernetes secrets found in {file}")
            return
        click.echo(manifest.render(), nl=False)


if __name__ == "__main__":
    cli()
