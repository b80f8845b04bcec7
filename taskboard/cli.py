"""
``flask generate-keys``: create a local RSA key pair for JWT signing.

The command is installed through the ``flask.commands`` entry point so it
works before any key exists, i.e. before the application itself can be
created.
"""

from __future__ import annotations

from pathlib import Path

import click
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from .config import PRIVATE_KEY_FILENAME, PUBLIC_KEY_FILENAME, default_keys_dir


def generate_key_pair() -> tuple[bytes, bytes]:
    """Generate a 2048-bit RSA key pair as ``(private_pem, public_pem)`` bytes."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_pem, public_pem


@click.command("generate-keys")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=default_keys_dir,
    show_default="$JWT_KEYS_DIR or <instance folder>/keys",
    help="Directory to write the PEM files into.",
)
@click.option("--force", is_flag=True, help="Overwrite an existing key pair.")
def generate_keys_command(output_dir: Path, force: bool) -> None:
    """Generate the JWT signing key pair used by the API."""
    private_path = output_dir / PRIVATE_KEY_FILENAME
    public_path = output_dir / PUBLIC_KEY_FILENAME
    private_exists = private_path.exists()
    public_exists = public_path.exists()

    if not force:
        if private_exists and public_exists:
            click.echo(f"Keys already exist, skipping: {private_path} / {public_path}")
            return
        if private_exists != public_exists:
            raise click.ClickException(
                "Only one key file exists. Remove it or pass --force to regenerate both."
            )

    output_dir.mkdir(parents=True, exist_ok=True)
    private_pem, public_pem = generate_key_pair()
    private_path.write_bytes(private_pem)
    private_path.chmod(0o600)
    public_path.write_bytes(public_pem)
    click.echo(f"Generated: {private_path}")
    click.echo(f"Generated: {public_path}")
