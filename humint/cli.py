"""
Command-line interface for the HUMINT crypto core.

Keys are re-derived from the wallet signature on every invocation; nothing
but encrypted bundles is ever written to disk.
"""

from __future__ import annotations

import logging
import uuid
from functools import wraps
from pathlib import Path
from typing import Any, Callable

import click
from pydantic import ValidationError

from humint.common import setup_logger
from humint.common.config import Config
from humint.common.decorators import access_gated
from humint.common.exceptions import HumintError
from humint.common.models import PostBundle, PostGrant
from humint.core.epoch import current_epoch
from humint.core.keypair import key_derivation_message
from humint.session import CryptoSession
from humint.store import FileContentStore


def _handle_errors(func: Callable) -> Callable:
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except HumintError as err:
            raise click.ClickException(str(err)) from err
        except ValidationError as err:
            msg = f"Invalid document: {err.error_count()} validation error(s)"
            raise click.ClickException(msg) from err

    return wrapper


def _identity_options(func: Callable) -> Callable:
    func = click.option(
        "--signature",
        required=True,
        help="Base64 wallet signature over the derivation message",
    )(func)
    return click.option("--account", required=True, help="Wallet account id")(func)


def _store_option(func: Callable) -> Callable:
    return click.option(
        "--store-dir",
        default=None,
        type=click.Path(file_okay=False, path_type=Path),
        help="Directory of the local content store (default: HUMINT_STORE_DIR)",
    )(func)


def _login(ctx: click.Context, account: str, signature: str) -> CryptoSession:
    session = CryptoSession(log_level=ctx.obj["log_level"])
    session.login(account, signature)
    return session


def _load_bundle(store_dir: Path | None, post_id: str) -> PostBundle:
    bundle = FileContentStore(store_dir).get(post_id)
    if bundle is None:
        msg = f"Post not found: {post_id}"
        raise click.ClickException(msg)
    return bundle


@access_gated("Access denied: this identity cannot derive the post key")
def _open_post(session: CryptoSession, bundle: PostBundle, peer: str) -> bytes:
    return session.open_post(bundle, peer)


@access_gated("Access denied: grant was not made for this identity")
def _open_granted(session: CryptoSession, bundle: PostBundle, grant: PostGrant) -> bytes:
    return session.open_granted_post(bundle, grant)


@click.group()
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:  # noqa: FBT001
    """HUMINT zero-storage encryption CLI"""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = logging.DEBUG if verbose else logging.WARNING
    setup_logger(logging.getLogger("humint"), ctx.obj["log_level"])


@cli.command()
@click.option("--account", required=True, help="Wallet account id")
@_handle_errors
def message(account: str) -> None:
    """Print the message the wallet must sign"""
    click.echo(key_derivation_message(account, Config().DOMAIN_TAG))


@cli.command()
@_identity_options
@click.pass_context
@_handle_errors
def derive(ctx: click.Context, account: str, signature: str) -> None:
    """Derive and print the identity public key"""
    session = _login(ctx, account, signature)
    click.echo(session.public_key_hex)


@cli.command()
def epoch() -> None:
    """Print the current epoch (YYYY-MM)"""
    click.echo(current_epoch())


@cli.command()
@_identity_options
@click.option("--peer", required=True, help="Peer public key (hex)")
@click.option("--tier", required=True, help="Access tier, e.g. press")
@click.option("--epoch", "epoch_", default=None, help="Epoch (default: current)")
@click.option("--post-id", default=None, help="Post id (default: random)")
@_store_option
@click.argument("source", type=click.File("rb"))
@click.pass_context
@_handle_errors
def seal(
    ctx: click.Context,
    account: str,
    signature: str,
    peer: str,
    tier: str,
    epoch_: str | None,
    post_id: str | None,
    store_dir: Path | None,
    source: Any,
) -> None:
    """Encrypt a file into the content store"""
    session = _login(ctx, account, signature)
    with session:
        bundle = session.seal_post(source.read(), tier, peer, epoch=epoch_)
    post_id = post_id or uuid.uuid4().hex
    FileContentStore(store_dir).put(post_id, bundle)
    click.echo(post_id)


@cli.command(name="open")
@_identity_options
@click.option("--peer", required=True, help="Peer public key (hex)")
@click.option("--post-id", required=True, help="Post id")
@_store_option
@click.pass_context
@_handle_errors
def open_(
    ctx: click.Context,
    account: str,
    signature: str,
    peer: str,
    post_id: str,
    store_dir: Path | None,
) -> None:
    """Decrypt a post from the content store to stdout"""
    bundle = _load_bundle(store_dir, post_id)
    with _login(ctx, account, signature) as session:
        plaintext = _open_post(session, bundle, peer)
    click.echo(plaintext, nl=False)


@cli.command()
@_identity_options
@click.option("--peer", required=True, help="Peer public key the post was sealed with (hex)")
@click.option("--recipient", required=True, help="Recipient public key (hex)")
@click.option("--post-id", required=True, help="Post id")
@_store_option
@click.pass_context
@_handle_errors
def grant(
    ctx: click.Context,
    account: str,
    signature: str,
    peer: str,
    recipient: str,
    post_id: str,
    store_dir: Path | None,
) -> None:
    """Grant one post to a single recipient"""
    bundle = _load_bundle(store_dir, post_id)
    with _login(ctx, account, signature) as session:
        post_grant = session.grant_post(bundle, peer, recipient, post_id=post_id)
    click.echo(post_grant.model_dump_json(indent=2))


@cli.command(name="open-grant")
@_identity_options
@click.option(
    "--grant-file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="PostGrant JSON produced by 'grant'",
)
@_store_option
@click.pass_context
@_handle_errors
def open_grant(
    ctx: click.Context,
    account: str,
    signature: str,
    grant_file: Path,
    store_dir: Path | None,
) -> None:
    """Decrypt a granted post to stdout"""
    post_grant = PostGrant.model_validate_json(grant_file.read_text())
    if not post_grant.post_id:
        msg = "Grant does not name a post id"
        raise click.ClickException(msg)
    bundle = _load_bundle(store_dir, post_grant.post_id)
    with _login(ctx, account, signature) as session:
        plaintext = _open_granted(session, bundle, post_grant)
    click.echo(plaintext, nl=False)


if __name__ == "__main__":
    cli()
