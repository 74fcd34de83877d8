"""
Crieur CLI.

Usage:
    crieur derive auction SELLER MINT
    crieur derive vault AUCTION
    crieur derive deposit AUCTION BIDDER
    crieur derive metadata MINT
    crieur metadata resolve MINT
    crieur metadata decode FILE [--base64]
    crieur auction show ADDRESS
    crieur auction find SELLER MINT
    crieur auction deposit AUCTION BIDDER
    crieur auction deposits AUCTION BIDDER...
"""

import asyncio
import base64
import binascii
import json
import sys
from typing import Any, Awaitable, Callable, Dict, Optional

import click

from crieur.config.settings import get_settings
from crieur.di.container import DIContainer
from crieur.domain.exceptions import CrieurException
from crieur.domain.services.metadata_decoder import decode_metadata
from crieur.utils.blockchain import lamports_to_sol

AUCTION_LAMPORT_FIELDS = ("reserve_price", "current_bid", "min_bid_increment")


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2))


def _with_sol(data: Dict[str, Any], *fields: str) -> Dict[str, Any]:
    """Add a "<field>_sol" entry next to each lamport amount."""
    for field in fields:
        data[f"{field}_sol"] = lamports_to_sol(data[field])
    return data


def _fail(message: str) -> None:
    click.echo(message, err=True)
    sys.exit(1)


def _container(ctx: click.Context) -> DIContainer:
    return ctx.obj["container"]


def _run(ctx: click.Context, func: Callable[[DIContainer], Awaitable[Any]]) -> Any:
    """Run a coroutine against the container and release its resources."""
    container = _container(ctx)

    async def runner():
        try:
            return await func(container)
        finally:
            await container.shutdown()

    return asyncio.run(runner())


@click.group()
@click.option("--rpc-url", default=None, help="Override Solana RPC URL")
@click.pass_context
def cli(ctx: click.Context, rpc_url: Optional[str]):
    """Crieur - Outcry auction and NFT metadata toolkit."""
    ctx.ensure_object(dict)
    if "container" in ctx.obj:
        return

    settings = get_settings()
    if rpc_url:
        settings = settings.model_copy(update={"solana_rpc_url": rpc_url})
    ctx.obj["container"] = DIContainer(settings)


# ================================================================
# derive
# ================================================================


@cli.group()
def derive():
    """Program-derived address commands."""


@derive.command("auction")
@click.argument("seller")
@click.argument("mint")
@click.pass_context
def derive_auction(ctx: click.Context, seller: str, mint: str):
    """Derive the AuctionState PDA for SELLER and MINT."""
    try:
        pda = _container(ctx).address_deriver.derive_auction_address(seller, mint)
    except CrieurException as e:
        _fail(f"Error: {e.message}")
    _echo_json(pda.to_dict())


@derive.command("vault")
@click.argument("auction")
@click.pass_context
def derive_vault(ctx: click.Context, auction: str):
    """Derive the AuctionVault PDA for AUCTION."""
    try:
        pda = _container(ctx).address_deriver.derive_vault_address(auction)
    except CrieurException as e:
        _fail(f"Error: {e.message}")
    _echo_json(pda.to_dict())


@derive.command("deposit")
@click.argument("auction")
@click.argument("bidder")
@click.pass_context
def derive_deposit(ctx: click.Context, auction: str, bidder: str):
    """Derive the BidderDeposit PDA for AUCTION and BIDDER."""
    try:
        pda = _container(ctx).address_deriver.derive_deposit_address(auction, bidder)
    except CrieurException as e:
        _fail(f"Error: {e.message}")
    _echo_json(pda.to_dict())


@derive.command("metadata")
@click.argument("mint")
@click.pass_context
def derive_metadata(ctx: click.Context, mint: str):
    """Derive the Metaplex metadata PDA for MINT."""
    try:
        pda = _container(ctx).address_deriver.derive_metadata_address(mint)
    except CrieurException as e:
        _fail(f"Error: {e.message}")
    _echo_json(pda.to_dict())


# ================================================================
# metadata
# ================================================================


@cli.group()
def metadata():
    """NFT metadata commands."""


@metadata.command("resolve")
@click.argument("mint")
@click.pass_context
def metadata_resolve(ctx: click.Context, mint: str):
    """Resolve on-chain and off-chain metadata for MINT."""
    try:
        resolved = _run(ctx, lambda c: c.metadata_resolver.resolve(mint))
    except CrieurException as e:
        _fail(f"Error: {e.message}")
    if resolved is None:
        _fail(f"No metadata found for {mint}")
    _echo_json(resolved.to_dict())


@metadata.command("decode")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--base64", "is_base64", is_flag=True, help="File holds base64 text")
def metadata_decode(path: str, is_base64: bool):
    """Decode a raw metadata account dump at PATH."""
    with open(path, "rb") as f:
        data = f.read()

    if is_base64:
        try:
            data = base64.b64decode(data.strip(), validate=True)
        except (binascii.Error, ValueError):
            _fail("Error: file is not valid base64")

    record = decode_metadata(data)
    if record is None:
        _fail("Error: not a valid metadata account")

    _echo_json(
        {
            "update_authority": str(record.update_authority),
            "mint": str(record.mint),
            "name": record.name,
            "symbol": record.symbol,
            "uri": record.uri,
            "seller_fee_basis_points": record.seller_fee_basis_points,
            "creators": [c.to_dict() for c in record.creators],
        }
    )


# ================================================================
# auction
# ================================================================


@cli.group()
def auction():
    """Outcry auction commands."""


@auction.command("show")
@click.argument("address")
@click.pass_context
def auction_show(ctx: click.Context, address: str):
    """Show the AuctionState at ADDRESS."""
    try:
        state = _run(ctx, lambda c: c.auction_reader.get_auction(address))
    except CrieurException as e:
        _fail(f"Error: {e.message}")
    if state is None:
        _fail(f"No auction found at {address}")
    _echo_json(_with_sol(state.to_dict(), *AUCTION_LAMPORT_FIELDS))


@auction.command("find")
@click.argument("seller")
@click.argument("mint")
@click.pass_context
def auction_find(ctx: click.Context, seller: str, mint: str):
    """Find the auction SELLER opened for MINT."""
    try:
        lookup = _run(ctx, lambda c: c.auction_reader.find_auction(seller, mint))
    except CrieurException as e:
        _fail(f"Error: {e.message}")
    if lookup is None:
        _fail(f"No auction found for seller {seller} and mint {mint}")
    _echo_json(
        _with_sol(
            {"address": str(lookup.address), **lookup.state.to_dict()},
            *AUCTION_LAMPORT_FIELDS,
        )
    )


@auction.command("deposit")
@click.argument("auction_address")
@click.argument("bidder")
@click.pass_context
def auction_deposit(ctx: click.Context, auction_address: str, bidder: str):
    """Show BIDDER's deposit for AUCTION_ADDRESS."""
    try:
        deposit = _run(
            ctx, lambda c: c.auction_reader.get_deposit(auction_address, bidder)
        )
    except CrieurException as e:
        _fail(f"Error: {e.message}")
    if deposit is None:
        _fail(f"No deposit found for {bidder}")
    _echo_json(_with_sol(deposit.to_dict(), "amount"))


@auction.command("deposits")
@click.argument("auction_address")
@click.argument("bidders", nargs=-1, required=True)
@click.pass_context
def auction_deposits(ctx: click.Context, auction_address: str, bidders: tuple):
    """Show the deposits of several BIDDERS for AUCTION_ADDRESS."""
    try:
        deposits = _run(
            ctx,
            lambda c: c.auction_reader.get_deposits(auction_address, list(bidders)),
        )
    except CrieurException as e:
        _fail(f"Error: {e.message}")
    _echo_json(
        {
            bidder: (
                None if deposit is None else _with_sol(deposit.to_dict(), "amount")
            )
            for bidder, deposit in zip(bidders, deposits)
        }
    )


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
