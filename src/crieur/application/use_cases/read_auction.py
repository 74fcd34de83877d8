"""
Read Auction use case.

Looks up Outcry auction, vault and bidder deposit accounts by address
or by their derivation seeds.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, TypeVar

from solders.pubkey import Pubkey  # type: ignore

from crieur.domain.entities import AuctionState, AuctionVault, BidderDeposit
from crieur.domain.exceptions import BlockchainException
from crieur.domain.services.address_deriver import AddressDeriver
from crieur.domain.services.auction_decoder import (
    decode_auction_state,
    decode_auction_vault,
    decode_bidder_deposit,
)
from crieur.domain.services.i_account_reader import IAccountReader
from crieur.reporter import SystemReporter
from crieur.utils.blockchain import AddressLike, to_pubkey

T = TypeVar("T")


@dataclass(frozen=True)
class AuctionLookup:
    """
    Auction found by seller and mint.

    Attributes:
        address: AuctionState PDA
        bump: PDA bump seed
        state: Decoded auction state
    """

    address: Pubkey
    bump: int
    state: AuctionState


class AuctionReader:
    """
    Read Outcry program accounts.

    Business rules:
    - Missing account, read failure or undecodable data yields None
    - Invalid addresses raise InvalidAddressError
    """

    def __init__(
        self,
        address_deriver: AddressDeriver,
        account_reader: IAccountReader,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize use case with dependencies.

        Args:
            address_deriver: PDA derivation
            account_reader: Raw account reads
            reporter: Optional logger
        """
        self.address_deriver = address_deriver
        self.account_reader = account_reader
        self.reporter = reporter or SystemReporter()

    async def get_auction(self, address: AddressLike) -> Optional[AuctionState]:
        """
        Read an AuctionState by address.

        Args:
            address: AuctionState PDA

        Returns:
            AuctionState, None if missing or unreadable
        """
        return await self._read(
            to_pubkey(address), decode_auction_state, "AuctionState"
        )

    async def find_auction(
        self, seller: AddressLike, nft_mint: AddressLike
    ) -> Optional[AuctionLookup]:
        """
        Locate the auction a seller opened for a mint.

        Args:
            seller: Seller wallet
            nft_mint: Auctioned NFT mint

        Returns:
            AuctionLookup, None if no auction exists
        """
        address, bump = self.address_deriver.derive_auction_address(
            seller, nft_mint
        )
        state = await self._read(address, decode_auction_state, "AuctionState")
        if state is None:
            return None
        return AuctionLookup(address=address, bump=bump, state=state)

    async def get_vault(self, auction: AddressLike) -> Optional[AuctionVault]:
        """
        Read the vault belonging to an auction.

        Args:
            auction: AuctionState PDA

        Returns:
            AuctionVault, None if missing or unreadable
        """
        address, _ = self.address_deriver.derive_vault_address(auction)
        return await self._read(address, decode_auction_vault, "AuctionVault")

    async def get_deposit(
        self, auction: AddressLike, bidder: AddressLike
    ) -> Optional[BidderDeposit]:
        """
        Read a bidder's deposit for an auction.

        Args:
            auction: AuctionState PDA
            bidder: Bidder wallet

        Returns:
            BidderDeposit, None if the bidder has not deposited
        """
        address, _ = self.address_deriver.derive_deposit_address(auction, bidder)
        return await self._read(address, decode_bidder_deposit, "BidderDeposit")

    async def get_deposits(
        self, auction: AddressLike, bidders: Sequence[AddressLike]
    ) -> List[Optional[BidderDeposit]]:
        """
        Read several bidders' deposits for an auction in one round trip.

        Args:
            auction: AuctionState PDA
            bidders: Bidder wallets

        Returns:
            BidderDeposit per bidder, in input order; None where the bidder
            has not deposited, or for every bidder if the read fails
        """
        addresses = [
            self.address_deriver.derive_deposit_address(auction, bidder).address
            for bidder in bidders
        ]
        if not addresses:
            return []

        try:
            accounts = await self.account_reader.read_accounts(addresses)
        except BlockchainException as e:
            self.reporter.warning(
                f"BidderDeposit batch read failed for {auction}: {e.message}",
                context="AuctionReader",
            )
            return [None] * len(addresses)

        deposits: List[Optional[BidderDeposit]] = []
        for address, data in zip(addresses, accounts):
            deposit = None if data is None else decode_bidder_deposit(data)
            if data is not None and deposit is None:
                self.reporter.warning(
                    f"Account {address} is not a valid BidderDeposit",
                    context="AuctionReader",
                )
            deposits.append(deposit)
        return deposits

    async def _read(
        self,
        address: Pubkey,
        decode: Callable[[bytes], Optional[T]],
        account_name: str,
    ) -> Optional[T]:
        try:
            data = await self.account_reader.read_account(address)
        except BlockchainException as e:
            self.reporter.warning(
                f"{account_name} read failed for {address}: {e.message}",
                context="AuctionReader",
            )
            return None

        if data is None:
            return None

        account = decode(data)
        if account is None:
            self.reporter.warning(
                f"Account {address} is not a valid {account_name}",
                context="AuctionReader",
            )
        return account
