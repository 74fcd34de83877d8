"""
Unit tests for AuctionReader use case.

Usage:
    pytest tests/unit/application/test_read_auction.py
"""

from unittest.mock import AsyncMock

import pytest

from crieur.application.use_cases import AuctionReader
from crieur.domain.entities import AuctionStatus
from crieur.domain.exceptions import (
    AccountDataError,
    InvalidAddressError,
    RPCException,
)
from crieur.domain.services import AddressDeriver
from crieur.infrastructure.crypto import Ed25519CurveProvider
from tests.helpers.buffers import (
    build_auction_state_buffer,
    build_deposit_buffer,
    build_vault_buffer,
    key,
)

SELLER = key(20)
MINT = key(21)
BIDDER = key(22)


class TestAuctionReader:
    """Unit tests for AuctionReader."""

    # ================================================================
    # Helper Methods
    # ================================================================

    def _create_reader(self, reporter):
        account_reader = AsyncMock()
        account_reader.read_account.return_value = None
        reader = AuctionReader(
            address_deriver=AddressDeriver(Ed25519CurveProvider()),
            account_reader=account_reader,
            reporter=reporter,
        )
        return reader, account_reader

    # ================================================================
    # Test Methods
    # ================================================================

    async def test_find_auction_derives_and_decodes(self, quiet_reporter):
        """Test find_auction reads the PDA for seller and mint."""
        self.reporter.info("Testing find_auction", context="Test")

        reader, account_reader = self._create_reader(quiet_reporter)
        account_reader.read_account.return_value = build_auction_state_buffer(
            SELLER, MINT, status=AuctionStatus.ACTIVE, reserve_price=42
        )

        lookup = await reader.find_auction(SELLER, MINT)

        expected, bump = reader.address_deriver.derive_auction_address(SELLER, MINT)
        assert lookup is not None
        assert lookup.address == expected
        assert lookup.bump == bump
        assert lookup.state.status is AuctionStatus.ACTIVE
        assert lookup.state.reserve_price == 42
        account_reader.read_account.assert_awaited_once_with(expected)

        self.reporter.info("Auction found", context="Test")

    async def test_get_auction_missing_returns_none(self, quiet_reporter):
        """Test a missing account returns None."""
        self.reporter.info("Testing missing auction", context="Test")

        reader, _ = self._create_reader(quiet_reporter)

        assert await reader.get_auction(key(30)) is None
        assert await reader.find_auction(SELLER, MINT) is None

        self.reporter.info("Missing auction returns None", context="Test")

    async def test_get_auction_wrong_account_type(self, quiet_reporter):
        """Test a non-auction account returns None."""
        self.reporter.info("Testing wrong account type", context="Test")

        reader, account_reader = self._create_reader(quiet_reporter)
        account_reader.read_account.return_value = build_vault_buffer(key(31))

        assert await reader.get_auction(str(key(31))) is None

        self.reporter.info("Wrong account type rejected", context="Test")

    async def test_read_failure_returns_none(self, quiet_reporter):
        """Test RPC failure degrades to None."""
        self.reporter.info("Testing read failure", context="Test")

        reader, account_reader = self._create_reader(quiet_reporter)
        account_reader.read_account.side_effect = RPCException("down")

        assert await reader.get_auction(key(32)) is None

        self.reporter.info("Read failure returns None", context="Test")

    async def test_get_vault(self, quiet_reporter):
        """Test vault lookup by auction address."""
        self.reporter.info("Testing get_vault", context="Test")

        reader, account_reader = self._create_reader(quiet_reporter)
        auction = key(33)
        account_reader.read_account.return_value = build_vault_buffer(auction)

        vault = await reader.get_vault(auction)

        expected, _ = reader.address_deriver.derive_vault_address(auction)
        assert vault is not None
        assert vault.auction == auction
        account_reader.read_account.assert_awaited_once_with(expected)

        self.reporter.info("Vault read", context="Test")

    async def test_get_deposit(self, quiet_reporter):
        """Test deposit lookup by auction and bidder."""
        self.reporter.info("Testing get_deposit", context="Test")

        reader, account_reader = self._create_reader(quiet_reporter)
        auction = key(34)
        account_reader.read_account.return_value = build_deposit_buffer(
            auction, BIDDER, amount=7_500_000_000
        )

        deposit = await reader.get_deposit(auction, BIDDER)

        expected, _ = reader.address_deriver.derive_deposit_address(auction, BIDDER)
        assert deposit is not None
        assert deposit.amount == 7_500_000_000
        assert deposit.bidder == BIDDER
        account_reader.read_account.assert_awaited_once_with(expected)

        self.reporter.info("Deposit read", context="Test")

    async def test_get_deposits_batch(self, quiet_reporter):
        """Test batch deposit lookup keeps bidder order in one read."""
        self.reporter.info("Testing get_deposits", context="Test")

        reader, account_reader = self._create_reader(quiet_reporter)
        auction = key(35)
        other_bidder = key(36)
        account_reader.read_accounts.return_value = [
            None,
            build_deposit_buffer(auction, BIDDER, amount=2_000_000_000),
            build_vault_buffer(auction),
        ]

        deposits = await reader.get_deposits(auction, [other_bidder, BIDDER, key(37)])

        expected = [
            reader.address_deriver.derive_deposit_address(auction, b).address
            for b in (other_bidder, BIDDER, key(37))
        ]
        account_reader.read_accounts.assert_awaited_once_with(expected)
        assert deposits[0] is None
        assert deposits[1].bidder == BIDDER
        assert deposits[1].amount == 2_000_000_000
        assert deposits[2] is None
        assert await reader.get_deposits(auction, []) == []

        self.reporter.info("Batch deposits read", context="Test")

    async def test_get_deposits_read_failure(self, quiet_reporter):
        """Test a failed batch read yields None for every bidder."""
        self.reporter.info("Testing get_deposits failure", context="Test")

        reader, account_reader = self._create_reader(quiet_reporter)
        account_reader.read_accounts.side_effect = AccountDataError("bad shape")

        deposits = await reader.get_deposits(key(38), [BIDDER, key(39)])

        assert deposits == [None, None]

        self.reporter.info("Batch failure degrades to None", context="Test")

    async def test_invalid_address_raises(self, quiet_reporter):
        """Test invalid input addresses raise InvalidAddressError."""
        self.reporter.info("Testing invalid address", context="Test")

        reader, account_reader = self._create_reader(quiet_reporter)

        with pytest.raises(InvalidAddressError):
            await reader.get_auction("bogus")

        account_reader.read_account.assert_not_awaited()

        self.reporter.info("Invalid address rejected", context="Test")
