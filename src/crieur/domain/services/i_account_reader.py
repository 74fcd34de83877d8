"""
Account reader interface.

Defines contract for reading raw account data from the chain.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from solders.pubkey import Pubkey  # type: ignore


class IAccountReader(ABC):
    """Interface for reading raw account bytes."""

    @abstractmethod
    async def read_account(self, address: Pubkey) -> Optional[bytes]:
        """
        Read account data.

        Args:
            address: Account address

        Returns:
            Raw account data, None if the account does not exist

        Raises:
            BlockchainException: If the read fails
        """

    @abstractmethod
    async def read_accounts(
        self, addresses: Sequence[Pubkey]
    ) -> List[Optional[bytes]]:
        """
        Read several accounts in one request.

        Args:
            addresses: Account addresses

        Returns:
            Raw data per address in input order, None where missing

        Raises:
            BlockchainException: If the read fails
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
