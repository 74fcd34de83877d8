"""Blockchain infrastructure."""

from crieur.infrastructure.blockchain.solana_rpc_client import SolanaRPCClient

__all__ = ["SolanaRPCClient"]
