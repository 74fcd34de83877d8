"""
Crieur - read-side client core for the Outcry auction platform.

Derives program addresses and resolves Metaplex NFT metadata
without running a Solana node.
"""

__version__ = "0.1.0"
