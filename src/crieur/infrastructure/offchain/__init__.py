"""Off-chain document retrieval."""

from crieur.infrastructure.offchain.http_json_fetcher import HttpJsonFetcher

__all__ = ["HttpJsonFetcher"]
