"""
Infrastructure layer: concrete cryptography, RPC, HTTP and caching.
"""
