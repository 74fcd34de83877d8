"""
Cryptography infrastructure.
"""

from crieur.infrastructure.crypto.ed25519_curve_provider import (
    Ed25519CurveProvider,
)

__all__ = ["Ed25519CurveProvider"]
