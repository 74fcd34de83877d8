"""
Base domain exception.
"""

from typing import Optional


class CrieurException(Exception):
    """Base exception for all Crieur errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)
