"""
Domain value objects.
"""

from crieur.domain.value_objects.bounded_string import BoundedString
from crieur.domain.value_objects.program_derived_address import (
    ProgramDerivedAddress,
)

__all__ = [
    "BoundedString",
    "ProgramDerivedAddress",
]
