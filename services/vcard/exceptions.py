"""
vCard System Exceptions

Raised while reading a single card. The parser catches these per card,
so they never escape parse_vcf().
"""


class VCardError(Exception):
    """Base exception for all vCard errors."""
    pass


class MalformedCardError(VCardError):
    """
    Raised when a card contains a property value that cannot be read.

    Examples are a value ending in a dangling escape backslash or a
    structured name with an unterminated quoted component.
    """
    def __init__(self, message: str, property_name: str = None):
        self.property_name = property_name
        super().__init__(message)
