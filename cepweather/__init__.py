"""Current temperature for a Brazilian postal code (CEP)."""

__version__ = "1.0.0"
