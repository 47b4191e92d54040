"""Postal code (CEP) syntax validation."""

from __future__ import annotations

import re

_CEP_RE = re.compile(r"[0-9]{8}")


def is_valid_cep(value: str) -> bool:
    """Return True if ``value`` is exactly 8 ASCII digits."""
    return _CEP_RE.fullmatch(value) is not None
