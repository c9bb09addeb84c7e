from __future__ import annotations


class DecodeError(ValueError):
    """Raised when a TED5000 XML body cannot be turned into a document."""
