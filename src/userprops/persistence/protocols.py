"""Persistence backend protocol: defines the contract all backends implement."""

from __future__ import annotations

from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class IPropertyPersistence(Protocol):
    """Protocol for property persistence backends (file, memory, etc.).

    The store holds the whole document in memory; a backend only has to hand
    out byte streams for the last persisted copy and for its replacement.
    """

    def exists(self) -> bool:
        """Return True if a persisted copy is available to read."""
        ...

    def open_read(self) -> BinaryIO:
        """Open a binary stream over the last persisted copy."""
        ...

    def open_write(self) -> BinaryIO:
        """Open a binary sink whose content replaces the persisted copy once closed."""
        ...
