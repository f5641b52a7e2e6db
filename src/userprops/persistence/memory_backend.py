"""In-memory persistence backend: byte buffer, ideal for tests."""

from __future__ import annotations

import io
import logging
from typing import BinaryIO, Callable, Optional

log = logging.getLogger(__name__)


class _CommittingBuffer(io.BytesIO):
    """BytesIO that hands its content to ``on_close`` when closed."""

    def __init__(self, on_close: Callable[[bytes], None]) -> None:
        super().__init__()
        self._on_close = on_close

    def close(self) -> None:
        if not self.closed:
            self._on_close(self.getvalue())
        super().close()


class MemoryPropertyPersistence:
    """Keeps the last written document in memory; nothing touches disk.

    ``exists()`` is False until the first write completes, unless the backend
    was seeded with ``initial`` bytes.
    """

    def __init__(self, initial: Optional[bytes] = None) -> None:
        self._data = initial

    def exists(self) -> bool:
        return self._data is not None

    def open_read(self) -> BinaryIO:
        return io.BytesIO(self._data or b"")

    def open_write(self) -> BinaryIO:
        return _CommittingBuffer(self._commit)

    def get_bytes(self) -> Optional[bytes]:
        """Return the last persisted document, or None if nothing was written."""
        return self._data

    def reset(self) -> None:
        """Forget the persisted document."""
        self._data = None

    def _commit(self, data: bytes) -> None:
        self._data = data
        log.debug("Saved %d bytes to memory store", len(data))
