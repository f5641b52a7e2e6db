"""File-based persistence backend: one JSON document in the user's home directory."""

from __future__ import annotations

import getpass
import io
import logging
import os
import tempfile
from pathlib import Path
from typing import BinaryIO, Optional, cast

log = logging.getLogger(__name__)


def default_properties_path() -> Path:
    """``<home>/.<user-name>.local.properties`` for the running user."""
    return Path.home() / f".{getpass.getuser()}.local.properties"


class _ReplaceOnClose(io.FileIO):
    """Writes to a temp file beside ``target`` and moves it into place on close.

    Leaving a ``with`` block through an exception discards the temp file, so
    ``target`` keeps its previous content.
    """

    def __init__(self, target: Path) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
        )
        super().__init__(fd, "wb")
        self._target = target
        self._tmp_path = Path(tmp_name)

    def close(self) -> None:
        if self.closed:
            return
        try:
            os.fsync(self.fileno())
        except BaseException:
            self.discard()
            raise
        super().close()
        try:
            os.replace(self._tmp_path, self._target)
        except OSError:
            self._tmp_path.unlink(missing_ok=True)
            raise

    def discard(self) -> None:
        if self.closed:
            return
        super().close()
        self._tmp_path.unlink(missing_ok=True)
        log.warning("Discarded incomplete write to %s", self._target)

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.discard()
        else:
            self.close()

    def __del__(self) -> None:
        # Never publish a half-written document from the garbage collector.
        self.discard()


class FilePropertyPersistence:
    """Stores the property document in a single file, replaced on every write.

    The file is swapped in with ``os.replace`` only after a write completes,
    so readers see either the previous document or the new one.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path if path is not None else default_properties_path()

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def open_read(self) -> BinaryIO:
        return self._path.open("rb")

    def open_write(self) -> BinaryIO:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        log.debug("Writing properties to %s", self._path)
        return cast(BinaryIO, _ReplaceOnClose(self._path))
