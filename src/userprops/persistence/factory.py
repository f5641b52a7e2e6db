"""Persistence backend factory: resolves a backend from config."""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Any

from userprops.exceptions import ConfigurationError
from userprops.persistence.file_backend import FilePropertyPersistence
from userprops.persistence.memory_backend import MemoryPropertyPersistence
from userprops.persistence.protocols import IPropertyPersistence

if TYPE_CHECKING:
    from userprops.core.config import PersistenceConfig

log = logging.getLogger(__name__)


def create_persistence(config: PersistenceConfig) -> IPropertyPersistence:
    """Create a persistence backend based on settings.

    ``"file"`` returns a :class:`FilePropertyPersistence` (at
    ``config.file_path`` when set, the per-user default otherwise) and
    ``"memory"`` a fresh :class:`MemoryPropertyPersistence`.

    Anything else is treated as a dotted path like
    ``mypackage.backends:RedisPersistence``; the object it names is called
    with no arguments and must return an :class:`IPropertyPersistence`.

    Raises:
        ConfigurationError: If the backend cannot be imported, built, or does
            not implement the persistence protocol.
    """
    backend_spec = config.backend.strip()

    if backend_spec == "file":
        backend = FilePropertyPersistence(config.file_path)
        log.info("Using file persistence at %s", backend.path)
        return backend

    if backend_spec == "memory":
        log.info("Using in-memory persistence")
        return MemoryPropertyPersistence()

    log.info("Loading external persistence backend: %s", backend_spec)
    try:
        factory = _import_dotted_path(backend_spec)
    except (ImportError, AttributeError, ValueError) as exc:
        msg = f"Unable to create persistence layer {backend_spec!r}, reason: {exc}"
        log.error(msg)
        raise ConfigurationError(msg) from exc

    if not callable(factory):
        raise ConfigurationError(
            f"Persistence backend {backend_spec!r} resolved to {factory!r}, "
            "which is not callable"
        )

    try:
        backend = factory()
    except Exception as exc:
        msg = f"Unable to create persistence layer {backend_spec!r}, reason: {exc!r}"
        log.error(msg, exc_info=True)
        raise ConfigurationError(msg) from exc

    if not isinstance(backend, IPropertyPersistence):
        raise ConfigurationError(
            f"Persistence backend {backend_spec!r} produced {type(backend).__name__}, "
            "which does not implement exists/open_read/open_write"
        )
    return backend


def _import_dotted_path(dotted: str) -> Any:
    """Import ``module.path:ClassName`` or ``module.path.ClassName``."""
    if ":" in dotted:
        module_path, obj_name = dotted.rsplit(":", 1)
    elif "." in dotted:
        module_path, obj_name = dotted.rsplit(".", 1)
    else:
        raise ValueError(f"expected 'file', 'memory' or a dotted path, got {dotted!r}")

    mod = importlib.import_module(module_path)
    return getattr(mod, obj_name)
