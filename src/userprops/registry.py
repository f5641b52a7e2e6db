"""Process-wide :class:`UserProperties` instance.

The shared store is built on first access from :class:`AppSettings`, which
reads ``USERPROPS_PERSISTENCE_*`` from the environment at that moment. Later
changes to the environment have no effect until :func:`reset_user_properties`
is called.

Usage::

    from userprops import get_user_properties

    props = get_user_properties()
    width = props.get_int("window.width", 800)
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from userprops.core.config import AppSettings
from userprops.persistence.factory import create_persistence
from userprops.store import UserProperties

log = logging.getLogger(__name__)


def create_user_properties(settings: Optional[AppSettings] = None) -> UserProperties:
    """Build a new store from settings (environment defaults when omitted).

    Raises:
        ConfigurationError: If the persistence backend cannot be created.
        PropertyLoadError: If persisted data exists but cannot be loaded.
    """
    settings = settings if settings is not None else AppSettings()
    persistence = create_persistence(settings.persistence)
    return UserProperties(persistence, synchronized=settings.persistence.synchronized)


# ── Module-level singleton ──────────────────────────────────────────

_global_properties: UserProperties | None = None
_global_lock = threading.Lock()


def get_user_properties() -> UserProperties:
    """Return the process-wide store, creating it on first call."""
    global _global_properties
    if _global_properties is None:
        with _global_lock:
            if _global_properties is None:
                _global_properties = create_user_properties()
                log.debug("Initialized process-wide user properties")
    return _global_properties


def set_user_properties(properties: UserProperties) -> None:
    """Install ``properties`` as the process-wide store (tests, embedding apps)."""
    global _global_properties
    with _global_lock:
        _global_properties = properties


def reset_user_properties() -> None:
    """Drop the process-wide store; the next access rebuilds it from settings."""
    global _global_properties
    with _global_lock:
        _global_properties = None
