"""Pluggable persistence backends for the property document."""

from __future__ import annotations

from userprops.persistence.factory import create_persistence
from userprops.persistence.file_backend import FilePropertyPersistence, default_properties_path
from userprops.persistence.memory_backend import MemoryPropertyPersistence
from userprops.persistence.protocols import IPropertyPersistence

__all__ = [
    "IPropertyPersistence",
    "FilePropertyPersistence",
    "MemoryPropertyPersistence",
    "create_persistence",
    "default_properties_path",
]
