"""userprops: write-through, observable user properties backed by a JSON document.

Usage::

    from userprops import get_user_properties

    props = get_user_properties()
    props.set_text("theme", "dark")          # persisted immediately
    volume = props.property("audio.volume")  # bindable handle, or None
"""

from __future__ import annotations

from userprops.core.config import AppSettings, ObservabilityConfig, PersistenceConfig
from userprops.exceptions import (
    ConfigurationError,
    PropertyLoadError,
    PropertyTypeError,
    UnknownPropertyTypeError,
    UserPropsError,
)
from userprops.models import Property, PropertyType
from userprops.persistence import (
    FilePropertyPersistence,
    IPropertyPersistence,
    MemoryPropertyPersistence,
    create_persistence,
)
from userprops.registry import (
    create_user_properties,
    get_user_properties,
    reset_user_properties,
    set_user_properties,
)
from userprops.store import UserProperties

__all__ = [
    "AppSettings",
    "PersistenceConfig",
    "ObservabilityConfig",
    "Property",
    "PropertyType",
    "UserProperties",
    "IPropertyPersistence",
    "FilePropertyPersistence",
    "MemoryPropertyPersistence",
    "create_persistence",
    "create_user_properties",
    "get_user_properties",
    "set_user_properties",
    "reset_user_properties",
    "UserPropsError",
    "ConfigurationError",
    "PropertyLoadError",
    "UnknownPropertyTypeError",
    "PropertyTypeError",
]
