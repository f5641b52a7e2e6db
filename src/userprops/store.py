"""Write-through store of typed, observable user properties.

Every property carries a change listener owned by the store. Any change,
whether made through a ``set_*`` call or by assigning to a
:class:`~userprops.models.Property` obtained from :meth:`UserProperties.property`,
serializes the whole store and writes it through the persistence backend
before control returns to the caller.
"""

from __future__ import annotations

import logging
import threading
from contextlib import AbstractContextManager, nullcontext
from typing import Any, Optional

from userprops import codec
from userprops.exceptions import PropertyLoadError, PropertyTypeError
from userprops.models import Property, PropertyType
from userprops.persistence.protocols import IPropertyPersistence

log = logging.getLogger(__name__)


class UserProperties:
    """Key/value store for ``str``, ``int`` and ``float`` settings.

    Reading an unknown key creates it with the supplied default. Setting a key
    returns its previous value (the type's zero value for a new key) and
    always writes the store, even when the value is unchanged.

    Args:
        persistence: Backend the document is loaded from and written to.
        synchronized: Serialize every operation behind one re-entrant lock.
            Without it, two threads touching the same unset key can race
            between the existence check and the insert.

    Raises:
        PropertyLoadError: If persisted data exists but cannot be loaded.
    """

    def __init__(self, persistence: IPropertyPersistence, *, synchronized: bool = False) -> None:
        self._persistence = persistence
        self._lock: AbstractContextManager[Any] = (
            threading.RLock() if synchronized else nullcontext()
        )
        self._listener = self._on_property_changed
        self._properties: dict[str, Property] = self._load()

    @property
    def persistence(self) -> IPropertyPersistence:
        return self._persistence

    # ── Typed accessors ─────────────────────────────────────────────

    def get_text(self, key: str, default: str = "") -> str:
        return self._get(key, PropertyType.STRING, default)

    def get_int(self, key: str, default: int = 0) -> int:
        return self._get(key, PropertyType.INTEGER, default)

    def get_double(self, key: str, default: float = 0.0) -> float:
        return self._get(key, PropertyType.DOUBLE, default)

    def set_text(self, key: str, value: str) -> str:
        return self._set(key, PropertyType.STRING, value)

    def set_int(self, key: str, value: int) -> int:
        return self._set(key, PropertyType.INTEGER, value)

    def set_double(self, key: str, value: float) -> float:
        return self._set(key, PropertyType.DOUBLE, value)

    # ── Introspection ───────────────────────────────────────────────

    def property_names(self) -> frozenset[str]:
        """Snapshot of the keys currently defined."""
        with self._lock:
            return frozenset(self._properties)

    def property(self, key: str) -> Optional[Property]:
        """Return the store's own :class:`Property` for ``key``, or None.

        Assigning to its ``value`` persists the store like a ``set_*`` call.
        """
        with self._lock:
            return self._properties.get(key)

    def get_type(self, key: str) -> Optional[PropertyType]:
        with self._lock:
            prop = self._properties.get(key)
            return prop.type if prop is not None else None

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._properties

    def __len__(self) -> int:
        with self._lock:
            return len(self._properties)

    # ── Persistence ─────────────────────────────────────────────────

    def clear(self) -> None:
        """Remove every property and persist the empty store.

        Intended for tests and resets; the persisted values are gone for good.
        """
        with self._lock:
            for prop in self._properties.values():
                prop.remove_listener(self._listener)
            self._properties.clear()
            self.save()
        log.warning("Cleared all user properties")

    def save(self) -> bool:
        """Write the whole store through the backend.

        Failures are logged, not raised: the in-memory values stay
        authoritative and the next change retries the full write.

        Returns:
            True if the document was written.
        """
        with self._lock:
            try:
                payload = codec.encode_store(self._properties)
                with self._persistence.open_write() as stream:
                    stream.write(payload)
            except Exception:
                log.error("Error updating user properties", exc_info=True)
                return False
            log.debug("Saved %d user properties (%d bytes)", len(self._properties), len(payload))
            return True

    def _load(self) -> dict[str, Property]:
        if not self._persistence.exists():
            log.info("No persisted user properties found, starting empty")
            return {}

        try:
            with self._persistence.open_read() as stream:
                data = stream.read()
            properties = codec.decode_store(data)
        except PropertyLoadError:
            log.error("Error loading user properties", exc_info=True)
            raise
        except OSError as exc:
            msg = f"Error loading user properties, reason: {exc}"
            log.error(msg, exc_info=True)
            raise PropertyLoadError(msg) from exc

        for prop in properties.values():
            prop.add_listener(self._listener)
        log.info("Loaded %d user properties", len(properties))
        return properties

    def _on_property_changed(self, old_value: Any, new_value: Any) -> None:
        self.save()

    # ── Internal helpers ────────────────────────────────────────────

    def _get(self, key: str, type_: PropertyType, default: Any) -> Any:
        with self._lock:
            prop = self._properties.get(key)
            if prop is None:
                prop = self._insert(key, type_, default)
                self.save()
                return prop.value
            _check_type(prop, type_)
            return prop.value

    def _set(self, key: str, type_: PropertyType, value: Any) -> Any:
        with self._lock:
            prop = self._properties.get(key)
            if prop is None:
                self._insert(key, type_, value)
                self.save()
                return type_.zero
            _check_type(prop, type_)
            old_value = prop.value
            if type_.coerce(value) == old_value:
                # No change event fires, but the write is still due.
                self.save()
            else:
                prop.value = value
            return old_value

    def _insert(self, key: str, type_: PropertyType, value: Any) -> Property:
        prop = Property(key, type_, value)
        prop.add_listener(self._listener)
        self._properties[key] = prop
        return prop


def _check_type(prop: Property, requested: PropertyType) -> None:
    if prop.type is not requested:
        raise PropertyTypeError(
            f"Property {prop.name!r} is a {prop.type.value}, not a {requested.value}"
        )
