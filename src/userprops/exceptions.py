"""Exception hierarchy for userprops."""


class UserPropsError(Exception):
    """Base exception for all userprops errors."""


class ConfigurationError(UserPropsError):
    """Raised when the persistence backend cannot be resolved or built."""


class PropertyLoadError(UserPropsError):
    """Raised when persisted properties exist but cannot be read or decoded."""


class UnknownPropertyTypeError(PropertyLoadError):
    """A persisted record carries a ``type`` tag this version does not know."""

    def __init__(self, key: str, type_tag: str) -> None:
        super().__init__(f"Found unexpected data type {type_tag!r} for property {key!r}")
        self.key = key
        self.type_tag = type_tag


class PropertyTypeError(UserPropsError, TypeError):
    """A property was used as a type other than the one it was created with."""
