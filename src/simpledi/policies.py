from enum import Enum


class ScopeFallback(str, Enum):
    """Policy for bean lookups that name a scope which is not registered."""

    STRICT = "strict"
    """Raise an error when the requested scope is not registered."""

    DEFAULT_SCOPE = "default_scope"
    """Look the bean up in the registry's default scope instead."""
