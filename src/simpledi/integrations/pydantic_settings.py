from __future__ import annotations

from typing import Any, TypeVar

from pydantic_settings import BaseSettings

from simpledi.exceptions import SimpleDIInvalidArgumentError
from simpledi.providers import BaseBeanProvider, bean_name_of
from simpledi.registry import BeanRegistry

SettingsT = TypeVar("SettingsT", bound=BaseSettings)


def is_pydantic_settings_subclass(candidate: object) -> bool:
    """Return whether a class is a ``pydantic_settings.BaseSettings`` model.

    Args:
        candidate: Object to test.

    Returns:
        ``True`` when ``candidate`` is a class deriving from ``BaseSettings``.

    """
    if not isinstance(candidate, type):
        return False
    try:
        return issubclass(candidate, BaseSettings)
    except TypeError:
        return False


class SettingsBeanProvider(BaseBeanProvider[SettingsT]):
    """Provide a settings model loaded from the environment.

    Settings have no soft dependencies. Keyword overrides are passed to the
    model constructor and take precedence over environment values.
    """

    def __init__(self, settings_type: type[SettingsT], **overrides: Any) -> None:
        if not is_pydantic_settings_subclass(settings_type):
            msg = f"{settings_type!r} is not a pydantic-settings BaseSettings subclass"
            raise SimpleDIInvalidArgumentError(msg)
        self._settings_type = settings_type
        self._overrides = overrides

    @property
    def settings_type(self) -> type[SettingsT]:
        return self._settings_type

    def provide(self) -> SettingsT:
        return self._settings_type(**self._overrides)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._settings_type.__qualname__})"


def register_settings(
    registry: BeanRegistry,
    settings_type: type[BaseSettings],
    scope_name: str | None = None,
    **overrides: Any,
) -> str:
    """Register a settings model under its class name and return that bean name.

    Settings are read once per scope instance; the default singleton scope
    reads them on first lookup.
    """
    bean_name = bean_name_of(settings_type)
    registry.register(SettingsBeanProvider(settings_type, **overrides), bean_name, scope_name)
    return bean_name


__all__ = [
    "SettingsBeanProvider",
    "is_pydantic_settings_subclass",
    "register_settings",
]
