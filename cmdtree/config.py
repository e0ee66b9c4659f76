"""Typed access to a settings section."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import logging

    from .validation import ConfigItems

__all__ = ["BOOL_FALSE_STRINGS", "BOOL_STRINGS", "BOOL_TRUE_STRINGS", "Configuration", "coerce_to_bool"]

ConfigValueType = float | bool | str | list | dict

# Strings accepted where a boolean is expected
BOOL_TRUE_STRINGS = frozenset({"true", "yes", "on", "1", "enabled"})
BOOL_FALSE_STRINGS = frozenset({"false", "no", "off", "0", "disabled"})
BOOL_STRINGS = BOOL_TRUE_STRINGS | BOOL_FALSE_STRINGS


def coerce_to_bool(value: ConfigValueType | None, default: bool = False) -> bool:
    """Read a loosely typed boolean.

    None gives `default`, blank strings and the BOOL_FALSE_STRINGS give
    False, any other string gives True. Other values use `bool()`.
    """
    if value is None:
        return default
    if isinstance(value, str):
        text = value.strip().lower()
        return bool(text) and text not in BOOL_FALSE_STRINGS
    return bool(value)


class Configuration(dict):
    """A settings section falling back to the schema defaults."""

    def __init__(
        self,
        *args: Any,  # noqa: ANN401
        logger: logging.Logger,
        schema: ConfigItems | None = None,
        **kwargs: Any,  # noqa: ANN401
    ):
        """Wrap a section.

        Args:
            *args: Passed to dict
            logger: Logger instance for warnings
            schema: Fields providing the defaults
            **kwargs: Passed to dict
        """
        super().__init__(*args, **kwargs)
        self.log = logger
        self._defaults: dict[str, ConfigValueType] = {}
        if schema:
            self._defaults = {item.name: item.default for item in schema if item.default is not None}

    def get(self, name: str, default: ConfigValueType | None = None) -> ConfigValueType | None:  # type: ignore[override]
        """Return the value of `name`, else its schema default, else `default`."""
        if name in self:
            return self[name]
        return self._defaults.get(name, default)

    def get_bool(self, name: str, default: bool = False) -> bool:
        """Return `name` as a boolean."""
        return coerce_to_bool(self.get(name), default)

    def get_str(self, name: str, default: str = "") -> str:
        """Return `name` as a string."""
        value = self.get(name)
        return default if value is None else str(value)

    def get_list(self, name: str) -> list[str]:
        """Return `name` as a list of strings; a single string becomes a one-item list."""
        value = self.get(name)
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if not isinstance(value, list):
            self.log.warning("Invalid list value for %s: %s", name, value)
            return []
        return [str(item) for item in value]
