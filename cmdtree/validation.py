"""Schema validation of the ``[cmdtree]`` settings section.

A schema is a `ConfigItems` list of `ConfigField` entries. `ConfigValidator`
checks a section against it and reports every problem at once, suggesting
the closest known key for typos.
"""

import difflib
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .config import BOOL_STRINGS

__all__ = [
    "ConfigField",
    "ConfigItems",
    "ConfigValidator",
    "format_config_error",
]

# How to write a value of each supported type in TOML, shown after a type error
_TYPE_HINTS: dict[type, str] = {
    bool: "Use true/false (without quotes)",
    str: 'Use {name} = "value"',
    list: 'Use {name} = ["item1", "item2"]',
}


def _is_of_type(expected: type, value: Any) -> bool:  # noqa: ANN401
    if expected is bool:
        return isinstance(value, bool) or (isinstance(value, str) and value.lower() in BOOL_STRINGS)
    return isinstance(value, expected)


@dataclass
class ConfigField:  # pylint: disable=too-many-instance-attributes
    """One setting of the schema.

    Attributes:
        name: Key in the section
        field_type: Expected type, or a tuple of accepted types
        required: Whether the key must be present
        default: Value used when the key is missing
        description: What the setting does
        choices: Accepted values, when the setting is an enumeration
        validator: Extra check returning a list of problems
    """

    name: str
    field_type: type | tuple[type, ...] = str
    required: bool = False
    default: Any = None
    description: str = ""
    choices: list | None = None
    validator: Callable[[Any], list[str]] | None = None

    @property
    def types(self) -> tuple[type, ...]:
        """Return the accepted types as a tuple."""
        return self.field_type if isinstance(self.field_type, tuple) else (self.field_type,)

    @property
    def type_name(self) -> str:
        """Return the accepted types as text (e.g. 'list or str')."""
        return " or ".join(typ.__name__ for typ in self.types)

    def accepts_type(self, value: Any) -> bool:  # noqa: ANN401
        """Check `value` against the accepted types."""
        return any(_is_of_type(typ, value) for typ in self.types)


class ConfigItems(list):
    """The fields of a schema, searchable by name."""

    def __init__(self, *args: ConfigField) -> None:
        super().__init__(args)
        self._by_name = {item.name: item for item in args}

    def get(self, name: str) -> ConfigField | None:
        """Return the field called `name`, if any."""
        return self._by_name.get(name)

    @property
    def names(self) -> list[str]:
        """Return every field name."""
        return [item.name for item in self]


def format_config_error(section: str, field: str, message: str, suggestion: str = "") -> str:
    """Build the text of a validation problem.

    Args:
        section: Section name
        field: Faulty key
        message: What is wrong
        suggestion: How to fix it

    Returns:
        The message, e.g. "[cmdtree] Config error for 'prefix': ... -> ..."
    """
    text = f"[{section}] Config error for '{field}': {message}"
    return f"{text} -> {suggestion}" if suggestion else text


class ConfigValidator:
    """Checks one settings section against a schema."""

    def __init__(self, config: dict, section: str, logger: logging.Logger) -> None:
        """Initialize the validator.

        Args:
            config: Section content
            section: Section name, used in the messages
            logger: Logger instance for warnings
        """
        self.config = config
        self.section = section
        self.log = logger

    def _error(self, field: ConfigField, message: str, suggestion: str = "") -> str:
        return format_config_error(self.section, field.name, message, suggestion)

    def _check_field(self, field: ConfigField, value: Any) -> list[str]:  # noqa: ANN401
        if not field.accepts_type(value):
            hint = _TYPE_HINTS.get(field.field_type, "") if not isinstance(field.field_type, tuple) else ""
            return [self._error(field, f"Expected {field.type_name}, got {type(value).__name__}", hint.format(name=field.name))]

        errors = []
        if field.choices is not None and value not in field.choices:
            valid = ", ".join(repr(choice) for choice in field.choices)
            errors.append(self._error(field, f"Invalid value {value!r}", f"Valid options: {valid}"))
        if field.validator is not None:
            errors.extend(self._error(field, problem) for problem in field.validator(value))
        return errors

    def validate(self, schema: ConfigItems) -> list[str]:
        """Check every field of `schema`.

        Args:
            schema: The expected fields

        Returns:
            Problems found, empty when the section is valid
        """
        errors: list[str] = []
        for field in schema:
            value = self.config.get(field.name)
            if value is None:
                if field.required:
                    errors.append(self._error(field, "Missing required field", f"Add {field.name} to [{self.section}]"))
                continue
            errors.extend(self._check_field(field, value))
        return errors

    def warn_unknown_keys(self, schema: ConfigItems) -> list[str]:
        """Warn about keys the schema doesn't know.

        Args:
            schema: The expected fields

        Returns:
            The warnings logged
        """
        known = schema.names
        warnings = []
        for key in self.config:
            if key in known:
                continue
            similar = difflib.get_close_matches(key, known, n=1)
            if similar:
                msg = f"[{self.section}] Unknown option '{key}' (did you mean '{similar[0]}'?)"
            else:
                msg = f"[{self.section}] Unknown option '{key}' - will be ignored"
            self.log.warning(msg)
            warnings.append(msg)
        return warnings
