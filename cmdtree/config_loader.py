"""Settings file loading.

The settings live in the ``[cmdtree]`` section of a TOML file::

    [cmdtree]
    prefix = "&7[&6MyPlugin&7]"
    usage_prefix = "Usage:"
    no_permission = "You do not have permission."
    permission = "myplugin"
    interactive = true
    non_interactive = true
    debug = false
    credits = ["version 1.0, author someone"]
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .config import Configuration
from .constants import CONFIG_FILE, CONFIG_SECTION, DEFAULT_COLOR_CHAR, LOGGER_NAME
from .logging_setup import get_logger
from .models import ConfigurationError, SenderKind
from .validation import ConfigField, ConfigItems, ConfigValidator

if TYPE_CHECKING:
    import logging

    from .tree.node import CommandNode

__all__ = ["SETTINGS_SCHEMA", "CommandSettings", "load_settings", "settings_from_dict"]


def _single_char(value: str) -> list[str]:
    return [] if len(value) == 1 else [f"Expected a single character, got {value!r}"]


SETTINGS_SCHEMA = ConfigItems(
    ConfigField("prefix", str, default="", description="Text put in front of every message"),
    ConfigField("usage_prefix", str, default="Usage:", description="Text put in front of usage lines"),
    ConfigField("no_permission", str, required=True, description="Message sent when the sender is refused"),
    ConfigField("permission", str, description="Permission required by the root command"),
    ConfigField("interactive", bool, default=True, description="Allow interactive senders (players)"),
    ConfigField("non_interactive", bool, default=True, description="Allow non-interactive senders (console)"),
    ConfigField("debug", bool, default=False, description="Log every dispatch decision"),
    ConfigField("credits", (list, str), description="Lines sent when the root is invoked alone"),
    ConfigField("color_char", str, default=DEFAULT_COLOR_CHAR, validator=_single_char, description="Color code character"),
)


@dataclass(frozen=True)
class CommandSettings:  # pylint: disable=too-many-instance-attributes
    """Settings applied to a root command before it is built."""

    no_permission: str
    prefix: str = ""
    usage_prefix: str = "Usage:"
    permission: str | None = None
    interactive: bool = True
    non_interactive: bool = True
    debug: bool = False
    credits: tuple[str, ...] = field(default_factory=tuple)
    color_char: str = DEFAULT_COLOR_CHAR

    @property
    def allowed_kinds(self) -> frozenset[SenderKind]:
        """Return the sender kinds enabled by the settings."""
        kinds = set()
        if self.interactive:
            kinds.add(SenderKind.INTERACTIVE)
        if self.non_interactive:
            kinds.add(SenderKind.NON_INTERACTIVE)
        return frozenset(kinds)

    def apply(self, node: CommandNode) -> None:
        """Copy the settings into a Draft node.

        Raises:
            FinalizedNodeError: if the node is Final
        """
        node.prefix = self.prefix
        node.usage_prefix = self.usage_prefix
        node.no_permission_line = self.no_permission
        node.allowed_kinds = self.allowed_kinds
        node.permission = self.permission


def settings_from_dict(data: dict[str, Any], log: logging.Logger | None = None) -> CommandSettings:
    """Validate a ``[cmdtree]`` section and build the settings.

    Args:
        data: The section content
        log: Logger instance for warnings

    Returns:
        The settings

    Raises:
        ConfigurationError: if the section doesn't match the schema
    """
    log = log or get_logger(f"{LOGGER_NAME}.config")
    validator = ConfigValidator(data, CONFIG_SECTION, log)
    errors = validator.validate(SETTINGS_SCHEMA)
    validator.warn_unknown_keys(SETTINGS_SCHEMA)
    if errors:
        for error in errors:
            log.error(error)
        raise ConfigurationError("\n".join(errors))

    conf = Configuration(data, logger=log, schema=SETTINGS_SCHEMA)
    permission = conf.get("permission")
    return CommandSettings(
        no_permission=conf.get_str("no_permission"),
        prefix=conf.get_str("prefix"),
        usage_prefix=conf.get_str("usage_prefix"),
        permission=str(permission) if permission is not None else None,
        interactive=conf.get_bool("interactive", default=True),
        non_interactive=conf.get_bool("non_interactive", default=True),
        debug=conf.get_bool("debug"),
        credits=tuple(conf.get_list("credits")),
        color_char=conf.get_str("color_char", DEFAULT_COLOR_CHAR),
    )


def load_settings(filename: str | Path | None = None, log: logging.Logger | None = None) -> CommandSettings:
    """Load the settings from a TOML file.

    Args:
        filename: Path to the file, the default CONFIG_FILE when not set
        log: Logger instance for status and error messages

    Returns:
        The settings

    Raises:
        ConfigurationError: if the file is missing, unreadable or invalid
    """
    log = log or get_logger(f"{LOGGER_NAME}.config")
    fname = Path(os.path.expandvars(filename)).expanduser() if filename else CONFIG_FILE

    if not fname.exists():
        log.critical("Config file not found! Please create %s", fname)
        msg = f"config file not found: {fname}"
        raise ConfigurationError(msg)

    log.info("Loading %s", fname)
    with fname.open("rb") as f:
        try:
            config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            log.critical("Problem reading %s: %s", fname, e)
            msg = f"problem reading {fname}: {e}"
            raise ConfigurationError(msg) from e

    section = config.get(CONFIG_SECTION)
    if not isinstance(section, dict):
        msg = f"{fname} must have a [{CONFIG_SECTION}] section"
        raise ConfigurationError(msg)
    return settings_from_dict(section, log)
