"""Shared constants for cmdtree."""

import os
from pathlib import Path

__all__ = [
    "CONFIG_FILE",
    "CONFIG_SECTION",
    "DEFAULT_COLOR_CHAR",
    "HELP_LITERAL",
    "LOGGER_NAME",
    "SUBCOMMAND_PARAM",
]

# Reserved token opening the help listing of any node
HELP_LITERAL = "help"

# Parameter line used for nodes having children but no explicit parameter line
SUBCOMMAND_PARAM = "<subCmd>"

LOGGER_NAME = "cmdtree"

DEFAULT_COLOR_CHAR = "&"

CONFIG_SECTION = "cmdtree"

# Config file path - use XDG_CONFIG_HOME with fallback to ~/.config
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "cmdtree" / "config.toml"
