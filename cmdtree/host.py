"""Host side of the engine: routes typed lines to registered roots."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import LOGGER_NAME
from .logging_setup import get_logger
from .models import InvalidChildError, NotFinalError
from .tree.completer import partial_matches
from .tree.gate import can_enter

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable

    from .models import Sender
    from .root import RootCommand

__all__ = ["CommandHost", "split_line"]


def split_line(line: str, for_completion: bool = False) -> tuple[str, list[str]]:
    """Split a typed line into its label and tokens.

    Tokens are separated by whitespace, no quoting is supported. A leading
    "/" is ignored. When completing, a trailing whitespace means the cursor
    is on a new, empty token.

    Args:
        line: The raw line
        for_completion: Append the empty token after a trailing whitespace

    Returns:
        Tuple of (label, tokens); the label is "" for an empty line
    """
    line = line.lstrip().removeprefix("/")
    words = line.split()
    if for_completion and (not line or line[-1].isspace()):
        words.append("")
    if not words:
        return "", []
    return words[0], words[1:]


class CommandHost:
    """Table of registered root commands, looked up by label."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        """Initialize an empty host.

        Args:
            log: Logger instance, a "cmdtree.host" logger when not set
        """
        self._roots: dict[str, RootCommand] = {}
        self.log = log or get_logger(f"{LOGGER_NAME}.host")

    @property
    def labels(self) -> list[str]:
        """Return every registered label, sorted."""
        return sorted(self._roots)

    def get(self, label: str) -> RootCommand | None:
        """Return the root registered under `label`, ignoring case."""
        return self._roots.get(label.lower())

    def register(self, root: RootCommand, aliases: Iterable[str] = ()) -> None:
        """Register `root` under its name and `aliases`.

        Raises:
            NotFinalError: if the root isn't finalized
            InvalidChildError: if a label is already taken
        """
        if not root.is_final:
            msg = f"{root.name!r} must be finalized before registering"
            raise NotFinalError(msg)
        labels = [root.name.lower(), *(alias.lower() for alias in aliases)]
        for label in labels:
            if label in self._roots and self._roots[label] is not root:
                msg = f"label {label!r} is already registered"
                raise InvalidChildError(msg)
        for label in labels:
            self._roots[label] = root
        self.log.info("Registered %s as %s", root.name, ", ".join(labels))

    def dispatch(self, sender: Sender, line: str) -> bool:
        """Execute a typed line.

        Returns:
            False when no command matches the label, True otherwise
        """
        label, tokens = split_line(line)
        root = self.get(label) if label else None
        if root is None:
            self.log.debug("Unknown command: %r", label)
            return False
        return root.on_invoke(sender, label, tokens)

    def complete(self, sender: Sender, line: str) -> list[str]:
        """Return the completion candidates for the end of a typed line."""
        label, tokens = split_line(line, for_completion=True)
        if not tokens:
            return partial_matches(label, [name for name, root in self._roots.items() if can_enter(sender, root)])
        root = self.get(label)
        if root is None:
            return []
        return root.on_complete_request(sender, label, tokens)
