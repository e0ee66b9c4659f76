"""Root command: the entry point a host calls for one top-level command."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .constants import DEFAULT_COLOR_CHAR, LOGGER_NAME
from .logging_setup import get_logger
from .senders import color_code_sink
from .tree import completer, dispatcher
from .tree.node import CommandNode

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .config_loader import CommandSettings
    from .host import CommandHost
    from .models import MessageSink, Sender

__all__ = ["RootCommand"]


class RootCommand(CommandNode):
    """Top-level node of a command tree, bound to a host label.

    Invoked without any token, a root having credit lines sends them
    instead of dispatching.
    """

    def __init__(
        self,
        name: str,
        help_text: str = "All commands.",
        *,
        debug: bool = False,
        sink: MessageSink | None = None,
        color_char: str = DEFAULT_COLOR_CHAR,
        **hooks: Any,  # noqa: ANN401
    ) -> None:
        """Create a Draft root.

        Args:
            name: Name the root is registered under
            help_text: Raw description shown in help listings
            debug: Log every dispatch decision of the tree
            sink: Message sink used for every message of the tree
            color_char: Character introducing the color codes of the display texts,
                used by the default sink
            **hooks: executor, extra_completer, tail_completer or gate (see CommandNode)
        """
        super().__init__(name, help_text, **hooks)
        self.log = get_logger(f"{LOGGER_NAME}.{name}", logging.DEBUG if debug else None)
        self.color_char = color_char
        self.sink: MessageSink = sink or color_code_sink(color_char)
        self._credit_lines: list[str] = []
        self._final_credit_lines: tuple[str, ...] | None = None

    @classmethod
    def from_settings(cls, name: str, help_text: str, settings: CommandSettings, **kwargs: Any) -> RootCommand:  # noqa: ANN401
        """Create a Draft root configured from `settings`."""
        kwargs.setdefault("color_char", settings.color_char)
        root = cls(name, help_text, debug=settings.debug, **kwargs)
        settings.apply(root)
        for line in settings.credits:
            root.add_credit_line(line)
        return root

    @property
    def credit_lines(self) -> tuple[str, ...]:
        """Return the credit lines, prefixed once Final."""
        if self._final_credit_lines is not None:
            return self._final_credit_lines
        return tuple(self._credit_lines)

    def add_credit_line(self, line: str) -> None:
        """Add a credit line (version, author...)."""
        self._ensure_draft("credit lines")
        self._credit_lines.append(line)

    def clear_credit_lines(self) -> None:
        """Remove every credit line."""
        self._ensure_draft("credit lines")
        self._credit_lines.clear()

    def finalize(self) -> None:
        """Finalize the root and prefix its credit lines."""
        if self.is_final:
            return
        super().finalize()
        self._final_credit_lines = tuple(self.prefix_message(line) for line in self._credit_lines)

    def register(self, host: CommandHost, aliases: Iterable[str] = ()) -> None:
        """Make `host` route this command (and its aliases) to this root.

        Raises:
            NotFinalError: if the tree isn't finalized yet
        """
        self._require_final("register")
        host.register(self, aliases)
        self.log.debug("Registered command %s", self.name)

    def on_invoke(self, sender: Sender, label: str, tokens: Sequence[str]) -> bool:
        """Handle a typed command.

        Args:
            sender: The command sender
            label: The label (name or alias) typed by the sender
            tokens: The whitespace separated tokens following the label

        Returns:
            True, the command is always handled
        """
        self._require_final("on_invoke")
        tokens = tuple(tokens)
        if not tokens and self.credit_lines:
            for line in self.credit_lines:
                self.sink(sender, line)
            return True
        dispatcher.execute(self, sender, label, (), (), tokens, 0, self.sink)
        return True

    def on_complete_request(self, sender: Sender, label: str, tokens: Sequence[str]) -> list[str]:
        """Return the completion candidates for the last token.

        Args:
            sender: The command sender
            label: The label (name or alias) typed by the sender
            tokens: The tokens following the label, the last one being completed

        Returns:
            Sorted candidates
        """
        self._require_final("on_complete_request")
        return completer.complete(self, sender, label, (), (), tuple(tokens), 0)
