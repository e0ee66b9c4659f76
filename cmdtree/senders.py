"""Reference senders and the default message sink."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TextIO

from .ansi import normalize_color_codes, should_colorize, strip_color_codes, translate_color_codes
from .constants import DEFAULT_COLOR_CHAR
from .models import SenderKind

if TYPE_CHECKING:
    from .models import MessageSink, Sender

__all__ = ["ConsoleSender", "PlayerSender", "color_code_sink", "deliver"]


def deliver(sender: Sender, text: str) -> None:
    """Send `text` to `sender` as is (default message sink)."""
    sender.send_message(text)


def color_code_sink(char: str) -> MessageSink:
    """Return a sink delivering texts written with `char` color codes.

    The codes are rewritten with DEFAULT_COLOR_CHAR, the character the
    senders understand.
    """
    if char == DEFAULT_COLOR_CHAR:
        return deliver

    def _send(sender: Sender, text: str) -> None:
        deliver(sender, normalize_color_codes(text, char, DEFAULT_COLOR_CHAR))

    return _send


@dataclass
class ConsoleSender:
    """The host console: non-interactive, holds every permission.

    Color codes are translated to ANSI when the stream supports colors,
    stripped otherwise.
    """

    stream: TextIO = field(default_factory=lambda: sys.stdout)
    color_char: str = DEFAULT_COLOR_CHAR
    kind: SenderKind = field(default=SenderKind.NON_INTERACTIVE, init=False)

    def has_permission(self, permission: str) -> bool:  # noqa: ARG002
        """Return True: the console is never restricted."""
        return True

    def send_message(self, text: str) -> None:
        """Write `text` on its own line."""
        if should_colorize(self.stream):
            text = translate_color_codes(text, self.color_char)
        else:
            text = strip_color_codes(text, self.color_char)
        print(text, file=self.stream)


@dataclass
class PlayerSender:
    """An interactive sender with an explicit permission set.

    Permissions use the dotted notation; holding ``a.*`` grants ``a`` and
    every permission below it, holding ``*`` grants everything.
    """

    name: str
    permissions: set[str] = field(default_factory=set)
    inbox: list[str] = field(default_factory=list)
    kind: SenderKind = field(default=SenderKind.INTERACTIVE, init=False)

    def has_permission(self, permission: str) -> bool:
        """Check `permission`, honoring wildcards."""
        if permission in self.permissions or "*" in self.permissions:
            return True
        parts = permission.split(".")
        return any(".".join(parts[:i]) + ".*" in self.permissions for i in range(1, len(parts) + 1))

    def send_message(self, text: str) -> None:
        """Queue `text` in the inbox."""
        self.inbox.append(text)
