"""Common types shared by the command tree and its hosts."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .tree.node import CommandNode

__all__ = [
    "CommandConfigError",
    "CompletionHook",
    "ConfigurationError",
    "ExecuteHook",
    "FinalizedNodeError",
    "GateHook",
    "InvalidChildError",
    "MessageSink",
    "MissingFieldError",
    "NodeConfig",
    "NodeState",
    "NotFinalError",
    "Sender",
    "SenderKind",
]


class SenderKind(StrEnum):
    """Classification of the command invoker."""

    INTERACTIVE = "interactive"  # a player typing in the chat
    NON_INTERACTIVE = "non-interactive"  # the server console, scripts


class NodeState(StrEnum):
    """Lifecycle state of a command node."""

    DRAFT = "draft"
    FINAL = "final"


@runtime_checkable
class Sender(Protocol):
    """Whoever typed the command."""

    @property
    def kind(self) -> SenderKind:
        """Return the sender kind."""

    def has_permission(self, permission: str) -> bool:
        """Check whether the sender holds `permission`."""

    def send_message(self, text: str) -> None:
        """Deliver an already formatted text to the sender."""


# send(sender, formatted_text)
MessageSink = Callable[[Sender, str], None]

# execute(sender, label, previous_nodes, extra_args, tokens, cursor) -> handled
ExecuteHook = Callable[[Sender, str, Sequence["CommandNode"], Sequence[str], Sequence[str], int], bool]

# complete(sender, label, previous_nodes, extra_args, tokens, cursor) -> candidates
CompletionHook = Callable[[Sender, str, Sequence["CommandNode"], Sequence[str], Sequence[str], int], "Sequence[str] | None"]

# gate(sender) -> allowed
GateHook = Callable[[Sender], bool]


@dataclass(frozen=True)
class NodeConfig:
    """Inheritable node settings, copied (never shared) from parent to child.

    Attributes:
        prefix: Text put in front of every message of the node (e.g. "[MyPlugin]")
        usage_prefix: Raw text put in front of the usage line (e.g. "Usage:")
        permission: Permission required to enter the node, None when unrestricted
        allowed_kinds: Sender kinds allowed to enter the node
        no_permission_line: Raw text sent when the gate refuses the sender
    """

    prefix: str = ""
    usage_prefix: str = ""
    permission: str | None = None
    allowed_kinds: frozenset[SenderKind] = field(default_factory=lambda: frozenset(SenderKind))
    no_permission_line: str = ""

    def for_child(self, name: str) -> NodeConfig:
        """Return the configuration a child called `name` starts with.

        The permission is extended as ``parent.permission + "." + name``.
        """
        permission = f"{self.permission}.{name}" if self.permission is not None else None
        return replace(self, permission=permission)


class CommandConfigError(Exception):
    """Raised when a command tree is built incorrectly."""


class FinalizedNodeError(CommandConfigError):
    """Raised when a Final node is modified."""


class InvalidChildError(CommandConfigError):
    """Raised when a child can't be attached to a node."""


class MissingFieldError(CommandConfigError):
    """Raised when a node is finalized without a mandatory field."""


class NotFinalError(CommandConfigError):
    """Raised when a Draft tree is used to serve invocations."""


class ConfigurationError(CommandConfigError):
    """Raised when the settings file can't be used."""
