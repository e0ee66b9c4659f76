"""The command node: one level of a command tree.

A node is created in the Draft state, configured through its setters, then
finalized, either explicitly or as a side effect of attaching children to
it. Once Final, every setter raises `FinalizedNodeError`.
"""

from __future__ import annotations

import weakref
from collections.abc import Iterable, Sequence
from dataclasses import replace
from types import MappingProxyType
from typing import TYPE_CHECKING

from ..constants import HELP_LITERAL, LOGGER_NAME
from ..logging_setup import get_logger
from ..models import (
    CommandConfigError,
    FinalizedNodeError,
    InvalidChildError,
    MissingFieldError,
    NodeConfig,
    NodeState,
    NotFinalError,
    SenderKind,
)
from . import completer, dispatcher
from .finalizer import DisplayLines, derive_display
from .slots import ExtraArgumentSlot

if TYPE_CHECKING:
    import logging
    from collections.abc import Mapping

    from ..models import CompletionHook, ExecuteHook, GateHook, MessageSink, Sender

__all__ = ["CommandNode"]


class CommandNode:  # pylint: disable=too-many-instance-attributes,too-many-public-methods
    """A vertex of the command tree.

    Behavior is supplied either by injecting callables at construction time
    or by overriding `run`, `check_sender`, `extra_completions` and
    `tail_completions` in a subclass.
    """

    def __init__(  # noqa: PLR0913
        self,
        name: str,
        help_text: str,
        parent: CommandNode | None = None,
        *,
        executor: ExecuteHook | None = None,
        extra_completer: CompletionHook | None = None,
        tail_completer: CompletionHook | None = None,
        gate: GateHook | None = None,
    ) -> None:
        """Create a Draft node.

        Args:
            name: Token selecting this node from its parent (case-insensitive)
            help_text: Raw description shown in help listings
            parent: Draft node whose settings are copied into this one
            executor: Leaf behavior, see `run`
            extra_completer: Candidates merged at the child-name boundary
            tail_completer: Candidates for tokens past the child-name boundary
            gate: Custom check run after the kind and permission checks
        """
        if not name or name != name.strip() or len(name.split()) != 1:
            msg = f"command name must be a single token, got {name!r}"
            raise CommandConfigError(msg)
        self._name = name
        self._help_text = help_text
        self._state = NodeState.DRAFT
        self._children: dict[str, CommandNode] = {}
        self._slots: list[ExtraArgumentSlot] = []
        self._help_header: list[str] = []
        self._param_line: str | None = None
        self._display: DisplayLines | None = None

        self._executor = executor
        self._extra_completer = extra_completer
        self._tail_completer = tail_completer
        self._gate = gate

        self._parent: weakref.ref[CommandNode] | None = None
        self.log: logging.Logger
        if parent is None:
            self._config = NodeConfig()
            self.log = get_logger(LOGGER_NAME)
        else:
            if parent.is_final:
                msg = f"can't create {name!r}: parent {parent.name!r} is already final"
                raise FinalizedNodeError(msg)
            self._parent = weakref.ref(parent)
            self._config = parent.config.for_child(name)
            self.log = parent.log

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._name!r} ({self._state})>"

    # Identity & structure

    @property
    def name(self) -> str:
        """Return the node name."""
        return self._name

    @property
    def parent(self) -> CommandNode | None:
        """Return the parent node, if still alive."""
        return self._parent() if self._parent is not None else None

    @property
    def state(self) -> NodeState:
        """Return the lifecycle state."""
        return self._state

    @property
    def is_final(self) -> bool:
        """Tell if the node is Final."""
        return self._state is NodeState.FINAL

    @property
    def config(self) -> NodeConfig:
        """Return the inheritable settings (raw values)."""
        return self._config

    @property
    def children(self) -> Mapping[str, CommandNode]:
        """Return a read-only view of the children, keyed by lower-cased name."""
        return MappingProxyType(self._children)

    @property
    def slots(self) -> tuple[ExtraArgumentSlot, ...]:
        """Return the extra argument slots, in order."""
        return tuple(self._slots)

    def get_child(self, token: str) -> CommandNode | None:
        """Return the child selected by `token`, ignoring case."""
        return self._children.get(token.lower())

    # Settings

    def _ensure_draft(self, what: str) -> None:
        if self.is_final:
            msg = f"{what} cannot be changed after finalization of {self._name!r}"
            raise FinalizedNodeError(msg)

    @property
    def help_text(self) -> str:
        """Return the raw description."""
        return self._help_text

    @help_text.setter
    def help_text(self, value: str) -> None:
        self._ensure_draft("help_text")
        self._help_text = value

    @property
    def prefix(self) -> str:
        """Return the message prefix."""
        return self._config.prefix

    @prefix.setter
    def prefix(self, value: str) -> None:
        self._ensure_draft("prefix")
        self._config = replace(self._config, prefix=value)

    @property
    def usage_prefix(self) -> str:
        """Return the usage prefix, composed with `prefix` once Final."""
        if self._display is not None:
            return self._display.usage_prefix
        return self._config.usage_prefix

    @usage_prefix.setter
    def usage_prefix(self, value: str) -> None:
        self._ensure_draft("usage_prefix")
        self._config = replace(self._config, usage_prefix=value)

    @property
    def permission(self) -> str | None:
        """Return the permission required to enter the node."""
        return self._config.permission

    @permission.setter
    def permission(self, value: str | None) -> None:
        self._ensure_draft("permission")
        self._config = replace(self._config, permission=value)

    @property
    def allowed_kinds(self) -> frozenset[SenderKind]:
        """Return the sender kinds allowed to enter the node."""
        return self._config.allowed_kinds

    @allowed_kinds.setter
    def allowed_kinds(self, value: Iterable[SenderKind]) -> None:
        self._ensure_draft("allowed_kinds")
        try:
            kinds = frozenset(SenderKind(kind) for kind in value)
        except ValueError as e:
            msg = f"invalid sender kind for {self._name!r}: {e}"
            raise CommandConfigError(msg) from e
        self._config = replace(self._config, allowed_kinds=kinds)

    @property
    def no_permission_line(self) -> str:
        """Return the refusal message, composed with `prefix` once Final."""
        if self._display is not None:
            return self._display.no_permission_line
        return self._config.no_permission_line

    @no_permission_line.setter
    def no_permission_line(self, value: str) -> None:
        self._ensure_draft("no_permission_line")
        self._config = replace(self._config, no_permission_line=value)

    @property
    def param_line(self) -> str | None:
        """Return the custom parameter line, if any."""
        return self._param_line

    @param_line.setter
    def param_line(self, value: str | None) -> None:
        self._ensure_draft("param_line")
        self._param_line = value

    @property
    def help_header(self) -> tuple[str, ...]:
        """Return the lines sent before the help listing."""
        if self._display is not None:
            return self._display.help_header
        return tuple(self._help_header)

    def add_help_header_line(self, line: str) -> None:
        """Add a line sent before the help listing of this node."""
        self._ensure_draft("help_header")
        self._help_header.append(line)

    def add_extra_argument(self, label: str, options: Iterable[str]) -> ExtraArgumentSlot:
        """Declare one more extra argument slot.

        Args:
            label: Placeholder shown in help and usage lines
            options: Values accepted for that slot (case-insensitive)

        Returns:
            The new slot
        """
        self._ensure_draft("extra arguments")
        slot = ExtraArgumentSlot.of(label, options)
        if not slot.options:
            msg = f"extra argument <{label}> of {self._name!r} needs at least one option"
            raise CommandConfigError(msg)
        self._slots.append(slot)
        return slot

    def add_children(self, *children: CommandNode) -> None:
        """Attach children, then finalize this node.

        Draft children are finalized first. Nothing is attached when one of
        the children is invalid.

        Raises:
            FinalizedNodeError: if this node is already Final
            InvalidChildError: for a reserved, duplicated or foreign child
            MissingFieldError: if this node or a Draft child lacks its no_permission_line
        """
        self._ensure_draft("children")
        if not self._config.no_permission_line:
            msg = f"no_permission_line must be set before finalizing {self._name!r}"
            raise MissingFieldError(msg)

        staged: dict[str, CommandNode] = {}
        for child in children:
            if not isinstance(child, CommandNode):
                msg = f"{child!r} is not a command node"
                raise InvalidChildError(msg)
            key = child.name.lower()
            if key == HELP_LITERAL:
                msg = f'a child of {self._name!r} can\'t be named "{HELP_LITERAL}"'
                raise InvalidChildError(msg)
            if key in self._children or key in staged:
                msg = f"{self._name!r} already has a child named {child.name!r}"
                raise InvalidChildError(msg)
            owner = child.parent
            if owner is not None and owner is not self:
                msg = f"{child.name!r} belongs to {owner.name!r}, not to {self._name!r}"
                raise InvalidChildError(msg)
            if owner is None and child.is_final:
                msg = f"{child.name!r} was finalized outside of {self._name!r}"
                raise InvalidChildError(msg)
            if not child.is_final and not child.config.no_permission_line:
                msg = f"no_permission_line must be set before finalizing {child.name!r}"
                raise MissingFieldError(msg)
            staged[key] = child

        for key, child in staged.items():
            if child.parent is None:
                child._parent = weakref.ref(self)  # noqa: SLF001
            child.finalize()
            self._children[key] = child
        self.finalize()

    # Finalization & display

    def finalize(self) -> None:
        """Lock the node and derive its display strings. Idempotent.

        Raises:
            MissingFieldError: if no_permission_line was never set
        """
        if self.is_final:
            return
        self._display = derive_display(self)
        self._state = NodeState.FINAL
        self.log.debug("finalized %s", self)

    def _require_final(self, what: str) -> DisplayLines:
        if self._display is None:
            msg = f"{what} of {self._name!r} is only available after finalization"
            raise NotFinalError(msg)
        return self._display

    @property
    def cmd_chain(self) -> str:
        """Return the command chain (names and slot placeholders below the root)."""
        return self._require_final("cmd_chain").chain

    @property
    def usage_line(self) -> str:
        """Return the command chain followed by the parameter line."""
        return self._require_final("usage_line").usage_line

    @property
    def help_line(self) -> str:
        """Return the usage line followed by the description."""
        return self._require_final("help_line").help_line

    def prefix_message(self, text: str) -> str:
        """Put the node prefix in front of `text`."""
        return " ".join(part for part in (self._config.prefix, text) if part)

    def _command_text(self, label: str) -> str:
        return " ".join(part for part in (f"/{label}", self.usage_line) if part)

    def render_help_line(self, label: str) -> str:
        """Return the help line as sent for the host `label`."""
        return self.prefix_message(f"{self._command_text(label)}: {self._help_text}")

    def render_usage_line(self, label: str) -> str:
        """Return the usage line as sent for the host `label`."""
        return " ".join(part for part in (self.usage_prefix, self._command_text(label)) if part)

    # Behavior hooks

    def check_sender(self, sender: Sender) -> bool:
        """Run the custom gate, evaluated after the kind and permission checks."""
        if self._gate is None:
            return True
        return self._gate(sender)

    def run(  # noqa: PLR0913
        self,
        sender: Sender,
        label: str,
        previous_nodes: Sequence[CommandNode],
        extra_args: Sequence[str],
        tokens: Sequence[str],
        cursor: int,
    ) -> bool:
        """Run the leaf behavior.

        Returns:
            False when the input is a bad usage (the usage line is then sent)
        """
        if self._executor is None:
            return False
        return self._executor(sender, label, previous_nodes, extra_args, tokens, cursor)

    def extra_completions(  # noqa: PLR0913
        self,
        sender: Sender,
        label: str,
        previous_nodes: Sequence[CommandNode],
        extra_args: Sequence[str],
        tokens: Sequence[str],
        cursor: int,
    ) -> list[str]:
        """Return candidates offered next to the child names."""
        if self._extra_completer is None:
            return []
        return list(self._extra_completer(sender, label, previous_nodes, extra_args, tokens, cursor) or ())

    def tail_completions(  # noqa: PLR0913
        self,
        sender: Sender,
        label: str,
        previous_nodes: Sequence[CommandNode],
        extra_args: Sequence[str],
        tokens: Sequence[str],
        cursor: int,
    ) -> list[str]:
        """Return candidates for tokens typed past the child-name position."""
        if self._tail_completer is None:
            return []
        return list(self._tail_completer(sender, label, previous_nodes, extra_args, tokens, cursor) or ())

    # Entry points

    def execute(  # noqa: PLR0913
        self,
        sender: Sender,
        label: str,
        previous_nodes: Sequence[CommandNode],
        previous_extra_args: Sequence[str],
        tokens: Sequence[str],
        cursor: int,
        sink: MessageSink | None = None,
    ) -> None:
        """Dispatch `tokens` from `cursor` through this node.

        Raises:
            NotFinalError: if the node is still a Draft
        """
        self._require_final("execute")
        dispatcher.execute(self, sender, label, tuple(previous_nodes), tuple(previous_extra_args), tokens, cursor, sink)

    def complete(  # noqa: PLR0913
        self,
        sender: Sender,
        label: str,
        previous_nodes: Sequence[CommandNode],
        previous_extra_args: Sequence[str],
        tokens: Sequence[str],
        cursor: int,
    ) -> list[str]:
        """Return the sorted completion candidates for the last token.

        Raises:
            NotFinalError: if the node is still a Draft
        """
        self._require_final("complete")
        return completer.complete(self, sender, label, tuple(previous_nodes), tuple(previous_extra_args), tokens, cursor)
