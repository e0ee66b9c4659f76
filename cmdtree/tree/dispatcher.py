"""Recursive execution walk of a finalized command tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..constants import HELP_LITERAL
from ..senders import deliver
from .gate import can_enter
from .slots import consume_slots

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..models import MessageSink, Sender
    from .node import CommandNode

__all__ = ["execute", "send_help"]


def send_help(node: CommandNode, sender: Sender, label: str, sink: MessageSink = deliver) -> None:
    """Send the help listing of `node`.

    The header lines come first. A node without children lists itself,
    otherwise every child the sender may enter is listed, sorted by name.

    Args:
        node: The node whose help was requested
        sender: The command sender
        label: The label typed by the sender
        sink: Message sink
    """
    for line in node.help_header:
        sink(sender, line)

    if not node.children:
        sink(sender, node.render_help_line(label))
        return

    for _key, child in sorted(node.children.items()):
        if can_enter(sender, child):
            sink(sender, child.render_help_line(label))


def execute(  # noqa: PLR0913
    node: CommandNode,
    sender: Sender,
    label: str,
    previous_nodes: tuple[CommandNode, ...],
    previous_extra_args: tuple[str, ...],
    tokens: Sequence[str],
    cursor: int,
    sink: MessageSink | None = None,
) -> None:
    """Route `tokens[cursor:]` through `node` and its descendants.

    Exactly one terminal outcome happens: the no-permission line, the help
    listing, the usage line, or the leaf behavior of the last matched node.
    User-input mismatches are never raised.

    Args:
        node: The node owning `tokens[cursor]`
        sender: The command sender
        label: The label typed by the sender
        previous_nodes: Node that consumed each token before `cursor`
        previous_extra_args: Extra argument values consumed by the ancestors
        tokens: The whole token array
        cursor: Index of the first token belonging to `node`
        sink: Message sink, `deliver` when not set
    """
    if sink is None:
        sink = deliver

    if not can_enter(sender, node):
        node.log.debug("EXECUTION: sender did not pass the gate of %s", node.name)
        sink(sender, node.no_permission_line)
        return

    if cursor < len(tokens) and tokens[cursor].lower() == HELP_LITERAL:
        node.log.debug("EXECUTION: tokens[%d] is help", cursor)
        send_help(node, sender, label, sink)
        return

    extra_args = consume_slots(node.slots, previous_extra_args, tokens, cursor)
    if extra_args is None:
        node.log.debug("EXECUTION: extra arguments of %s not satisfied", node.name)
        sink(sender, node.render_usage_line(label))
        return

    after_slots = cursor + len(node.slots)
    if len(tokens) > after_slots:
        child = node.get_child(tokens[after_slots])
        if child is not None:
            node.log.debug("EXECUTION: found child %s", child.name)
            nodes = previous_nodes + (node,) * (len(node.slots) + 1)
            execute(child, sender, label, nodes, extra_args, tokens, after_slots + 1, sink)
            return

    node.log.debug("EXECUTION: calling the leaf behavior of %s", node.name)
    if not node.run(sender, label, previous_nodes, extra_args, tokens, after_slots):
        sink(sender, node.render_usage_line(label))
