"""Recursive tab-completion walk of a finalized command tree.

The walk mirrors the dispatcher: the slot region of a node spans
``tokens[cursor:cursor + len(slots)]`` and the child name sits right after
it. Any mismatch yields an empty list, never an exception.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..constants import HELP_LITERAL
from .gate import can_enter
from .slots import consume_slots

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ..models import Sender
    from .node import CommandNode

__all__ = ["complete", "partial_matches"]


def partial_matches(token: str, candidates: Iterable[str]) -> list[str]:
    """Keep the candidates starting with `token`, ignoring case.

    Args:
        token: The partially typed token
        candidates: Possible values

    Returns:
        Sorted, de-duplicated matches
    """
    lowered = token.lower()
    return sorted({candidate for candidate in candidates if candidate.lower().startswith(lowered)})


def complete(  # noqa: PLR0913
    node: CommandNode,
    sender: Sender,
    label: str,
    previous_nodes: tuple[CommandNode, ...],
    previous_extra_args: tuple[str, ...],
    tokens: Sequence[str],
    cursor: int,
) -> list[str]:
    """Return the candidates for the last token of `tokens`.

    Args:
        node: The node owning `tokens[cursor]`
        sender: The command sender
        label: The label typed by the sender
        previous_nodes: Node that consumed each token before `cursor`
        previous_extra_args: Extra argument values consumed by the ancestors
        tokens: The whole token array, the last one being completed
        cursor: Index of the first token belonging to `node`

    Returns:
        Sorted, de-duplicated candidates
    """
    if not can_enter(sender, node):
        return []

    slot_count = len(node.slots)
    after_slots = cursor + slot_count

    if len(tokens) > after_slots:
        extra_args = consume_slots(node.slots, previous_extra_args, tokens, cursor)
        if extra_args is None:
            node.log.debug("TAB-COMPLETION: an extra argument of %s is wrong", node.name)
            return []
        nodes = previous_nodes + (node,) * slot_count

        child = node.get_child(tokens[after_slots])
        if child is not None:
            node.log.debug("TAB-COMPLETION: found child %s", child.name)
            return complete(child, sender, label, (*nodes, node), extra_args, tokens, after_slots + 1)

        if len(tokens) > after_slots + 1:
            node.log.debug("TAB-COMPLETION: beyond the child names of %s", node.name)
            return partial_matches(tokens[-1], node.tail_completions(sender, label, nodes, extra_args, tokens, after_slots + 1))

        candidates = {child.name for child in node.children.values() if can_enter(sender, child)}
        if slot_count == 0:
            candidates.add(HELP_LITERAL)
        candidates.update(node.extra_completions(sender, label, nodes, extra_args, tokens, after_slots))
        return partial_matches(tokens[after_slots], candidates)

    if len(tokens) > cursor:
        index = len(tokens) - 1
        if consume_slots(node.slots[: index - cursor], previous_extra_args, tokens, cursor) is None:
            node.log.debug("TAB-COMPLETION: an extra argument of %s is wrong", node.name)
            return []
        node.log.debug("TAB-COMPLETION: at extra argument %d of %s", index - cursor, node.name)
        candidates = set(node.slots[index - cursor].options)
        if index == cursor:
            candidates.add(HELP_LITERAL)
        return partial_matches(tokens[index], candidates)

    return []
