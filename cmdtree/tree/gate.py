"""Sender gating: kind, permission, then the node's custom check."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import Sender
    from .node import CommandNode

__all__ = ["can_enter"]


def can_enter(sender: Sender, node: CommandNode) -> bool:
    """Tell whether `sender` may enter `node`.

    The custom check (`CommandNode.check_sender`) only runs once the
    structural checks passed.

    Args:
        sender: The command sender
        node: The node to enter

    Returns:
        True if the sender is allowed
    """
    if sender.kind not in node.allowed_kinds:
        return False
    if node.permission is not None and not sender.has_permission(node.permission):
        return False
    return node.check_sender(sender)
