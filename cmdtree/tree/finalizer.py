"""Derivation of the display strings of a node at finalization time."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..constants import SUBCOMMAND_PARAM
from ..models import MissingFieldError

if TYPE_CHECKING:
    from .node import CommandNode

__all__ = ["DisplayLines", "command_chain", "derive_display", "finalize"]


@dataclass(frozen=True)
class DisplayLines:
    """Ready-to-send strings of a Final node.

    Attributes:
        chain: Names and slot placeholders from below the root down to the node
        usage_line: `chain` followed by the parameter line
        help_line: `usage_line`, then ": " and the raw description
        no_permission_line: Refusal message, prefixed
        usage_prefix: Usage prefix, prefixed
        help_header: Help header lines, prefixed
    """

    chain: str
    usage_line: str
    help_line: str
    no_permission_line: str
    usage_prefix: str
    help_header: tuple[str, ...]


def _join(*parts: str) -> str:
    return " ".join(part for part in parts if part)


def command_chain(node: CommandNode) -> str:
    """Return the command chain of `node`.

    The root contributes no name (the host label stands for it), every
    other node contributes its name, and each node appends the placeholders
    of its extra argument slots.
    """
    parent = node.parent
    head = _join(command_chain(parent), node.name) if parent is not None else ""
    return _join(head, *(slot.placeholder for slot in node.slots))


def derive_display(node: CommandNode) -> DisplayLines:
    """Compute the display strings of a node about to be finalized.

    Raises:
        MissingFieldError: if the node has no no_permission_line
    """
    config = node.config
    if not config.no_permission_line:
        msg = f"no_permission_line must be set before finalizing {node.name!r}"
        raise MissingFieldError(msg)

    param_line = node.param_line
    if param_line is None:
        param_line = SUBCOMMAND_PARAM if node.children else ""

    chain = command_chain(node)
    usage_line = _join(chain, param_line)
    help_line = f"{usage_line}: {node.help_text}" if usage_line else node.help_text
    return DisplayLines(
        chain=chain,
        usage_line=usage_line,
        help_line=help_line,
        no_permission_line=node.prefix_message(config.no_permission_line),
        usage_prefix=node.prefix_message(config.usage_prefix),
        help_header=tuple(node.prefix_message(line) for line in node.help_header),
    )


def finalize(node: CommandNode) -> None:
    """Finalize `node`; a no-op when it is already Final."""
    node.finalize()
