"""Extra argument slots and their consumption."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

__all__ = ["ExtraArgumentSlot", "consume_slots"]


@dataclass(frozen=True)
class ExtraArgumentSlot:
    """A positional token that must match one of a fixed set of options.

    Attributes:
        label: Placeholder shown in help and usage lines (rendered as ``<label>``)
        options: Accepted values, compared case-insensitively
    """

    label: str
    options: frozenset[str]

    @classmethod
    def of(cls, label: str, options: Iterable[str]) -> ExtraArgumentSlot:
        """Build a slot from any iterable of options."""
        return cls(label=label, options=frozenset(options))

    @property
    def placeholder(self) -> str:
        """Return the label as shown in a command chain."""
        return f"<{self.label}>"

    def accepts(self, token: str) -> bool:
        """Check if `token` matches one of the options, ignoring case."""
        lowered = token.lower()
        return any(option.lower() == lowered for option in self.options)


def consume_slots(
    slots: Sequence[ExtraArgumentSlot],
    previous_values: Sequence[str],
    tokens: Sequence[str],
    cursor: int,
) -> tuple[str, ...] | None:
    """Fill every slot with the tokens starting at `cursor`.

    The slot region occupies ``tokens[cursor:cursor + len(slots)]``.
    Shared by the dispatcher and the completer.

    Args:
        slots: The slots declared by a node, in order
        previous_values: Values consumed by the ancestors
        tokens: The whole token array
        cursor: Index of the first token belonging to the node

    Returns:
        `previous_values` followed by the consumed tokens, or None when a
        token is missing or doesn't match its slot
    """
    if len(tokens) < cursor + len(slots):
        return None

    consumed = tokens[cursor : cursor + len(slots)]
    for slot, token in zip(slots, consumed, strict=True):
        if not slot.accepts(token):
            return None
    return (*previous_values, *consumed)
