"""cmdtree - declarative, permission-gated command trees with help and tab-completion."""

from .config_loader import CommandSettings, load_settings
from .host import CommandHost, split_line
from .models import (
    CommandConfigError,
    ConfigurationError,
    FinalizedNodeError,
    InvalidChildError,
    MissingFieldError,
    NodeConfig,
    NodeState,
    NotFinalError,
    Sender,
    SenderKind,
)
from .root import RootCommand
from .senders import ConsoleSender, PlayerSender, deliver
from .tree.node import CommandNode
from .tree.slots import ExtraArgumentSlot, consume_slots

__all__ = [
    "CommandConfigError",
    "CommandHost",
    "CommandNode",
    "CommandSettings",
    "ConfigurationError",
    "ConsoleSender",
    "ExtraArgumentSlot",
    "FinalizedNodeError",
    "InvalidChildError",
    "MissingFieldError",
    "NodeConfig",
    "NodeState",
    "NotFinalError",
    "PlayerSender",
    "RootCommand",
    "Sender",
    "SenderKind",
    "consume_slots",
    "deliver",
    "load_settings",
    "split_line",
]
