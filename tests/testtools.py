"Test doubles"

from dataclasses import dataclass, field

from cmdtree import SenderKind


@dataclass
class RecordingSender:
    "A sender keeping every message it receives"

    kind: SenderKind
    permissions: set[str] = field(default_factory=set)
    messages: list[str] = field(default_factory=list)

    def has_permission(self, permission: str) -> bool:
        return "*" in self.permissions or permission in self.permissions

    def send_message(self, text: str) -> None:
        self.messages.append(text)


@dataclass
class Call:
    "Arguments received by a leaf behavior"

    name: str
    sender: object
    label: str
    previous_nodes: tuple
    extra_args: tuple
    tokens: tuple
    cursor: int


@dataclass
class Recorder:
    "Builds leaf behaviors recording their calls"

    calls: list[Call] = field(default_factory=list)
    result: bool = True

    def hook(self, name):
        def _execute(sender, label, previous_nodes, extra_args, tokens, cursor):
            self.calls.append(Call(name, sender, label, tuple(previous_nodes), tuple(extra_args), tuple(tokens), cursor))
            return self.result

        return _execute

    @property
    def names(self):
        return [call.name for call in self.calls]
