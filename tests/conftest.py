"generic fixtures"

import pytest

from cmdtree import CommandNode, RootCommand, SenderKind

from .testtools import RecordingSender, Recorder


def pytest_configure():
    "Runs once before all"
    from cmdtree.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def player():
    "An interactive sender without any permission"
    return RecordingSender(SenderKind.INTERACTIVE)


@pytest.fixture
def admin():
    "An interactive sender holding every permission"
    return RecordingSender(SenderKind.INTERACTIVE, permissions={"*"})


@pytest.fixture
def console():
    "A non-interactive sender holding every permission"
    return RecordingSender(SenderKind.NON_INTERACTIVE, permissions={"*"})


@pytest.fixture
def recorder():
    "A leaf behavior recording its calls"
    return Recorder()


@pytest.fixture
def game_tree(recorder):
    """A small tree.

    /game
      list                      (leaf)
      mode <state: on|off>      (leaf, permission game.mode)
      team                      (branch, players only)
        join <color: red|blue>  (leaf)
        leave                   (leaf)
    """
    root = RootCommand("game", "All game commands.")
    root.prefix = "[Game]"
    root.usage_prefix = "Usage:"
    root.no_permission_line = "No permission."
    root.permission = "game"

    lst = CommandNode("list", "List the games.", root, executor=recorder.hook("list"))
    mode = CommandNode("mode", "Switch the mode.", root, executor=recorder.hook("mode"))
    mode.add_extra_argument("state", ["on", "off"])

    team = CommandNode("team", "Team commands.", root)
    team.allowed_kinds = {SenderKind.INTERACTIVE}
    join = CommandNode("join", "Join a team.", team, executor=recorder.hook("join"))
    join.add_extra_argument("color", ["red", "blue"])
    leave = CommandNode("leave", "Leave your team.", team, executor=recorder.hook("leave"))
    team.add_children(join, leave)

    root.add_children(lst, mode, team)
    return root
