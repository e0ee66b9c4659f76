"""Tests for the execution walk."""

from unittest.mock import Mock

import pytest

from cmdtree import CommandNode, RootCommand, SenderKind
from cmdtree.tree.dispatcher import execute, send_help

from .testtools import Recorder, RecordingSender

NO_PERMISSION = "[Game] No permission."


def simple_root(**kwargs):
    root = RootCommand("plugin", "Plugin commands.", **kwargs)
    root.no_permission_line = "Denied."
    return root


class TestScenarios:
    """End to end dispatch scenarios."""

    def test_child_leaf(self, admin, recorder):
        """Test a child name reaches the leaf behavior of the child."""
        root = simple_root()
        lst = CommandNode("list", "List.", root, executor=recorder.hook("list"))
        root.add_children(lst)

        root.on_invoke(admin, "plugin", ["list"])

        assert recorder.names == ["list"]
        call = recorder.calls[0]
        assert call.previous_nodes == (root,)
        assert call.extra_args == ()
        assert call.cursor == 1
        assert admin.messages == []

    def test_bad_extra_argument(self, admin, recorder):
        """Test a value outside the options sends the usage line."""
        root = simple_root(executor=recorder.hook("root"))
        root.add_extra_argument("state", ["on", "off"])
        root.finalize()

        root.on_invoke(admin, "plugin", ["maybe"])

        assert recorder.calls == []
        assert admin.messages == ["/plugin <state>"]

    def test_good_extra_argument(self, admin, recorder):
        """Test a valid value is passed to the leaf behavior."""
        root = simple_root(executor=recorder.hook("root"))
        root.add_extra_argument("state", ["on", "off"])
        root.finalize()

        root.on_invoke(admin, "plugin", ["on"])

        assert recorder.names == ["root"]
        assert recorder.calls[0].extra_args == ("on",)
        assert recorder.calls[0].cursor == 1
        assert recorder.calls[0].previous_nodes == ()

    def test_no_permission(self, player, recorder, game_tree):
        """Test a refused sender only gets the no-permission line."""
        game_tree.on_invoke(player, "game", [])

        assert player.messages == [NO_PERMISSION]
        assert recorder.calls == []


class TestExecute:
    """Tests for the execution walk on a deeper tree."""

    def test_leaf_with_slot(self, admin, recorder, game_tree):
        """Test a slot of a child is consumed after its name."""
        game_tree.on_invoke(admin, "game", ["mode", "OFF"])

        call = recorder.calls[0]
        assert call.name == "mode"
        assert call.extra_args == ("OFF",)
        assert call.previous_nodes == (game_tree,)
        assert call.tokens == ("mode", "OFF")
        assert call.cursor == 2
        assert call.label == "game"

    def test_nested(self, admin, recorder, game_tree):
        """Test previous nodes collect every traversed level."""
        team = game_tree.get_child("team")
        game_tree.on_invoke(admin, "game", ["Team", "JOIN", "red", "now"])

        call = recorder.calls[0]
        assert call.name == "join"
        assert call.previous_nodes == (game_tree, team)
        assert call.extra_args == ("red",)
        assert call.cursor == 3

    def test_node_repeated_for_its_slots(self, admin, recorder):
        """Test a node appears once per consumed token in previous nodes."""
        root = simple_root()
        root.add_extra_argument("world", ["nether", "end"])
        tp = CommandNode("tp", "Teleport.", root, executor=recorder.hook("tp"))
        root.add_children(tp)

        root.on_invoke(admin, "plugin", ["end", "tp"])

        call = recorder.calls[0]
        assert call.previous_nodes == (root, root)
        assert call.extra_args == ("end",)
        assert call.cursor == 2

    def test_missing_extra_argument(self, admin, recorder, game_tree):
        """Test a missing slot value sends the usage line of the node."""
        game_tree.on_invoke(admin, "game", ["mode"])

        assert admin.messages == ["[Game] Usage: /game mode <state>"]
        assert recorder.calls == []

    def test_unknown_subcommand(self, admin, recorder, game_tree):
        """Test an unknown token falls back to the node's own leaf behavior."""
        game_tree.on_invoke(admin, "game", ["bogus"])

        assert admin.messages == ["[Game] Usage: /game <subCmd>"]
        assert recorder.calls == []

    def test_leaf_reports_bad_usage(self, admin, recorder, game_tree):
        """Test a leaf returning False gets the usage line sent."""
        recorder.result = False
        game_tree.on_invoke(admin, "game", ["list"])

        assert recorder.names == ["list"]
        assert admin.messages == ["[Game] Usage: /game list"]

    def test_usage_uses_typed_label(self, admin, recorder, game_tree):
        """Test the label typed by the sender is used in the usage line."""
        game_tree.on_invoke(admin, "g", ["mode", "maybe"])

        assert admin.messages == ["[Game] Usage: /g mode <state>"]

    def test_kind_refused_on_branch(self, console, recorder, game_tree):
        """Test a refused kind stops the walk at the branch."""
        game_tree.on_invoke(console, "game", ["team", "leave"])

        assert console.messages == [NO_PERMISSION]
        assert recorder.calls == []

    @pytest.mark.parametrize(
        "tokens",
        [["mode"], ["mode", "on"], ["mode", "help"], ["mode", "on", "extra"], ["MODE", "maybe"]],
    )
    def test_refused_whatever_follows(self, recorder, game_tree, tokens):
        """Test a refused sender gets the same answer whatever it types after."""
        sender = RecordingSender(SenderKind.INTERACTIVE, permissions={"game"})
        game_tree.on_invoke(sender, "game", tokens)

        assert sender.messages == [NO_PERMISSION]
        assert recorder.calls == []

    def test_leaf_exception_propagates(self, admin):
        """Test errors raised by a leaf behavior aren't swallowed."""
        root = RootCommand("boom", "Boom.", executor=Mock(side_effect=RuntimeError("boom")))
        root.no_permission_line = "Denied."
        root.finalize()

        with pytest.raises(RuntimeError):
            root.on_invoke(admin, "boom", [])

    def test_custom_sink(self, admin, game_tree):
        """Test every message goes through the given sink."""
        sink = Mock()
        execute(game_tree, admin, "game", (), (), ["mode"], 0, sink)

        sink.assert_called_once_with(admin, "[Game] Usage: /game mode <state>")
        assert admin.messages == []

    def test_root_sink(self, admin):
        """Test the sink of a root is used by on_invoke."""
        sink = Mock()
        root = RootCommand("plugin", "Plugin.", sink=sink)
        root.no_permission_line = "Denied."
        root.finalize()

        root.on_invoke(admin, "plugin", ["x"])

        sink.assert_called_once_with(admin, "/plugin")


class TestHelp:
    """Tests for the help listing."""

    def test_children_sorted(self, admin, recorder, game_tree):
        """Test the help of a branch lists its children by name."""
        game_tree.on_invoke(admin, "game", ["help"])

        assert admin.messages == [
            "[Game] /game list: List the games.",
            "[Game] /game mode <state>: Switch the mode.",
            "[Game] /game team <subCmd>: Team commands.",
        ]
        assert recorder.calls == []

    def test_only_permitted_children(self, recorder, game_tree):
        """Test children the sender can't enter are hidden."""
        sender = RecordingSender(SenderKind.INTERACTIVE, permissions={"game", "game.list"})
        game_tree.on_invoke(sender, "game", ["HELP"])

        assert sender.messages == ["[Game] /game list: List the games."]

    def test_nested_branch(self, admin, game_tree):
        """Test the help of a nested branch."""
        game_tree.on_invoke(admin, "game", ["team", "help", "ignored"])

        assert admin.messages == [
            "[Game] /game team join <color>: Join a team.",
            "[Game] /game team leave: Leave your team.",
        ]

    def test_leaf(self, admin, recorder, game_tree):
        """Test the help of a leaf shows the leaf itself."""
        game_tree.on_invoke(admin, "game", ["list", "help"])

        assert admin.messages == ["[Game] /game list: List the games."]
        assert recorder.calls == []

    def test_help_before_slots(self, admin, recorder, game_tree):
        """Test help is recognized where a slot value is expected."""
        game_tree.on_invoke(admin, "game", ["mode", "help"])

        assert admin.messages == ["[Game] /game mode <state>: Switch the mode."]
        assert recorder.calls == []

    def test_header_first(self, admin):
        """Test header lines come before the listing."""
        recorder = Recorder()
        root = RootCommand("plugin", "Plugin.")
        root.prefix = "[P]"
        root.no_permission_line = "Denied."
        root.add_help_header_line("Commands:")
        root.add_children(CommandNode("a", "A.", root, executor=recorder.hook("a")))

        send_help(root, admin, "plugin")

        assert admin.messages == ["[P] Commands:", "[P] /plugin a: A."]
