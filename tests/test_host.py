"""Tests for the command host."""

import pytest

from cmdtree import CommandHost, RootCommand, split_line
from cmdtree.models import InvalidChildError, NotFinalError


class TestSplitLine:
    """Tests for split_line."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("/game mode on", ("game", ["mode", "on"])),
            ("game   mode\ton", ("game", ["mode", "on"])),
            ("  /game", ("game", [])),
            ("", ("", [])),
            ("/", ("", [])),
        ],
    )
    def test_execution(self, line, expected):
        """Test lines are split on whitespace."""
        assert split_line(line) == expected

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("/game mo", ("game", ["mo"])),
            ("/game mode ", ("game", ["mode", ""])),
            ("/game ", ("game", [""])),
            ("/ga", ("ga", [])),
            ("", ("", [])),
        ],
    )
    def test_completion(self, line, expected):
        """Test a trailing whitespace opens an empty token."""
        assert split_line(line, for_completion=True) == expected


class TestCommandHost:
    """Tests for CommandHost."""

    @pytest.fixture
    def host(self, game_tree):
        host = CommandHost()
        game_tree.register(host, aliases=["g"])
        return host

    def test_dispatch(self, admin, recorder, host):
        """Test a line reaches the registered root."""
        assert host.dispatch(admin, "/game mode on") is True
        assert recorder.calls[0].extra_args == ("on",)
        assert recorder.calls[0].label == "game"

    def test_dispatch_alias(self, admin, host):
        """Test the typed alias is used in the replies."""
        assert host.dispatch(admin, "/G mode") is True
        assert admin.messages == ["[Game] Usage: /G mode <state>"]

    def test_dispatch_unknown(self, admin, host):
        """Test an unknown label isn't handled."""
        assert host.dispatch(admin, "/other") is False
        assert host.dispatch(admin, "") is False
        assert admin.messages == []

    def test_complete_labels(self, admin, player, host):
        """Test labels are completed for the senders allowed to use them."""
        assert host.complete(admin, "/") == ["g", "game"]
        assert host.complete(admin, "/ga") == ["game"]
        assert host.complete(player, "/ga") == []

    def test_complete_delegates(self, admin, host):
        """Test the rest of the line is completed by the root."""
        assert host.complete(admin, "/game mode ") == ["help", "off", "on"]
        assert host.complete(admin, "/g te") == ["team"]
        assert host.complete(admin, "/other ") == []

    def test_draft_refused(self):
        """Test a Draft root can't be registered."""
        root = RootCommand("draft")
        with pytest.raises(NotFinalError):
            CommandHost().register(root)

    def test_duplicate_label(self, host):
        """Test a label can't be taken twice."""
        other = RootCommand("other")
        other.no_permission_line = "Denied."
        other.finalize()
        with pytest.raises(InvalidChildError):
            host.register(other, aliases=["G"])
        assert host.get("other") is None

    def test_register_again(self, host, game_tree):
        """Test registering the same root again is accepted."""
        host.register(game_tree)
        assert host.labels == ["g", "game"]
