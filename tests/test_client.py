"""Tests for client.py — TrelliClient request shapes and validation."""

from unittest.mock import MagicMock

import pytest

from trelli_cli.client import TrelliClient, _filter_boards
from trelli_cli.config import Config
from trelli_cli.exceptions import AmbiguousMatchError, ConfigurationError
from trelli_cli.models import (
    Board,
    Card,
    Checklist,
    ChecklistItem,
    CommentAction,
    TrelloList,
)


@pytest.fixture
def transport():
    return MagicMock()


@pytest.fixture
def client(cfg, transport):
    return TrelliClient(cfg, transport=transport)


def _lists():
    return [TrelloList(id="l1", name="To Do", pos=1.0), TrelloList(id="l2", name="Done", pos=2.0)]


class TestConstruction:
    def test_missing_credentials(self):
        with pytest.raises(ConfigurationError):
            TrelliClient(Config(api_key="", token=""))

    def test_builds_transport_from_config(self, cfg):
        client = TrelliClient(cfg)
        assert client.transport.timeout == cfg.timeout_seconds


class TestBoardsAndLists:
    def test_list_boards_sorted(self, client, transport):
        transport.invoke.return_value = [Board(id="b2", name="Zeta"), Board(id="b1", name="Alpha")]
        boards = client.list_boards()
        assert [b.id for b in boards] == ["b1", "b2"]
        transport.invoke.assert_called_once_with(
            "GET",
            "/1/members/me/boards",
            query={"fields": "id,name,url,closed"},
            out=Board,
            many=True,
        )

    def test_list_boards_filter(self, client, transport):
        transport.invoke.return_value = [Board(id="b1", name="Game Dev"), Board(id="b2")]
        assert [b.id for b in client.list_boards(name_filter="dev")] == ["b1"]

    def test_filter_helper_blank(self):
        boards = [Board(id="b1", name="A")]
        assert _filter_boards(boards, "  ") == boards

    def test_list_lists_uses_default_board_and_sorts(self, client, transport):
        transport.invoke.return_value = [
            TrelloList(id="l2", name="Done", pos=200.0),
            TrelloList(id="l1", name="To Do", pos=100.0),
        ]
        lists = client.list_lists()
        assert [lst.id for lst in lists] == ["l1", "l2"]
        assert transport.invoke.call_args.args[1] == "/1/boards/board1/lists"

    def test_list_lists_explicit_board(self, client, transport):
        transport.invoke.return_value = []
        client.list_lists(board="other")
        assert transport.invoke.call_args.args[1] == "/1/boards/other/lists"

    def test_resolve_list_id_by_name(self, client, transport):
        transport.invoke.return_value = _lists()
        assert client.resolve_list_id(list_name="done") == "l2"


class TestCards:
    def test_list_cards_by_id_is_one_call(self, client, transport):
        transport.invoke.return_value = [Card(id="c1")]
        cards = client.list_cards(list_id="l1", limit=5)
        assert [c.id for c in cards] == ["c1"]
        transport.invoke.assert_called_once()
        args, kwargs = transport.invoke.call_args
        assert args == ("GET", "/1/lists/l1/cards")
        assert kwargs["query"]["limit"] == "5"
        assert kwargs["query"]["fields"] == Card.FIELDS["fields"]

    def test_list_cards_by_name_resolves_first(self, client, transport):
        transport.invoke.side_effect = [_lists(), [Card(id="c1")]]
        client.list_cards(list_name="to do")
        assert transport.invoke.call_count == 2
        assert transport.invoke.call_args.args[1] == "/1/lists/l1/cards"

    def test_list_cards_bad_limit(self, client, transport):
        with pytest.raises(ConfigurationError):
            client.list_cards(list_id="l1", limit=0)
        transport.invoke.assert_not_called()

    def test_list_cards_without_target(self, client, transport):
        with pytest.raises(ConfigurationError):
            client.list_cards()
        transport.invoke.assert_not_called()

    def test_get_card(self, client, transport):
        transport.invoke.return_value = Card(id="c1")
        assert client.get_card("c1").id == "c1"
        assert transport.invoke.call_args.args == ("GET", "/1/cards/c1")

    def test_get_card_requires_id(self, client, transport):
        with pytest.raises(ConfigurationError) as exc_info:
            client.get_card("  ")
        assert exc_info.value.parameter == "card"
        transport.invoke.assert_not_called()

    def test_create_card_minimal_form(self, client, transport):
        transport.invoke.return_value = Card(id="c1", name="Fix")
        client.create_card("Fix", list_id="l1", desc="  ", due="")
        transport.invoke.assert_called_once_with(
            "POST", "/1/cards", form={"idList": "l1", "name": "Fix"}, out=Card
        )

    def test_create_card_optional_fields(self, client, transport):
        transport.invoke.return_value = Card(id="c1")
        client.create_card(
            "Fix",
            list_id="l1",
            desc="Details",
            due="2026-02-14T18:00:00Z",
            labels="lab1,lab2",
            members="m1",
        )
        form = transport.invoke.call_args.kwargs["form"]
        assert form == {
            "idList": "l1",
            "name": "Fix",
            "desc": "Details",
            "due": "2026-02-14T18:00:00Z",
            "idLabels": "lab1,lab2",
            "idMembers": "m1",
        }

    def test_create_card_requires_name(self, client, transport):
        with pytest.raises(ConfigurationError) as exc_info:
            client.create_card("", list_id="l1")
        assert exc_info.value.parameter == "name"
        transport.invoke.assert_not_called()

    def test_create_card_ambiguous_list_makes_no_post(self, client, transport):
        transport.invoke.return_value = _lists()
        with pytest.raises(AmbiguousMatchError):
            client.create_card("Fix", list_name="o")
        assert transport.invoke.call_count == 1

    def test_move_card(self, client, transport):
        transport.invoke.side_effect = [_lists(), Card(id="c1", id_list="l2")]
        card = client.move_card("c1", list_name="Done")
        assert card.id_list == "l2"
        args, kwargs = transport.invoke.call_args
        assert args == ("PUT", "/1/cards/c1")
        assert kwargs["form"] == {"idList": "l2"}

    def test_archive_card(self, client, transport):
        transport.invoke.return_value = Card(id="c1", closed=True)
        client.archive_card("c1")
        assert transport.invoke.call_args.kwargs["form"] == {"closed": "true"}

    def test_card_id_is_path_escaped(self, client, transport):
        transport.invoke.return_value = Card(id="x")
        client.archive_card("a/b")
        assert transport.invoke.call_args.args[1] == "/1/cards/a%2Fb"


class TestComments:
    def test_list_comments(self, client, transport):
        transport.invoke.return_value = [CommentAction(id="a1", text="hi")]
        comments = client.list_comments("c1", limit=10)
        assert comments[0].text == "hi"
        args, kwargs = transport.invoke.call_args
        assert args == ("GET", "/1/cards/c1/actions")
        assert kwargs["query"]["filter"] == "commentCard"
        assert kwargs["query"]["limit"] == "10"

    def test_add_comment(self, client, transport):
        transport.invoke.return_value = CommentAction(id="a1")
        client.add_comment("c1", "Shipped")
        args, kwargs = transport.invoke.call_args
        assert args == ("POST", "/1/cards/c1/actions/comments")
        assert kwargs["form"] == {"text": "Shipped"}

    def test_add_comment_requires_text(self, client, transport):
        with pytest.raises(ConfigurationError):
            client.add_comment("c1", " ")
        transport.invoke.assert_not_called()


class TestChecklists:
    def test_list_checklists(self, client, transport):
        transport.invoke.return_value = [Checklist(id="k1")]
        client.list_checklists("c1")
        args, kwargs = transport.invoke.call_args
        assert args == ("GET", "/1/cards/c1/checklists")
        assert kwargs["query"]["checkItems"] == "all"

    def test_create_checklist(self, client, transport):
        transport.invoke.return_value = Checklist(id="k1", name="QA")
        client.create_checklist("c1", "QA")
        assert transport.invoke.call_args.kwargs["form"] == {"name": "QA"}

    def test_add_item_checked(self, client, transport):
        transport.invoke.return_value = ChecklistItem(id="i1")
        client.add_checklist_item("k1", "Write notes", checked=True)
        args, kwargs = transport.invoke.call_args
        assert args == ("POST", "/1/checklists/k1/checkItems")
        assert kwargs["form"] == {"name": "Write notes", "checked": "true"}

    def test_add_item_unchecked_omits_flag(self, client, transport):
        transport.invoke.return_value = ChecklistItem(id="i1")
        client.add_checklist_item("k1", "Write notes")
        assert transport.invoke.call_args.kwargs["form"] == {"name": "Write notes"}

    def test_set_item_state(self, client, transport):
        transport.invoke.return_value = ChecklistItem(id="i1", state="complete")
        client.set_checklist_item("c1", "i1", "Complete")
        args, kwargs = transport.invoke.call_args
        assert args == ("PUT", "/1/cards/c1/checkItem/i1")
        assert kwargs["form"] == {"state": "complete"}

    def test_set_item_invalid_state(self, client, transport):
        with pytest.raises(ConfigurationError) as exc_info:
            client.set_checklist_item("c1", "i1", "done")
        assert exc_info.value.parameter == "state"
        transport.invoke.assert_not_called()
