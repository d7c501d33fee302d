"""Tests for models.py — record decoding, field selection, to_jsonable."""

import pytest

from trelli_cli.exceptions import DecodeError
from trelli_cli.models import (
    Board,
    Card,
    Checklist,
    ChecklistItem,
    CommentAction,
    TrelloList,
    to_jsonable,
)


class TestBoard:
    def test_decodes_fields(self):
        board = Board.from_value(
            {"id": "b1", "name": "Roadmap", "url": "https://trello.com/b/x", "closed": True}
        )
        assert board == Board(id="b1", name="Roadmap", url="https://trello.com/b/x", closed=True)

    def test_missing_fields_default(self):
        board = Board.from_value({"id": "b1"})
        assert board.name == ""
        assert board.closed is False

    def test_null_field_defaults(self):
        assert Board.from_value({"id": "b1", "name": None}).name == ""

    def test_extra_fields_ignored(self):
        assert Board.from_value({"id": "b1", "prefs": {"x": 1}}).id == "b1"

    def test_wrong_type_raises_decode_error(self):
        with pytest.raises(DecodeError) as exc_info:
            Board.from_value({"id": "b1", "closed": "yes"})
        assert "'closed'" in str(exc_info.value)

    def test_non_object_raises_decode_error(self):
        with pytest.raises(DecodeError):
            Board.from_value(["b1"])

    def test_field_selection(self):
        assert Board.FIELDS == {"fields": "id,name,url,closed"}


class TestTrelloList:
    def test_integer_pos_becomes_float(self):
        lst = TrelloList.from_value({"id": "l1", "name": "Doing", "pos": 16384})
        assert lst.pos == 16384.0
        assert isinstance(lst.pos, float)

    def test_bool_pos_rejected(self):
        with pytest.raises(DecodeError):
            TrelloList.from_value({"id": "l1", "pos": True})

    def test_field_selection(self):
        assert TrelloList.FIELDS == {"fields": "id,name,closed,pos"}


class TestCard:
    def test_maps_camel_case_fields(self):
        card = Card.from_value(
            {
                "id": "c1",
                "name": "Fix login",
                "idList": "l1",
                "shortUrl": "https://trello.com/c/abc",
                "url": "https://trello.com/c/abc/1-fix-login",
                "due": "2026-02-14T18:00:00.000Z",
            }
        )
        assert card.id_list == "l1"
        assert card.short_url == "https://trello.com/c/abc"
        assert card.due == "2026-02-14T18:00:00.000Z"

    def test_link_prefers_short_url(self):
        card = Card(id="c1", short_url="https://s", url="https://long")
        assert card.link == "https://s"

    def test_link_falls_back_to_url(self):
        assert Card(id="c1", short_url=" ", url="https://long").link == "https://long"

    def test_field_selection_names_api_fields(self):
        assert Card.FIELDS["fields"] == "id,name,desc,idList,shortUrl,url,due,closed"

    def test_records_are_immutable(self):
        card = Card(id="c1")
        with pytest.raises(AttributeError):
            card.name = "changed"


class TestCommentAction:
    def test_flattens_data_and_creator(self):
        action = CommentAction.from_value(
            {
                "id": "a1",
                "type": "commentCard",
                "date": "2026-01-02T03:04:05.000Z",
                "data": {"text": "Looks good", "card": {"id": "c1"}},
                "memberCreator": {"username": "sam", "fullName": "Sam Lee"},
            }
        )
        assert action.text == "Looks good"
        assert action.author_username == "sam"
        assert action.author == "Sam Lee"

    def test_author_falls_back_to_username(self):
        assert CommentAction(id="a1", author_username="sam").author == "sam"

    def test_missing_nested_objects(self):
        action = CommentAction.from_value({"id": "a1"})
        assert action.text == ""
        assert action.author == ""

    def test_field_selection(self):
        assert CommentAction.FIELDS["filter"] == "commentCard"
        assert CommentAction.FIELDS["memberCreator_fields"] == "username,fullName"


class TestChecklist:
    def test_decodes_items(self):
        checklist = Checklist.from_value(
            {
                "id": "k1",
                "name": "Release",
                "checkItems": [
                    {"id": "i1", "name": "Tag", "state": "complete", "pos": 1},
                    {"id": "i2", "name": "Notes", "state": "incomplete", "pos": 2},
                ],
            }
        )
        assert [i.id for i in checklist.check_items] == ["i1", "i2"]
        assert checklist.check_items[0] == ChecklistItem(
            id="i1", name="Tag", state="complete", pos=1.0
        )

    def test_missing_items(self):
        assert Checklist.from_value({"id": "k1"}).check_items == ()

    def test_item_not_object(self):
        with pytest.raises(DecodeError):
            Checklist.from_value({"id": "k1", "checkItems": ["i1"]})

    def test_field_selection_includes_items(self):
        assert Checklist.FIELDS == {
            "fields": "id,name",
            "checkItems": "all",
            "checkItem_fields": "name,state,pos",
        }


class TestToJsonable:
    def test_record(self):
        assert to_jsonable(Board(id="b1", name="X")) == {
            "id": "b1",
            "name": "X",
            "url": "",
            "closed": False,
        }

    def test_list_of_records(self):
        assert to_jsonable([TrelloList(id="l1")])[0]["id"] == "l1"

    def test_nested_items_become_lists(self):
        data = to_jsonable(Checklist(id="k1", check_items=(ChecklistItem(id="i1"),)))
        assert data["check_items"][0]["id"] == "i1"

    def test_plain_values_pass_through(self):
        assert to_jsonable("l1") == "l1"
        assert to_jsonable(None) is None
