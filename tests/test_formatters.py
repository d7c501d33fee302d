"""Tests for formatters — table rendering, sanitizing, output dispatch."""

import json

from trelli_cli.formatters import (
    _sanitize_str,
    _table,
    _trunc,
    format_boards_table,
    format_cards_table,
    format_checklist_items_table,
    format_checklists_table,
    format_comments_table,
    format_lists_table,
    output,
)
from trelli_cli.models import (
    Board,
    Card,
    Checklist,
    ChecklistItem,
    CommentAction,
    TrelloList,
)


class TestHelpers:
    def test_trunc(self):
        assert _trunc("abcdef", 4) == "abc…"
        assert _trunc("abc", 4) == "abc"
        assert _trunc(None, 4) == ""

    def test_sanitize_strips_ansi_and_flattens_newlines(self):
        assert _sanitize_str("\x1b[31mred\x1b[0m\nnext\tcol") == "red next col"

    def test_sanitize_empty(self):
        assert _sanitize_str("") == ""

    def test_table_alignment(self):
        text = _table(["ID", "NAME"], [("a", "x"), ("long-id", "y")])
        lines = text.splitlines()
        assert lines[0] == "ID       NAME"
        assert lines[1] == "a        x"
        assert lines[2] == "long-id  y"

    def test_table_bool_and_none_cells(self):
        text = _table(["A", "B", "C"], [(True, None, False)])
        assert text.splitlines()[1].split() == ["true", "false"]

    def test_table_footer(self):
        assert _table(["A"], [("x",)], footer="Total: 1").endswith("\n\nTotal: 1")


class TestEntityTables:
    def test_empty_messages(self):
        assert format_boards_table([]) == "No boards found."
        assert format_lists_table([]) == "No lists found."
        assert format_cards_table([]) == "No cards found."
        assert format_comments_table([]) == "No comments found."
        assert format_checklists_table([]) == "No checklists found."
        assert format_checklist_items_table([]) == "No checklist items found."

    def test_boards(self):
        text = format_boards_table([Board(id="b1", name="Roadmap", url="https://t/b1")])
        assert text.splitlines()[0].split() == ["ID", "NAME", "CLOSED", "URL"]
        assert "Roadmap" in text
        assert "false" in text

    def test_lists(self):
        text = format_lists_table([TrelloList(id="l1", name="To Do")])
        assert "l1" in text and "To Do" in text

    def test_cards_use_short_link(self):
        card = Card(id="c1", name="Fix", id_list="l1", short_url="https://s", url="https://long")
        text = format_cards_table([card])
        assert "https://s" in text
        assert "https://long" not in text

    def test_cards_truncate_long_names(self):
        text = format_cards_table([Card(id="c1", name="x" * 80)])
        assert "x" * 80 not in text
        assert "…" in text

    def test_comments_flatten_multiline_text(self):
        action = CommentAction(id="a1", text="line one\nline two", author_full_name="Sam")
        text = format_comments_table([action])
        assert "line one line two" in text
        assert "Sam" in text

    def test_checklists_one_row_per_item(self):
        checklist = Checklist(
            id="k1",
            name="Release",
            check_items=(
                ChecklistItem(id="i1", name="Tag", state="complete"),
                ChecklistItem(id="i2", name="Notes", state="incomplete"),
            ),
        )
        lines = format_checklists_table([checklist, Checklist(id="k2", name="Empty")]).splitlines()
        assert len(lines) == 4
        assert "i2" in lines[2]
        assert lines[3].split() == ["k2", "Empty"]

    def test_checklist_items(self):
        text = format_checklist_items_table([ChecklistItem(id="i1", name="Tag", state="complete")])
        assert text.splitlines()[1].split() == ["i1", "complete", "Tag"]


class TestOutput:
    def test_table_list(self, capsys):
        output([TrelloList(id="l1", name="To Do")], format_lists_table, "table")
        assert "To Do" in capsys.readouterr().out

    def test_table_single_record_wrapped(self, capsys):
        output(Card(id="c1", name="Fix"), format_cards_table, "table")
        assert "Fix" in capsys.readouterr().out

    def test_table_none(self, capsys):
        output(None, format_cards_table, "table")
        assert capsys.readouterr().out.strip() == "No cards found."

    def test_json(self, capsys):
        output([Board(id="b1", name="Roadmap")], format_boards_table, "json")
        data = json.loads(capsys.readouterr().out)
        assert data == [{"id": "b1", "name": "Roadmap", "url": "", "closed": False}]

    def test_json_keeps_unicode(self, capsys):
        output(Card(id="c1", name="Café"), format_cards_table, "json")
        assert "Café" in capsys.readouterr().out
