"""Table formatters for boards, lists, cards, comments and checklists."""

from trelli_cli.formatters._table import _table, _trunc


def format_boards_table(boards):
    if not boards:
        return "No boards found."
    rows = [(b.id, b.name, b.closed, b.url) for b in boards]
    return _table(["ID", "NAME", "CLOSED", "URL"], rows)


def format_lists_table(lists):
    if not lists:
        return "No lists found."
    rows = [(lst.id, lst.name, lst.closed) for lst in lists]
    return _table(["ID", "NAME", "CLOSED"], rows)


def format_cards_table(cards):
    """Format cards; the link column prefers the short URL."""
    if not cards:
        return "No cards found."
    rows = [(c.id, _trunc(c.name, 60), c.id_list, c.due, c.closed, c.link) for c in cards]
    return _table(["ID", "NAME", "LIST", "DUE", "CLOSED", "URL"], rows)


def format_comments_table(comments):
    if not comments:
        return "No comments found."
    rows = [(a.id, a.date, a.author, a.text) for a in comments]
    return _table(["ID", "DATE", "AUTHOR", "COMMENT"], rows)


def format_checklists_table(checklists):
    """One row per checklist item; a checklist without items gets one bare row."""
    if not checklists:
        return "No checklists found."
    rows = []
    for cl in checklists:
        if not cl.check_items:
            rows.append((cl.id, cl.name, "", "", ""))
            continue
        for item in cl.check_items:
            rows.append((cl.id, cl.name, item.id, item.state, item.name))
    return _table(["CHECKLIST_ID", "CHECKLIST_NAME", "ITEM_ID", "ITEM_STATE", "ITEM_NAME"], rows)


def format_checklist_items_table(items):
    if not items:
        return "No checklist items found."
    rows = [(item.id, item.state, item.name) for item in items]
    return _table(["ITEM_ID", "STATE", "NAME"], rows)
