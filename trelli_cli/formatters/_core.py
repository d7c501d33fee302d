"""Core output dispatchers."""

import json

from trelli_cli.models import to_jsonable


def pretty_print(data):
    print(json.dumps(to_jsonable(data), indent=2, ensure_ascii=False))


def output(data, formatter=None, fmt="table"):
    """Output records in the requested format.

    A single record is passed to *formatter* as a one-element list, so
    each table formatter only has to handle lists.
    """
    if fmt == "table" and formatter:
        rows = data if isinstance(data, list) else ([] if data is None else [data])
        print(formatter(rows))
    else:
        pretty_print(data)
