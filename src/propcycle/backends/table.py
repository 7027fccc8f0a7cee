"""
Table renderer for Cyclers.

Lays a Cycler out as one row per record and one column per key.

Supports two formats:
    - TEXT: Fixed-width plain text, for terminals and logs
    - HTML: A <table> element, used for notebook display
"""

import html
from enum import Enum
from typing import List

from propcycle.core import Cycler


class TableFormat(Enum):
    """Output formats for table rendering."""
    TEXT = "text"
    HTML = "html"


def _columns(cc: Cycler) -> List:
    """Keys in a stable order, even when they are not mutually comparable."""
    return sorted(cc.keys, key=repr)


def _generate_text(cc: Cycler) -> str:
    keys = _columns(cc)
    header = [repr(k) for k in keys]
    rows = [[repr(rec[k]) for k in keys] for rec in cc]

    widths = [len(h) for h in header]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

    def _line(cells: List[str]) -> str:
        return " | ".join(cell.ljust(w) for cell, w in zip(cells, widths)).rstrip()

    lines = [_line(header), "-+-".join("-" * w for w in widths)]
    lines.extend(_line(row) for row in rows)
    return "\n".join(lines)


def _generate_html(cc: Cycler) -> str:
    keys = _columns(cc)
    lines = ["<table>"]

    header = "".join(f"<th>{html.escape(repr(k))}</th>" for k in keys)
    lines.append(f"<tr><th></th>{header}</tr>")

    for j, rec in enumerate(cc):
        row = "".join(f"<td>{html.escape(repr(rec[k]))}</td>" for k in keys)
        lines.append(f"<tr><td>{j}</td>{row}</tr>")

    lines.append("</table>")
    return "\n".join(lines)


def generate_table(cc: Cycler, fmt: TableFormat = TableFormat.TEXT) -> str:
    """
    Render a cycler as a table.

    Args:
        cc: Cycler to render
        fmt: Output format (TEXT, HTML)

    Returns:
        String containing the table
    """
    if fmt == TableFormat.HTML:
        return _generate_html(cc)
    return _generate_text(cc)


def save_table_file(cc: Cycler, filename: str, fmt: TableFormat = TableFormat.TEXT) -> None:
    """
    Render a table and save it to file.

    Args:
        cc: Cycler to render
        filename: Output file path
        fmt: Output format
    """
    table = generate_table(cc, fmt=fmt)
    with open(filename, 'w') as f:
        f.write(table)


__all__ = ["TableFormat", "generate_table", "save_table_file"]
