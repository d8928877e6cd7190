"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (key/value lines plus a table
for ``items``) or machines (--json).
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.console import RenderableType
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from edgy.output.console import render, type_style

if TYPE_CHECKING:
    from edgy.services.result import ServiceResult


def _compact(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"), sort_keys=True)
    return str(value)


def _cell(column: str, value: Any) -> Text:
    text = _compact(value)
    if column == "type" and isinstance(value, str):
        return Text(text, style=type_style(value))
    return Text(text)


def _items_table(items: list[dict[str, Any]]) -> Table:
    columns: list[str] = []
    for item in items:
        for key in item:
            if key not in columns:
                columns.append(key)
    table = Table(show_header=True, header_style="edgy.key")
    for column in columns:
        table.add_column(column, style="edgy.id" if column == "id" else None)
    for item in items:
        table.add_row(*(_cell(column, item.get(column, "")) for column in columns))
    return table


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    no_color: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
        no_color: Strip ANSI styling from human output.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    if not result.ok:
        error_msg = result.error.message if result.error else "Unknown error"
        code = result.error.code if result.error else "ERROR"
        line = f"[edgy.error]ERROR[/]: {result.op} ({code}) - {escape(error_msg)}"
        return render(line, no_color=no_color)

    lines: list[RenderableType] = [f"[edgy.ok]OK[/]: [edgy.op]{result.op}[/]"]
    items = result.data.get("items")
    for key, value in result.data.items():
        if key == "items" and isinstance(items, list):
            continue
        lines.append(f"  [edgy.key]{key}[/]: {escape(_compact(value))}")
    if isinstance(items, list) and items:
        lines.append(_items_table(items))
    return render(*lines, no_color=no_color)
