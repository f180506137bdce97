"""The render pipeline and the one-call helpers built on it."""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping, Sequence
from typing import IO, TYPE_CHECKING, Any

from boxtable.assembler import RenderContext, assemble
from boxtable.colors import build_color_map
from boxtable.grouped_headers import compose_grouped_headers, normalize_groups
from boxtable.preprocess import fill_row_text, select_columns, select_rows
from boxtable.styles import DEFAULT_TABLE_STYLE
from boxtable.utils import pad_to_width, split_to_width, visible_width
from boxtable.width import resolve_widths

if TYPE_CHECKING:
    from boxtable.table import Table

logger = logging.getLogger(__name__)


def _title_line(title: str, width: int, char_length: Mapping[str, int] | None) -> str:
    """Center *title* over *width* cells, cutting it when it is wider."""
    fitted = split_to_width(title, width, char_length)[0]
    return pad_to_width(fitted, width, "center", char_length)


def render_table_lines(table: Table) -> list[str]:
    """Render *table* into its printable lines.

    Grouped headers are validated before anything is laid out; the caller's
    rows, columns and group descriptors are left untouched apart from the
    memoised display text of each cell.
    """
    columns = select_columns(
        table.all_columns(), table.enabled_columns, table.disabled_columns
    )
    sections = normalize_groups(columns, table.grouped_columns_headers)
    rows = select_rows(table.rows, table.filter, table.sort)

    # Hidden columns still get their text: computed columns may read it.
    fill_row_text(table.all_columns(), rows)
    resolve_widths(columns, rows, table.char_length)

    ctx = RenderContext(
        style=table.style or DEFAULT_TABLE_STYLE,
        color_map=build_color_map(table.color_map),
        disable_colors=table.colors_disabled(),
        char_length=table.char_length,
        row_separator=table.row_separator,
    )
    lines = assemble(columns, rows, ctx)
    lines = compose_grouped_headers(columns, sections, lines, ctx)

    if table.title is not None:
        lines.insert(0, _title_line(table.title, visible_width(lines[0]), table.char_length))

    logger.debug(
        "Rendered table: %d column(s), %d row(s), %d line(s)",
        len(columns),
        len(rows),
        len(lines),
    )
    return lines


def render_simple_table(
    rows: Sequence[Mapping[str, Any]],
    options: Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> str:
    """Render *rows* as a table in one call."""
    from boxtable.table import Table

    table = Table(options, **kwargs)
    table.add_rows(rows)
    return table.render()


def print_simple_table(
    rows: Sequence[Mapping[str, Any]],
    options: Mapping[str, Any] | None = None,
    *,
    file: IO[str] | None = None,
    **kwargs: Any,
) -> None:
    """Print *rows* as a table in one call."""
    print(render_simple_table(rows, options, **kwargs), file=file or sys.stdout)
