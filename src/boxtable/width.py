"""Column width resolution."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from boxtable.models import Column, Row
from boxtable.utils import max_line_width


def resolve_column_width(
    column: Column,
    texts: Iterable[str],
    char_length: Mapping[str, int] | None = None,
) -> int:
    """Return the rendered width of *column*.

    The base width is the widest physical line among the title and every
    cell text. ``max_len`` caps it (longer content wraps later) and
    ``min_len`` raises it (shorter content is padded later).
    """
    width = max_line_width(column.title or "", char_length)
    for text in texts:
        width = max(width, max_line_width(text, char_length))

    if column.max_len is not None and width > column.max_len:
        width = column.max_len
    if column.min_len is not None and width < column.min_len:
        width = column.min_len
    return width


def wrap_width(column: Column) -> int:
    """Return the number of cells a fragment of *column* may hold.

    Equal to ``length`` except when ``min_len`` exceeds ``max_len``: text then
    still wraps at ``max_len`` and the fragments are padded up to ``length``.
    """
    assert column.length is not None
    # min_len > max_len happens when a column's own min_len overrides a
    # default max_len; the bounds are not rejected for that reason.
    if column.max_len is not None:
        return min(column.length, column.max_len)
    return column.length


def resolve_widths(
    columns: Sequence[Column],
    rows: Sequence[Row],
    char_length: Mapping[str, int] | None = None,
) -> None:
    """Store the resolved width of every column on its ``length``."""
    for column in columns:
        column.length = resolve_column_width(
            column,
            (row.text.get(column.name, "") for row in rows),
            char_length,
        )
