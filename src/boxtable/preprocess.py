"""Column and row selection applied before a table is laid out."""

from __future__ import annotations

import inspect
from collections.abc import Sequence
from dataclasses import replace
from functools import cmp_to_key
from typing import Any, Callable

from boxtable.cell import ensure_row_text, to_text
from boxtable.models import Column, ComputedColumn, Row, RowPredicate, RowSort


def select_columns(
    columns: Sequence[Column],
    enabled: Sequence[str] | None = None,
    disabled: Sequence[str] | None = None,
) -> list[Column]:
    """Return render copies of the visible columns, in table order.

    ``enabled`` keeps only the named columns when given; ``disabled`` always
    hides the named columns, even enabled ones.
    """
    enabled_set = set(enabled) if enabled is not None else None
    disabled_set = set(disabled or ())
    return [
        replace(column, length=None)
        for column in columns
        if (enabled_set is None or column.name in enabled_set)
        and column.name not in disabled_set
    ]


def _takes_two_arguments(func: Callable[..., Any]) -> bool:
    try:
        params = inspect.signature(func).parameters.values()
    except (TypeError, ValueError):
        return False
    positional = [
        p
        for p in params
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
    ]
    return len(positional) == 2


def select_rows(
    rows: Sequence[Row],
    row_filter: RowPredicate | None = None,
    sort: RowSort | None = None,
) -> list[Row]:
    """Return the rows to render, filtered and sorted, as a new list.

    *sort* is either a ``key`` function or a two-argument comparator.
    """
    selected = [row for row in rows if row_filter is None or row_filter(row.data)]
    if sort is None:
        return selected
    if _takes_two_arguments(sort):
        key = cmp_to_key(lambda a, b: sort(a.data, b.data))  # type: ignore[call-arg]
    else:
        key = lambda row: sort(row.data)  # type: ignore[call-arg]  # noqa: E731
    return sorted(selected, key=key)


def computed_text(row: Row, column: ComputedColumn) -> str:
    """Evaluate a computed column once for *row* and memoise its text.

    The function sees a fresh mapping of the row where every cell that
    already has display text shows that text instead of its raw value.
    """
    if column.name not in row.text:
        assert column.function is not None
        value = column.function({**row.data, **row.text})
        if column.transform is not None:
            value = column.transform(value)
        row.text[column.name] = to_text(value)
    return row.text[column.name]


def fill_row_text(columns: Sequence[Column], rows: Sequence[Row]) -> None:
    """Make sure every cell of *columns* has its display text.

    Regular columns are filled first so computed columns see transformed
    values.
    """
    computed = [c for c in columns if isinstance(c, ComputedColumn)]
    regular = [c for c in columns if not isinstance(c, ComputedColumn)]
    for row in rows:
        for column in regular:
            ensure_row_text(row, column)
        for column in computed:
            computed_text(row, column)
