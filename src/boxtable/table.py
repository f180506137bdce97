"""Table: the builder callers fill with columns and rows, then render."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Mapping
from typing import IO, Any

from boxtable.colors import colors_disabled_by_env
from boxtable.models import (
    Column,
    ColumnOptions,
    ComputedColumn,
    GroupedColumnsHeader,
    Row,
    RowPredicate,
    RowSort,
    TableOptions,
    column_from_dict,
    computed_column_from_dict,
    grouped_header_from_dict,
    options_from_dict,
)
from boxtable.printer import render_table_lines
from boxtable.styles import TableStyle


def _to_options(
    options: TableOptions | Mapping[str, Any] | Iterable[Any] | None,
    kwargs: Mapping[str, Any],
) -> TableOptions:
    if options is None:
        return options_from_dict(kwargs)
    if kwargs:
        raise TypeError("Pass table options either positionally or as keywords, not both")
    if isinstance(options, TableOptions):
        return options
    if isinstance(options, Mapping):
        return options_from_dict(options)
    # A bare list of column names or column descriptions.
    return TableOptions(columns=[column_from_dict(c) for c in options])


class Table:
    """A table of rows rendered with box-drawing borders.

    Example::

        table = Table(columns=[{"name": "item", "alignment": "left"}, "price"])
        table.add_row({"item": "Coffee", "price": 3.5})
        table.print_table()
    """

    def __init__(
        self,
        options: TableOptions | Mapping[str, Any] | Iterable[Any] | None = None,
        **kwargs: Any,
    ) -> None:
        opts = _to_options(options, kwargs)

        self.title: str | None = opts.title
        self.sort: RowSort | None = opts.sort
        self.filter: RowPredicate | None = opts.filter
        self.enabled_columns: list[str] | None = opts.enabled_columns
        self.disabled_columns: list[str] | None = opts.disabled_columns
        self.color_map: dict[str, str] | None = opts.color_map
        self.char_length: dict[str, int] | None = opts.char_length
        self.default_column_options: ColumnOptions | None = opts.default_column_options
        self.style: TableStyle | None = opts.style
        self.should_disable_colors: bool | None = opts.should_disable_colors
        self.row_separator: bool = opts.row_separator
        self.grouped_columns_headers: list[GroupedColumnsHeader] = list(
            opts.grouped_columns_headers
        )

        self.columns: list[Column] = []
        self.computed_columns: list[ComputedColumn] = []
        self.rows: list[Row] = []

        self.add_columns(opts.columns)
        for computed in opts.computed_columns:
            self.add_computed_column(computed)
        self.add_rows(opts.rows)

    # -- columns ----------------------------------------------------------

    def _has_column(self, name: str) -> bool:
        return any(column.name == name for column in self.all_columns())

    def add_column(self, column: Column | str | Mapping[str, Any]) -> Table:
        resolved = column_from_dict(column)
        if isinstance(resolved, ComputedColumn):
            return self.add_computed_column(resolved)
        if self._has_column(resolved.name):
            raise ValueError(f"Column '{resolved.name}' already exists")
        self.columns.append(resolved.with_defaults(self.default_column_options))
        return self

    def add_columns(self, columns: Iterable[Column | str | Mapping[str, Any]]) -> Table:
        for column in columns:
            self.add_column(column)
        return self

    def add_computed_column(self, column: ComputedColumn | Mapping[str, Any]) -> Table:
        resolved = computed_column_from_dict(column)
        if self._has_column(resolved.name):
            raise ValueError(f"Column '{resolved.name}' already exists")
        self.computed_columns.append(resolved.with_defaults(self.default_column_options))  # type: ignore[arg-type]
        return self

    def all_columns(self) -> list[Column]:
        """Declared columns followed by computed ones."""
        return [*self.columns, *self.computed_columns]

    def add_grouped_columns_header(
        self, group: GroupedColumnsHeader | Mapping[str, Any]
    ) -> Table:
        self.grouped_columns_headers.append(grouped_header_from_dict(group))
        return self

    # -- rows -------------------------------------------------------------

    def add_row(
        self,
        data: Mapping[str, Any],
        color: str | None = None,
        separator: bool | None = None,
    ) -> Table:
        """Append a row; unknown keys become new columns."""
        for key in data:
            if not self._has_column(key):
                self.add_column(Column(name=key))
        self.rows.append(Row(data=dict(data), color=color, separator=separator))
        return self

    def add_rows(
        self,
        rows: Iterable[Mapping[str, Any]],
        color: str | None = None,
        separator: bool | None = None,
    ) -> Table:
        for data in rows:
            self.add_row(data, color=color, separator=separator)
        return self

    # -- rendering --------------------------------------------------------

    def colors_disabled(self) -> bool:
        if self.should_disable_colors is not None:
            return self.should_disable_colors
        return colors_disabled_by_env()

    def render_lines(self) -> list[str]:
        return render_table_lines(self)

    def render(self) -> str:
        return "\n".join(self.render_lines())

    def print_table(self, file: IO[str] | None = None) -> None:
        print(self.render(), file=file or sys.stdout)
