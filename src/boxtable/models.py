"""Core type definitions for boxtable."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Literal, Union

from boxtable.styles import TableStyle, table_style_from_dict

Alignment = Literal["left", "center", "right"]
ALIGNMENTS: tuple[str, ...] = ("left", "center", "right")
DEFAULT_ALIGNMENT: Alignment = "right"

ValueTransformer = Callable[[Any], Any]
RowFunction = Callable[[dict[str, Any]], Any]
RowPredicate = Callable[[dict[str, Any]], bool]
# Either a ``key`` function (one argument) or a comparator (two arguments).
RowSort = Union[Callable[[dict[str, Any]], Any], Callable[[dict[str, Any], dict[str, Any]], int]]


def _check_alignment(alignment: str | None) -> None:
    if alignment is not None and alignment not in ALIGNMENTS:
        raise ValueError(
            f"Invalid alignment {alignment!r}, expected one of {', '.join(ALIGNMENTS)}"
        )


def _check_lengths(min_len: int | None, max_len: int | None) -> None:
    if min_len is not None and min_len < 0:
        raise ValueError(f"min_len must be >= 0, got {min_len}")
    if max_len is not None and max_len < 1:
        raise ValueError(f"max_len must be >= 1, got {max_len}")


@dataclass
class ColumnOptions:
    """Settings shared by every column unless the column sets its own."""

    alignment: Alignment | None = None
    color: str | None = None
    min_len: int | None = None
    max_len: int | None = None
    transform: ValueTransformer | None = None

    def __post_init__(self) -> None:
        _check_alignment(self.alignment)
        _check_lengths(self.min_len, self.max_len)


@dataclass
class Column:
    """A named vertical slot of the table.

    ``length`` is the rendered width; it is computed on every render pass and
    never configured by callers.
    """

    name: str
    title: str | None = None
    alignment: Alignment | None = None
    color: str | None = None
    min_len: int | None = None
    max_len: int | None = None
    transform: ValueTransformer | None = None
    length: int | None = None

    def __post_init__(self) -> None:
        if self.title is None:
            self.title = self.name
        _check_alignment(self.alignment)
        _check_lengths(self.min_len, self.max_len)

    def with_defaults(self, defaults: ColumnOptions | None) -> Column:
        """Return a copy where unset options fall back to *defaults*."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        if defaults is not None:
            for f in fields(defaults):
                if values[f.name] is None:
                    values[f.name] = getattr(defaults, f.name)
        if values["alignment"] is None:
            values["alignment"] = DEFAULT_ALIGNMENT
        return type(self)(**values)


@dataclass
class ComputedColumn(Column):
    """A column whose value is derived from the whole row by ``function``."""

    function: RowFunction | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.function is None:
            raise ValueError(f"Computed column {self.name!r} needs a function")


@dataclass
class Row:
    """One body row.

    ``data`` holds the caller's raw values, ``text`` the memoised display
    text per column name.
    """

    data: dict[str, Any]
    color: str | None = None
    separator: bool | None = None
    text: dict[str, str] = field(default_factory=dict)


@dataclass
class GroupedColumnsHeader:
    """A label spanning a contiguous run of columns."""

    name: str
    child_names: list[str] = field(default_factory=list)
    alignment: Alignment | None = None

    def __post_init__(self) -> None:
        _check_alignment(self.alignment)


@dataclass
class TableOptions:
    """Everything a table can be configured with."""

    title: str | None = None
    columns: list[Column] = field(default_factory=list)
    rows: list[dict[str, Any]] = field(default_factory=list)
    sort: RowSort | None = None
    filter: RowPredicate | None = None
    enabled_columns: list[str] | None = None
    disabled_columns: list[str] | None = None
    computed_columns: list[ComputedColumn] = field(default_factory=list)
    color_map: dict[str, str] | None = None
    char_length: dict[str, int] | None = None
    default_column_options: ColumnOptions | None = None
    grouped_columns_headers: list[GroupedColumnsHeader] = field(default_factory=list)
    style: TableStyle | None = None
    should_disable_colors: bool | None = None
    row_separator: bool = False


# ---------------------------------------------------------------------------
# Dict deserialisation (camelCase or snake_case keys)
# ---------------------------------------------------------------------------

_KEY_ALIASES = {
    "minLen": "min_len",
    "maxLen": "max_len",
    "transformer": "transform",
    "childNames": "child_names",
    "enabledColumns": "enabled_columns",
    "disabledColumns": "disabled_columns",
    "computedColumns": "computed_columns",
    "colorMap": "color_map",
    "charLength": "char_length",
    "defaultColumnOptions": "default_column_options",
    "groupedColumnsHeaders": "grouped_columns_headers",
    "shouldDisableColors": "should_disable_colors",
    "rowSeparator": "row_separator",
}


def _snake_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {_KEY_ALIASES.get(key, key): value for key, value in data.items()}


def column_from_dict(data: Column | str | Mapping[str, Any]) -> Column:
    """Deserialize a column from a name, a Column or a JSON-compatible dict."""
    if isinstance(data, Column):
        return data
    if isinstance(data, str):
        return Column(name=data)
    values = _snake_keys(data)
    if "function" in values:
        return ComputedColumn(**values)
    return Column(**values)


def computed_column_from_dict(data: ComputedColumn | Mapping[str, Any]) -> ComputedColumn:
    if isinstance(data, ComputedColumn):
        return data
    return ComputedColumn(**_snake_keys(data))


def column_options_from_dict(data: ColumnOptions | Mapping[str, Any] | None) -> ColumnOptions | None:
    if data is None or isinstance(data, ColumnOptions):
        return data
    return ColumnOptions(**_snake_keys(data))


def grouped_header_from_dict(
    data: GroupedColumnsHeader | Mapping[str, Any],
) -> GroupedColumnsHeader:
    if isinstance(data, GroupedColumnsHeader):
        return data
    values = _snake_keys(data)
    values["child_names"] = list(values.get("child_names", []))
    return GroupedColumnsHeader(**values)


def options_from_dict(data: Mapping[str, Any]) -> TableOptions:
    """Deserialize table options from a JSON-compatible dict."""
    values = _snake_keys(data)
    known = {f.name for f in fields(TableOptions)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown table option(s): {', '.join(unknown)}")

    values["columns"] = [column_from_dict(c) for c in values.get("columns") or []]
    values["computed_columns"] = [
        computed_column_from_dict(c) for c in values.get("computed_columns") or []
    ]
    values["grouped_columns_headers"] = [
        grouped_header_from_dict(g) for g in values.get("grouped_columns_headers") or []
    ]
    values["rows"] = list(values.get("rows") or [])
    values["default_column_options"] = column_options_from_dict(
        values.get("default_column_options")
    )
    style = values.get("style")
    if style is not None and not isinstance(style, TableStyle):
        values["style"] = table_style_from_dict(style)
    return TableOptions(**values)
