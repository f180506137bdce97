"""Grouped column headers: a band of labels spanning runs of columns.

The band is rendered as an independent one-row table whose columns mirror
the groups, then spliced on top of the main table:

* the band's own top border is redrawn so that only real groups get a
  frame (placeholders stay blank);
* the main table's top border gets junction glyphs wherever a group edge
  meets it.

Junction positions are tracked as a list of fixups, one per section edge:

* ``p``: the table starts with a placeholder
* ``P``: the table ends with a placeholder
* ``g``: a group starts (table start or after a placeholder)
* ``G``: a group ends (before a placeholder or at the table end)
* ``M``: one group ends where the next one starts
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Literal, Union

from boxtable.assembler import RenderContext, assemble
from boxtable.models import Column, GroupedColumnsHeader, Row
from boxtable.width import resolve_widths

logger = logging.getLogger(__name__)

# Each column adds its two padding spaces and one border glyph.
COLUMN_OVERHEAD = 3

FixupState = Literal["p", "P", "g", "G", "M"]


class GroupedColumnsHeaderError(ValueError):
    """Raised when grouped column headers do not fit the table's columns."""


@dataclass(frozen=True)
class Group:
    name: str
    width: int
    child_names: tuple[str, ...] = ()
    alignment: str | None = None
    kind: Literal["GROUP"] = "GROUP"


@dataclass(frozen=True)
class Placeholder:
    width: int
    kind: Literal["PLACEHOLDER"] = "PLACEHOLDER"


GroupOrPlaceholder = Union[Group, Placeholder]


@dataclass(frozen=True)
class Fixup:
    offset: int
    state: FixupState
    glyph: str = ""


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _ensure_no_empty_child_names(groups: Sequence[GroupedColumnsHeader]) -> None:
    for group in groups:
        if not group.child_names:
            raise GroupedColumnsHeaderError(
                f"Grouped columns header '{group.name}' must have at least one child name"
            )


def _ensure_no_duplicate_child_names(groups: Sequence[GroupedColumnsHeader]) -> None:
    for group in groups:
        seen: set[str] = set()
        for child_name in group.child_names:
            if child_name in seen:
                raise GroupedColumnsHeaderError(
                    f"Grouped columns header '{group.name}' has duplicate child name '{child_name}'"
                )
            seen.add(child_name)


def _ensure_no_shared_child_names(groups: Sequence[GroupedColumnsHeader]) -> None:
    seen: set[str] = set()
    for group in groups:
        for child_name in group.child_names:
            if child_name in seen:
                raise GroupedColumnsHeaderError(
                    f"Grouped columns header '{group.name}' has a child name '{child_name}' "
                    "that is already used in another group"
                )
            seen.add(child_name)


def _ensure_child_names_match_columns(
    columns: Sequence[Column], groups: Sequence[GroupedColumnsHeader]
) -> None:
    column_names = {column.name for column in columns}
    for group in groups:
        for child_name in group.child_names:
            if child_name not in column_names:
                raise GroupedColumnsHeaderError(
                    f"Grouped columns header '{group.name}' has a child name '{child_name}' "
                    "that does not match any existing column name"
                )


def _ensure_child_names_are_consecutive(
    columns: Sequence[Column], groups: Sequence[GroupedColumnsHeader]
) -> None:
    positions = {column.name: index for index, column in enumerate(columns)}
    for group in groups:
        indices = sorted(positions[name] for name in group.child_names)
        if indices[-1] - indices[0] != len(indices) - 1:
            raise GroupedColumnsHeaderError(
                f"Grouped columns header '{group.name}' reference columns "
                "that are non-consecutive in the table"
            )


def validate_groups(columns: Sequence[Column], groups: Sequence[GroupedColumnsHeader]) -> None:
    """Raise ``GroupedColumnsHeaderError`` if *groups* cannot be laid over *columns*.

    Checks run in order so the first broken rule is the one reported.
    Distinct, existing children also bound the total spanned width by the
    column count.
    """
    _ensure_no_empty_child_names(groups)
    _ensure_no_duplicate_child_names(groups)
    _ensure_no_shared_child_names(groups)
    _ensure_child_names_match_columns(columns, groups)
    _ensure_child_names_are_consecutive(columns, groups)


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------


def _materialize_placeholders(
    columns: Sequence[Column], groups: Sequence[GroupedColumnsHeader]
) -> list[GroupOrPlaceholder]:
    owner = {name: group for group in groups for name in group.child_names}
    normalized: list[GroupOrPlaceholder] = []

    for column in columns:
        previous = normalized[-1] if normalized else None

        if previous is not None and previous.kind == "GROUP" and column.name in previous.child_names:
            continue

        group = owner.get(column.name)
        if group is None:
            if previous is not None and previous.kind == "PLACEHOLDER":
                normalized[-1] = Placeholder(width=previous.width + 1)
            else:
                normalized.append(Placeholder(width=1))
            continue

        normalized.append(
            Group(
                name=group.name,
                width=len(group.child_names),
                child_names=tuple(group.child_names),
                alignment=group.alignment,
            )
        )

    return normalized


def normalize_groups(
    columns: Sequence[Column], groups: Sequence[GroupedColumnsHeader]
) -> list[GroupOrPlaceholder]:
    """Validate *groups* and return sections covering every column once.

    Uncovered runs of columns become placeholders, adjacent placeholders are
    merged. The caller's descriptors are only read, never modified.
    """
    validate_groups(columns, groups)
    return _materialize_placeholders(columns, groups)


# ---------------------------------------------------------------------------
# Fixups
# ---------------------------------------------------------------------------


def _span_width(columns: Sequence[Column]) -> int:
    return sum(column.length + COLUMN_OVERHEAD for column in columns)  # type: ignore[operator]


def build_fixups(
    columns: Sequence[Column], sections: Sequence[GroupOrPlaceholder]
) -> tuple[list[Fixup], list[int]]:
    """Compute the fixup list and the rendered width of every section.

    Offsets are character positions in the main table's top border.
    """
    fixups: list[Fixup] = []
    spans: list[int] = []
    offset = 0
    column_index = 0
    previous_was_placeholder: bool | None = None

    for section in sections:
        span = _span_width(columns[column_index : column_index + section.width])
        column_index += section.width

        if section.kind == "PLACEHOLDER":
            if previous_was_placeholder is None:
                fixups.append(Fixup(offset, "p"))
            elif previous_was_placeholder is False:
                fixups.append(Fixup(offset, "G"))
            previous_was_placeholder = True
        else:
            if previous_was_placeholder is False:
                fixups.append(Fixup(offset, "M"))
            else:
                fixups.append(Fixup(offset, "g"))
            previous_was_placeholder = False

        offset += span
        spans.append(span)

    if previous_was_placeholder is True:
        fixups.append(Fixup(offset, "P"))
    elif previous_was_placeholder is False:
        fixups.append(Fixup(offset, "G"))

    return fixups, spans


# ---------------------------------------------------------------------------
# Band rendering
# ---------------------------------------------------------------------------


def _render_band(
    sections: Sequence[GroupOrPlaceholder],
    spans: Sequence[int],
    ctx: RenderContext,
) -> list[str]:
    """Render the throwaway one-row table whose columns mirror *sections*."""
    band_columns: list[Column] = []
    filler: dict[str, str] = {}

    for index, (section, span) in enumerate(zip(sections, spans)):
        width = span - COLUMN_OVERHEAD
        name = f"section_{index}"
        if section.kind == "PLACEHOLDER" or width == 0:
            column = Column(name=name, title="", alignment="right")
        else:
            column = Column(
                name=name,
                title=section.name,
                alignment=section.alignment or "center",  # type: ignore[arg-type]
            )
        # Labels longer than the spanned width are truncated, not widened.
        column.max_len = width
        band_columns.append(column)
        filler[name] = " " * width

    band_rows = [Row(data=dict(filler), text=dict(filler))]
    resolve_widths(band_columns, band_rows, ctx.char_length)
    return assemble(band_columns, band_rows, replace(ctx, row_separator=False))


def _draw_band_top(width: int, fixups: Sequence[Fixup], ctx: RenderContext) -> str:
    border = ctx.style.header_top
    buffer = [" "] * width
    run_start = 0

    for fix in fixups:
        if fix.state == "g":
            buffer[fix.offset] = border.left
        elif fix.state in ("M", "G"):
            buffer[run_start : fix.offset] = border.other * (fix.offset - run_start)
            buffer[fix.offset] = border.mid if fix.state == "M" else border.right
        run_start = fix.offset + 1

    return "".join(buffer)


def _blank_placeholder_edges(label: str, fixups: Sequence[Fixup]) -> str:
    if fixups[0].state == "p":
        label = " " + label[1:]
    if fixups[-1].state == "P":
        label = label[:-1] + " "
    return label


def _junction_glyphs(fixups: Sequence[Fixup], ctx: RenderContext) -> list[Fixup]:
    """Replace fixup states by the main-border glyph each offset receives."""
    style = ctx.style
    result = [replace(fix, glyph=style.header_bottom.mid) for fix in fixups]

    first, last = result[0], result[-1]
    result[0] = replace(
        first,
        glyph=style.header_top.left if first.state == "p" else style.header_bottom.left,
    )
    result[-1] = replace(
        last,
        glyph=style.header_top.right if last.state == "P" else style.header_bottom.right,
    )
    return result


def _patch_line(line: str, fixups: Sequence[Fixup]) -> str:
    buffer = list(line)
    for fix in fixups:
        buffer[fix.offset] = fix.glyph
    return "".join(buffer)


def is_single_placeholder(sections: Sequence[GroupOrPlaceholder]) -> bool:
    return not sections or (len(sections) == 1 and sections[0].kind == "PLACEHOLDER")


def compose_grouped_headers(
    columns: Sequence[Column],
    sections: Sequence[GroupOrPlaceholder],
    lines: Sequence[str],
    ctx: RenderContext,
) -> list[str]:
    """Splice a band of group labels on top of an assembled table.

    *sections* come from :func:`normalize_groups`, *columns* must carry
    their resolved ``length`` and *lines* must start with the table's top
    border. A table covered by a single placeholder is returned unchanged.
    """
    if is_single_placeholder(sections):
        return list(lines)

    fixups, spans = build_fixups(columns, sections)
    logger.debug(
        "Composing %d grouped header section(s), fixups=%s",
        len(sections),
        [(fix.offset, fix.state) for fix in fixups],
    )

    band = _render_band(sections, spans, ctx)
    top = lines[0]
    band_top = _draw_band_top(len(top), fixups, ctx)
    band_label = _blank_placeholder_edges(band[1], fixups)

    main_top = _patch_line(top, _junction_glyphs(fixups, ctx))
    return [band_top, band_label, main_top, *lines[1:]]
