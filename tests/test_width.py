"""Tests for column width resolution."""

from __future__ import annotations

import pytest

from boxtable.models import Column, Row
from boxtable.width import resolve_column_width, resolve_widths, wrap_width


class TestResolveColumnWidth:
    def test_widest_cell_wins(self) -> None:
        assert resolve_column_width(Column(name="a"), ["x", "xyz", "xy"]) == 3

    def test_title_counts(self) -> None:
        column = Column(name="very_long_header_name")
        assert resolve_column_width(column, ["data"]) == 21

    def test_measured_per_physical_line(self) -> None:
        assert resolve_column_width(Column(name="a"), ["ab\nabcdef"]) == 6

    def test_max_len_caps(self) -> None:
        column = Column(name="limited", max_len=10)
        assert resolve_column_width(column, ["This text is longer than 10 chars"]) == 10

    def test_max_len_does_not_widen(self) -> None:
        column = Column(name="price", max_len=80)
        assert resolve_column_width(column, ["$3.50", "$7.99"]) == 5

    def test_min_len_raises(self) -> None:
        column = Column(name="padded", min_len=15)
        assert resolve_column_width(column, ["Hi"]) == 15

    @pytest.mark.parametrize("text", ["123456789", "1234567890", "12345678901"])
    def test_equal_bounds_force_exact_width(self, text: str) -> None:
        column = Column(name="exact", min_len=10, max_len=10)
        assert resolve_column_width(column, [text]) == 10

    def test_min_len_wins_over_smaller_max_len(self) -> None:
        column = Column(name="override", min_len=10, max_len=8)
        assert resolve_column_width(column, ["This is a very long text"]) == 10

    def test_char_length_table(self) -> None:
        column = Column(name="e")
        assert resolve_column_width(column, ["→→"], {"→": 2}) == 4


class TestResolveWidths:
    def test_sets_length_on_every_column(self) -> None:
        columns = [Column(name="a"), Column(name="b", min_len=4)]
        rows = [Row(data={}, text={"a": "hello", "b": "x"}), Row(data={}, text={"a": "hi"})]
        resolve_widths(columns, rows)
        assert [c.length for c in columns] == [5, 4]

    def test_wrap_width_follows_max_len(self) -> None:
        column = Column(name="override", min_len=10, max_len=8, length=10)
        assert wrap_width(column) == 8
        assert wrap_width(Column(name="a", length=6)) == 6
