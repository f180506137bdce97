"""End-to-end tests for the Table builder and the one-call helpers."""

from __future__ import annotations

import io
import logging
from typing import Any

import pytest

from boxtable import (
    Column,
    ColumnOptions,
    Table,
    TableOptions,
    print_simple_table,
    render_simple_table,
    visible_width,
)


def _plain(**kwargs: Any) -> Table:
    return Table(should_disable_colors=True, **kwargs)


class TestRender:
    def test_max_len_wraps_long_value(self) -> None:
        table = _plain(columns=[{"name": "wrapped", "maxLen": 10}])
        table.add_row({"wrapped": "abcdefghijklmnopqrstuvwxyz"})
        assert table.render() == "\n".join(
            [
                "┌────────────┐",
                "│    wrapped │",
                "├────────────┤",
                "│ abcdefghij │",
                "│ klmnopqrst │",
                "│     uvwxyz │",
                "└────────────┘",
            ]
        )

    def test_columns_from_rows(self) -> None:
        table = _plain()
        table.add_rows([{"item": "Coffee", "price": 3.5}, {"item": "Tea", "qty": 2}])
        assert [c.name for c in table.columns] == ["item", "price", "qty"]
        assert table.render_lines()[3] == "│ Coffee │   3.5 │     │"

    def test_empty_table(self) -> None:
        assert _plain(columns=["a"]).render_lines() == ["┌───┐", "│ a │", "├───┤", "└───┘"]

    def test_title_is_centered_above_the_table(self) -> None:
        table = _plain(title="Menu", columns=["item"])
        table.add_row({"item": "Coffee"})
        lines = table.render_lines()
        assert lines[0] == "   Menu   "
        assert visible_width(lines[0]) == visible_width(lines[1])

    def test_wide_title_is_cut_to_table_width(self) -> None:
        table = _plain(title="A much longer title")
        table.add_row({"a": 1})
        lines = table.render_lines()
        assert lines[0] == "A muc"
        assert {visible_width(line) for line in lines} == {5}

    def test_title_above_grouped_headers(self) -> None:
        table = _plain(
            title="T",
            grouped_columns_headers=[{"name": "G", "childNames": ["a"]}],
        )
        table.add_row({"a": "x", "b": "y"})
        lines = table.render_lines()
        assert lines[0].strip() == "T"
        assert lines[1].startswith("┌───┐")
        assert len({visible_width(line) for line in lines}) == 1

    def test_row_separator_option(self) -> None:
        table = _plain(row_separator=True)
        table.add_rows([{"a": 1}, {"a": 2}])
        assert table.render_lines().count("├───┼") == 0
        assert table.render_lines().count("├───┤") == 2

    def test_row_separator_can_be_turned_off_per_row(self) -> None:
        table = _plain(row_separator=True)
        table.add_row({"a": 1}, separator=False)
        table.add_row({"a": 2})
        table.add_row({"a": 3})
        assert table.render_lines().count("├───┤") == 2

    def test_enabled_and_disabled_columns(self) -> None:
        table = _plain(enabled_columns=["a", "b"], disabled_columns=["b"])
        table.add_row({"a": 1, "b": 2, "c": 3})
        assert table.render_lines()[1] == "│ a │"

    def test_filter_and_sort(self) -> None:
        table = _plain(filter=lambda row: row["n"] != 2, sort=lambda row: -row["n"])
        table.add_rows([{"n": 1}, {"n": 2}, {"n": 3}])
        assert table.render_lines()[3:5] == ["│ 3 │", "│ 1 │"]

    def test_char_length_widens_column(self) -> None:
        table = _plain(char_length={"→": 2})
        table.add_row({"a": "→"})
        assert table.render_lines()[0] == "┌────┐"

    def test_custom_style(self) -> None:
        table = _plain(
            style={"headerTop": {"left": "+", "mid": "+", "right": "+", "other": "-"}}
        )
        table.add_row({"a": 1})
        assert table.render_lines()[0] == "+---+"


class TestColumns:
    def test_duplicate_column_raises(self) -> None:
        table = Table(columns=["a"])
        with pytest.raises(ValueError, match="Column 'a' already exists"):
            table.add_column("a")

    def test_default_column_options_are_overridden_per_column(self) -> None:
        table = _plain(
            default_column_options={"alignment": "left", "minLen": 4},
            columns=["a", {"name": "b", "alignment": "right"}],
        )
        table.add_row({"a": 1, "b": 2})
        assert table.render_lines()[3] == "│ 1    │    2 │"

    def test_default_alignment_is_right(self) -> None:
        table = _plain(columns=[Column(name="abc")])
        table.add_row({"abc": 1})
        assert table.render_lines()[3] == "│   1 │"

    def test_computed_column(self) -> None:
        table = _plain(
            computed_columns=[
                {"name": "total", "function": lambda row: f"{row['a']}+{row['b']}"}
            ]
        )
        table.add_row({"a": 1, "b": 2})
        assert table.render_lines()[3] == "│ 1 │ 2 │   1+2 │"

    def test_computed_column_reads_transformed_hidden_columns(self) -> None:
        table = _plain(
            rows=[{"col1": 1, "col2": 10}, {"col1": 2, "col2": 20}],
            columns=[{"name": "col1", "transformer": lambda v: f"{int(v):.2f}"}, "col2"],
            computed_columns=[
                {"name": "sum", "function": lambda row: row["col1"] + row["col2"]}
            ],
            enabled_columns=["col1", "sum"],
        )
        lines = table.render_lines()
        assert lines[1] == "│ col1 │    sum │"
        assert lines[3:5] == ["│ 1.00 │ 1.0010 │", "│ 2.00 │ 2.0020 │"]

    def test_own_min_len_beats_default_max_len(self) -> None:
        table = _plain(
            default_column_options={"maxLen": 8},
            columns=[{"name": "text", "minLen": 10}],
        )
        table.add_row({"text": "This is a very long text"})
        assert table.render_lines()[3:6] == [
            "│   This is  │",
            "│   a very l │",
            "│   ong text │",
        ]

    def test_transform_runs_once_across_renders(self) -> None:
        calls: list[Any] = []

        def counting(value: Any) -> str:
            calls.append(value)
            return f"#{len(calls)} {value}"

        table = _plain(columns=[{"name": "v", "transform": counting}])
        table.add_rows([{"v": "A"}, {"v": "B"}])

        first = table.render()
        second = table.render()

        assert first == second
        assert calls == ["A", "B"]
        assert table.rows[0].data == {"v": "A"}

    def test_options_object(self) -> None:
        options = TableOptions(
            columns=[Column(name="x")],
            default_column_options=ColumnOptions(alignment="center"),
            should_disable_colors=True,
        )
        table = Table(options)
        table.add_row({"x": "ab"})
        assert table.render_lines()[1] == "│ x  │"

    def test_unknown_option_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown table option"):
            Table({"colour": True})

    def test_options_and_keywords_together_raise(self) -> None:
        with pytest.raises(TypeError):
            Table({"title": "a"}, title="b")

    def test_builder_methods_chain(self) -> None:
        table = _plain().add_column("a").add_row({"a": 1}).add_row({"a": 2})
        assert len(table.rows) == 2


class TestColors:
    def test_colors_enabled(self) -> None:
        table = Table(should_disable_colors=False)
        table.add_row({"a": 1}, color="green")
        lines = table.render_lines()
        assert "\x1b[01m" in lines[1]
        assert "\x1b[32m" in lines[3]
        assert len({visible_width(line) for line in lines}) == 1

    def test_default_cell_color_is_white(self) -> None:
        table = Table(should_disable_colors=False)
        table.add_row({"a": 1})
        assert "\x1b[37m" in table.render_lines()[3]

    def test_column_color(self) -> None:
        table = Table(columns=[{"name": "a", "color": "red"}], should_disable_colors=False)
        table.add_row({"a": 1})
        assert "\x1b[31m" in table.render_lines()[3]

    def test_custom_color_map(self) -> None:
        table = Table(color_map={"orange": "\x1b[38;5;214m"}, should_disable_colors=False)
        table.add_row({"a": 1}, color="orange")
        assert "\x1b[38;5;214m" in table.render_lines()[3]

    def test_no_color_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        table = Table()
        table.add_row({"a": 1}, color="red")
        assert "\x1b[" not in table.render()

    def test_explicit_setting_beats_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        table = Table(should_disable_colors=False)
        table.add_row({"a": 1}, color="red")
        assert "\x1b[31m" in table.render()

    def test_unknown_color_raises(self) -> None:
        table = Table(should_disable_colors=False)
        table.add_row({"a": 1}, color="chartreuse")
        with pytest.raises(ValueError, match="Unknown color"):
            table.render()


class TestSimpleHelpers:
    def test_render_simple_table(self) -> None:
        rendered = render_simple_table([{"a": 1}], should_disable_colors=True)
        assert rendered == "┌───┐\n│ a │\n├───┤\n│ 1 │\n└───┘"

    def test_print_simple_table(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_simple_table([{"a": 1}], {"shouldDisableColors": True})
        assert capsys.readouterr().out == "┌───┐\n│ a │\n├───┤\n│ 1 │\n└───┘\n"

    def test_print_table_to_file(self) -> None:
        buffer = io.StringIO()
        table = _plain()
        table.add_row({"a": 1})
        table.print_table(file=buffer)
        assert buffer.getvalue().endswith("└───┘\n")


class TestLogging:
    def test_render_logs_summary(self, caplog: pytest.LogCaptureFixture) -> None:
        table = _plain()
        table.add_rows([{"a": 1, "b": 2}])
        with caplog.at_level(logging.DEBUG, logger="boxtable"):
            table.render()
        assert "2 column(s), 1 row(s), 5 line(s)" in caplog.text
