"""Tests for mitt_formula.output.console module."""

from __future__ import annotations

import pytest

from mitt_formula.output.console import (
    ConsoleProtocol,
    MockConsole,
    OutputRecord,
    RichConsole,
    Style,
)


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.DIM) == "dim"

    def test_all_styles_exist(self) -> None:
        expected = {"DEFAULT", "SUCCESS", "ERROR", "WARNING", "INFO", "DIM", "HEADER"}
        assert {s.name for s in Style} == expected


class TestMockConsole:
    """MockConsole records what services report."""

    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("download https://example.com/mitt.tar.gz", Style.DIM)
        assert console.outputs == [
            OutputRecord("download https://example.com/mitt.tar.gz", Style.DIM)
        ]

    def test_prefixes(self) -> None:
        console = MockConsole()
        console.success("installed")
        console.error("failed")
        console.warning("careful")
        console.info("newer version")
        console.header("mitt")
        assert console.messages == [
            "OK installed",
            "error: failed",
            "warning: careful",
            "info: newer version",
            "mitt",
        ]

    def test_text_property(self) -> None:
        console = MockConsole()
        console.print("line1")
        console.print("line2")
        assert console.text == "line1\nline2"

    def test_has_error_and_success(self) -> None:
        console = MockConsole()
        assert console.has_error() is False
        assert console.has_success() is False
        console.error("oops")
        console.success("yay")
        assert console.has_error() is True
        assert console.has_success() is True

    def test_find(self) -> None:
        console = MockConsole()
        console.print("sha256 verified: abc")
        console.print("install mitt 0.4.0")
        assert [m.message for m in console.find("sha256")] == ["sha256 verified: abc"]


class TestRichConsole:
    def test_output_goes_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.print("version 0.4.0")
        console.success("installed")

        captured = capsys.readouterr()
        assert "version 0.4.0" in captured.out
        assert "OK installed" in captured.out
        assert captured.err == ""

    def test_errors_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.error("checksum mismatch")
        console.warning("cache cleared")

        captured = capsys.readouterr()
        assert "error: checksum mismatch" in captured.err
        assert "warning: cache cleared" in captured.err
        assert captured.out == ""

    def test_markup_in_messages_is_literal(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().error("bad value [red]x[/red]")

        assert "[red]x[/red]" in capsys.readouterr().err


class TestConsoleProtocol:
    def test_mock_satisfies_protocol(self) -> None:
        def use_console(c: ConsoleProtocol) -> None:
            c.print("test")
            c.success("ok")
            c.error("err")
            c.warning("warn")
            c.info("info")
            c.header("hdr")

        mock = MockConsole()
        use_console(mock)
        assert len(mock.outputs) == 6
