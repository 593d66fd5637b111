"""
Integration Tests for the Command Line Driver
=============================================

Runs seri.cli.main with real files, stdin and stdout.
"""

import io

import pytest

from seri.cli import EXIT_COMPILE_ERROR, EXIT_IO_ERROR, EXIT_OK, create_parser, main

from tests.data.sample_documents import (
    CONFERENCE_DOCUMENT,
    MINIMAL_DOCUMENT,
    OVERLAPPING_DOCUMENT,
    UNSCHEDULED_DOCUMENT,
)


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "programme.seri"
    path.write_text(CONFERENCE_DOCUMENT, encoding="utf-8")
    return path


class TestCLI:
    """Test the seri command."""

    def test_parser_defaults(self):
        args = create_parser().parse_args([])
        assert args.input == "-"
        assert args.output_format is None
        assert args.strict is None
        assert args.check is False

    def test_compile_to_stdout(self, source_file, capsys):
        assert main([str(source_file)]) == EXIT_OK
        captured = capsys.readouterr()
        assert "\\begin{tikzpicture}" in captured.out
        assert "Monday, June 2" in captured.out

    def test_compile_to_file(self, source_file, tmp_path, capsys):
        output = tmp_path / "programme.html"
        assert main([str(source_file), "-f", "html", "-o", str(output)]) == EXIT_OK
        assert capsys.readouterr().out == ""
        assert "Compilers in practice" in output.read_text(encoding="utf-8")

    def test_read_from_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(MINIMAL_DOCUMENT))
        assert main(["-", "--format", "html"]) == EXIT_OK
        assert "Opening keynote" in capsys.readouterr().out

    def test_standalone(self, source_file, capsys):
        assert main([str(source_file), "-f", "html", "--standalone"]) == EXIT_OK
        assert capsys.readouterr().out.startswith("<!DOCTYPE html>")

    def test_template_file(self, source_file, tmp_path, capsys):
        template = tmp_path / "wrap.tex"
        template.write_text("% wrapper\n{{ CALENDAR }}", encoding="utf-8")
        assert main([str(source_file), "-t", str(template)]) == EXIT_OK
        assert capsys.readouterr().out.startswith("% wrapper\n\\tikzset{")

    def test_compile_error(self, tmp_path, capsys):
        path = tmp_path / "bad.seri"
        path.write_text(OVERLAPPING_DOCUMENT, encoding="utf-8")
        assert main([str(path)]) == EXIT_COMPILE_ERROR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "semantic error" in captured.err
        assert "'Talk A' and 'Talk B' overlap" in captured.err

    def test_strict_flag(self, tmp_path, capsys):
        path = tmp_path / "loose.seri"
        path.write_text(UNSCHEDULED_DOCUMENT, encoding="utf-8")
        assert main([str(path)]) == EXIT_OK
        capsys.readouterr()
        assert main([str(path), "--strict"]) == EXIT_COMPILE_ERROR
        assert "Floating discussion" in capsys.readouterr().err

    def test_check(self, source_file, capsys):
        assert main([str(source_file), "--check"]) == EXIT_OK
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "ok (2 days, 5 sessions)" in captured.err

    def test_check_reports_errors(self, tmp_path, capsys):
        path = tmp_path / "bad.seri"
        path.write_text('"Talk"\nroom: "B12"\n', encoding="utf-8")
        assert main([str(path), "--check"]) == EXIT_COMPILE_ERROR
        assert "parse error" in capsys.readouterr().err

    def test_missing_input(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.seri")]) == EXIT_IO_ERROR
        assert "cannot read input" in capsys.readouterr().err

    def test_missing_template(self, source_file, tmp_path, capsys):
        assert main([str(source_file), "-t", str(tmp_path / "nope.tex")]) == EXIT_IO_ERROR

    def test_unwritable_output(self, source_file, tmp_path, capsys):
        target = tmp_path / "no-such-dir" / "out.tex"
        assert main([str(source_file), "-o", str(target)]) == EXIT_IO_ERROR
        assert "cannot write output" in capsys.readouterr().err

    def test_invalid_format_is_rejected_by_argparse(self, source_file):
        with pytest.raises(SystemExit) as exc_info:
            main([str(source_file), "-f", "pdf"])
        assert exc_info.value.code == 2

    def test_logging_is_configured_by_the_driver(self, source_file, monkeypatch):
        calls = []
        monkeypatch.setattr("seri.cli.setup_logging", lambda **kwargs: calls.append(kwargs))
        assert main(["--check", str(source_file)]) == EXIT_OK
        assert calls == [{"driver_loggers": ()}]
