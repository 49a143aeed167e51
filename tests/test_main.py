"""Tests for the command-line entry point."""

from unittest.mock import patch

import pytest

from wordsmith import __main__ as cli


def test_parse_filename():
    assert cli.parse_args(["notes.md"]) == (None, "notes.md")


def test_parse_log_file():
    assert cli.parse_args(["--log-file", "w.log", "a.md"]) == ("w.log", "a.md")
    assert cli.parse_args(["--log-file=w.log"]) == ("w.log", None)


@pytest.mark.parametrize("args", [["--log-file"], ["--bogus"], ["a.md", "b.md"]])
def test_parse_errors(args):
    with pytest.raises(ValueError):
        cli.parse_args(args)


def test_version(capsys):
    with patch.object(cli.sys, "argv", ["wordsmith", "--version"]):
        cli.main()
    assert capsys.readouterr().out.startswith("wordsmith ")


def test_bad_arguments_exit(capsys):
    with patch.object(cli.sys, "argv", ["wordsmith", "--bogus"]):
        with pytest.raises(SystemExit) as excinfo:
            cli.main()
    assert excinfo.value.code == 2
    assert "unknown option" in capsys.readouterr().err


def test_main_runs_editor():
    with patch.object(cli.sys, "argv", ["wordsmith", "doc.md"]), \
         patch("wordsmith.editor.Editor") as editor_class:
        cli.main()
    editor = editor_class.return_value
    editor.load_file.assert_called_once_with("doc.md")
    editor.run.assert_called_once_with()
