import io
import logging

import pytest
from md_lint.cli import main, parse_option_assignment
from md_lint.exceptions import LintConfigError


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage: md-lint" in capsys.readouterr().out


def test_list(caplog):
    caplog.set_level(logging.INFO, logger="md_lint.cli")
    assert main(["list"]) == 0
    assert "[RULE] heading-blank-lines [Spacing] - Heading blank lines" in caplog.text
    assert "(empty_line_after_yaml, emptyLineAfterYaml, default: true)" in caplog.text


def test_examples_pass():
    assert main(["examples"]) == 0


def test_apply_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("# H1\n## H2\n"))
    assert main(["apply"]) == 0
    assert capsys.readouterr().out == "# H1\n\n## H2"


def test_apply_with_option_override(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("# H1\n\n\nline"))
    assert main(["apply", "--set", "heading-blank-lines.bottom=false"]) == 0
    assert capsys.readouterr().out == "# H1\nline"


def test_apply_rejects_bad_option(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("# H1"))
    assert main(["apply", "--set", "heading-blank-lines.bottom=maybe"]) == 1
    assert capsys.readouterr().out == ""


def test_apply_rejects_unknown_rule(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("# H1"))
    assert main(["apply", "--rule", "no-such-rule"]) == 1


def test_docs(capsys):
    assert main(["docs"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("# Rules\n")
    assert "## Heading blank lines" in out


def test_parse_option_assignment():
    assert parse_option_assignment("heading-blank-lines.bottom=true") == (
        "heading-blank-lines", "bottom", True
    )
    assert parse_option_assignment("rule.key=text") == ("rule", "key", "text")


@pytest.mark.parametrize("assignment", ["bottom=true", "rule.bottom", ".bottom=1", "rule.=1"])
def test_parse_option_assignment_malformed(assignment):
    with pytest.raises(LintConfigError):
        parse_option_assignment(assignment)


def test_docs_for_one_rule(capsys):
    assert main(["docs", "--rule", "heading-blank-lines"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("## Heading blank lines\n")
    assert "# Rules" not in out


def test_docs_unknown_rule(capsys):
    assert main(["docs", "--rule", "no-such-rule"]) == 1
    assert capsys.readouterr().out == ""
