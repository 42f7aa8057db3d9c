"""
Tests for the command line entry point.
"""

import io
import json
import sys

import pytest
from syntaxlens.__main__ import main


@pytest.fixture
def stdin_bytes(monkeypatch):
    def _feed(data: bytes):
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data), encoding="utf-8"))
    return _feed


class TestMain:
    def test_file_argument(self, tmp_path, capsys):
        source = tmp_path / "a.swift"
        source.write_text("let x = 1\n", encoding="utf-8")
        assert main([str(source)]) == 0
        nodes = json.loads(capsys.readouterr().out)
        assert nodes[0]["label"] == "SourceFile"
        assert nodes[-1]["tokenInfo"]["kind"] == "endOfFile"

    def test_stdin(self, stdin_bytes, capsys):
        stdin_bytes(b"f(x)")
        assert main([]) == 0
        labels = [node["label"] for node in json.loads(capsys.readouterr().out)]
        assert "FunctionCallExpr" in labels

    def test_folds_by_default(self, stdin_bytes, capsys):
        stdin_bytes(b"1 + 2")
        main([])
        assert "InfixOperatorExpr" in capsys.readouterr().out

    def test_no_fold(self, stdin_bytes, capsys):
        stdin_bytes(b"1 + 2")
        main(["--no-fold"])
        out = capsys.readouterr().out
        assert "SequenceExpr" in out
        assert "InfixOperatorExpr" not in out

    def test_show_missing(self, stdin_bytes, capsys):
        stdin_bytes(b"f(")
        main(["--show-missing"])
        labels = [node["label"] for node in json.loads(capsys.readouterr().out)]
        assert ")" in labels

    def test_indent(self, stdin_bytes, capsys):
        stdin_bytes(b"x")
        main(["--indent", "2"])
        assert capsys.readouterr().out.startswith("[\n  {")

    def test_sexpr_format(self, stdin_bytes, capsys):
        stdin_bytes(b"let x = 1")
        assert main(["--format", "sexpr"]) == 0
        assert capsys.readouterr().out.startswith("(SourceFile")

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.swift")]) == 1
        captured = capsys.readouterr()
        assert "file not found" in json.loads(captured.out)["error"]
        assert "file not found" in captured.err

    def test_directory_is_not_a_file(self, tmp_path, capsys):
        assert main([str(tmp_path)]) == 1
        assert list(json.loads(capsys.readouterr().out)) == ["error"]

    def test_invalid_utf8(self, tmp_path, capsys):
        source = tmp_path / "bad.swift"
        source.write_bytes(b"let x = \xff")
        assert main([str(source)]) == 1
        assert "not valid UTF-8" in json.loads(capsys.readouterr().out)["error"]

    def test_parse_error(self, stdin_bytes, capsys):
        stdin_bytes(b")" * 200)
        assert main([]) == 1
        captured = capsys.readouterr()
        assert "too many syntax errors" in json.loads(captured.out)["error"]
        assert "error[E0001]" in captured.err
        assert "= note: recovery gave up after 64 repairs" in captured.err
        assert " --> <stdin>:1:" in captured.err
