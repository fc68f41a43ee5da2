import io
from pathlib import Path

import pytest

from firstfollow.ffc import main

DATA = Path(__file__).parent / "grammar_test"
EXPR = str(DATA / "expr.g")


def test_sets(capsys):
    assert main(["sets", EXPR]) == 0
    out = capsys.readouterr().out
    assert 'FIRST(Expr): "(" "id"' in out
    assert 'FIRST("id"): "id"' in out
    assert 'FIRST(ExprTail): "" "+"' in out
    assert 'FOLLOW(Factor): "" ")" "*" "+"' in out
    assert 'FOLLOW(Expr): "" ")"' in out
    assert "FOLLOW(\"id\")" not in out
    assert out.startswith("Expr ExprTail Factor Term TermTail\n")


def test_first_sequence(capsys):
    assert main(["first", EXPR, "ExprTail", ")"]) == 0
    assert capsys.readouterr().out.strip() == 'FIRST(ExprTail ")"): ")" "+"'


def test_first_empty_sequence(capsys):
    assert main(["first", EXPR]) == 0
    assert capsys.readouterr().out.strip() == "FIRST():"


def test_follow(capsys):
    assert main(["follow", EXPR, "Term"]) == 0
    assert capsys.readouterr().out.strip() == 'FOLLOW(Term): "" ")" "+"'


def test_follow_unknown_symbol_warns(capsys):
    assert main(["follow", EXPR, "Nope"]) == 0
    cap = capsys.readouterr()
    assert cap.out.strip() == "FOLLOW(Nope):"
    assert "[WARN]" in cap.err


def test_fmt_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("S\na\n\nS = S a\nS =\n\nS\n"))
    assert main(["fmt", "-"]) == 0
    assert capsys.readouterr().out == 'S\n\n"a"\n\nS =\nS = S "a"\n\nS\n'


def test_debug_goes_to_stderr(capsys):
    assert main(["sets", EXPR, "-D"]) == 0
    cap = capsys.readouterr()
    assert "[DEBUG] Grammar ready" in cap.err
    assert "[DEBUG] FIRST/FOLLOW computed | nullable=ExprTail, TermTail" in cap.err
    assert "[DEBUG]" not in cap.out


def test_syntax_error_exit_code(tmp_path, capsys):
    bad = tmp_path / "bad.g"
    bad.write_text("S\na\n\nX = a\n\nS\n", encoding="utf-8")
    assert main(["sets", str(bad)]) == 2
    err = capsys.readouterr().err
    assert "[SYNTAX ERROR]" in err
    assert "not a declared non-terminal" in err


def test_missing_file(tmp_path, capsys):
    assert main(["sets", str(tmp_path / "nope.g")]) == 2
    assert "[ERROR] FileNotFoundError" in capsys.readouterr().err


def test_subcommand_required():
    with pytest.raises(SystemExit):
        main([])


def test_invalid_utf8_exit_code(tmp_path, capsys):
    bad = tmp_path / "latin.g"
    bad.write_bytes(b"S\n\xff\n\nS = a\n\nS\n")
    assert main(["sets", str(bad)]) == 2
    cap = capsys.readouterr()
    assert "[ERROR] UnicodeDecodeError" in cap.err
    assert cap.out == ""
