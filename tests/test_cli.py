from pathlib import Path

import pytest

from toyc.toycc import main

HELLO = str(Path(__file__).parent / "toy_test" / "hello.toy")


def test_lex_text(capsys):
    assert main(["lex", "--text", "x := 1"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "000: <Id, value='x', line=1, column=1>"
    assert out[1] == "001: <Punctuation, value=':=', kind=Assignment, line=1, column=3>"
    assert out[-1] == "003: End of file"


def test_lex_stops_at_first_error(capsys):
    assert main(["lex", "--text", "a 3E b"]) == 2
    captured = capsys.readouterr()
    assert "000: <Id, value='a'" in captured.out
    assert "[LEX ERROR]" in captured.err
    assert "EndedWithEExpoent" in captured.err


def test_lex_strict_comments(capsys):
    assert main(["lex", "--text", "a {% open"]) == 0
    assert main(["lex", "--text", "a {% open", "--strict-comments"]) == 2
    assert "UnclosedComment" in capsys.readouterr().err


def test_parse_text_with_start(capsys):
    assert main(["parse", "--text", "x := 5 - 6;", "--start", "cmd_atrib"]) == 0
    out = capsys.readouterr().out
    assert "├─ Assignment: name=x" in out
    assert "├─ expr: BinaryOp: op=Sub" in out


def test_parse_file_with_symbols(capsys):
    assert main(["parse", HELLO, "--symbols"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("├─ Program: type=Int")
    assert "VarDecl: type=Int names=i, sum" in out
    assert "[Symbols]" in out
    assert "'sum'" in out


def test_parse_syntax_error(capsys):
    assert main(["parse", "--text", "int main() [ x := ; ]"]) == 2
    err = capsys.readouterr().err
    assert "[SYNTAX ERROR]" in err
    assert "Parse error at 1:19" in err


def test_parse_lex_error(capsys):
    assert main(["parse", "--text", "int main() [ x := 1.; ]"]) == 2
    assert "[LEX ERROR]" in capsys.readouterr().err


def test_parse_unknown_start(capsys):
    assert main(["parse", "--text", "x", "--start", "nope"]) == 2
    assert "[ERROR] ValueError" in capsys.readouterr().err


def test_parse_debug(capsys):
    assert main(["parse", "--text", "-6", "--start", "E", "-D"]) == 0
    err = capsys.readouterr().err
    assert "[DEBUG] start=E" in err
    assert "[DEBUG] action @neg" in err


def test_check(capsys):
    assert main(["check"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("[CHECK OK] parser=ll1 start=program")
    assert "conflicts=0" in out


def test_check_debug_prints_first_follow(capsys):
    assert main(["check", "-D"]) == 0
    err = capsys.readouterr().err
    assert "[FIRST / FOLLOW]" in err
    assert "if_tail" in err


def test_source_is_required():
    with pytest.raises(SystemExit):
        main(["parse"])
