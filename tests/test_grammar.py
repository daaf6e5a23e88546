import pytest

from toyc.errors import GrammarConflictError
from toyc.grammar.bnf import Production
from toyc.grammar.parser import parse_scheme
from toyc.grammar.toy import load_toy_grammar
from toyc.lex import RELOPS, TERMINALS
from toyc.ll1.first_follow import compute_nullable_first_follow
from toyc.ll1.runtime import toy_parse_table
from toyc.ll1.symbols import END, EPSILON, Action, ActionKind, NonTerminal, Terminal
from toyc.ll1.table import ParseTable, build_parse_table


def test_toy_grammar_loads():
    bnf = load_toy_grammar()
    assert bnf.start == "program"
    assert bnf.nonterms[0] == "program"
    assert set(bnf.actions()) == ActionKind.all()
    assert set(bnf.terms) <= TERMINALS


def test_toy_grammar_is_ll1():
    tbl = build_parse_table(load_toy_grammar())
    assert tbl.conflicts == []
    assert tbl.pretty_conflicts() == "(no conflicts)"


def test_first_sets():
    ff = compute_nullable_first_follow(load_toy_grammar())
    assert ff.first["E"] == {"ID", "NUMBER", "CHAR", "(", "-"}
    assert ff.first["stmt"] == {"ID", "if", "while", "do", "for", "["}
    assert ff.first["program"] == {"int", "float", "char", "void"}
    assert {"decls", "stmts", "ids_tail", "if_tail", "E'", "T'", "F'"} <= ff.nullable


def test_every_nonterminal_is_an_entry_point():
    bnf = load_toy_grammar()
    ff = compute_nullable_first_follow(bnf)
    for nt in bnf.nonterms:
        assert "$" in ff.follow[nt], nt


def test_if_tail_follow_excludes_else_branches():
    ff = compute_nullable_first_follow(load_toy_grammar())
    assert "else" not in ff.follow["if_tail"]
    assert "elsif" not in ff.follow["if_tail"]


def test_entry_points_can_be_restricted():
    bnf = parse_scheme('s : "(" s ")" | ID ;', {"(", ")", "ID"}, ())
    ff = compute_nullable_first_follow(bnf, entry_points=[])
    assert ff.follow["s"] == {")"}


def test_table_cells():
    tbl = toy_parse_table()
    neg = tbl.get_entry("U", "-")
    assert neg.rhs == (Terminal("-"), NonTerminal("U"), Action(ActionKind.NEG))
    assert tbl.get_entry("U", "+") is None
    # ε 전개는 FOLLOW 범주에 들어간다
    assert tbl.get_entry("E'", ";").rhs == (EPSILON,)
    assert tbl.expected("relop") == sorted(RELOPS)


def test_set_entry_overwrites():
    tbl = ParseTable(start="s", nonterms=["s"])
    p1 = Production("s", (Terminal("ID"),))
    p2 = Production("s", (Terminal("NUMBER"),))
    tbl.set_entry("s", "ID", p1)
    tbl.set_entry("s", "ID", p2)
    assert tbl.get_entry("s", "ID") is p2
    assert tbl.get_entry("s", "NUMBER") is None
    assert list(tbl.rows()) == [("s", [("ID", p2)])]


def test_conflicting_grammar_is_rejected():
    bnf = parse_scheme('s : "if" ID | "if" NUMBER ;', {"if", "ID", "NUMBER"}, ())
    with pytest.raises(GrammarConflictError) as ei:
        build_parse_table(bnf)
    assert "[s, if]" in ei.value.report


def test_productions_print_actions_and_epsilon():
    bnf = load_toy_grammar()
    texts = {str(p) for p in bnf.prods}
    assert "U -> '-' U @neg" in texts
    assert "E' -> ε" in texts
    assert str(END) == "$"


@pytest.mark.parametrize("src, needle", [
    ('s : ID @nope ;', "Unknown action @nope"),
    ('s : "while" ;', "Undefined terminal 'while'"),
    ('s : FOO ;', "Undefined symbol 'FOO'"),
    ('s : ID', "Missing ';'"),
    ('%token x; s : ID ;', "Unknown directive %token"),
    ('%start t; s : ID ;', "%start names undefined non-terminal 't'"),
    ('', "Grammar has no rules"),
])
def test_scheme_errors(src, needle):
    with pytest.raises(SyntaxError) as ei:
        parse_scheme(src, {"ID"}, {"make_list"})
    assert needle in str(ei.value)


def test_scheme_error_caret_points_at_offending_token():
    src = 's : ID ;\nt : ID @nope ;'
    with pytest.raises(SyntaxError) as ei:
        parse_scheme(src, {"ID"}, {"make_list"})
    assert str(ei.value).endswith("t : ID @nope ;\n        ^")
