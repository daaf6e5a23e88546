import dataclasses
from pathlib import Path

import pytest

from toyc import parse
from toyc.errors import ActionError, LexError, ParseError
from toyc.lex.symtab import SymbolTable
from toyc.ll1.runtime import Parser
from toyc.tree import (
    Assignment, BinaryComp, BinaryOp, Block, DoWhile, For, Identifier, If,
    Literal, Number, Program, UnaryOp, VarDecl, While, dump, is_helper,
)

HELLO = Path(__file__).parent / "toy_test" / "hello.toy"


def assign(name, expr):
    return Assignment(name, expr)


def block(*stmts, decls=()):
    return Block(decls=tuple(decls), stmts=tuple(stmts))


# ---- 식 ----

def test_negative_number():
    assert parse("-6", start="E") == UnaryOp(Number("6"))


def test_negated_parenthesized_product():
    assert parse("-(x * 2)", start="E") == UnaryOp(
        BinaryOp("Mult", Identifier("x"), Number("2"))
    )


def test_subtraction_is_left_associative():
    assert parse("1 - 2 - 3", start="E") == BinaryOp(
        "Sub", BinaryOp("Sub", Number("1"), Number("2")), Number("3")
    )


def test_precedence():
    assert parse("a + b * c ** 2", start="E") == BinaryOp(
        "Sum",
        Identifier("a"),
        BinaryOp("Mult", Identifier("b"), BinaryOp("Exp", Identifier("c"), Number("2"))),
    )


def test_division_and_char_operand():
    assert parse("'a' / 2.5E1", start="E") == BinaryOp("Div", Literal("a"), Number("2.5E1"))


# ---- 명령 ----

def test_assignment():
    assert parse("x := 5 - 6;", start="cmd_atrib") == assign(
        "x", BinaryOp("Sub", Number("5"), Number("6"))
    )


def test_condition():
    assert parse("a <= b + 1", start="cond") == BinaryComp(
        "LE", Identifier("a"), BinaryOp("Sum", Identifier("b"), Number("1"))
    )


def test_if_without_else():
    node = parse("if (a == 1) then [ a := 2; ]", start="cmd_if")
    assert node == If(
        BinaryComp("EQ", Identifier("a"), Number("1")),
        block(assign("a", Number("2"))),
    )
    assert node.else_branch is None


def test_if_elsif_else_chain_nests_in_else_branch():
    src = (
        "if (a > 1) then [ x := 1; ] "
        "elsif (a < 0) then [ x := 2; ] "
        "else [ x := 3; ]"
    )
    assert parse(src, start="cmd_if") == If(
        BinaryComp("GT", Identifier("a"), Number("1")),
        block(assign("x", Number("1"))),
        If(
            BinaryComp("LT", Identifier("a"), Number("0")),
            block(assign("x", Number("2"))),
            block(assign("x", Number("3"))),
        ),
    )


def test_elsif_without_else():
    node = parse("if (a != 1) then [ ] elsif (a >= 2) then [ ]", start="cmd_if")
    assert node.else_branch == If(BinaryComp("GE", Identifier("a"), Number("2")), block())
    assert node.else_branch.else_branch is None


def test_block_keeps_source_order():
    assert parse("[int a, b; y := y * 2;]", start="block") == block(
        assign("y", BinaryOp("Mult", Identifier("y"), Number("2"))),
        decls=[VarDecl("Int", ("a", "b"))],
    )


def test_block_with_several_declarations_and_statements():
    node = parse("[int a; float b, c; char d; a := 1; b := 2; [ c := 3; ]]", start="block")
    assert node.decls == (
        VarDecl("Int", ("a",)), VarDecl("Float", ("b", "c")), VarDecl("Char", ("d",)),
    )
    assert node.stmts == (
        assign("a", Number("1")),
        assign("b", Number("2")),
        block(assign("c", Number("3"))),
    )


def test_while():
    assert parse("while (i < 10) do i := i + 1;", start="cmd_while") == While(
        BinaryComp("LT", Identifier("i"), Number("10")),
        assign("i", BinaryOp("Sum", Identifier("i"), Number("1"))),
    )


def test_do_while():
    assert parse("do [ i := i - 1; ] while (i > 0);", start="cmd_do") == DoWhile(
        block(assign("i", BinaryOp("Sub", Identifier("i"), Number("1")))),
        BinaryComp("GT", Identifier("i"), Number("0")),
    )


def test_for():
    assert parse("for (i; 1; 10; 2) [ s := s + i; ]", start="cmd_for") == For(
        "i", 1, 10, Number("2"),
        block(assign("s", BinaryOp("Sum", Identifier("s"), Identifier("i")))),
    )


@pytest.mark.parametrize("src", [
    "for (i; 1.5; 10; 1) [ ]",
    "for (i; 1; 1E3; 1) [ ]",
])
def test_for_bounds_must_be_integers(src):
    with pytest.raises(ParseError):
        parse(src, start="cmd_for")


# ---- 프로그램 ----

def test_empty_void_program():
    assert parse("void main() [ ]") == Program("Void", block())


def test_full_program_from_file():
    text = HELLO.read_text(encoding="utf-8")
    st = SymbolTable()
    root = parse(text, symtab=st)
    assert isinstance(root, Program)
    assert root.type == "Int"
    assert root.body.decls == (
        VarDecl("Int", ("i", "sum")), VarDecl("Float", ("avg",)), VarDecl("Char", ("c",)),
    )
    kinds = [type(s).__name__ for s in root.body.stmts]
    assert kinds == ["Assignment", "For", "If", "Assignment", "DoWhile"]
    assert root.body.stmts[3] == assign("c", Literal("x"))
    assert {"i", "sum", "avg", "c", "x", "1.5E-2"} <= set(st)


def test_exactly_one_root_is_left():
    p = Parser("float main() [ x := 1; ]")
    root = p.parse()
    assert p.stack == []
    assert p.ast_stack == [root]
    assert not is_helper(root)


def test_caller_owns_symbol_table():
    st = SymbolTable()
    parse("x := y + 1;", start="cmd_atrib", symtab=st)
    parse("z := x;", start="cmd_atrib", symtab=st)
    assert list(st) == ["x", "y", "1", "z"]
    assert st.lookup("x").line == 1


def test_dump():
    text = dump(parse("-(x * 2)", start="E"))
    assert text.splitlines() == [
        "├─ UnaryOp",
        "  ├─ expr: BinaryOp: op=Mult",
        "    ├─ left: Identifier: x",
        "    ├─ right: Number: 2",
    ]


# ---- 오류 ----

def test_missing_expression_reports_expected_set():
    with pytest.raises(ParseError) as ei:
        parse("x := ;", start="cmd_atrib")
    err = ei.value
    assert err.found.type == ";"
    assert (err.line, err.col) == (1, 6)
    assert err.expected == sorted(["ID", "NUMBER", "CHAR", "(", "-"])
    assert "x := ;\n     ^" in str(err)


def test_terminal_mismatch_names_expected_category():
    with pytest.raises(ParseError) as ei:
        parse("x := 1", start="cmd_atrib")
    assert ei.value.expected == [";"]
    assert ei.value.found.type == "$"


def test_trailing_input_is_rejected():
    with pytest.raises(ParseError) as ei:
        parse("int main() [ ] x")
    assert ei.value.expected == ["$"]
    assert ei.value.found.text == "x"


def test_missing_return_type():
    with pytest.raises(ParseError):
        parse("main() [ ]")


def test_lexical_error_surfaces_from_parse():
    with pytest.raises(LexError):
        parse("x := 3.;", start="cmd_atrib")


def test_strict_comments_reach_the_lexer():
    assert parse("x {% open", start="E") == Identifier("x")
    with pytest.raises(LexError):
        Parser("x {% open", start="E", strict_comments=True).parse()


@pytest.mark.parametrize("start, src", [
    ("ids", "a, b"),
    ("type", "int"),
    ("relop", "<="),
    ("stmts", "x := 1;"),
])
def test_helper_root_is_an_internal_error(start, src):
    with pytest.raises(ActionError):
        parse(src, start=start)


def test_unknown_start_symbol():
    with pytest.raises(ValueError):
        Parser("x", start="nope")


def test_debug_trace(capsys):
    Parser("-6", start="E", debug=True).parse()
    err = capsys.readouterr().err
    assert "[DEBUG] expand" in err
    assert "[DEBUG] match" in err
    assert "[DEBUG] action @neg" in err


# ---- 문서 예제 / 전체 프로그램 ----

def test_if_elsif_else_with_char_condition_and_declaration_only_else():
    src = "if(x>y)then[y := y * 2;]elsif(c=='a')then[x := 2**4;]else[int a, b;]"
    assert parse(src, start="cmd_if") == If(
        BinaryComp("GT", Identifier("x"), Identifier("y")),
        block(assign("y", BinaryOp("Mult", Identifier("y"), Number("2")))),
        If(
            BinaryComp("EQ", Identifier("c"), Literal("a")),
            block(assign("x", BinaryOp("Exp", Number("2"), Number("4")))),
            block(decls=[VarDecl("Int", ("a", "b"))]),
        ),
    )


PROGRAM_WITH_COMMENTS = """int main() [
    char c;
    int x;
    float y;

    c := 'a';
    x := 67;
    y := 54.90E-22;

    if(x>y)then[
        y := y * 2;
    ]elsif(c=='a')then[
        x := x + 2;
    ]else[
        c := 'b';
    ]

    {%comentario%}
    {%
        comentario
        de
        multiplas
        linhas
    %}

    do [
        x := x + 1;
    ]while (x < 100);

] """


def test_program_with_comments_between_statements():
    st = SymbolTable()
    assert parse(PROGRAM_WITH_COMMENTS, symtab=st) == Program("Int", block(
        assign("c", Literal("a")),
        assign("x", Number("67")),
        assign("y", Number("54.90E-22")),
        If(
            BinaryComp("GT", Identifier("x"), Identifier("y")),
            block(assign("y", BinaryOp("Mult", Identifier("y"), Number("2")))),
            If(
                BinaryComp("EQ", Identifier("c"), Literal("a")),
                block(assign("x", BinaryOp("Sum", Identifier("x"), Number("2")))),
                block(assign("c", Literal("b"))),
            ),
        ),
        DoWhile(
            block(assign("x", BinaryOp("Sum", Identifier("x"), Number("1")))),
            BinaryComp("LT", Identifier("x"), Number("100")),
        ),
        decls=[VarDecl("Char", ("c",)), VarDecl("Int", ("x",)), VarDecl("Float", ("y",))],
    ))
    # 문자 리터럴 'a' 는 값 "a" 로 등록되고, 먼저 나온 식별자가 없으므로 CHAR 항목이 남는다
    assert st.lookup("a").type == "CHAR"
    assert st.lookup("c").type == "ID"


def test_finished_tree_is_immutable():
    node = parse("[int a, b; a := 1;]", start="block")
    assert isinstance(node.decls, tuple)
    assert isinstance(node.stmts, tuple)
    assert isinstance(node.decls[0].names, tuple)
    with pytest.raises(AttributeError):
        node.stmts.append(assign("b", Number("2")))
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.decls = ()
