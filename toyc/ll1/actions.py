# toyc/ll1/actions.py
"""의미 동작: AST 스택에서 정해진 개수의 값을 꺼내 노드 하나를 만든다.

각 동작의 꺼내는 순서(스택 top 부터):

    add/sub/mul/div/pow : right, left                 -> BinaryOp
    neg                 : expr                        -> UnaryOp
    assign              : expr, Identifier            -> Assignment
    make_cond           : right, CondWrapper, left    -> BinaryComp
    make_block          : NodeList(stmts), NodeList(decls) -> Block
    make_decl           : NodeList(ids), TypeWrapper  -> VarDecl
    make_list           : (없음)                      -> NodeList(())
    append_list         : NodeList(tail), item        -> NodeList((item, *tail))
    make_if             : then, cond                  -> If
    make_if_else        : else, then, cond            -> If
    make_while          : body, cond                  -> While
    make_do_while       : cond, body                  -> DoWhile
    make_for            : body, step, end, start, Identifier -> For
    make_program        : Block, TypeWrapper          -> Program

모양이 어긋나면 문법/동작 짝이 틀린 것이므로 `ActionError`(내부 오류).
"""

from __future__ import annotations
from typing import Callable, Dict, List, Tuple, Type

from ..errors import ActionError, ParseError
from ..lex import OperatorKind, Token
from ..tree import (
    Assignment, BinaryComp, BinaryOp, Block, CondWrapper, DoWhile, For,
    Identifier, If, NodeList, Number, Program, TypeWrapper, UnaryOp,
    VarDecl, While, is_helper,
)
from .symbols import ActionKind

AstStack = List[object]

_MATH_OPS = {
    ActionKind.ADD: OperatorKind.SUM,
    ActionKind.SUB: OperatorKind.SUB,
    ActionKind.MUL: OperatorKind.MULT,
    ActionKind.DIV: OperatorKind.DIV,
    ActionKind.POW: OperatorKind.EXP,
}


def _pop(stack: AstStack, n: int, action: str, at: Token) -> Tuple[object, ...]:
    """top 부터 n개를 꺼내 (top, top-1, ...) 순서로 돌려준다."""
    if len(stack) < n:
        raise ActionError(
            action, f"needs {n} value(s) on the AST stack, found {len(stack)}: {stack!r}",
            at.line, at.col,
        )
    return tuple(stack.pop() for _ in range(n))


def _expect(value: object, cls: Type, action: str, what: str, at: Token):
    if not isinstance(value, cls):
        raise ActionError(action, f"expected {what}, got {value!r}", at.line, at.col)
    return value


def _node(value: object, action: str, what: str, at: Token):
    """보조 노드가 아닌 완성된 노드인지 확인."""
    if is_helper(value):
        raise ActionError(action, f"expected {what}, got helper {value!r}", at.line, at.col)
    return value


def _int_bound(value: object, action: str, what: str, at: Token, src: str) -> int:
    num = _expect(value, Number, action, f"a number for the {what} bound", at)
    try:
        return int(num.value)
    except ValueError:
        raise ParseError(
            f"for-loop {what} bound must be an integer literal, got {num.value!r}",
            at.line, at.col, found=at, expected=["NUMBER"], src=src,
        ) from None


# ---- 동작별 구현 ----

def _math(kind: str) -> Callable[[AstStack, Token, str], object]:
    def act(stack: AstStack, at: Token, src: str) -> object:
        right, left = _pop(stack, 2, kind, at)
        return BinaryOp(
            _MATH_OPS[kind],
            _node(left, kind, "left operand", at),
            _node(right, kind, "right operand", at),
        )
    return act


def _neg(stack: AstStack, at: Token, src: str) -> object:
    (expr,) = _pop(stack, 1, ActionKind.NEG, at)
    return UnaryOp(_node(expr, ActionKind.NEG, "an operand", at))


def _assign(stack: AstStack, at: Token, src: str) -> object:
    k = ActionKind.ASSIGN
    expr, ident = _pop(stack, 2, k, at)
    ident = _expect(ident, Identifier, k, "an identifier", at)
    return Assignment(ident.name, _node(expr, k, "an expression", at))


def _make_cond(stack: AstStack, at: Token, src: str) -> object:
    k = ActionKind.MAKE_COND
    right, relop, left = _pop(stack, 3, k, at)
    relop = _expect(relop, CondWrapper, k, "a relational operator", at)
    return BinaryComp(relop.relop, _node(left, k, "left operand", at), _node(right, k, "right operand", at))


def _make_block(stack: AstStack, at: Token, src: str) -> object:
    k = ActionKind.MAKE_BLOCK
    stmts, decls = _pop(stack, 2, k, at)
    stmts = _expect(stmts, NodeList, k, "a statement list", at)
    decls = _expect(decls, NodeList, k, "a declaration list", at)
    return Block(decls=decls.items, stmts=stmts.items)


def _make_decl(stack: AstStack, at: Token, src: str) -> object:
    k = ActionKind.MAKE_DECL
    ids, typ = _pop(stack, 2, k, at)
    ids = _expect(ids, NodeList, k, "an identifier list", at)
    typ = _expect(typ, TypeWrapper, k, "a type", at)
    names = tuple(_expect(i, Identifier, k, "an identifier in the declaration list", at).name for i in ids.items)
    return VarDecl(typ.type, names)


def _make_list(stack: AstStack, at: Token, src: str) -> object:
    return NodeList()


def _append_list(stack: AstStack, at: Token, src: str) -> object:
    k = ActionKind.APPEND_LIST
    tail, item = _pop(stack, 2, k, at)
    tail = _expect(tail, NodeList, k, "a list on top of the stack", at)
    # 우재귀로 꼬리부터 만들어지므로 새 항목은 **앞**에 붙인다
    return NodeList((_node(item, k, "a list item", at),) + tail.items)


def _make_if(stack: AstStack, at: Token, src: str) -> object:
    k = ActionKind.MAKE_IF
    then, cond = _pop(stack, 2, k, at)
    return If(_node(cond, k, "a condition", at), _node(then, k, "a then-branch", at))


def _make_if_else(stack: AstStack, at: Token, src: str) -> object:
    k = ActionKind.MAKE_IF_ELSE
    other, then, cond = _pop(stack, 3, k, at)
    return If(
        _node(cond, k, "a condition", at),
        _node(then, k, "a then-branch", at),
        _node(other, k, "an else-branch", at),
    )


def _make_while(stack: AstStack, at: Token, src: str) -> object:
    k = ActionKind.MAKE_WHILE
    body, cond = _pop(stack, 2, k, at)
    return While(_node(cond, k, "a condition", at), _node(body, k, "a loop body", at))


def _make_do_while(stack: AstStack, at: Token, src: str) -> object:
    k = ActionKind.MAKE_DO_WHILE
    cond, body = _pop(stack, 2, k, at)
    return DoWhile(_node(body, k, "a loop body", at), _node(cond, k, "a condition", at))


def _make_for(stack: AstStack, at: Token, src: str) -> object:
    k = ActionKind.MAKE_FOR
    body, step, end, start, ident = _pop(stack, 5, k, at)
    ident = _expect(ident, Identifier, k, "the loop variable", at)
    return For(
        ident.name,
        _int_bound(start, k, "start", at, src),
        _int_bound(end, k, "end", at, src),
        _node(step, k, "a step expression", at),
        _node(body, k, "a loop body", at),
    )


def _make_program(stack: AstStack, at: Token, src: str) -> object:
    k = ActionKind.MAKE_PROGRAM
    body, typ = _pop(stack, 2, k, at)
    typ = _expect(typ, TypeWrapper, k, "a type", at)
    return Program(typ.type, _expect(body, Block, k, "a block", at))


ACTIONS: Dict[str, Callable[[AstStack, Token, str], object]] = {
    ActionKind.ADD: _math(ActionKind.ADD),
    ActionKind.SUB: _math(ActionKind.SUB),
    ActionKind.MUL: _math(ActionKind.MUL),
    ActionKind.DIV: _math(ActionKind.DIV),
    ActionKind.POW: _math(ActionKind.POW),
    ActionKind.NEG: _neg,
    ActionKind.ASSIGN: _assign,
    ActionKind.MAKE_COND: _make_cond,
    ActionKind.MAKE_BLOCK: _make_block,
    ActionKind.MAKE_DECL: _make_decl,
    ActionKind.MAKE_LIST: _make_list,
    ActionKind.APPEND_LIST: _append_list,
    ActionKind.MAKE_IF: _make_if,
    ActionKind.MAKE_IF_ELSE: _make_if_else,
    ActionKind.MAKE_WHILE: _make_while,
    ActionKind.MAKE_DO_WHILE: _make_do_while,
    ActionKind.MAKE_FOR: _make_for,
    ActionKind.MAKE_PROGRAM: _make_program,
}


def run_action(kind: str, stack: AstStack, at: Token, src: str = "") -> None:
    """동작 kind를 실행해 AST 스택에 **정확히 하나**의 노드를 올린다.

    at 은 현재 lookahead 토큰(오류 위치 표시용), src 는 원문(캐럿 스니펫용).
    """
    try:
        act = ACTIONS[kind]
    except KeyError:
        raise ActionError(kind, "unknown action", at.line, at.col) from None
    stack.append(act(stack, at, src))
