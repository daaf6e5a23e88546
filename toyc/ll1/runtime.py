# toyc/ll1/runtime.py
"""LL(1) 파서 런타임(명시적 스택 머신).

- 심볼 스택(`End`, 시작 비단말로 초기화)과 AST 스택을 나란히 운용합니다.
- 렉서에서 토큰을 필요할 때마다 당겨 오고, 파스 테이블로 비단말을 전개하며,
  프로덕션에 끼워진 의미 동작을 만나면 AST 조각을 조립합니다.
- 재귀 하강이 아닙니다. 제어 상태는 **심볼 스택 그 자체**입니다.
- 첫 오류에서 즉시 멈춥니다(복구 없음).
"""

from __future__ import annotations
from functools import lru_cache
import sys
from typing import List, Optional

from ..errors import ActionError, ParseError
from ..grammar.toy import load_toy_grammar
from ..lex import CHAR, EOF, ID, NUMBER, RELOPS, TYPE_KEYWORDS, Lexer, Token
from ..lex.symtab import SymbolTable
from ..tree import CondWrapper, Identifier, Literal, Number, TypeWrapper, is_helper
from .actions import run_action
from .symbols import Action, End, Epsilon, NonTerminal, Symbol, Terminal, END
from .table import ParseTable, build_parse_table


def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


@lru_cache(maxsize=None)
def toy_parse_table() -> ParseTable:
    """내장 toy 문법의 LL(1) 테이블(프로세스당 한 번 작성)."""
    return build_parse_table(load_toy_grammar())


def _describe(tok: Token) -> str:
    if tok.type == EOF:
        return "end of input"
    return f"{tok.type!r} ({tok.text!r})"


def _leaf_for(tok: Token) -> Optional[object]:
    """페이로드가 있는 단말이면 AST 잎 노드, 아니면 None."""
    if tok.type == ID:
        return Identifier(tok.text)
    if tok.type == NUMBER:
        return Number(tok.text)
    if tok.type == CHAR:
        return Literal(tok.value)
    if tok.type in TYPE_KEYWORDS:
        return TypeWrapper(TYPE_KEYWORDS[tok.type])
    if tok.type in RELOPS:
        return CondWrapper(RELOPS[tok.type])
    # 괄호/구두점/순수 키워드는 잎을 만들지 않는다
    return None


class Parser:
    """
    Parser
    ======
    한 원문 단위를 파싱해 AST 루트 하나를 돌려줍니다.

    Parameters
    ----------
    text : str
        파싱할 원문.
    symtab : SymbolTable | None
        호출자가 소유하는 심볼 테이블(렉서가 등록). None이면 새로 만듭니다.
    start : str | None
        시작 비단말. None이면 문법의 %start(program). 부분 문법 진입점
        (예: "E", "cond", "cmd_if", "block")도 허용됩니다.
    table : ParseTable | None
        사용할 파스 테이블. None이면 내장 toy 문법 테이블.
    debug : bool
        True면 전개/매치/동작 과정을 stderr에 `[DEBUG]`로 출력.
    strict_comments : bool
        True면 닫히지 않은 `{%` 주석을 어휘 오류로 처리.
    """

    def __init__(
        self,
        text: str,
        symtab: Optional[SymbolTable] = None,
        *,
        start: Optional[str] = None,
        table: Optional[ParseTable] = None,
        debug: bool = False,
        strict_comments: bool = False,
    ):
        self._src = text
        self._table = table if table is not None else toy_parse_table()
        self._start = start or self._table.start
        if self._start not in self._table.nonterms:
            raise ValueError(
                f"Unknown start symbol {self._start!r}; "
                f"expected one of {', '.join(self._table.nonterms)}"
            )
        self.symtab = symtab if symtab is not None else SymbolTable()
        self._lexer = Lexer(text, self.symtab, strict_comments=strict_comments)
        self._debug = debug
        self.stack: List[Symbol] = []
        self.ast_stack: List[object] = []

    @property
    def start(self) -> str:
        return self._start

    def parse(self) -> object:
        """
        Returns
        -------
        AST 루트 노드(보조 노드가 아님).

        Raises
        ------
        LexError    : 어휘 오류
        ParseError  : 구문 오류(단말 불일치, 테이블 칸 없음, 입력 끝 불일치)
        ActionError : 동작/스택 모양 불일치(내부 오류)
        """
        self.stack = [END, NonTerminal(self._start)]
        self.ast_stack = []
        look = self._lexer.next_token()

        while self.stack:
            top = self.stack[-1]

            if isinstance(top, End):
                if look.type != EOF:
                    raise self._error(f"expected end of input, found {_describe(look)}", look, [EOF])
                self.stack.pop()
                continue

            if isinstance(top, Terminal):
                if top.name != look.type:
                    raise self._error(
                        f"expected {top.name!r}, found {_describe(look)}", look, [top.name]
                    )
                leaf = _leaf_for(look)
                if leaf is not None:
                    self.ast_stack.append(leaf)
                if self._debug:
                    _eprint(f"[DEBUG] match {top.name!r} {look.text!r} @{look.line}:{look.col}")
                self.stack.pop()
                look = self._lexer.next_token()
                continue

            if isinstance(top, NonTerminal):
                prod = self._table.get_entry(top.name, look.type)
                if prod is None:
                    expected = self._table.expected(top.name)
                    raise self._error(
                        f"unexpected {_describe(look)} while parsing {top.name}; "
                        f"expected one of {{{', '.join(expected)}}}",
                        look, expected,
                    )
                if self._debug:
                    _eprint(f"[DEBUG] expand {prod} on {look.type!r}")
                self.stack.pop()
                # 가장 왼쪽 기호가 먼저 처리되도록 역순으로 쌓는다
                for sym in reversed(prod.rhs):
                    if not isinstance(sym, Epsilon):
                        self.stack.append(sym)
                continue

            if isinstance(top, Action):
                self.stack.pop()
                run_action(top.kind, self.ast_stack, look, self._src)
                if self._debug:
                    _eprint(f"[DEBUG] action @{top.kind} -> {self.ast_stack[-1]!r}")
                continue

            # Epsilon은 쌓이지 않는다
            raise RuntimeError(f"Unknown grammar symbol on the stack: {top!r}")

        return self._finish(look)

    # ---- Internals ----
    def _error(self, message: str, look: Token, expected: List[str]) -> ParseError:
        return ParseError(message, look.line, look.col, found=look, expected=expected, src=self._src)

    def _finish(self, look: Token) -> object:
        if len(self.ast_stack) != 1:
            raise ActionError(
                "finish",
                f"expected exactly one AST node at the end of the parse, found {len(self.ast_stack)}: "
                f"{self.ast_stack!r}",
                look.line, look.col,
            )
        root = self.ast_stack[0]
        if is_helper(root):
            raise ActionError(
                "finish", f"helper node {root!r} left at the root (start symbol {self._start!r})",
                look.line, look.col,
            )
        return root


def parse(text: str, start: str = "program", symtab: Optional[SymbolTable] = None, *, debug: bool = False) -> object:
    """`Parser(text, symtab, start=start).parse()`의 단축 함수."""
    return Parser(text, symtab, start=start, debug=debug).parse()
