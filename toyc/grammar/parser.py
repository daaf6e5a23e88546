"""toyc 문법 기술 언어 파서 (번역 스킴)
- %start 선언
- 규칙: name : alt | alt ... ;
- 우변 항목:
    "lit"   → 단말(키워드/연산자/구두점 리터럴)
    NAME    → 규칙으로 정의된 이름이면 비단말, 아니면 토큰 범주(ID, NUMBER, CHAR)
    @action → 의미 동작(폭 0)
    ε       → 빈 우변(문서용, 파서는 무시)
- 이름 끝의 프라임(') 허용: E', T'
- 주석: // ..., /* ... */
- 세미콜론(;)은 모든 선언/규칙 종료에 **반드시 필요**
"""

from __future__ import annotations
import regex as re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple
import ast as _pyast

from ..ll1.symbols import Symbol, Terminal, NonTerminal, Action, EPSILON
from .bnf import BNF, Production

# ---- Lexer 토큰 ----
_TOKEN_SPEC = [
    ("WS",       r"[ \t\f\r]+"),
    ("NEWLINE",  r"\n"),
    ("COMMENT",  r"//[^\n]*"),
    ("MCOMMENT", r"/\*.*?\*/"),
    ("PERCENT",  r"%"),
    ("COLON",    r":"),
    ("SEMI",     r";"),
    ("OR",       r"\|"),
    ("AT",       r"@"),
    ("EPS",      r"ε"),
    ("STRING",   r'"(?:\\.|[^"\\])*"'),
    ("IDENT",    r"[A-Za-z_][A-Za-z0-9_]*'*"),
]
MASTER_RE = re.compile("|".join(f"(?P<{n}>{p})" for n, p in _TOKEN_SPEC), re.S)


@dataclass
class Tok:
    kind: str
    lexeme: str
    start: int
    line: int
    col: int


def _scan(src: str) -> List[Tok]:
    """개행/공백/주석은 줄/칼럼 갱신만 하고 토큰스트림에는 **넣지 않는다**."""
    toks: List[Tok] = []
    line = col = 1
    i = 0
    while i < len(src):
        m = MASTER_RE.match(src, i)
        if not m:
            raise SyntaxError(f"Unexpected char {src[i]!r} at {line}:{col}")
        kind = m.lastgroup or ""
        lex = m.group(0)
        start, end = i, m.end()
        nl_count = lex.count("\n")

        if kind not in ("WS", "COMMENT", "MCOMMENT", "NEWLINE"):
            toks.append(Tok(kind, lex, start, line, col))

        # 위치 갱신
        if nl_count:
            line += nl_count
            col = len(lex) - lex.rfind("\n")
        else:
            col += len(lex)
        i = end

    toks.append(Tok("EOF", "", len(src), line, col))
    return toks


# ---------- error handling utils ----------
def _line_bounds(src: str, pos: int) -> Tuple[int, int]:
    """pos가 속한 라인의 [시작, 끝+1) 범위"""
    start = src.rfind("\n", 0, pos)
    start = 0 if start == -1 else start + 1
    end = src.find("\n", pos)
    if end == -1:
        end = len(src)
    return start, end


def _snippet_with_caret(src: str, tok: Tok) -> str:
    """토큰 시작 위치에 캐럿"""
    start, end = _line_bounds(src, tok.start)
    line_text = src[start:end]
    caret = " " * (tok.col - 1) + "^"
    return f"{line_text}\n{caret}"


# --- 토큰 스트림 ---
class _TS:
    def __init__(self, toks: List[Tok], src: str):
        self.toks = toks
        self.i = 0
        self.src = src

    def la(self) -> Tok:
        return self.toks[self.i]

    def eat(self, kind: str) -> Tok:
        t = self.la()
        if t.kind != kind:
            snippet = _snippet_with_caret(self.src, t)
            raise SyntaxError(
                f"Expected {kind}, got {t.kind} at {t.line}:{t.col}\n{snippet}"
            )
        self.i += 1
        return t

    def match(self, kind: str) -> Optional[Tok]:
        if self.la().kind == kind:
            return self.eat(kind)
        return None


def _require_semi(ts: _TS, context: str, example: str) -> None:
    if ts.match("SEMI"):
        return
    got = ts.la()
    found = "EOF" if got.kind == "EOF" else got.kind
    raise SyntaxError(
        f"Missing ';' after {context} (semicolon is mandatory).\n"
        f"- Found: {found} at {got.line}:{got.col}\n"
        f"- Example: {example}\n\n"
        f"{_snippet_with_caret(ts.src, got)}"
    )


# --- 규칙 파싱 (1단계: 이름 해석 전의 원시 항목) ---

_RawItem = Tuple[str, Tok]   # (kind, tok) kind: IDENT | STRING | AT | EPS


def _parse_alt(ts: _TS) -> List[_RawItem]:
    items: List[_RawItem] = []
    while True:
        t = ts.la()
        if t.kind in ("IDENT", "STRING", "EPS"):
            items.append((t.kind, ts.eat(t.kind)))
        elif t.kind == "AT":
            ts.eat("AT")
            items.append(("AT", ts.eat("IDENT")))
        else:
            return items


def _parse_rules(ts: _TS) -> Tuple[Optional[str], List[Tuple[str, List[List[_RawItem]]]]]:
    start: Optional[str] = None
    rules: List[Tuple[str, List[List[_RawItem]]]] = []

    # 선언부
    while ts.la().kind == "PERCENT":
        ts.eat("PERCENT")
        ident_tok = ts.eat("IDENT")
        if ident_tok.lexeme != "start":
            snippet = _snippet_with_caret(ts.src, ident_tok)
            raise SyntaxError(
                f"Unknown directive %{ident_tok.lexeme} at {ident_tok.line}:{ident_tok.col}\n{snippet}"
            )
        start = ts.eat("IDENT").lexeme
        _require_semi(ts, "%start declaration", "%start program;")

    # 규칙부
    while ts.la().kind != "EOF":
        lhs = ts.eat("IDENT").lexeme
        ts.eat("COLON")
        alts = [_parse_alt(ts)]
        while ts.match("OR"):
            alts.append(_parse_alt(ts))
        _require_semi(ts, f"rule '{lhs}'", f"{lhs} : ... ;")
        rules.append((lhs, alts))

    return start, rules


# --- 공개 API ---
def parse_scheme(src: str, terminals: Iterable[str], actions: Iterable[str]) -> BNF:
    """
    문법 기술 텍스트를 읽어 `BNF`로 돌려줍니다.

    Parameters
    ----------
    src : str
        문법 원문.
    terminals : Iterable[str]
        렉서가 만들 수 있는 단말 범주 이름 전체.
    actions : Iterable[str]
        허용되는 의미 동작 이름 전체.

    Raises
    ------
    SyntaxError
        문법 원문의 형식 오류, 정의되지 않은 이름/리터럴/동작.
    """
    ts = _TS(_scan(src), src)
    start, rules = _parse_rules(ts)
    term_set = set(terminals)
    action_set = set(actions)
    nonterms: List[str] = []
    for lhs, _ in rules:
        if lhs not in nonterms:
            nonterms.append(lhs)

    used_terms: List[str] = []
    prods: List[Production] = []

    for lhs, alts in rules:
        for raw in alts:
            rhs: List[Symbol] = []
            for kind, tok in raw:
                if kind == "EPS":
                    rhs.append(EPSILON)
                elif kind == "AT":
                    if tok.lexeme not in action_set:
                        raise SyntaxError(
                            f"Unknown action @{tok.lexeme} at {tok.line}:{tok.col}\n"
                            + _snippet_with_caret(src, tok)
                        )
                    rhs.append(Action(tok.lexeme))
                else:
                    name = _pyast.literal_eval(tok.lexeme) if kind == "STRING" else tok.lexeme
                    if kind == "IDENT" and name in nonterms:
                        rhs.append(NonTerminal(name))
                        continue
                    if name not in term_set:
                        what = "terminal" if kind == "STRING" else "symbol"
                        raise SyntaxError(
                            f"Undefined {what} {name!r} at {tok.line}:{tok.col}\n"
                            + _snippet_with_caret(src, tok)
                        )
                    rhs.append(Terminal(name))
                    if name not in used_terms:
                        used_terms.append(name)
            prods.append(Production(lhs, tuple(rhs)))

    if not nonterms:
        raise SyntaxError("Grammar has no rules")
    if start is None:
        start = nonterms[0]
    elif start not in nonterms:
        raise SyntaxError(f"%start names undefined non-terminal {start!r}")

    return BNF(start=start, prods=prods, terms=used_terms, nonterms=nonterms)
