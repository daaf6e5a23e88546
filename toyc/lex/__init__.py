# toyc/lex/__init__.py
"""toyc 토크나이저: 손으로 짠 유한 상태 오토마톤(DFA) 렉서.

특징
----
- `CharCursor` 위를 한 글자씩 걸으며 lexeme 종류별 상태를 진행
- 토큰 앞의 공백과 `{% ... %}` 주석을 모두 건너뜀
  (닫히지 않은 주석은 입력 끝까지 먹고 **오류가 아님**; `strict_comments=True`면 오류)
- 식별자/키워드: **최장일치** 후 한 글자 되돌리고, 키워드 표에 정확히 있으면 키워드
- 숫자: 정수부 → (`.` + 숫자 1개 이상)? → (`E` + 부호? + 숫자 1개 이상)?
- 두 글자 연산자(`**`, `<=`, `>=`, `==`, `!=`, `:=`)는 한 글자 pushback으로 되돌아감
- ID / NUMBER / CHAR 토큰은 심볼 테이블에 insert-if-absent 로 등록

산출 토큰의 `type`은 파스 테이블의 **단말 이름과 정확히 일치**합니다.
  - 식별자/숫자/문자 리터럴: "ID", "NUMBER", "CHAR"
  - 키워드/연산자/구두점: 리터럴 그대로 (예: "if", "+", ":=")
  - 입력 끝: "$"

API
---
- `Token(type, text, line, col, num_kind=None)`
- `Lexer(text, symtab=None, *, strict_comments=False).next_token() -> Token`
- `tokenize(text, symtab=None) -> Iterator[Token]`   # "$" 토큰까지 산출
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Optional

from ..errors import ErrorKind, LexError
from .cursor import CharCursor
from .symtab import SymbolTable

# ASCII 전용 문자 분류. 언어의 문자 집합은 ASCII + 공백입니다.
_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_DIGITS = frozenset("0123456789")
_IDENT_START = _LETTERS | {"_"}
_IDENT_CONT = _IDENT_START | _DIGITS
_SPACES = frozenset(" \t\n\r\f\v")


def _is_ident_start(ch: Optional[str]) -> bool:
    return ch in _IDENT_START


def _is_ident_continue(ch: Optional[str]) -> bool:
    return ch in _IDENT_CONT


def _is_digit(ch: Optional[str]) -> bool:
    return ch in _DIGITS


def _is_space(ch: Optional[str]) -> bool:
    return ch in _SPACES


# --------- 어휘 범주 ---------

ID = "ID"
NUMBER = "NUMBER"
CHAR = "CHAR"
EOF = "$"


class NumberKind:
    INTEGER = "Integer"
    FLOAT = "Float"


class OperatorKind:
    SUM = "Sum"
    SUB = "Sub"
    MULT = "Mult"
    DIV = "Div"
    EXP = "Exp"
    LPAREN = "LParen"
    RPAREN = "RParen"


class RelopKind:
    GT = "GT"
    LT = "LT"
    GE = "GE"
    LE = "LE"
    EQ = "EQ"
    NE = "NE"


class TypeKind:
    INT = "Int"
    FLOAT = "Float"
    CHAR = "Char"
    VOID = "Void"


OPERATORS = {
    "+": OperatorKind.SUM,
    "-": OperatorKind.SUB,
    "*": OperatorKind.MULT,
    "/": OperatorKind.DIV,
    "**": OperatorKind.EXP,
    "(": OperatorKind.LPAREN,
    ")": OperatorKind.RPAREN,
}

RELOPS = {
    ">": RelopKind.GT,
    "<": RelopKind.LT,
    ">=": RelopKind.GE,
    "<=": RelopKind.LE,
    "==": RelopKind.EQ,
    "!=": RelopKind.NE,
}

PUNCTUATION = {
    ":=": "Assignment",
    ",": "Comma",
    ";": "EndExp",
    "[": "BeginBlock",
    "]": "EndBlock",
}

KEYWORDS = {
    "if": "If",
    "then": "Then",
    "else": "Else",
    "elsif": "Elsif",
    "while": "While",
    "do": "Do",
    "for": "For",
    "int": "Int",
    "float": "Float",
    "char": "Char",
    "void": "Void",
    "main": "Main",
}

TYPE_KEYWORDS = {
    "int": TypeKind.INT,
    "float": TypeKind.FLOAT,
    "char": TypeKind.CHAR,
    "void": TypeKind.VOID,
}

TERMINALS = frozenset({ID, NUMBER, CHAR, EOF}) | frozenset(OPERATORS) \
    | frozenset(RELOPS) | frozenset(PUNCTUATION) | frozenset(KEYWORDS)

# 한 글자로 바로 끝나는 토큰
_SINGLE = frozenset({"(", ")", "/", "+", "-", ",", ";", "[", "]"})

# --------- Public datatypes ---------

@dataclass(frozen=True)
class Token:
    type: str                       # 단말 범주 이름
    text: str                       # 원문 lexeme
    line: int                       # 1-based
    col: int                        # 1-based
    num_kind: Optional[str] = None  # NUMBER 일 때 Integer | Float

    @property
    def value(self) -> str:
        """페이로드 값. CHAR는 따옴표를 벗긴 글자, 그 외는 원문."""
        if self.type == CHAR:
            return self.text[1:-1]
        return self.text

    @property
    def group(self) -> str:
        if self.type == ID:
            return "Id"
        if self.type == NUMBER:
            return "Number"
        if self.type == CHAR:
            return "Char"
        if self.type in OPERATORS:
            return "Operator"
        if self.type in RELOPS:
            return "Relop"
        if self.type in PUNCTUATION:
            return "Punctuation"
        if self.type in KEYWORDS:
            return "Keyword"
        return "Eof"

    @property
    def kind(self) -> Optional[str]:
        """그룹 안에서의 세부 종류(예: Operator → Sum)."""
        if self.type == NUMBER:
            return self.num_kind
        for table in (OPERATORS, RELOPS, PUNCTUATION, KEYWORDS):
            if self.type in table:
                return table[self.type]
        return None

    def __str__(self) -> str:
        if self.type == EOF:
            return "End of file"
        kind = self.kind
        kind_part = f", kind={kind}" if kind is not None else ""
        return (
            f"<{self.group}, value='{self.value}'{kind_part}, "
            f"line={self.line}, column={self.col}>"
        )


# --------- Core implementation ---------

class Lexer:
    """
    Lexer
    =====
    `next_token()`을 부를 때마다 토큰 하나를 돌려주거나 `LexError`를 던집니다.
    복구는 하지 않습니다(첫 오류에서 멈추는 것은 호출자 몫).
    """

    def __init__(self, text: str, symtab: Optional[SymbolTable] = None, *, strict_comments: bool = False):
        self._src = text
        self._cur = CharCursor(text)
        self._symtab = symtab if symtab is not None else SymbolTable()
        self._strict_comments = strict_comments

    @property
    def symtab(self) -> SymbolTable:
        return self._symtab

    # ---- Public API ----
    def next_token(self) -> Token:
        self._skip_blanks()
        cur = self._cur
        start, line, col = cur.pos, cur.line, cur.col

        ch = cur.next()
        if ch is None:
            return Token(EOF, "", line, col)

        if _is_ident_start(ch):
            return self._scan_word(start, line, col)
        if _is_digit(ch):
            return self._scan_number(start, line, col)
        if ch == "'":
            return self._scan_char(start, line, col)
        if ch in _SINGLE:
            return Token(ch, ch, line, col)
        if ch == "*":
            return self._one_or_two("*", "**", line, col)
        if ch == "<":
            return self._one_or_two("<", "<=", line, col)
        if ch == ">":
            return self._one_or_two(">", ">=", line, col)
        if ch == "!":
            return self._require_equal("!=", ErrorKind.INVALID_AFTER_EXCLAMATION, start, line, col)
        if ch == "=":
            return self._require_equal("==", ErrorKind.MISSING_EQUAL, start, line, col)
        if ch == ":":
            return self._require_equal(":=", ErrorKind.MISSING_EQUAL, start, line, col)

        raise self._error(ErrorKind.UNKNOWN_TOKEN, start, line, col)

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == EOF:
                return

    # ---- Internals ----
    def _error(self, kind: str, start: int, line: int, col: int) -> LexError:
        return LexError(kind, self._cur.slice_from(start), line, col, src=self._src)

    def _unread(self, ch: Optional[str]) -> None:
        """입력 끝(None)이 아니면 방금 읽은 글자를 되돌린다."""
        if ch is not None:
            self._cur.pushback()

    def _intern(self, tok: Token) -> Token:
        self._symtab.intern(tok)
        return tok

    def _skip_blanks(self) -> None:
        cur = self._cur
        while True:
            ch = cur.peek()
            if _is_space(ch):
                cur.next()
                continue
            if ch == "{":
                start, line, col = cur.pos, cur.line, cur.col
                cur.next()
                if cur.peek() == "%":
                    cur.next()
                    self._skip_comment(start, line, col)
                    continue
                # 주석이 아님: '{'를 돌려놓고 토큰 인식에 맡긴다
                cur.pushback()
            return

    def _skip_comment(self, start: int, line: int, col: int) -> None:
        cur = self._cur
        while True:
            ch = cur.next()
            if ch is None:
                if self._strict_comments:
                    raise LexError(ErrorKind.UNCLOSED_COMMENT, "{%", line, col, src=self._src)
                return
            if ch == "%" and cur.peek() == "}":
                cur.next()
                return

    def _scan_word(self, start: int, line: int, col: int) -> Token:
        cur = self._cur
        while True:
            ch = cur.next()
            if not _is_ident_continue(ch):
                self._unread(ch)
                break
        text = cur.slice_from(start)
        if text in KEYWORDS:
            return Token(text, text, line, col)
        return self._intern(Token(ID, text, line, col))

    def _scan_number(self, start: int, line: int, col: int) -> Token:
        """
        상태
        ----
        int   : 정수부 숫자들
        dot   : '.' 직후 (숫자 필수)
        frac  : 소수부 숫자들
        exp   : 'E' 직후 (부호 또는 숫자 필수)
        sign  : 지수 부호 직후 (숫자 필수)
        edig  : 지수부 숫자들
        """
        cur = self._cur
        state = "int"
        while True:
            ch = cur.next()
            if state == "int":
                if _is_digit(ch):
                    continue
                if ch == ".":
                    state = "dot"
                    continue
                if ch == "E":
                    state = "exp"
                    continue
                break
            if state == "dot":
                if _is_digit(ch):
                    state = "frac"
                    continue
                self._unread(ch)
                raise self._error(ErrorKind.FRACTION_ENDED_WITH_DOT, start, line, col)
            if state == "frac":
                if _is_digit(ch):
                    continue
                if ch == "E":
                    state = "exp"
                    continue
                break
            if state == "exp":
                if ch in ("+", "-"):
                    state = "sign"
                    continue
                if _is_digit(ch):
                    state = "edig"
                    continue
                self._unread(ch)
                raise self._error(ErrorKind.ENDED_WITH_EXPONENT, start, line, col)
            if state == "sign":
                if _is_digit(ch):
                    state = "edig"
                    continue
                self._unread(ch)
                raise self._error(ErrorKind.ENDED_AFTER_EXPONENT_SIGN, start, line, col)
            # edig
            if _is_digit(ch):
                continue
            break

        self._unread(ch)
        kind = NumberKind.INTEGER if state == "int" else NumberKind.FLOAT
        return self._intern(Token(NUMBER, cur.slice_from(start), line, col, num_kind=kind))

    def _scan_char(self, start: int, line: int, col: int) -> Token:
        cur = self._cur
        body = cur.next()
        if body is None or body == "'":
            raise self._error(ErrorKind.UNCLOSED_CHAR, start, line, col)
        close = cur.next()
        if close != "'":
            self._unread(close)
            raise self._error(ErrorKind.UNCLOSED_CHAR, start, line, col)
        return self._intern(Token(CHAR, cur.slice_from(start), line, col))

    def _one_or_two(self, single: str, double: str, line: int, col: int) -> Token:
        ch = self._cur.next()
        if ch == double[1]:
            return Token(double, double, line, col)
        self._unread(ch)
        return Token(single, single, line, col)

    def _require_equal(self, double: str, err: str, start: int, line: int, col: int) -> Token:
        ch = self._cur.next()
        if ch == "=":
            return Token(double, double, line, col)
        self._unread(ch)
        raise self._error(err, start, line, col)


# Convenience
def tokenize(text: str, symtab: Optional[SymbolTable] = None) -> Iterator[Token]:
    """입력 끝("$") 토큰까지 차례로 산출. 어휘 오류는 그 자리에서 `LexError`."""
    return iter(Lexer(text, symtab))
