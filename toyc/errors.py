# toyc/errors.py
"""toyc 진단(에러) 타입.

두 계열을 구분합니다.

- 사용자 입력 오류 → 내장 `SyntaxError` 하위 클래스
  - `LexError`   : 어휘 분석 실패 (부분 lexeme, 종류, 위치)
  - `ParseError` : 구문 분석 실패 (기대 단말, 실제 토큰, 위치)
- 내부 불일치 → 내장 `RuntimeError` 하위 클래스
  - `ActionError`          : 의미 동작 실행 중 AST 스택 모양 위반(문법/동작 짝 불일치)
  - `GrammarConflictError` : LL(1) 테이블 한 칸에 두 프로덕션이 충돌

모든 오류는 첫 발생 시 즉시 전파되며 복구를 시도하지 않습니다.
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple


class ErrorKind:
    """어휘 오류 종류(표시용 이름 그대로 사용)."""
    UNCLOSED_CHAR = "UnclosedChar"
    INVALID_AFTER_EXCLAMATION = "InvalidTokenAfterExclamation"
    FRACTION_ENDED_WITH_DOT = "FractionEndedWithADot"
    ENDED_WITH_EXPONENT = "EndedWithEExpoent"
    ENDED_AFTER_EXPONENT_SIGN = "EndedAfterExpoentSign"
    MISSING_EQUAL = "MissingEqual"
    UNKNOWN_TOKEN = "UnknownToken"
    # strict_comments=True 일 때만 발생
    UNCLOSED_COMMENT = "UnclosedComment"


def _line_bounds(src: str, pos: int) -> Tuple[int, int]:
    """pos가 속한 라인의 [start, end) 범위를 반환."""
    start = src.rfind("\n", 0, pos)
    start = 0 if start < 0 else start + 1
    end = src.find("\n", pos)
    end = len(src) if end < 0 else end
    return start, end


def caret_snippet(src: Optional[str], line: int, col: int) -> str:
    """(line, col) 위치에 캐럿(^)을 찍은 스니펫을 생성. 원문이 없으면 빈 문자열."""
    if not src or line < 1:
        return ""
    pos = 0
    for _ in range(line - 1):
        nl = src.find("\n", pos)
        if nl < 0:
            return ""
        pos = nl + 1
    start, end = _line_bounds(src, pos)
    text = src[start:end]
    caret = " " * max(col - 1, 0) + "^"
    return f"{text}\n{caret}"


class LexError(SyntaxError):
    """어휘 오류. `kind`는 `ErrorKind` 중 하나."""

    def __init__(self, kind: str, lexeme: str, line: int, col: int, src: Optional[str] = None):
        self.kind = kind
        self.lexeme = lexeme
        self.line = line
        self.col = col
        msg = f"Lexical error at {line}:{col}: {kind} (lexeme {lexeme!r})"
        snippet = caret_snippet(src, line, col)
        if snippet:
            msg += "\n" + snippet
        super().__init__(msg)


class ParseError(SyntaxError):
    """구문 오류. `expected`는 기대했던 단말 범주 목록(정렬됨)."""

    def __init__(
        self,
        message: str,
        line: int,
        col: int,
        *,
        found=None,
        expected: Sequence[str] = (),
        src: Optional[str] = None,
    ):
        self.line = line
        self.col = col
        self.found = found
        self.expected: List[str] = sorted(expected)
        msg = f"Parse error at {line}:{col}: {message}"
        snippet = caret_snippet(src, line, col)
        if snippet:
            msg += "\n" + snippet
        super().__init__(msg)


class ActionError(RuntimeError):
    """의미 동작이 기대한 AST 스택 모양을 찾지 못했을 때(내부 오류)."""

    def __init__(self, action: str, message: str, line: int = 0, col: int = 0):
        self.action = action
        self.line = line
        self.col = col
        super().__init__(f"Internal error in action @{action} at {line}:{col}: {message}")


class GrammarConflictError(RuntimeError):
    """LL(1) 테이블 작성 중 한 칸에 둘 이상의 프로덕션이 들어가려 할 때."""

    def __init__(self, report: str):
        self.report = report
        super().__init__("Grammar is not LL(1):\n" + report)
