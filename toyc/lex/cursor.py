# toyc/lex/cursor.py
"""문자 커서: 렉서 DFA가 한 글자씩 당겨 쓰는 원문 버퍼.

- `next()`     : 다음 글자를 돌려주고 전진. 개행이면 line+1, col=1. 끝이면 None.
- `peek()`     : 소비하지 않고 다음 글자를 본다(한 칸 lookahead).
- `pushback()` : 직전에 소비한 글자 하나를 되돌린다(직전 line/col 복원).
                 되돌릴 수 있는 깊이는 정확히 1 이다.
"""

from __future__ import annotations
from typing import Optional, Tuple


class CharCursor:
    def __init__(self, text: str, *, line: int = 1, col: int = 1):
        self._text = text
        self._pos = 0
        self._line = line
        self._col = col
        # 마지막 next() 직전의 (line, col). pushback 한 번 하면 None.
        self._prev: Optional[Tuple[int, int]] = None

    # ---- Public API ----
    def next(self) -> Optional[str]:
        if self._pos >= len(self._text):
            self._prev = None
            return None
        ch = self._text[self._pos]
        self._prev = (self._line, self._col)
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def peek(self) -> Optional[str]:
        if self._pos >= len(self._text):
            return None
        return self._text[self._pos]

    def pushback(self) -> None:
        if self._prev is None:
            raise RuntimeError("pushback without a preceding next() (depth is limited to one character)")
        self._pos -= 1
        self._line, self._col = self._prev
        self._prev = None

    # ---- 조회 ----
    @property
    def pos(self) -> int:
        return self._pos

    @property
    def line(self) -> int:
        return self._line

    @property
    def col(self) -> int:
        return self._col

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self._text)

    def slice_from(self, start: int) -> str:
        """start 부터 현재 위치 직전까지의 원문(lexeme)."""
        return self._text[start:self._pos]
