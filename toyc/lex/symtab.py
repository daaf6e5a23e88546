# toyc/lex/symtab.py
"""렉서가 식별자/숫자/문자 리터럴을 등록(intern)하는 심볼 테이블.

- 키는 토큰의 값(식별자 이름, 숫자 원문, 따옴표를 벗긴 문자 하나).
  그래서 식별자 `x` 와 문자 리터럴 `'x'` 는 한 항목을 공유합니다
- **처음 등록된 토큰이 이긴다**(insert-if-absent). 이후 같은 원문은 기존 항목을 재사용
- 호출자가 소유하고, 파싱이 끝난 뒤에도 조회할 수 있습니다.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterator, Optional, Tuple

if TYPE_CHECKING:
    from . import Token


@dataclass
class SymbolTable:
    _entries: Dict[str, "Token"] = field(default_factory=dict)

    def intern(self, tok: "Token") -> "Token":
        """tok.value 키가 없을 때만 넣고, 테이블에 남은 항목을 돌려준다."""
        return self._entries.setdefault(tok.value, tok)

    def lookup(self, text: str) -> Optional["Token"]:
        return self._entries.get(text)

    def items(self) -> Iterator[Tuple[str, "Token"]]:
        return iter(self._entries.items())

    def __contains__(self, text: object) -> bool:
        return text in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"SymbolTable({list(self._entries)})"
