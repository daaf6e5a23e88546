# table.py
"""LL(1) 파스 테이블: (비단말, lookahead 범주) → 프로덕션."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Tuple, List, Optional, Iterator

from ..errors import GrammarConflictError
from ..grammar.bnf import BNF, Production
from .first_follow import FFResult, compute_nullable_first_follow


@dataclass
class ParseTable:
    """
    ParseTable
    ==========
    예측 파서가 조회하는 표와 작성 중 발견한 충돌 기록.

    필드
    ----
    - cells    : (nonterm, term) -> Production
    - start    : 기본 시작 비단말(문법의 %start)
    - nonterms : 테이블이 아는 비단말 이름(선언 순서)
    - conflicts: (nonterm, term, 기존 프로덕션, 새 프로덕션)

    사용
    ----
    - 런타임 파서는 get_entry 로 전개할 프로덕션을 고릅니다.
    - 에러 메시지의 expected-set 은 expected(nonterm) 로 계산합니다.
    """
    start: str
    nonterms: List[str] = field(default_factory=list)
    cells: Dict[Tuple[str, str], Production] = field(default_factory=dict)
    conflicts: List[Tuple[str, str, Production, Production]] = field(default_factory=list)

    def set_entry(self, non_terminal: str, lookahead: str, production: Production) -> None:
        """칸을 넣거나 덮어씁니다."""
        self.cells[(non_terminal, lookahead)] = production

    def get_entry(self, non_terminal: str, lookahead: str) -> Optional[Production]:
        return self.cells.get((non_terminal, lookahead))

    def expected(self, non_terminal: str) -> List[str]:
        """non_terminal 행에 칸이 있는 lookahead 범주들(정렬)."""
        return sorted(t for (nt, t) in self.cells if nt == non_terminal)

    def rows(self) -> Iterator[Tuple[str, List[Tuple[str, Production]]]]:
        for nt in self.nonterms:
            row = sorted((t, p) for (n, t), p in self.cells.items() if n == nt)
            yield nt, row

    def pretty_conflicts(self) -> str:
        """
        충돌 목록을 사람이 읽기 좋은 문자열로 변환합니다.
        충돌이 없으면 '(no conflicts)' 반환.
        """
        if not self.conflicts:
            return "(no conflicts)"
        lines: List[str] = []
        for nt, term, old, new in self.conflicts:
            lines.append(f"[{nt}, {term}]: {old}  /  {new}")
        return "\n".join(lines)


def build_parse_table(bnf: BNF, ff: Optional[FFResult] = None) -> ParseTable:
    """
    BNF(번역 스킴)로부터 LL(1) 테이블을 **결정적으로** 작성합니다.

    A -> α 마다
      - FIRST(α)의 각 단말 a 에 대해 M[A, a] = A -> α
      - α가 nullable이면 FOLLOW(A)의 각 단말 b 에 대해 M[A, b] = A -> α

    한 칸에 두 프로덕션이 들어가려 하면 모두 기록한 뒤
    `GrammarConflictError`를 던집니다(LL(1)이 아닌 문법).
    """
    if ff is None:
        ff = compute_nullable_first_follow(bnf)

    table = ParseTable(start=bnf.start, nonterms=list(bnf.nonterms))
    for p in bnf.prods:
        first, is_nullable = ff.first_of_sequence(p.grammar_names())
        lookaheads = set(first)
        if is_nullable:
            lookaheads |= ff.follow[p.lhs]
        for a in sorted(lookaheads):
            old = table.get_entry(p.lhs, a)
            if old is not None and old != p:
                table.conflicts.append((p.lhs, a, old, p))
                continue
            table.set_entry(p.lhs, a, p)

    if table.conflicts:
        raise GrammarConflictError(table.pretty_conflicts())
    return table
