from __future__ import annotations
from typing import Dict, Iterable, Optional, Set, List, Tuple
from dataclasses import dataclass
from ..grammar.bnf import BNF

EOF = "$"


@dataclass
class FFResult:
    """
    FFResult
    ========
    FIRST/FOLLOW/NULLABLE 계산 결과를 담는 단순 컨테이너입니다.

    - nullable: ε-생산 가능한 비단말 집합 (이름 기반)
    - first: 각 **심볼 이름** → FIRST 집합(단말 이름들의 집합)
      * 비단말 A: FIRST(A)
      * 단말 a: FIRST(a) = { a }
    - follow: 각 **비단말 이름** → FOLLOW 집합(단말 이름들의 집합)
      * 진입점으로 쓰일 수 있는 비단말에는 항상 '$'가 포함됩니다.
    """
    nullable: Set[str]
    first: Dict[str, Set[str]]
    follow: Dict[str, Set[str]]

    def first_of_sequence(self, seq: List[str]) -> Tuple[Set[str], bool]:
        """시퀀스 seq의 FIRST 집합과 seq 전체가 nullable인지 여부."""
        out: Set[str] = set()
        for X in seq:
            out |= self.first[X]
            if X not in self.nullable:
                return out, False
        return out, True


def compute_nullable_first_follow(bnf: BNF, entry_points: Optional[Iterable[str]] = None) -> FFResult:
    """
    compute_nullable_first_follow
    =============================
    번역 스킴 BNF에 대해 NULLABLE/FIRST/FOLLOW 집합을 계산합니다.
    Action/Epsilon 기호는 폭이 0이므로 계산에서 **제외**합니다.

    entry_points
    ------------
    '$'를 FOLLOW에 넣을 비단말 목록. None이면 **모든 비단말**입니다.
    파서는 임의의 비단말에서 시작할 수 있어야 하므로(부분 문법 진입점)
    기본값은 전체입니다.

    계산 순서
    ---------
    1) NULLABLE + FIRST: 한 고정점 루프에서 함께 갱신
       (A -> X1..Xn 에서 X1..Xk-1 이 모두 nullable이면 FIRST(Xk) ⊆ FIRST(A))
    2) FOLLOW: A -> α B β 마다 FIRST(β) ⊆ FOLLOW(B),
       β가 nullable이면 FOLLOW(A) ⊆ FOLLOW(B) (고정점)
    """
    nonterms = set(bnf.nonterms)
    seqs = [(p.lhs, p.grammar_names()) for p in bnf.prods]

    res = FFResult(nullable=set(), first={}, follow={})
    for t in set(bnf.terms) | {EOF}:
        res.first[t] = {t}
    for A in nonterms:
        res.first[A] = set()
        res.follow[A] = set()

    # ---- NULLABLE / FIRST ----
    dirty = True
    while dirty:
        dirty = False
        for A, alpha in seqs:
            seq_first, seq_nullable = res.first_of_sequence(alpha)
            if not seq_first <= res.first[A]:
                res.first[A] |= seq_first
                dirty = True
            if seq_nullable and A not in res.nullable:
                res.nullable.add(A)
                dirty = True

    # ---- FOLLOW ----
    for A in (nonterms if entry_points is None else entry_points):
        res.follow[A].add(EOF)

    dirty = True
    while dirty:
        dirty = False
        for A, alpha in seqs:
            for i, B in enumerate(alpha):
                if B not in nonterms:
                    continue
                rest_first, rest_nullable = res.first_of_sequence(alpha[i + 1:])
                grow = rest_first | (res.follow[A] if rest_nullable else set())
                if not grow <= res.follow[B]:
                    res.follow[B] |= grow
                    dirty = True

    return res
