# toyc/grammar/bnf.py
"""번역 스킴(translation scheme) 형태의 BNF 컨테이너."""

from __future__     import annotations
from dataclasses    import dataclass
from typing         import Dict, List, Tuple

from ..ll1.symbols  import Symbol, Terminal, NonTerminal, Epsilon, Action


@dataclass(frozen=True)
class Production:
    """
    BNF 프로덕션 1개.
    - lhs: 좌변 비단말 이름
    - rhs: 우변 기호 튜플. 단말/비단말 사이에 Action(폭 0)이 끼어들 수 있음
      ε는 빈 튜플 또는 Epsilon 기호 하나로 표현
    """
    lhs: str
    rhs: Tuple[Symbol, ...]

    def grammar_names(self) -> List[str]:
        """FIRST/FOLLOW 계산용: Action/Epsilon을 뺀 단말·비단말 이름 시퀀스."""
        out: List[str] = []
        for s in self.rhs:
            if isinstance(s, (Terminal, NonTerminal)):
                out.append(s.name)
        return out

    def __str__(self) -> str:
        rhs = " ".join(str(s) for s in self.rhs if not isinstance(s, Epsilon))
        return f"{self.lhs} -> {rhs or 'ε'}"


@dataclass
class BNF:
    start: str
    prods: List[Production]
    terms: List[str]
    nonterms: List[str]

    def by_lhs(self) -> Dict[str, List[Production]]:
        out: Dict[str, List[Production]] = {}
        for p in self.prods:
            out.setdefault(p.lhs, []).append(p)
        return out

    def actions(self) -> List[str]:
        seen: List[str] = []
        for p in self.prods:
            for s in p.rhs:
                if isinstance(s, Action) and s.kind not in seen:
                    seen.append(s.kind)
        return seen
