"""문법 기호 모델: 파스 테이블과 파서 심볼 스택이 쓰는 어휘."""
from __future__     import annotations
from dataclasses    import dataclass
from typing         import Union


class ActionKind:
    """
    ActionKind
    ==========
    프로덕션 우변에 끼워 넣는 **의미 동작** 종류(폭 0인 기호).
    문법 기술 언어에서는 `@이름`으로 씁니다.

    - 산술:   add, sub, mul, div, pow, neg
    - 명령:   assign, make_block, make_if, make_if_else, make_while,
              make_do_while, make_for
    - 목록:   make_list, append_list
    - 기타:   make_decl, make_cond, make_program
    """
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    POW = "pow"
    NEG = "neg"

    ASSIGN = "assign"
    MAKE_BLOCK = "make_block"
    MAKE_IF = "make_if"
    MAKE_IF_ELSE = "make_if_else"
    MAKE_WHILE = "make_while"
    MAKE_DO_WHILE = "make_do_while"
    MAKE_FOR = "make_for"

    MAKE_LIST = "make_list"
    APPEND_LIST = "append_list"
    MAKE_DECL = "make_decl"
    MAKE_COND = "make_cond"

    MAKE_PROGRAM = "make_program"

    @classmethod
    def all(cls) -> frozenset:
        return frozenset(v for k, v in vars(cls).items() if k.isupper())


@dataclass(frozen=True)
class Terminal:
    name: str   # 토큰 범주 이름(= Token.type)

    def __str__(self) -> str:
        return repr(self.name) if not self.name.isupper() else self.name


@dataclass(frozen=True)
class NonTerminal:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Epsilon:
    def __str__(self) -> str:
        return "ε"


@dataclass(frozen=True)
class End:
    """입력 끝 표시('$'). 심볼 스택 바닥에 한 번 놓입니다."""
    def __str__(self) -> str:
        return "$"


@dataclass(frozen=True)
class Action:
    kind: str   # ActionKind 값

    def __str__(self) -> str:
        return f"@{self.kind}"


Symbol = Union[Terminal, NonTerminal, Epsilon, End, Action]

EPSILON = Epsilon()
END = End()
