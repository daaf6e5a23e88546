# toyc/tree.py
"""toy 언어 AST
- 모든 노드는 불변(frozen). 복합 노드는 자식을 단독 소유합니다.
- TypeWrapper / CondWrapper / NodeList 는 파싱 도중에만 존재하는 **보조 노드**로,
  완성된 트리에는 절대 남지 않습니다.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from typing import List, Optional, Tuple, Union

from .lex import OperatorKind, RelopKind, TypeKind  # noqa: F401  (재노출)

# ---- 식 ----

@dataclass(frozen=True)
class Number:
    value: str      # 원문 그대로 (예: "54.90E-22")

@dataclass(frozen=True)
class Identifier:
    name: str

@dataclass(frozen=True)
class Literal:
    value: str      # 문자 하나

@dataclass(frozen=True)
class UnaryOp:
    """단항 부호 반전(-) 전용."""
    expr: "Node"

@dataclass(frozen=True)
class BinaryOp:
    op: str         # OperatorKind
    left: "Node"
    right: "Node"

@dataclass(frozen=True)
class BinaryComp:
    relop: str      # RelopKind
    left: "Node"
    right: "Node"

# ---- 명령 / 구조 ----

@dataclass(frozen=True)
class Assignment:
    name: str
    expr: "Node"

@dataclass(frozen=True)
class VarDecl:
    type: str       # TypeKind
    names: Tuple[str, ...] = ()

@dataclass(frozen=True)
class Block:
    decls: Tuple["Node", ...] = ()
    stmts: Tuple["Node", ...] = ()

@dataclass(frozen=True)
class If:
    cond: "Node"
    then_branch: "Node"
    else_branch: Optional["Node"] = None

@dataclass(frozen=True)
class While:
    cond: "Node"
    body: "Node"

@dataclass(frozen=True)
class DoWhile:
    body: "Node"
    cond: "Node"

@dataclass(frozen=True)
class For:
    name: str
    start: int
    end: int
    step: "Node"
    body: "Node"

@dataclass(frozen=True)
class Program:
    type: str       # TypeKind
    body: "Node"

# ---- 보조 노드(파싱 중에만) ----

@dataclass(frozen=True)
class TypeWrapper:
    type: str

@dataclass(frozen=True)
class CondWrapper:
    relop: str

@dataclass(frozen=True)
class NodeList:
    items: Tuple["Node", ...] = ()


Node = Union[
    Number, Identifier, Literal, UnaryOp, BinaryOp, BinaryComp,
    Assignment, VarDecl, Block, If, While, DoWhile, For, Program,
]
HELPER_NODES = (TypeWrapper, CondWrapper, NodeList)


def is_helper(node: object) -> bool:
    return isinstance(node, HELPER_NODES)


# ---- 출력 ----

def dump(node: object, indent: int = 0) -> str:
    """AST를 들여쓴 트리 문자열로 바꿉니다.

    예)
        ├─ BinaryOp: op=Mult
          ├─ left: Identifier: x
          ├─ right: Number: 2
    """
    lines: List[str] = []
    _dump_into(lines, node, indent, None)
    return "\n".join(lines)


def _dump_into(lines: List[str], node: object, indent: int, label: Optional[str]) -> None:
    pad = "  " * indent
    prefix = f"{pad}├─ " + (f"{label}: " if label else "")

    if isinstance(node, (Number, Literal)):
        lines.append(f"{prefix}{type(node).__name__}: {node.value}")
        return
    if isinstance(node, Identifier):
        lines.append(f"{prefix}Identifier: {node.name}")
        return
    if isinstance(node, tuple):
        lines.append(f"{prefix}[{len(node)}]")
        for item in node:
            _dump_into(lines, item, indent + 1, None)
        return
    if node is None:
        lines.append(f"{prefix}-")
        return

    # 스칼라 필드는 머리줄에, 노드 필드는 자식 줄로
    scalars: List[str] = []
    children = []
    for f in fields(node):
        v = getattr(node, f.name)
        if isinstance(v, (str, int)) or (isinstance(v, tuple) and all(isinstance(x, str) for x in v) and v):
            scalars.append(f"{f.name}={v}" if not isinstance(v, tuple) else f"{f.name}={', '.join(v)}")
        else:
            children.append((f.name, v))
    head = type(node).__name__
    if scalars:
        head += ": " + " ".join(scalars)
    lines.append(prefix + head)
    for name, v in children:
        _dump_into(lines, v, indent + 1, name)
