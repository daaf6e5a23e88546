# toyc/grammar/toy.py
"""toy 언어의 고정 LL(1) 문법(번역 스킴).

식 문법은 좌재귀를 없앤 우재귀 프라임 비단말(E', T', F')로 적습니다.
동작(@...)은 우변에서 필요한 값이 모두 AST 스택에 올라온 지점에 놓입니다.
목록(decls, ids, stmts)은 꼬리부터 만들어지므로 @append_list 가 항목을
**앞에** 끼워 넣어 원문 순서를 유지합니다.
"""

from __future__ import annotations
from functools import lru_cache

from ..lex import TERMINALS
from ..ll1.symbols import ActionKind
from .bnf import BNF
from .parser import parse_scheme

TOY_GRAMMAR = r"""
%start program;

// ---- 프로그램 / 블록 / 선언 ----
program   : ret_type "main" "(" ")" block @make_program ;
ret_type  : type | "void" ;
type      : "int" | "float" | "char" ;
block     : "[" decls stmts "]" @make_block ;
decls     : decl decls @append_list
          | @make_list ;
decl      : type ids ";" @make_decl ;
ids       : ID ids_tail @append_list ;
ids_tail  : "," ID ids_tail @append_list
          | @make_list ;

// ---- 명령 ----
stmts     : stmt stmts @append_list
          | @make_list ;
stmt      : cmd_atrib | cmd_if | cmd_while | cmd_do | cmd_for | block ;
cmd_atrib : ID ":=" E ";" @assign ;
cmd_if    : "if" "(" cond ")" "then" block if_tail ;
if_tail   : "elsif" "(" cond ")" "then" block if_tail @make_if_else   // elsif → else 쪽의 중첩 If
          | "else" block @make_if_else
          | @make_if ;
cmd_while : "while" "(" cond ")" "do" stmt @make_while ;
cmd_do    : "do" stmt "while" "(" cond ")" ";" @make_do_while ;
cmd_for   : "for" "(" ID ";" NUMBER ";" NUMBER ";" E ")" stmt @make_for ;

// ---- 조건 ----
cond      : E relop E @make_cond ;
relop     : ">" | "<" | ">=" | "<=" | "==" | "!=" ;

// ---- 식 ----
E         : T E' ;
E'        : "+" T @add E'
          | "-" T @sub E'
          | ε ;
T         : F T' ;
T'        : "*" F @mul T'
          | "/" F @div T'
          | ε ;
F         : U F' ;
F'        : "**" U @pow F'
          | ε ;
U         : ID | NUMBER | CHAR
          | "(" E ")"
          | "-" U @neg ;
"""


@lru_cache(maxsize=None)
def load_toy_grammar() -> BNF:
    """내장 문법을 한 번만 읽어 `BNF`로 돌려줍니다."""
    return parse_scheme(TOY_GRAMMAR, TERMINALS, ActionKind.all())
