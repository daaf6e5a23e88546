# toyc/__init__.py
"""toyc – toy 절차형 언어 프런트엔드.

This package provides:
- A hand-written DFA lexer with a caller-owned symbol table
- The fixed LL(1) grammar of the language and its parse table
- An explicit-stack LL(1) parser that builds the AST through semantic actions
"""

from .errors import ActionError, ErrorKind, GrammarConflictError, LexError, ParseError
from .lex import Lexer, Token, tokenize
from .lex.symtab import SymbolTable
from .ll1.runtime import Parser, parse
from .tree import dump
