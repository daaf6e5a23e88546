# toyc/toycc.py
"""toycc – toyc CLI

사용 예)
    $ python -m toyc.toycc lex tests/toy_test/hello.toy
    $ python -m toyc.toycc parse --text "x := 5 - 6;" --start cmd_atrib
    $ python -m toyc.toycc parse tests/toy_test/hello.toy --symbols -D
    $ python -m toyc.toycc check -D

기능
----
- lex   : 원문을 토큰으로 나눠 한 줄에 하나씩 출력('$' 또는 첫 어휘 오류까지)
- parse : 원문을 파싱해 AST를 들여쓴 트리로 출력
- check : 내장 문법으로 LL(1) 테이블을 만들어 충돌 유무와 요약을 출력

디버그 모드(-D/--debug)를 켜면 파서의 전개/매치/동작 과정과
FIRST/FOLLOW 집합을 stderr로 출력합니다.
"""

from __future__ import annotations
import argparse
import sys
from typing import Optional

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _read_source(args) -> str:
    """--text 가 있으면 그대로, 아니면 파일을 읽는다."""
    if args.text is not None:
        return args.text
    from .grammar.loader import load_source_text
    return load_source_text(args.file)

# ------------------------------
# 디버그 출력 헬퍼
# ------------------------------

def _print_bnf_summary(bnf) -> None:
    _eprint("\n[BNF]")
    _eprint(f"Start: {bnf.start}")
    _eprint("Terminals:")
    _eprint("  " + ", ".join(sorted(bnf.terms)))
    _eprint("Nonterminals:")
    _eprint("  " + ", ".join(bnf.nonterms))
    _eprint(f"Productions: {len(bnf.prods)}")


def _print_first_follow(bnf, ff) -> None:
    _eprint("\n[NULLABLE]")
    _eprint("  " + (", ".join(sorted(ff.nullable)) or "(none)"))
    _eprint("\n[FIRST / FOLLOW]")
    for A in bnf.nonterms:
        _eprint(f"  {A:>10} : FIRST={{{', '.join(sorted(ff.first[A]))}}}"
                f"  FOLLOW={{{', '.join(sorted(ff.follow[A]))}}}")


def _print_symbols(symtab) -> None:
    print("\n[Symbols]")
    if not len(symtab):
        print("  (empty)")
    for key, tok in symtab.items():
        print(f"  {key!r:<12} {tok}")

# ------------------------------
# 커맨드 구현
# ------------------------------

def cmd_lex(args) -> int:
    """원문을 토크나이즈해 결과를 표준출력으로 보여줍니다."""
    from .lex import EOF, Lexer
    try:
        text = _read_source(args)
        lx = Lexer(text, strict_comments=args.strict_comments)
        i = 0
        while True:
            tok = lx.next_token()
            print(f"{i:03d}: {tok}")
            if tok.type == EOF:
                break
            i += 1
        return 0
    except SyntaxError as e:
        _eprint("[LEX ERROR]", str(e))
        return 2
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2


def cmd_parse(args) -> int:
    from .errors import LexError
    from .lex.symtab import SymbolTable
    from .ll1.runtime import Parser
    from .tree import dump

    symtab = SymbolTable()
    try:
        text = _read_source(args)
        parser = Parser(text, symtab, start=args.start, debug=args.debug,
                        strict_comments=args.strict_comments)
        if args.debug: _eprint(f"[DEBUG] start={parser.start} bytes={len(text)}")
        root = parser.parse()
    except LexError as e:
        _eprint("[LEX ERROR]")
        _eprint(str(e))
        return 2
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    print(dump(root))
    if args.symbols:
        _print_symbols(symtab)
    return 0


def cmd_check(args) -> int:
    from .grammar.toy import load_toy_grammar
    from .ll1.first_follow import compute_nullable_first_follow
    from .ll1.table import build_parse_table

    try:
        bnf = load_toy_grammar()
        if args.debug: _eprint("[DEBUG] BNF ready | terms=%d nonterms=%d rules=%d" %
                              (len(bnf.terms), len(bnf.nonterms), len(bnf.prods)))
        ff = compute_nullable_first_follow(bnf)
        if args.debug: _eprint("[DEBUG] FIRST/FOLLOW/NULLABLE computed")
        tbl = build_parse_table(bnf, ff)
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2
    except Exception as e:
        # GrammarConflictError 의 메시지에 충돌 목록이 모두 들어 있다
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    if args.debug:
        _print_bnf_summary(bnf)
        _print_first_follow(bnf, ff)

    print(f"[CHECK OK] parser=ll1 start={tbl.start} terms={len(bnf.terms)} "
          f"nonterms={len(bnf.nonterms)} prods={len(bnf.prods)} cells={len(tbl.cells)} "
          f"conflicts={len(tbl.conflicts)}")
    return 0


# ------------------------------
# 엔트리포인트
# ------------------------------

def _add_source_args(p: argparse.ArgumentParser) -> None:
    src_group = p.add_mutually_exclusive_group(required=True)
    src_group.add_argument("file", nargs="?", help="원문 파일 경로")
    src_group.add_argument("--text", help="직접 입력 텍스트")
    p.add_argument("--strict-comments", action="store_true",
                   help="닫히지 않은 {%% 주석을 어휘 오류로 처리")


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="toycc", description="toy language front end (lexer + LL(1) parser)")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_lex = sub.add_parser("lex", help="원문을 토크나이즈합니다")
    _add_source_args(p_lex)
    p_lex.set_defaults(func=cmd_lex)

    p_parse = sub.add_parser("parse", help="원문을 파싱해 AST를 출력합니다")
    _add_source_args(p_parse)
    p_parse.add_argument("--start", default="program", help="시작 비단말(기본: program)")
    p_parse.add_argument("--symbols", action="store_true", help="심볼 테이블도 출력")
    p_parse.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_parse.set_defaults(func=cmd_parse)

    p_check = sub.add_parser("check", help="내장 문법의 LL(1) 테이블을 만들고 충돌 유무를 확인합니다")
    p_check.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_check.set_defaults(func=cmd_check)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
