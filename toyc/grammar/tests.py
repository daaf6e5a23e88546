from __future__ import annotations
from .bnf import BNF
from .toy import load_toy_grammar
from ..ll1.first_follow import compute_nullable_first_follow
from ..ll1.table import build_parse_table
from ..ll1.runtime import Parser
from ..errors import ActionError
from ..tree import dump


def _print_bnf(b: BNF) -> None:
    print(f"\n[BNF]")
    print(f"Start: {b.start}")
    by_lhs = b.by_lhs()
    for lhs in b.nonterms:
        for p in by_lhs.get(lhs, []):
            print(p)
    print("\n[Terminals]")
    print(", ".join(sorted(b.terms)))
    print("\n[Nonterminals]")
    print(", ".join(b.nonterms))
    print("\n[Actions]")
    print(", ".join(b.actions()))

def _print_first_follow(bnf):
    """FIRST/FOLLOW/NULLABLE을 계산해 보기 좋게 출력합니다."""
    ff = compute_nullable_first_follow(bnf)

    print("\n[NULLABLE]")
    print(", ".join(sorted(ff.nullable)) if ff.nullable else "(none)")

    print("\n[FIRST(nonterminals)]")
    for A in bnf.nonterms:
        items = sorted(ff.first[A])
        print(f"{A:>10} : {{{', '.join(items)}}}")

    print("\n[FOLLOW(nonterminals)]")
    for A in bnf.nonterms:
        items = sorted(ff.follow[A])
        print(f"{A:>10} : {{{', '.join(items)}}}")

def _print_ll1_table(bnf):
    """LL(1) 테이블을 만들고 칸 수/충돌/일부 행을 요약 출력합니다."""
    tbl = build_parse_table(bnf)

    print("\n[LL(1) Table]")
    print(f"Cells: {len(tbl.cells)}")
    print(f"Conflicts: {len(tbl.conflicts)}")

    # 식 행 샘플(디버깅)
    for nt, row in tbl.rows():
        if nt not in ("E'", "T'", "U"):
            continue
        print(f"\n[{nt}]")
        for t, p in row:
            print(f"  on {t:>6} -> {p}")

def _run_runtime_smoke():
    """스택 머신으로 간단한 입력을 파싱해 성공/에러를 확인."""
    ok_inputs = [
        ("E", "-6"),
        ("E", "-(x * 2)"),
        ("E", "1+2*3+(4*5)"),
        ("E", "2 ** 3 ** 2"),
        ("cmd_atrib", "x := 5 - 6;"),
        ("cond", "a <= b + 1"),
        ("block", "[int a, b; y := y * 2;]"),
        ("program", "int main() [ if (a > 1) then [ a := 1; ] else [ a := 2; ] ]"),
    ]
    bad_inputs = [
        ("E", "1+*2"),
        ("E", "(1"),
        ("cmd_atrib", "x := 1"),
        ("program", "main() [ ]"),
        ("ids", "a, b"),
    ]

    print("\n[Runtime OK cases]")
    for start, s in ok_inputs:
        try:
            res = Parser(s, start=start).parse()
            print(f"  {start}: {s!r}")
            print(dump(res, 2))
        except (SyntaxError, ActionError) as e:
            print(f"  {start}: {s!r} -> ERROR\n{e}")
            raise

    print("\n[Runtime ERROR cases]")
    for start, s in bad_inputs:
        try:
            res = Parser(s, start=start).parse()
            print(f"  {start}: {s!r} -> {res} (unexpected)")
        except (SyntaxError, ActionError) as e:
            print(f"  {start}: {s!r} -> {type(e).__name__}: \n{e}")


def main() -> None:
    try:
        bnf = load_toy_grammar()
        _print_bnf(bnf)
        _print_first_follow(bnf)
        _print_ll1_table(bnf)
        _run_runtime_smoke()
    except SyntaxError as e:
        # 친절한 메시지만 출력(Traceback 숨김)
        print(str(e))


if __name__ == "__main__":
    main()
