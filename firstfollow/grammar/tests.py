"""수동 스모크 실행기: 예제 문법을 읽어 파이프라인 전체를 출력합니다.

    $ python -m firstfollow.grammar.tests
"""
from __future__ import annotations
from pathlib import Path
from .loader import load_grammar_text
from .parser import parse_grammar
from .model import Grammar
from .writer import dump_grammar, format_set, format_rule
from ..analysis.first_follow import compute_sets, first, follow

EXPR = Path("tests/grammar_test/expr.g")

def _print_grammar(g: Grammar) -> None:
    print("\n[Grammar]")
    print(f"Start: {g.start}")
    # 정렬 출력(디버깅 용이)
    for r in sorted(g.rules):
        print(format_rule(g, r))
    print("\n[Terminals]")
    print(format_set(g, g.terminals))
    print("\n[Nonterminals]")
    print(format_set(g, g.non_terminals))

def _print_first_follow(g: Grammar) -> None:
    """FIRST/FOLLOW/NULLABLE을 계산해 보기 좋게 출력합니다."""
    ff = compute_sets(g)

    print("\n[NULLABLE]")
    print(", ".join(sorted(ff.nullable)) if ff.nullable else "(none)")

    print("\n[FIRST(nonterminals)]")
    for A in sorted(g.non_terminals):
        print(f"{A:>10} : {{{format_set(g, ff.first[A])}}}")

    print("\n[FOLLOW(nonterminals)]")
    for A in sorted(g.non_terminals):
        print(f"{A:>10} : {{{format_set(g, ff.follow[A])}}}")

def _check_single_queries(g: Grammar) -> None:
    """일괄 API와 단건 질의가 같은 답을 내는지 확인."""
    ff = compute_sets(g)
    mismatches = 0
    for A in sorted(g.non_terminals):
        if first(g, [A]) != ff.first[A]:
            print(f"  FIRST mismatch for {A}: {format_set(g, first(g, [A]))} != {format_set(g, ff.first[A])}")
            mismatches += 1
        if follow(g, A) != ff.follow[A]:
            print(f"  FOLLOW mismatch for {A}: {format_set(g, follow(g, A))} != {format_set(g, ff.follow[A])}")
            mismatches += 1
    print(f"\nSingle queries agree with compute_sets: {mismatches == 0}")

def _print_roundtrip(g: Grammar) -> None:
    text = dump_grammar(g)
    g2 = parse_grammar(text)
    same = (g2.non_terminals == g.non_terminals and g2.terminals == g.terminals
            and set(g2.rules) == set(g.rules) and g2.start == g.start)
    print("\n[Round trip]")
    print(text)
    print(f"Equal after re-parse: {same}")


def main() -> None:
    try:
        text = load_grammar_text(str(EXPR))
        g = parse_grammar(text)
        print(repr(g))
        _print_grammar(g)
        _print_first_follow(g)
        _check_single_queries(g)
        _print_roundtrip(g)
    except SyntaxError as e:
        # 친절한 메시지만 출력(Traceback 숨김)
        print(str(e))


if __name__ == "__main__":
    main()
