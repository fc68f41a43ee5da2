# firstfollow/ffc.py
"""ffc – firstfollow CLI

사용 예)
    $ python -m firstfollow.ffc sets tests/grammar_test/expr.g -D
    $ python -m firstfollow.ffc first tests/grammar_test/expr.g Term "Expr'"
    $ python -m firstfollow.ffc follow tests/grammar_test/expr.g Factor
    $ cat grammar.g | python -m firstfollow.ffc fmt -

기능
----
- sets   : 문법을 출력하고 모든 심볼의 FIRST, 모든 비단말의 FOLLOW를 출력
- first  : 주어진 심볼 시퀀스의 FIRST
- follow : 주어진 비단말의 FOLLOW
- fmt    : 문법을 정규화된 텍스트 포맷으로 다시 출력

디버그 모드(-D/--debug)를 켜면 파이프라인 진행 상황을 stderr로 출력합니다.
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Optional

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)

# ------------------------------
# 파이프라인 로딩
# ------------------------------

def _load_grammar(grammar_path: str, debug: bool):
    """문법 파일('-'이면 stdin)을 읽어 Grammar 로 만든다."""
    from .grammar.loader import load_grammar_text
    from .grammar.parser import parse_grammar

    src = load_grammar_text(grammar_path)
    if debug: _eprint(f"[DEBUG] read {len(src)} chars from {grammar_path}")

    g = parse_grammar(src)
    if debug: _eprint("[DEBUG] Grammar ready | terms=%d nonterms=%d rules=%d start=%s" %
                      (len(g.terminals), len(g.non_terminals), len(g.rules), g.start))
    return g


def _run(func, args) -> int:
    """명령 공통 에러 처리."""
    try:
        return func(args)
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2
    except (OSError, UnicodeDecodeError) as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

# ------------------------------
# 커맨드 구현
# ------------------------------

def _sets(args) -> int:
    from .analysis.first_follow import compute_sets
    from .grammar.writer import dump_grammar, format_set, format_symbol

    g = _load_grammar(args.file, args.debug)
    ff = compute_sets(g)
    if args.debug:
        _eprint("[DEBUG] FIRST/FOLLOW computed | nullable=%s" %
                (", ".join(sorted(ff.nullable)) or "(none)"))

    print(dump_grammar(g))
    for s in g.symbols():
        print(f"FIRST({format_symbol(g, s)}): {format_set(g, ff.first[s])}")
    for A in sorted(g.non_terminals):
        print(f"FOLLOW({format_symbol(g, A)}): {format_set(g, ff.follow[A])}")
    return 0


def _first(args) -> int:
    from .analysis.first_follow import first
    from .grammar.writer import format_sequence, format_set

    g = _load_grammar(args.file, args.debug)
    seq: List[str] = list(args.symbols)
    result = first(g, seq)
    print(f"FIRST({format_sequence(g, seq)}): {format_set(g, result)}")
    return 0


def _follow(args) -> int:
    from .analysis.first_follow import follow
    from .grammar.writer import format_set, format_symbol

    g = _load_grammar(args.file, args.debug)
    if not g.has_non_terminal(args.symbol):
        _eprint(f"[WARN] {args.symbol!r} is not a non-terminal of this grammar")
    result = follow(g, args.symbol)
    print(f"FOLLOW({format_symbol(g, args.symbol)}): {format_set(g, result)}")
    return 0


def _fmt(args) -> int:
    from .grammar.writer import dump_grammar

    g = _load_grammar(args.file, args.debug)
    sys.stdout.write(dump_grammar(g))
    return 0


def cmd_sets(args) -> int:
    return _run(_sets, args)

def cmd_first(args) -> int:
    return _run(_first, args)

def cmd_follow(args) -> int:
    return _run(_follow, args)

def cmd_fmt(args) -> int:
    return _run(_fmt, args)

# ------------------------------
# 엔트리포인트
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="ffc", description="FIRST/FOLLOW set calculator")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_sets = sub.add_parser("sets", help="문법과 모든 FIRST/FOLLOW 집합을 출력합니다")
    p_sets.add_argument("file", help="문법 파일 ('-'이면 stdin)")
    p_sets.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_sets.set_defaults(func=cmd_sets)

    p_first = sub.add_parser("first", help="심볼 시퀀스의 FIRST 집합을 출력합니다")
    p_first.add_argument("file", help="문법 파일 ('-'이면 stdin)")
    p_first.add_argument("symbols", nargs="*", help="심볼 시퀀스 (비우면 빈 시퀀스)")
    p_first.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_first.set_defaults(func=cmd_first)

    p_follow = sub.add_parser("follow", help="비단말의 FOLLOW 집합을 출력합니다")
    p_follow.add_argument("file", help="문법 파일 ('-'이면 stdin)")
    p_follow.add_argument("symbol", help="비단말 이름")
    p_follow.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_follow.set_defaults(func=cmd_follow)

    p_fmt = sub.add_parser("fmt", help="문법을 정규화된 형태로 다시 출력합니다")
    p_fmt.add_argument("file", help="문법 파일 ('-'이면 stdin)")
    p_fmt.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_fmt.set_defaults(func=cmd_fmt)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
