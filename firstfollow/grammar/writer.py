"""Grammar 출력기 — 모델 값을 텍스트 포맷으로 되돌립니다.

단말과 EMPTY(빈 심볼)는 항상 큰따옴표로 감싸고, 비단말은 그대로 씁니다.
(공백·따옴표가 들어가거나 `=`인 비단말은 예외적으로 감쌉니다.)
따옴표 안에서는 `"`와 `\\` 앞에 `\\`를 붙입니다.
"""

from __future__ import annotations
import regex as re
from typing import Iterable, List
from .model import EMPTY, Grammar, Rule

QUOTE = '"'
ESCAPE = "\\"

# 따옴표 없이 쓰면 다시 읽을 수 없는 심볼
_NEEDS_QUOTE_RE = re.compile(r"[\s\"\\]")


def quote(sym: str) -> str:
    out: List[str] = [QUOTE]
    for c in sym:
        if c == QUOTE or c == ESCAPE:
            out.append(ESCAPE)
        out.append(c)
    out.append(QUOTE)
    return "".join(out)


def format_symbol(g: Grammar, sym: str) -> str:
    if sym == EMPTY or g.has_terminal(sym) or sym == "=" or _NEEDS_QUOTE_RE.search(sym):
        return quote(sym)
    return sym


def format_sequence(g: Grammar, seq: Iterable[str]) -> str:
    return " ".join(format_symbol(g, s) for s in seq)


def format_set(g: Grammar, syms: Iterable[str]) -> str:
    """정렬된 순서로 출력합니다(결정적 출력)."""
    return " ".join(format_symbol(g, s) for s in sorted(syms))


def format_rule(g: Grammar, r: Rule) -> str:
    if r.is_empty():
        return f"{format_symbol(g, r.head)} ="
    return f"{format_symbol(g, r.head)} = {format_sequence(g, r.body)}"


def dump_grammar(g: Grammar) -> str:
    """
    네 블록(비단말 / 단말 / 규칙 / 시작 기호)을 빈 줄로 구분해 출력합니다.
    규칙 블록은 빈 줄로 끝나야 하므로 블록 사이 빈 줄이 곧 구분자입니다.
    """
    blocks = [
        format_set(g, g.non_terminals),
        format_set(g, g.terminals),
        "\n".join(format_rule(g, r) for r in sorted(g.rules)),
        format_symbol(g, g.start),
    ]
    return "\n\n".join(blocks) + "\n"
