"""문법 텍스트 포맷 파서
- 1번째 블록: 비단말 목록 (한 줄)
- 2번째 블록: 단말 목록 (한 줄)
- 3번째 블록: 규칙들, 한 줄에 `HEAD = BODY...` 하나. 빈 줄에서 끝남
- 4번째 블록: 시작 기호 (한 줄)

심볼은 공백으로 구분합니다. 공백이 들어간 심볼은 큰따옴표로 감싸고,
따옴표 안에서 `\\`는 다음 글자를 그대로 취합니다. `""`는 EMPTY(ε)입니다.
따옴표 없는 `=`는 규칙의 구분자입니다.

예)
    S A
    a b

    S = A "b"
    A = "a"
    A =

    S
"""

from __future__ import annotations
import regex as re
from dataclasses import dataclass
from typing import List, Set, Tuple
from .model import EMPTY, Grammar, Rule

# ---- Lexer 토큰 ----
_TOKEN_SPEC = [
    ("WS",       r"\s+"),
    ("STRING",   r'"(?:\\.|[^"\\])*"'),
    ("BADSTR",   r'"(?:\\.|[^"\\])*\\?$'),
    ("BARE",     r'[^\s"]+'),
]
MASTER_RE = re.compile("|".join(f"(?P<{n}>{p})" for n, p in _TOKEN_SPEC))


@dataclass
class Tok:
    kind: str       # "SYM" | "EQ"
    text: str       # 따옴표를 벗긴 심볼 이름
    line: int
    col: int


def _unquote(lexeme: str) -> str:
    out: List[str] = []
    i, end = 1, len(lexeme) - 1
    while i < end:
        c = lexeme[i]
        if c == "\\":
            i += 1
            c = lexeme[i]
        out.append(c)
        i += 1
    return "".join(out)


def _scan_line(text: str, line: int) -> List[Tok]:
    """한 줄을 토큰으로 자릅니다. 개행은 들어오지 않습니다."""
    toks: List[Tok] = []
    i = 0
    while i < len(text):
        m = MASTER_RE.match(text, i)
        if not m:
            raise SyntaxError(f"Unexpected char {text[i]!r} at {line}:{i + 1}")
        kind = m.lastgroup or ""
        lex = m.group(0)
        col = i + 1
        if kind == "BADSTR":
            raise SyntaxError(
                f"Unterminated quoted symbol at {line}:{col}\n{_caret(text, col)}"
            )
        if kind == "STRING":
            toks.append(Tok("SYM", _unquote(lex), line, col))
        elif kind == "BARE":
            toks.append(Tok("EQ" if lex == "=" else "SYM", lex, line, col))
        i = m.end()
    return toks


# ---------- error handling utils ----------
def _caret(line_text: str, col: int) -> str:
    return f"{line_text}\n{' ' * (col - 1)}^"


class _Lines:
    """줄 단위 커서. 줄 번호는 1부터."""
    def __init__(self, src: str):
        self.lines = src.split("\n")
        self.i = 0

    def at_end(self) -> bool:
        return self.i >= len(self.lines)

    def peek(self) -> str:
        return self.lines[self.i]

    def skip_blank(self) -> None:
        while not self.at_end() and not self.peek().strip():
            self.i += 1

    def take(self) -> Tuple[str, List[Tok]]:
        text = self.lines[self.i]
        toks = _scan_line(text, self.i + 1)
        self.i += 1
        return text, toks

    @property
    def line_no(self) -> int:
        return self.i + 1


def _error(toks_text: str, tok: Tok, msg: str) -> SyntaxError:
    return SyntaxError(f"{msg} at {tok.line}:{tok.col}\n{_caret(toks_text, tok.col)}")


def _symbol_set(text: str, toks: List[Tok], what: str) -> Set[str]:
    out: Set[str] = set()
    for t in toks:
        if t.kind == "EQ":
            raise _error(text, t, f"Unexpected '=' in {what} list")
        if t.text == EMPTY:
            raise _error(text, t, f"The empty symbol cannot be declared as a {what}")
        out.add(t.text)
    return out


def _is_rule_line(toks: List[Tok]) -> bool:
    return len(toks) >= 2 and toks[1].kind == "EQ"


def _parse_rule(text: str, toks: List[Tok], nonterms: Set[str]) -> Rule:
    head = toks[0]
    if head.kind != "SYM":
        raise _error(text, head, "Expected rule head")
    if head.text not in nonterms:
        raise _error(text, head, f"Rule head {head.text!r} is not a declared non-terminal")
    body: List[str] = []
    for t in toks[2:]:
        if t.kind == "EQ":
            raise _error(text, t, "Unexpected '=' in rule body (quote it as \"=\")")
        body.append(t.text)
    return Rule(head.text, tuple(body))


def parse_grammar(src: str) -> Grammar:
    """
    parse_grammar
    =============
    텍스트를 읽어 Grammar를 만듭니다. 코어 분석기가 가정하는 불변식을
    여기서 강제합니다.
      - 규칙 좌변은 선언된 비단말이어야 함
      - 시작 기호는 선언된 비단말이어야 함
      - 한 심볼이 단말이면서 비단말일 수 없음
      - EMPTY는 선언할 수 없음
    위반 시 위치(줄:칸)와 캐럿을 담은 SyntaxError를 던집니다.

    단말이 하나도 없으면 단말 줄을 비워 둘 수 있습니다. 이때 다음 줄이
    규칙(`=`를 가진 줄)이면 단말 블록이 빈 것으로 봅니다.
    """
    cur = _Lines(src)

    # 1) 비단말
    cur.skip_blank()
    if cur.at_end():
        raise SyntaxError("Expected non-terminal list, got end of input at 1:1")
    nt_text, nt_toks = cur.take()
    nonterms = _symbol_set(nt_text, nt_toks, "non-terminal")

    # 2) 단말 (생략 가능: 바로 규칙이 오면 빈 집합)
    terms: Set[str] = set()
    cur.skip_blank()
    if cur.at_end():
        raise SyntaxError(f"Expected terminal list, got end of input at {cur.line_no}:1")
    t_text, t_toks = _scan_peek(cur)
    if not _is_rule_line(t_toks):
        cur.take()
        terms = _symbol_set(t_text, t_toks, "terminal")
        for t in t_toks:
            if t.text in nonterms:
                raise _error(t_text, t, f"Symbol {t.text!r} is declared as both terminal and non-terminal")

    # 3) 규칙들 — 첫 규칙 앞의 빈 줄은 건너뛰고, 규칙 뒤의 빈 줄에서 끝
    rules: List[Rule] = []
    cur.skip_blank()
    while not cur.at_end() and cur.peek().strip():
        text, toks = _scan_peek(cur)
        if not _is_rule_line(toks):
            if rules:
                raise _error(text, toks[0], "Expected '=' after rule head")
            break       # 규칙 없는 문법: 이 줄이 시작 기호
        cur.take()
        rules.append(_parse_rule(text, toks, nonterms))

    # 4) 시작 기호
    cur.skip_blank()
    if cur.at_end():
        raise SyntaxError(f"Expected start symbol, got end of input at {cur.line_no}:1")
    s_text, s_toks = cur.take()
    start_tok = s_toks[0]
    if len(s_toks) != 1:
        raise _error(s_text, s_toks[1], "Expected exactly one start symbol")
    if start_tok.kind != "SYM" or start_tok.text not in nonterms:
        raise _error(s_text, start_tok, f"Start symbol {start_tok.text!r} is not a declared non-terminal")

    cur.skip_blank()
    if not cur.at_end():
        text, toks = cur.take()
        raise _error(text, toks[0], "Unexpected content after start symbol")

    return Grammar(frozenset(nonterms), frozenset(terms), tuple(rules), start_tok.text)


def _scan_peek(cur: _Lines) -> Tuple[str, List[Tok]]:
    text = cur.peek()
    return text, _scan_line(text, cur.line_no)


__all__: List[str] = ["parse_grammar"]
