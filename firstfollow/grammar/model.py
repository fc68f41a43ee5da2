# firstfollow/grammar/model.py
"""문법 모델
- Rule    : HEAD = BODY... 한 줄(생산 규칙)
- Grammar : 비단말/단말 집합, 규칙 집합, 시작 기호
"""

from __future__     import annotations
from dataclasses    import dataclass, field
from typing         import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

# ε(빈 문자열). 실제 심볼 이름과 절대 겹치지 않는 예약 값.
EMPTY = ""


@dataclass(frozen=True, order=True)
class Rule:
    """
    생산 규칙 1개.
    - head: 좌변 비단말 이름
    - body: 우변 심볼 이름 튜플(단말/비단말/EMPTY)
    """
    head: str
    body: Tuple[str, ...] = ()     # ε는 빈 튜플로 표현

    def is_empty(self) -> bool:
        return len(self.body) == 0


RuleLike = Union[Rule, Tuple[str, Sequence[str]]]


@dataclass(frozen=True)
class Grammar:
    """
    Grammar
    =======
    분석 동안 **불변**인 문법 값입니다. 여러 스레드의 FIRST/FOLLOW 질의가
    같은 인스턴스를 공유해도 안전합니다.

    필드
    ----
    - non_terminals: 비단말 이름 집합
    - terminals    : 단말 이름 집합
    - rules        : 중복 없는 규칙 튜플(호출자가 준 순서 유지)
    - start        : 시작 기호

    모델은 아무것도 검증하지 않습니다. 선언되지 않은 심볼, 시작 기호 누락 같은
    문제는 로더(parser.parse_grammar)의 책임입니다.
    """
    non_terminals: FrozenSet[str]
    terminals: FrozenSet[str]
    rules: Tuple[Rule, ...]
    start: str
    _by_head: Optional[Dict[str, Tuple[Rule, ...]]] = field(
        default=None, init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "non_terminals", frozenset(self.non_terminals))
        object.__setattr__(self, "terminals", frozenset(self.terminals))
        # 중복 제거, 순서 유지
        rules = tuple(dict.fromkeys(_as_rule(r) for r in self.rules))
        object.__setattr__(self, "rules", rules)

        by_head: Dict[str, List[Rule]] = {}
        for r in rules:
            by_head.setdefault(r.head, []).append(r)
        object.__setattr__(self, "_by_head", {h: tuple(rs) for h, rs in by_head.items()})

    @classmethod
    def build(cls,
              non_terminals: Iterable[str],
              terminals: Iterable[str],
              rules: Iterable[RuleLike],
              start: str) -> "Grammar":
        """평범한 iterable과 (head, body) 쌍으로 Grammar를 만듭니다."""
        return cls(frozenset(non_terminals), frozenset(terminals), tuple(rules), start)

    # ----- 조회 -----
    def has_terminal(self, sym: str) -> bool:
        return sym in self.terminals

    def has_non_terminal(self, sym: str) -> bool:
        return sym in self.non_terminals

    def rules_for(self, head: str) -> Tuple[Rule, ...]:
        """head를 좌변으로 갖는 규칙들. 없으면 빈 튜플."""
        return self._by_head.get(head, ())

    def symbols(self) -> List[str]:
        return sorted(self.non_terminals | self.terminals)

    def __repr__(self) -> str:
        return (f"Grammar(nonterms={sorted(self.non_terminals)}, terms={sorted(self.terminals)}, "
                f"rules={len(self.rules)}, start={self.start!r})")


def _as_rule(r: RuleLike) -> Rule:
    if isinstance(r, Rule):
        return r
    head, body = r
    return Rule(head, tuple(body))
