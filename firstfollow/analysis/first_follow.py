from __future__ import annotations
from collections import deque
from typing import Dict, List, Sequence, Set, Tuple
from dataclasses import dataclass
from ..grammar.model import EMPTY, Grammar


@dataclass
class FFResult:
    """
    FFResult
    ========
    문법 전체에 대한 FIRST/FOLLOW/NULLABLE 계산 결과를 담는 단순 컨테이너입니다.

    - nullable: ε를 유도할 수 있는 비단말 집합
    - first: 각 **심볼 이름** → FIRST 집합
      * 단말 a: FIRST(a) = { a }
      * 비단말 A: FIRST(A), ε를 유도할 수 있으면 EMPTY 포함
    - follow: 각 **비단말 이름** → FOLLOW 집합
      * 시작 기호 S 에는 항상 EMPTY(입력의 끝)가 포함됩니다.
    """
    nullable: Set[str]
    first: Dict[str, Set[str]]
    follow: Dict[str, Set[str]]


_FIRST = "first"
_FOLLOW = "follow"


class _Solver:
    """
    _Solver
    =======
    FIRST/FOLLOW 를 **호출 하나 동안만** 풀어 주는 상태 객체입니다.

    재귀 정의를 그대로 따라가면 `A = B`, `B = A` 같은 순환 문법에서 끝나지
    않고, 긴 사슬(`N0 = N1`, `N1 = N2`, ...)에서는 호출 스택이 넘칩니다. 그래서
      - (종류, 심볼) 키마다 지금까지 모은 부분 결과(partial)를 보관하고
      - 규칙 본문은 항상 현재 부분 결과로만 평가하며
      - 어떤 부분 결과가 커지면 그 심볼에 의존하는 규칙만 작업 큐에 다시 넣어
        큐가 빌 때까지 반복합니다.
    부분 결과는 합집합으로만 커지고 크기는 알파벳으로 묶여 있으므로 반드시
    최소 고정점에 도달합니다. 재귀 호출은 없습니다.
    """

    def __init__(self, grammar: Grammar):
        self.g = grammar
        self.partial: Dict[Tuple[str, str], Set[str]] = {}
        self._first_ready = False

    def _grow(self, key: Tuple[str, str], more: Set[str]) -> bool:
        cur = self.partial.setdefault(key, set())
        if more <= cur:
            return False
        cur |= more
        return True

    # ---------- FIRST ----------
    def first_single(self, sym: str) -> Set[str]:
        if sym == EMPTY or self.g.has_terminal(sym):
            return {sym}
        return set(self.partial.get((_FIRST, sym), ()))

    def first_sequence(self, seq: Sequence[str]) -> Set[str]:
        """현재 부분 결과로 시퀀스의 FIRST 를 계산. (빈 시퀀스는 {EMPTY})"""
        out: Set[str] = set()
        for sym in seq:
            sub = self.first_single(sym)
            had_empty = EMPTY in sub
            sub.discard(EMPTY)
            out |= sub
            if not had_empty:
                break
        else:
            out.add(EMPTY)
        return out

    def solve_first(self) -> None:
        if self._first_ready:
            return
        rules = self.g.rules
        # 심볼 → 그 심볼이 본문에 나오는 규칙 번호
        users: Dict[str, List[int]] = {}
        for i, r in enumerate(rules):
            for b in set(r.body):
                users.setdefault(b, []).append(i)

        queue = deque(range(len(rules)))
        queued = set(queue)
        while queue:
            i = queue.popleft()
            queued.discard(i)
            r = rules[i]
            if self._grow((_FIRST, r.head), self.first_sequence(r.body)):
                for j in users.get(r.head, ()):
                    if j not in queued:
                        queued.add(j)
                        queue.append(j)
        self._first_ready = True

    # ---------- FOLLOW ----------
    def solve_follow(self) -> None:
        self.solve_first()
        g = self.g
        rules = g.rules
        # 좌변 → 규칙 번호
        by_head: Dict[str, List[int]] = {}
        for i, r in enumerate(rules):
            by_head.setdefault(r.head, []).append(i)

        self._grow((_FOLLOW, g.start), {EMPTY})     # 입력의 끝

        queue = deque(range(len(rules)))
        queued = set(queue)
        while queue:
            i = queue.popleft()
            queued.discard(i)
            r = rules[i]
            head_follow = set(self.partial.get((_FOLLOW, r.head), ()))

            # 오른쪽에서 왼쪽으로 훑는다.
            # trailer = FIRST(뒤쪽) - {EMPTY}, nullable = 뒤쪽이 비었거나 ε를 유도
            trailer: Set[str] = set()
            nullable = True
            for b in reversed(r.body):
                if b != EMPTY and not g.has_terminal(b):
                    more = trailer | head_follow if nullable else set(trailer)
                    if self._grow((_FOLLOW, b), more):
                        for j in by_head.get(b, ()):
                            if j not in queued:
                                queued.add(j)
                                queue.append(j)
                sub = self.first_single(b)
                if EMPTY in sub:
                    sub.discard(EMPTY)
                    trailer |= sub
                else:
                    trailer = sub
                    nullable = False

    def follow_of(self, nt: str) -> Set[str]:
        return set(self.partial.get((_FOLLOW, nt), ()))


def first(grammar: Grammar, sequence: Sequence[str]) -> Set[str]:
    """
    심볼 시퀀스에서 유도되는 문자열의 첫 단말이 될 수 있는 집합을 구합니다.
    시퀀스 전체가 ε를 유도할 수 있으면 EMPTY가 포함됩니다.

    빈 시퀀스는 {EMPTY}가 아니라 **빈 집합**을 돌려줍니다.
    """
    seq = list(sequence)
    if not seq:
        return set()
    solver = _Solver(grammar)
    solver.solve_first()
    return solver.first_sequence(seq)


def follow(grammar: Grammar, non_terminal: str) -> Set[str]:
    """
    어떤 유도에서 non_terminal 바로 뒤에 올 수 있는 단말 집합을 구합니다.
    시작 기호의 FOLLOW에는 입력의 끝을 뜻하는 EMPTY가 들어갑니다.

    선언된 비단말이 아니면 "정보 없음"으로 보고 빈 집합을 돌려줍니다.
    """
    if not grammar.has_non_terminal(non_terminal):
        return set()
    solver = _Solver(grammar)
    solver.solve_follow()
    return solver.follow_of(non_terminal)


def compute_sets(grammar: Grammar) -> FFResult:
    """
    compute_sets
    ============
    문법의 모든 심볼에 대해 FIRST를, 모든 비단말에 대해 FOLLOW를 계산해
    FFResult로 묶어 돌려줍니다. (출력/디버깅용 일괄 API)
    """
    solver = _Solver(grammar)
    solver.solve_follow()

    first_sets: Dict[str, Set[str]] = {}
    for s in grammar.symbols():
        first_sets[s] = solver.first_sequence([s])

    follow_sets: Dict[str, Set[str]] = {}
    nullable: Set[str] = set()
    for A in sorted(grammar.non_terminals):
        follow_sets[A] = solver.follow_of(A)
        if EMPTY in first_sets[A]:
            nullable.add(A)

    return FFResult(nullable=nullable, first=first_sets, follow=follow_sets)


__all__: List[str] = ["FFResult", "first", "follow", "compute_sets"]
