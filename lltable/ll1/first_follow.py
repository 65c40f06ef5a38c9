from __future__ import annotations
from typing import Dict, FrozenSet, List, Optional, Sequence, Set
from dataclasses import dataclass

from ..grammar.errors import AnalysisDidNotConverge
from ..grammar.model import Grammar
from ..grammar.symbols import EPSILON, END_OF_INPUT, Symbol

SetMap = Dict[str, Set[Symbol]]
Snapshot = Dict[str, FrozenSet[Symbol]]


@dataclass
class FFResult:
    """
    FFResult
    ========
    FIRST/FOLLOW 계산 결과를 담는 단순 컨테이너입니다. (비단말 ID 기준)

    - first : 비단말 A → FIRST(A). ε(EPSILON)를 포함할 수 있습니다.
      * 단말 a 의 FIRST({a})는 따로 저장하지 않고 `first_of_sequence`에서 처리
    - follow: 비단말 A → FOLLOW(A). '$'(END_OF_INPUT)는 포함할 수 있지만 ε는 절대 없음
    """
    first: SetMap
    follow: SetMap

    def first_of(self, seq: Sequence[Symbol]) -> Set[Symbol]:
        return first_of_sequence(seq, self.first)


def first_of_sequence(seq: Sequence[Symbol], first: SetMap) -> Set[Symbol]:
    """
    심볼 시퀀스 s1 s2 ... sk 의 FIRST 집합.
    왼쪽부터 훑으며 FIRST(si) - {ε} 를 더하고, ε가 없는 심볼에서 멈춘다.
    모든 si 가 ε를 낼 수 있으면(빈 시퀀스 포함) ε도 더한다.
    정의되지 않은 비단말의 FIRST 는 빈 집합으로 본다.
    """
    out: Set[Symbol] = set()
    for X in seq:
        if X.is_epsilon:
            continue
        if X.is_terminal or X.is_end:
            out.add(X)
            return out
        fx = first.get(X.name, ())
        out.update(s for s in fx if not s.is_epsilon)
        if EPSILON not in fx:
            return out
    out.add(EPSILON)
    return out


def _snapshot(sets: SetMap) -> Snapshot:
    return {k: frozenset(v) for k, v in sets.items()}


def _default_cap(g: Grammar) -> int:
    # 매 라운드 최소 한 원소는 늘어나야 계속 돌므로 원소 총량이 곧 상한
    return len(g) * (len(g.terminals()) + 2) + 2


def compute_first_sets(
    g: Grammar,
    initial: Optional[SetMap] = None,
    max_rounds: Optional[int] = None,
    history: Optional[List[Snapshot]] = None,
) -> SetMap:
    """
    compute_first_sets
    ==================
    모든 비단말의 FIRST 집합을 고정점 반복으로 계산합니다.

    - 라운드마다 모든 비단말 N 에 대해 FIRST(N) |= FIRST(α) (N -> α 전부)
    - 한 라운드 전체에서 어떤 집합도 커지지 않으면 종료
    - 집합은 합집합으로만 갱신하므로 라운드 사이에 절대 줄지 않는다(단조성)

    Parameters
    ----------
    initial : 이미 계산된 집합으로 시작(안정된 집합을 넣으면 그대로 돌아옴)
    max_rounds : 라운드 상한. 넘으면 AnalysisDidNotConverge
    history : 주어지면 라운드마다 스냅샷을 덧붙인다
    """
    first: SetMap = {A: set() for A in g.nonterminals()}
    if initial:
        for A, s in initial.items():
            first.setdefault(A, set()).update(s)

    cap = max_rounds if max_rounds is not None else _default_cap(g)
    rounds = 0
    changed = True
    while changed:
        changed = False
        rounds += 1
        if rounds > cap:
            raise AnalysisDidNotConverge("FIRST", rounds - 1)
        for A, prods in g.items():
            before = len(first[A])
            for alpha in prods:
                first[A] |= first_of_sequence(alpha, first)
            if len(first[A]) != before:
                changed = True
        if history is not None:
            history.append(_snapshot(first))
    return first


def compute_follow_sets(
    g: Grammar,
    first: SetMap,
    initial: Optional[SetMap] = None,
    max_rounds: Optional[int] = None,
    history: Optional[List[Snapshot]] = None,
) -> SetMap:
    """
    compute_follow_sets
    ===================
    모든 비단말의 FOLLOW 집합을 계산합니다. FIRST 가 이미 안정된 상태여야 합니다.

    - FOLLOW(start) 에 '$' 추가
    - 모든 프로덕션 A -> ... B β 의 모든 비단말 출현 B 에 대해
        FOLLOW(B) ⊇ FIRST(β) - {ε}
        β가 비었거나 ε ∈ FIRST(β) 이면 FOLLOW(B) ⊇ FOLLOW(A)
    - 어떤 FOLLOW 도 커지지 않는 라운드가 나오면 종료
    """
    follow: SetMap = {A: set() for A in g.nonterminals()}
    if initial:
        for A, s in initial.items():
            follow.setdefault(A, set()).update(s)
    if g.start is not None:
        follow[g.start].add(END_OF_INPUT)

    cap = max_rounds if max_rounds is not None else _default_cap(g)
    rounds = 0
    changed = True
    while changed:
        changed = False
        rounds += 1
        if rounds > cap:
            raise AnalysisDidNotConverge("FOLLOW", rounds - 1)
        for A, prods in g.items():
            for alpha in prods:
                for i, B in enumerate(alpha):
                    if not B.is_nonterminal or B.name not in follow:
                        continue
                    f_beta = first_of_sequence(alpha[i + 1:], first)
                    before = len(follow[B.name])
                    follow[B.name] |= f_beta - {EPSILON}
                    if EPSILON in f_beta:
                        follow[B.name] |= follow[A]
                    if len(follow[B.name]) != before:
                        changed = True
        if history is not None:
            history.append(_snapshot(follow))
    return follow


def compute_first_follow(g: Grammar, max_rounds: Optional[int] = None) -> FFResult:
    """FIRST → FOLLOW 순서로 계산해 FFResult 로 묶어 돌려줍니다."""
    first = compute_first_sets(g, max_rounds=max_rounds)
    follow = compute_follow_sets(g, first, max_rounds=max_rounds)
    return FFResult(first=first, follow=follow)
