# lltable/grammar/transform.py
"""문법 재작성 단계: 좌측 인수분해(left factoring)와 직접 좌재귀 제거.

두 함수 모두 Grammar 를 **제자리에서** 고치고 같은 객체를 돌려줍니다.
새 비단말은 전부 `Grammar.fresh_nonterminal()`로 발급받습니다.
"""

from __future__     import annotations
from typing         import List, Optional

from .errors        import AnalysisDidNotConverge
from .model         import Grammar
from .symbols       import EPSILON, Production, nonterminal


def common_prefix(p1: Production, p2: Production) -> Production:
    """두 프로덕션의 가장 긴 공통 접두 심볼열 (ε는 접두로 치지 않음)"""
    n = 0
    for a, b in zip(p1, p2):
        if a != b or a.is_epsilon:
            break
        n += 1
    return p1[:n]


def _factor_once(g: Grammar, head: str) -> bool:
    """
    head 의 프로덕션 중 **리스트 순서상 첫 번째** 공통 접두 쌍 하나를 처리합니다.
    - 완전히 같은 두 프로덕션(ε 끼리 포함): 뒤쪽을 지움(중복 제거)
    - 그 외: A -> prefix F, F -> suffix1 | suffix2  (빈 suffix 는 ε)
    변화가 있었으면 True.
    """
    prods = g.productions_of(head)
    for i in range(len(prods)):
        for j in range(i + 1, len(prods)):
            if prods[i] == prods[j]:
                del prods[j]
                g.set_productions(head, prods)
                return True
            prefix = common_prefix(prods[i], prods[j])
            if not prefix:
                continue

            k = len(prefix)
            fresh = g.fresh_nonterminal(head)
            g.set_productions(fresh, [prods[i][k:] or (EPSILON,),
                                      prods[j][k:] or (EPSILON,)])
            prods[i] = prefix + (nonterminal(fresh),)
            del prods[j]
            g.set_productions(head, prods)
            return True
    return False


def _factoring_cap(g: Grammar) -> int:
    size = g.symbol_count() + g.production_count() + 1
    return size * size + 16


def left_factor(g: Grammar, max_rounds: Optional[int] = None) -> Grammar:
    """
    left_factor
    ===========
    모든 비단말에서 공통 접두를 가진 프로덕션 쌍이 사라질 때까지 인수분해합니다.

    알고리즘
    --------
    - 전역 패스: 패스 시작 시점의 비단말 목록을 순서대로 훑는다.
      (이번 패스에서 새로 생긴 F 는 다음 패스에서 검사)
    - 각 비단말은 `_factor_once`가 False 를 줄 때까지 처음부터 다시 훑는다.
    - 한 패스 전체에서 변화가 없으면 종료.

    재작성 횟수가 max_rounds(기본: 문법 크기 기반 상한)를 넘으면
    AnalysisDidNotConverge.
    """
    cap = max_rounds if max_rounds is not None else _factoring_cap(g)
    rewrites = 0
    changed = True
    while changed:
        changed = False
        for head in g.nonterminals():
            while _factor_once(g, head):
                changed = True
                rewrites += 1
                if rewrites > cap:
                    raise AnalysisDidNotConverge("left-factoring", rewrites)
    return g


def remove_left_recursion(g: Grammar) -> Grammar:
    """
    remove_left_recursion
    =====================
    각 비단말 A 의 **직접** 좌재귀만 제거합니다. (A ⇒ B ⇒ A 같은 간접 재귀는 그대로 둠)

        A -> A α1 | ... | A αm | β1 | ... | βn
    ⇒   A  -> β1 A' | ... | βn A'          (β가 없으면 A -> A')
        A' -> α1 A' | ... | αm A' | ε

    - 대상은 호출 시점의 비단말 목록뿐이고, 여기서 만든 A' 는 다시 보지 않는다.
    - `A -> A` 처럼 α가 비는 프로덕션은 아무것도 유도하지 않으므로 버린다.
      (남는 α가 없으면 A' 도 만들지 않음)
    """
    for head in g.nonterminals():
        me = nonterminal(head)
        alphas: List[Production] = []
        betas: List[Production] = []
        recursive = False
        for p in g.productions_of(head):
            if p[0] == me:
                recursive = True
                if len(p) > 1:
                    alphas.append(p[1:])
            else:
                betas.append(p)

        if not recursive:
            continue
        if not alphas:
            g.set_productions(head, betas)
            continue

        prime = g.fresh_nonterminal(head)
        ref = nonterminal(prime)
        g.set_productions(head, [beta + (ref,) for beta in betas] or [(ref,)])
        g.set_productions(prime, [alpha + (ref,) for alpha in alphas] + [(EPSILON,)])
    return g
