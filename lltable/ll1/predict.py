# lltable/ll1/predict.py
"""최종 문법과 FIRST/FOLLOW 로 LL(1) 예측 테이블을 만들고 충돌을 수집한다.

각 프로덕션 A -> α 에 대해
- FIRST(α) - {ε} 의 각 단말 t   : M[A, t] 청구
- ε ∈ FIRST(α) 이면 FOLLOW(A) 의 각 c : M[A, c] 청구
청구 순서는 문법 순서(비단말 → 프로덕션), 한 프로덕션 안에서는 열 순서.
청구자는 head 안의 프로덕션 위치로 구분하므로 `S -> a | a` 도 충돌이다.
"""

from __future__ import annotations
from typing import List, Optional, Set

from ..grammar.model import Grammar
from ..grammar.symbols import END_OF_INPUT, EPSILON, Symbol, symbol_sort_key
from .first_follow import FFResult, compute_first_follow, first_of_sequence
from .table import LL1Table


def table_columns(g: Grammar) -> List[Symbol]:
    """열 = 문법에 나오는 모든 단말(알파벳 순) + '$'"""
    return g.terminals() + [END_OF_INPUT]


def _in_column_order(syms: Set[Symbol]) -> List[Symbol]:
    return sorted(syms, key=symbol_sort_key)


def build_ll1_table(g: Grammar, sets: Optional[FFResult] = None) -> LL1Table:
    """
    build_ll1_table
    ===============
    Parameters
    ----------
    g : Grammar
        재작성이 끝난 문법. 미정의 비단말 참조가 있으면 UnknownSymbolReference.
    sets : FFResult, optional
        이미 계산한 FIRST/FOLLOW. 없으면 여기서 계산한다.

    Returns
    -------
    LL1Table
        충돌이 있어도 테이블은 끝까지 채워서 돌려준다(best-effort).
    """
    g.check_references()
    if sets is None:
        sets = compute_first_follow(g)

    table = LL1Table(rows=g.nonterminals(), columns=table_columns(g))
    for A, prods in g.items():
        follow_a = sets.follow.get(A, set())
        for i, alpha in enumerate(prods):
            f_alpha = first_of_sequence(alpha, sets.first)
            for t in _in_column_order(f_alpha - {EPSILON}):
                table.claim(A, t, alpha, origin=i)
            if EPSILON in f_alpha:
                for c in _in_column_order(follow_a):
                    table.claim(A, c, alpha, origin=i)
    return table
