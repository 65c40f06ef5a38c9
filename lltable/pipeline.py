# lltable/pipeline.py
"""Grammar → 좌측 인수분해 → 좌재귀 제거 → FIRST/FOLLOW → LL(1) 테이블

각 단계는 독립 함수이고, 여기서는 순서대로 묶어 단계별 스냅샷을 남긴다.
코어는 아무것도 출력하지 않는다. 진행 로그가 필요하면 `log` 콜백을 넘긴다.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .grammar.errors import GrammarNotLL1, MalformedGrammarLine
from .grammar.model import Grammar
from .grammar.parser import build_grammar, read_rules
from .grammar.transform import left_factor, remove_left_recursion
from .ll1.first_follow import FFResult, compute_first_sets, compute_follow_sets
from .ll1.predict import build_ll1_table
from .ll1.table import LL1Table

Log = Callable[[str], None]


@dataclass
class PipelineOptions:
    """
    파이프라인 설정.
    - factor                  : 좌측 인수분해 수행 여부
    - eliminate_left_recursion: 직접 좌재귀 제거 수행 여부
    - strict                  : 충돌이 있으면 GrammarNotLL1 을 던짐
    - max_rounds              : 모든 고정점 반복의 상한(없으면 문법 크기로 결정)
    """
    factor: bool = True
    eliminate_left_recursion: bool = True
    strict: bool = False
    max_rounds: Optional[int] = None


@dataclass
class AnalysisResult:
    initial: Grammar
    factored: Grammar
    recursion_free: Grammar
    grammar: Grammar
    sets: FFResult
    table: LL1Table
    skipped: List[MalformedGrammarLine] = field(default_factory=list)

    @property
    def is_ll1(self) -> bool:
        return self.table.is_ll1


def _nolog(_msg: str) -> None:
    pass


def analyze(
    grammar: Grammar,
    options: Optional[PipelineOptions] = None,
    log: Optional[Log] = None,
) -> AnalysisResult:
    """
    grammar 를 제자리에서 재작성하고 분석 결과를 돌려줍니다.
    initial/factored/recursion_free 는 각 단계 직후의 복사본입니다.
    """
    opts = options or PipelineOptions()
    log = log or _nolog

    initial = grammar.copy()
    log("[DEBUG] Grammar ready | nonterms=%d prods=%d start=%s" %
        (len(grammar), grammar.production_count(), grammar.start))

    if opts.factor:
        left_factor(grammar, max_rounds=opts.max_rounds)
        log("[DEBUG] Left factoring done | nonterms=%d prods=%d" %
            (len(grammar), grammar.production_count()))
    factored = grammar.copy()

    if opts.eliminate_left_recursion:
        remove_left_recursion(grammar)
        log("[DEBUG] Left recursion removed | nonterms=%d prods=%d" %
            (len(grammar), grammar.production_count()))
    recursion_free = grammar.copy()

    grammar.check_references()
    first = compute_first_sets(grammar, max_rounds=opts.max_rounds)
    follow = compute_follow_sets(grammar, first, max_rounds=opts.max_rounds)
    sets = FFResult(first=first, follow=follow)
    log("[DEBUG] FIRST/FOLLOW computed")

    table = build_ll1_table(grammar, sets)
    log("[DEBUG] LL(1) table built | rows=%d cols=%d conflicts=%d" %
        (len(table.rows), len(table.columns), len(table.conflicts)))

    if opts.strict and table.conflicts:
        raise GrammarNotLL1(table.conflicts)

    return AnalysisResult(
        initial=initial,
        factored=factored,
        recursion_free=recursion_free,
        grammar=grammar,
        sets=sets,
        table=table,
    )


def analyze_text(
    src: str,
    options: Optional[PipelineOptions] = None,
    log: Optional[Log] = None,
    char_terminals: bool = False,
) -> AnalysisResult:
    """텍스트를 읽어 analyze() 까지 한 번에. strict 면 malformed 줄도 오류."""
    opts = options or PipelineOptions()
    rules, skipped = read_rules(src, strict=opts.strict)
    result = analyze(build_grammar(rules, char_terminals=char_terminals), opts, log)
    result.skipped = skipped
    return result
