# lltable/report.py
"""분석 결과를 사람이 읽는 텍스트 보고서로 만든다.

섹션 순서
---------
1) Initial Grammar
2) After Left Factoring
3) After Removing Left Recursion
4) FIRST & FOLLOW Sets
5) LL(1) Parsing Table   (빈 셀은 '-')
6) Conflicts
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Set

from .grammar.model import Grammar
from .grammar.symbols import Production, Symbol, format_production, symbol_sort_key
from .ll1.first_follow import FFResult
from .ll1.table import LL1Table

EMPTY_CELL = "-"


def format_rule(head: str, prods: Iterable[Production]) -> str:
    return f"{head} -> {' | '.join(format_production(p) for p in prods)}"


def format_cell(head: str, prod: Optional[Production]) -> str:
    if prod is None:
        return EMPTY_CELL
    return f"{head} -> {format_production(prod)}"


def format_symbol_set(syms: Set[Symbol]) -> str:
    items = " ".join(s.name for s in sorted(syms, key=symbol_sort_key))
    return f"{{ {items} }}" if items else "{ }"


def format_grammar(g: Grammar, title: str) -> str:
    lines = [title]
    for head, prods in g.items():
        lines.append(format_rule(head, prods))
    return "\n".join(lines)


def format_sets(g: Grammar, sets: FFResult) -> str:
    lines = ["FIRST & FOLLOW Sets:"]
    for A in g.nonterminals():
        lines.append(f"  {A}:")
        lines.append(f"    FIRST  = {format_symbol_set(sets.first.get(A, set()))}")
        lines.append(f"    FOLLOW = {format_symbol_set(sets.follow.get(A, set()))}")
    return "\n".join(lines)


def format_table(table: LL1Table) -> str:
    header = [""] + [c.name for c in table.columns]
    body: List[List[str]] = []
    for A in table.rows:
        body.append([A] + [format_cell(A, p) for p in table.row(A)])

    widths = [max(len(r[i]) for r in [header] + body) for i in range(len(header))]

    def _line(cells: List[str]) -> str:
        return " | ".join(c.ljust(w) for c, w in zip(cells, widths)).rstrip()

    lines = ["LL(1) Parsing Table:", _line(header)]
    lines.append("-+-".join("-" * w for w in widths))
    lines.extend(_line(r) for r in body)
    return "\n".join(lines)


def format_conflicts(table: LL1Table) -> str:
    lines = ["Conflicts:"]
    if not table.conflicts:
        lines.append("  (no conflicts)")
        return "\n".join(lines)
    for c in table.conflicts:
        alts = "  <->  ".join(format_cell(c.nonterminal, p) for p in c.productions)
        lines.append(f"  M[{c.nonterminal}, {c.column}]: {alts}")
    lines.append("  grammar is NOT LL(1)")
    return "\n".join(lines)


def format_report(result) -> str:
    """AnalysisResult 전체 보고서"""
    sections = [
        format_grammar(result.initial, "Initial Grammar:"),
        format_grammar(result.factored, "After Left Factoring:"),
        format_grammar(result.recursion_free, "After Removing Left Recursion:"),
        format_sets(result.grammar, result.sets),
        format_table(result.table),
        format_conflicts(result.table),
    ]
    return "\n\n".join(sections) + "\n"
