# lltable/__init__.py
"""LL(1) predictive-table generator.

This package provides:
- a mutable grammar model with a fresh-nonterminal allocator
- grammar rewrites: left factoring, immediate left-recursion removal
- FIRST/FOLLOW fixpoint solvers
- LL(1) table construction with conflict reporting

Reading grammar text (`lltable.grammar.parser`), rendering reports
(`lltable.report`) and the `lltc` CLI sit on top of the core.
"""

from .grammar.errors import (
    GrammarError, UnknownSymbolReference, FreshNameExhausted,
    AnalysisDidNotConverge, GrammarNotLL1, MalformedGrammarLine,
)
from .grammar.symbols import (
    Symbol, SymbolKind, EPSILON, END_OF_INPUT,
    terminal, nonterminal, classify_token,
)
from .grammar.model import Grammar, FreshIdAllocator
from .grammar.parser import parse_grammar
from .grammar.transform import left_factor, remove_left_recursion
from .ll1.first_follow import FFResult, compute_first_sets, compute_follow_sets, compute_first_follow
from .ll1.table import LL1Table, Conflict
from .ll1.predict import build_ll1_table
from .pipeline import PipelineOptions, AnalysisResult, analyze, analyze_text
