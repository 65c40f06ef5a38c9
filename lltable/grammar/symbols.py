# lltable/grammar/symbols.py
"""문법 심볼 표현과 원시 토큰 분류기.

프로덕션은 `Symbol`의 튜플입니다. 심볼은 네 종류로 나뉩니다.
- terminal    : 입력 토큰 (예: "+", "id")
- nonterminal : 비단말 ID (예: "E", "E'1")
- epsilon     : 빈 프로덕션 ε
- end         : 입력 끝 '$'
"""

from __future__     import annotations
import regex as re
from dataclasses    import dataclass
from typing         import Iterable, Tuple


class SymbolKind:
    TERMINAL    = "terminal"
    NONTERMINAL = "nonterminal"
    EPSILON     = "epsilon"
    END         = "end"


@dataclass(frozen=True)
class Symbol:
    kind: str
    name: str

    @property
    def is_terminal(self) -> bool:
        return self.kind == SymbolKind.TERMINAL

    @property
    def is_nonterminal(self) -> bool:
        return self.kind == SymbolKind.NONTERMINAL

    @property
    def is_epsilon(self) -> bool:
        return self.kind == SymbolKind.EPSILON

    @property
    def is_end(self) -> bool:
        return self.kind == SymbolKind.END

    def __str__(self) -> str:
        return self.name


EPSILON      = Symbol(SymbolKind.EPSILON, "ε")
END_OF_INPUT = Symbol(SymbolKind.END, "$")

# 입력에서 ε로 읽는 리터럴
EPSILON_LITERALS = frozenset({"EPSILON", "eps", "ε", "~"})

Production = Tuple[Symbol, ...]

_NONTERM_START_RE = re.compile(r"\p{Lu}")


def terminal(token: str) -> Symbol:
    return Symbol(SymbolKind.TERMINAL, token)


def nonterminal(name: str) -> Symbol:
    return Symbol(SymbolKind.NONTERMINAL, name)


def classify_token(token: str, heads: Iterable[str] = ()) -> Symbol:
    """
    원시 토큰 하나를 심볼로 분류합니다. (특정 비단말의 상태와 무관한 순수 함수)

    - ε 리터럴 → EPSILON
    - "$"     → END_OF_INPUT
    - heads에 있는 이름, 또는 대문자로 시작하는 토큰 → 비단말
    - 나머지 → 단말
    """
    if token in EPSILON_LITERALS:
        return EPSILON
    if token == END_OF_INPUT.name:
        return END_OF_INPUT
    if token in heads or _NONTERM_START_RE.match(token):
        return nonterminal(token)
    return terminal(token)


_KIND_RANK = {
    SymbolKind.TERMINAL: 0,
    SymbolKind.NONTERMINAL: 1,
    SymbolKind.EPSILON: 2,
    SymbolKind.END: 3,
}


def symbol_sort_key(sym: Symbol) -> Tuple[int, str]:
    """보고/열 순서용 정렬 키: 단말(알파벳) → 비단말 → ε → '$'."""
    return (_KIND_RANK[sym.kind], sym.name)


def format_production(prod: Production) -> str:
    """프로덕션 우변을 공백으로 이어 붙인 문자열."""
    return " ".join(s.name for s in prod)
