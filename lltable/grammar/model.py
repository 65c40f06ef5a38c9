# lltable/grammar/model.py
"""파이프라인이 소유하고 단계별로 넘겨 가며 고쳐 쓰는 문법 모델"""

from __future__     import annotations
from typing         import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .errors        import FreshNameExhausted, UnknownSymbolReference
from .symbols       import (
    EPSILON, Production, Symbol, SymbolKind,
    format_production, symbol_sort_key,
)


class FreshIdAllocator:
    """
    FreshIdAllocator
    ================
    변환 중 새로 만드는 비단말의 ID를 발급합니다.

    - 단조 증가 카운터 n 으로 `<hint>'<n>` 형태의 이름을 만들고,
      지금까지 본 모든 ID(taken)와 겹치면 n 을 더 올립니다.
    - hint 는 가독성용일 뿐, 유일성은 카운터와 taken 검사로만 보장합니다.
      (hint 끝의 `'숫자` 꼬리는 떼어내서 `E'1'2` 같은 이름이 쌓이지 않게 함)
    - limit 를 주면 발급 개수가 그 값을 넘을 때 FreshNameExhausted.
    """

    def __init__(self, taken: Iterable[str] = (), limit: Optional[int] = None):
        self._taken: Set[str] = set(taken)
        self._counter = 0
        self._issued = 0
        self.limit = limit

    def reserve(self, name: str) -> None:
        self._taken.add(name)

    def is_taken(self, name: str) -> bool:
        return name in self._taken

    def fresh(self, hint: str) -> str:
        if self.limit is not None and self._issued >= self.limit:
            raise FreshNameExhausted(hint, self.limit)
        base = _strip_fresh_suffix(hint) or "N"
        while True:
            self._counter += 1
            name = f"{base}'{self._counter}"
            if name not in self._taken:
                break
        self._taken.add(name)
        self._issued += 1
        return name

    @property
    def issued(self) -> int:
        return self._issued


def _strip_fresh_suffix(hint: str) -> str:
    i = hint.find("'")
    return hint if i < 0 else hint[:i]


def normalize_production(symbols: Sequence[Symbol]) -> Production:
    """ε는 단독 프로덕션 `(ε,)`로만 남기고, 긴 시퀀스 안의 ε는 제거합니다."""
    body = tuple(s for s in symbols if not s.is_epsilon)
    return body if body else (EPSILON,)


class Grammar:
    """
    Grammar
    =======
    비단말 ID → 순서 있는 프로덕션 리스트 (삽입 순서 유지).

    - 시작 기호: 처음 삽입된 비단말. 이후 합성 비단말이 붙어도 바뀌지 않음
    - 프로덕션 순서는 팩토링/테이블 충돌의 tie-break 순서이자 보고 순서
    - 새 비단말은 `fresh_nonterminal()`로만 만든다 (ID 충돌 방지)
    """

    def __init__(self, fresh_limit: Optional[int] = None):
        self._rules: Dict[str, List[Production]] = {}
        self.allocator = FreshIdAllocator(limit=fresh_limit)

    # ----- 구성 -----
    def add_nonterminal(self, head: str) -> None:
        if head not in self._rules:
            self._rules[head] = []
            self.allocator.reserve(head)

    def add_production(self, head: str, production: Sequence[Symbol]) -> Production:
        self.add_nonterminal(head)
        prod = normalize_production(production)
        for s in prod:
            if s.is_nonterminal:
                self.allocator.reserve(s.name)
        self._rules[head].append(prod)
        return prod

    def set_productions(self, head: str, productions: Iterable[Sequence[Symbol]]) -> None:
        """head 의 프로덕션 목록을 통째로 교체합니다(변환 단계용)."""
        self.add_nonterminal(head)
        self._rules[head] = []
        for p in productions:
            self.add_production(head, p)

    def fresh_nonterminal(self, hint: str) -> str:
        name = self.allocator.fresh(hint)
        self.add_nonterminal(name)
        return name

    # ----- 조회 -----
    @property
    def start(self) -> Optional[str]:
        for head in self._rules:
            return head
        return None

    def nonterminals(self) -> List[str]:
        return list(self._rules)

    def productions_of(self, head: str) -> List[Production]:
        return list(self._rules.get(head, ()))

    def items(self) -> List[Tuple[str, List[Production]]]:
        return [(h, list(ps)) for h, ps in self._rules.items()]

    def is_defined(self, head: str) -> bool:
        return head in self._rules

    def is_terminal(self, sym: Symbol) -> bool:
        return sym.kind == SymbolKind.TERMINAL

    def is_nonterminal(self, sym: Symbol) -> bool:
        return sym.kind == SymbolKind.NONTERMINAL

    def terminals(self) -> List[Symbol]:
        """문법 어디엔가 등장하는 단말들(알파벳 순)."""
        seen: Set[Symbol] = set()
        for prods in self._rules.values():
            for p in prods:
                for s in p:
                    if s.is_terminal:
                        seen.add(s)
        return sorted(seen, key=symbol_sort_key)

    def symbol_count(self) -> int:
        return sum(len(p) for prods in self._rules.values() for p in prods)

    def production_count(self) -> int:
        return sum(len(prods) for prods in self._rules.values())

    def undefined_references(self) -> List[Tuple[str, str]]:
        """(head, 참조된 미정의 비단말) 목록. 문법 순서, 중복 제거."""
        out: List[Tuple[str, str]] = []
        seen: Set[Tuple[str, str]] = set()
        for head, prods in self._rules.items():
            for p in prods:
                for s in p:
                    if s.is_nonterminal and not self.is_defined(s.name):
                        key = (head, s.name)
                        if key not in seen:
                            seen.add(key)
                            out.append(key)
        return out

    def check_references(self) -> None:
        dangling = self.undefined_references()
        if dangling:
            head, name = dangling[0]
            raise UnknownSymbolReference(head, name)

    # ----- 복사/표현 -----
    def copy(self) -> "Grammar":
        g = Grammar()
        g._rules = {h: list(ps) for h, ps in self._rules.items()}
        g.allocator = FreshIdAllocator(self.allocator._taken, limit=self.allocator.limit)
        g.allocator._counter = self.allocator._counter
        g.allocator._issued = self.allocator._issued
        return g

    def as_dict(self) -> Dict[str, List[str]]:
        """비교/표시용: head → 프로덕션 문자열 리스트"""
        return {h: [format_production(p) for p in ps] for h, ps in self._rules.items()}

    def __contains__(self, head: str) -> bool:
        return head in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grammar):
            return NotImplemented
        return list(self._rules.items()) == list(other._rules.items())

    def __repr__(self) -> str:
        body = "; ".join(
            f"{h} -> {' | '.join(format_production(p) for p in ps)}"
            for h, ps in self._rules.items()
        )
        return f"Grammar(start={self.start}, rules=[{body}])"


def grammar_from_rules(rules: Iterable[Tuple[str, Iterable[Sequence[Symbol]]]]) -> Grammar:
    """(head, [symbols...]) 목록에서 Grammar 를 만듭니다. 대안이 없는 head 도 비단말로 등록."""
    g = Grammar()
    for head, prods in rules:
        g.add_nonterminal(head)
        for p in prods:
            g.add_production(head, p)
    return g
