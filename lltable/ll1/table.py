# table.py
"""LL(1) 예측 파싱 테이블과 충돌 목록을 담는 컨테이너"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional, Tuple

from ..grammar.symbols import Production, Symbol, format_production

Cell = Tuple[str, Symbol]


@dataclass
class Conflict:
    """
    한 셀(nonterminal, column)을 두 개 이상의 프로덕션이 차지하려 한 기록.
    - productions[0] : 테이블에 남아 있는 최초 점유자
    - productions[1:]: 밀려난 후보들(청구 순서)
    셀 하나당 Conflict 는 정확히 하나입니다.
    """
    nonterminal: str
    column: Symbol
    productions: List[Production]

    def __str__(self) -> str:
        alts = "  <->  ".join(format_production(p) for p in self.productions)
        return f"M[{self.nonterminal}, {self.column}]: {alts}"


@dataclass
class LL1Table:
    """
    LL1Table
    ========
    LL(1) 파싱 테이블과 디버그 정보를 담는 컨테이너.

    필드
    ----
    - rows     : 비단말 ID 목록(문법 순서)
    - columns  : 단말(알파벳 순) + '$'
    - cells    : (nonterminal, column) -> Production
    - conflicts: 충돌 목록. 셀당 하나, 셀에 처음 청구된 순서

    사용
    ----
    - `claim()`은 빈 셀만 채운다. 이미 다른 프로덕션이 있으면 충돌로 기록하고
      원래 점유자를 그대로 둔다(덮어쓰기 없음).
    - conflicts 가 비어 있을 때만 LL(1) 이다. 충돌이 있어도 테이블 전체는 유지된다.
    """
    rows: List[str]
    columns: List[Symbol]
    cells: Dict[Cell, Production] = field(default_factory=dict)
    conflicts: List[Conflict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._conflict_at: Dict[Cell, Conflict] = {_cell_of(c): c for c in self.conflicts}
        self._claimants: Dict[Cell, List[Hashable]] = {k: [p] for k, p in self.cells.items()}
        for c in self.conflicts:
            self._claimants[_cell_of(c)] = list(c.productions)

    def claim(
        self, nonterminal: str, column: Symbol, prod: Production, origin: Optional[int] = None
    ) -> bool:
        """
        셀 청구. 새로 채웠으면 True, 이미 있었으면(같은 청구든 충돌이든) False.
        origin 은 head 안에서의 프로덕션 위치. 주면 모양이 같은 중복 대안도
        서로 다른 청구자로 보고, 안 주면 프로덕션 값으로 청구자를 구분한다.
        """
        key = (nonterminal, column)
        who: Hashable = prod if origin is None else origin
        current = self.cells.get(key)
        if current is None:
            self.cells[key] = prod
            self._claimants[key] = [who]
            return True
        claimants = self._claimants.setdefault(key, [current])
        if who in claimants:
            return False
        claimants.append(who)
        conflict = self._conflict_at.get(key)
        if conflict is None:
            conflict = Conflict(nonterminal, column, [current])
            self._conflict_at[key] = conflict
            self.conflicts.append(conflict)
        conflict.productions.append(prod)
        return False

    def get(self, nonterminal: str, column: Symbol) -> Optional[Production]:
        return self.cells.get((nonterminal, column))

    def row(self, nonterminal: str) -> List[Optional[Production]]:
        return [self.cells.get((nonterminal, c)) for c in self.columns]

    @property
    def is_ll1(self) -> bool:
        return not self.conflicts

    def pretty_conflicts(self) -> str:
        """
        충돌 목록을 사람이 읽기 좋은 문자열로 변환합니다.
        충돌이 없으면 '(no conflicts)' 반환.
        """
        if not self.conflicts:
            return "(no conflicts)"
        return "\n".join(str(c) for c in self.conflicts)


def _cell_of(c: Conflict) -> Cell:
    return (c.nonterminal, c.column)
