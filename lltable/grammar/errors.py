# lltable/grammar/errors.py
"""문법 변환/분석 파이프라인에서 쓰는 예외들.

- 코어 단계의 오류는 모두 `GrammarError`를 상속합니다.
- `MalformedGrammarLine`은 텍스트 리더(collaborator) 쪽 오류라서
  CLI가 이미 잡고 있는 `SyntaxError`를 상속합니다.
- `GrammarNotLL1`은 평소에는 던지지 않습니다. 충돌은 표와 함께 **반환**하고,
  호출자가 strict 모드를 요청했을 때만 예외로 바꿉니다.
"""

from __future__ import annotations
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..ll1.table import Conflict


class GrammarError(Exception):
    """코어 파이프라인 오류의 공통 부모."""
    code = "grammar_error"


class UnknownSymbolReference(GrammarError):
    """정의되지 않은 비단말을 참조하는 프로덕션(dangling reference)."""
    code = "unknown_symbol"

    def __init__(self, head: str, name: str):
        self.head = head
        self.name = name
        super().__init__(
            f"Production of '{head}' references undefined nonterminal '{name}'"
        )


class FreshNameExhausted(GrammarError):
    """새 비단말 ID를 더 이상 만들 수 없음(할당 한도 초과)."""
    code = "fresh_name_exhausted"

    def __init__(self, hint: str, limit: int):
        self.hint = hint
        self.limit = limit
        super().__init__(
            f"Cannot allocate a fresh nonterminal for '{hint}': limit of {limit} ids reached"
        )


class AnalysisDidNotConverge(GrammarError):
    """고정점 반복이 상한을 넘음. 모델링 버그를 뜻합니다."""
    code = "did_not_converge"

    def __init__(self, stage: str, rounds: int):
        self.stage = stage
        self.rounds = rounds
        super().__init__(f"{stage} did not converge after {rounds} rounds")


class GrammarNotLL1(GrammarError):
    """충돌 셀이 하나 이상 있음(strict 모드에서만 발생)."""
    code = "not_ll1"

    def __init__(self, conflicts: List["Conflict"]):
        self.conflicts = list(conflicts)
        cells = ", ".join(f"({c.nonterminal}, {c.column})" for c in self.conflicts)
        super().__init__(f"Grammar is not LL(1): {len(self.conflicts)} conflict(s) at {cells}")


class MalformedGrammarLine(SyntaxError):
    """`Head -> alt | ...` 형태가 아닌 입력 줄."""
    code = "malformed_line"

    def __init__(self, line_no: int, text: str, reason: Optional[str] = None):
        self.line_no = line_no
        self.line_text = text
        self.reason = reason or "missing rule separator '->'"
        super().__init__(f"Malformed grammar line {line_no}: {self.reason}\n{text}")
