"""문법 텍스트 리더
- 한 줄에 규칙 하나: `Head -> alt1 | alt2 | ...`  (`→`, `::=` 도 허용)
- 빈 줄, `#` 또는 `//` 로 시작하는 줄은 무시
- 구분자가 없는 줄은 malformed: 기본은 건너뛰고 보고, strict 면 MalformedGrammarLine
- 같은 Head 가 다시 나오면 기존 비단말에 대안을 이어 붙임
- 첫 번째로 나온 Head 가 시작 기호
- 대안에 공백이 있으면 공백으로 나눈 조각 하나가 심볼 하나,
  공백이 없으면(compact) 알려진 Head 와 `_COMPACT_RE` 규칙으로 잘라 읽음
"""

from __future__ import annotations
import regex as re
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .errors import MalformedGrammarLine
from .model import Grammar, grammar_from_rules
from .symbols import classify_token

_SEPARATOR_RE = re.compile(r"->|→|::=")
_COMMENT_RE = re.compile(r"^\s*(?:#|//)")
_WS_RE = re.compile(r"\s+")

# compact 대안 스캐너. 순서가 곧 우선순위.
_COMPACT_RE = re.compile(
    r"""
      (?P<EPS>EPSILON|ε|~|eps(?![\p{Ll}\d_]))
    | (?P<NONTERM>\p{Lu}(?:'|\d)*)
    | (?P<WORD>[\p{Ll}\d_]+)
    | (?P<CHAR>\S)
    """,
    re.X,
)


@dataclass
class RawRule:
    line_no: int
    head: str
    alternatives: List[str]    # 대안별 원시 텍스트 (토큰화는 Head 를 다 모은 뒤)


def tokenize_alternative(
    text: str, char_terminals: bool = False, heads: Iterable[str] = ()
) -> List[str]:
    """
    대안 문자열 하나를 원시 토큰 리스트로 자릅니다.
    - char_terminals=True 면 compact 모드의 소문자/숫자 묶음을 한 글자씩 나눈다.
    - heads 가 주어지면 compact 모드에서 그 자리에 맞는 가장 긴 Head 를
      `_COMPACT_RE` 토큰보다 먼저 본다 (`Expr+Term` → Expr, +, Term).
    """
    text = text.strip()
    if not text:
        return []
    if _WS_RE.search(text):
        return _WS_RE.split(text)

    known = sorted(heads, key=len, reverse=True)
    toks: List[str] = []
    i = 0
    while i < len(text):
        m = _COMPACT_RE.match(text, i)
        lex, kind = m.group(0), m.lastgroup
        head = next((h for h in known if text.startswith(h, i)), None)
        if head is not None and len(head) >= len(lex):
            lex, kind = head, "HEAD"
        if kind == "WORD" and char_terminals:
            toks.extend(lex)
        else:
            toks.append(lex)
        i += len(lex)
    return toks


def _read_line(line_no: int, line: str) -> RawRule:
    m = _SEPARATOR_RE.search(line)
    if not m:
        raise MalformedGrammarLine(line_no, line)
    head = line[:m.start()].strip()
    if not head:
        raise MalformedGrammarLine(line_no, line, "missing rule head")
    if _WS_RE.search(head):
        raise MalformedGrammarLine(line_no, line, f"rule head {head!r} is not a single symbol")
    if not classify_token(head, (head,)).is_nonterminal:
        raise MalformedGrammarLine(line_no, line, f"rule head {head!r} is reserved")

    alts = [piece.strip() for piece in line[m.end():].split("|")]
    return RawRule(line_no=line_no, head=head, alternatives=[a for a in alts if a])


def read_rules(src: str, strict: bool = False) -> Tuple[List[RawRule], List[MalformedGrammarLine]]:
    """
    텍스트에서 규칙들을 읽습니다.

    Returns
    -------
    (rules, skipped)
        skipped 는 건너뛴 줄들의 MalformedGrammarLine 목록(strict=False 일 때만 채워짐).
    """
    rules: List[RawRule] = []
    skipped: List[MalformedGrammarLine] = []
    for line_no, line in enumerate(src.splitlines(), start=1):
        if not line.strip() or _COMMENT_RE.match(line):
            continue
        try:
            rules.append(_read_line(line_no, line))
        except MalformedGrammarLine as e:
            if strict:
                raise
            skipped.append(e)
    return rules, skipped


def build_grammar(rules: List[RawRule], char_terminals: bool = False) -> Grammar:
    """RawRule 목록 → Grammar. 토큰화와 분류는 모든 Head 를 모은 뒤에 한다."""
    heads = {r.head for r in rules}

    def symbols(alt: str):
        return [classify_token(tok, heads) for tok in tokenize_alternative(alt, char_terminals, heads)]

    return grammar_from_rules((r.head, [symbols(alt) for alt in r.alternatives]) for r in rules)


def parse_grammar(src: str, strict: bool = False, char_terminals: bool = False) -> Grammar:
    """텍스트 → Grammar (malformed 줄은 strict 가 아니면 조용히 건너뜀)"""
    rules, _ = read_rules(src, strict=strict)
    return build_grammar(rules, char_terminals=char_terminals)
