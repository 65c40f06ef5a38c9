from __future__ import annotations
from pathlib import Path
from typing import List
from .loader import load_grammar_text
from .parser import parse_grammar
from .model import Grammar
from .transform import left_factor, remove_left_recursion
from .symbols import format_production
from ..ll1.first_follow import compute_first_follow
from ..ll1.predict import build_ll1_table
from ..report import format_sets, format_table

GRAMMAR_DIR = Path(__file__).resolve().parents[2] / "tests" / "grammar_test"
EXPR = GRAMMAR_DIR / "expr.txt"
SAMPLES: List[Path] = [EXPR, GRAMMAR_DIR / "factor.txt", GRAMMAR_DIR / "ambiguous.txt"]

def _print_grammar(title: str, g: Grammar) -> None:
    print(f"\n[{title}]")
    print(f"Start: {g.start}")
    for head, prods in g.items():
        print(f"{head:>6} -> {' | '.join(format_production(p) for p in prods)}")
    print("Terminals: " + ", ".join(t.name for t in g.terminals()))

def _print_first_follow(g: Grammar):
    """FIRST/FOLLOW 을 계산해 보기 좋게 출력하고 결과를 돌려줍니다."""
    ff = compute_first_follow(g)
    print()
    print(format_sets(g, ff))
    return ff

def _print_ll1_table(g: Grammar, ff) -> None:
    """
    LL(1) 테이블을 만들어 전체 표와 충돌 요약을 출력합니다.
    """
    tbl = build_ll1_table(g, ff)
    print()
    print(format_table(tbl))
    print(f"\nConflicts: {len(tbl.conflicts)}")
    if tbl.conflicts:
        print(tbl.pretty_conflicts())
    print(f"LL(1): {tbl.is_ll1}")

def _run_sample(path: Path) -> None:
    print("=" * 60)
    print(f"[FILE] {path.name}")
    g = parse_grammar(load_grammar_text(str(path)))
    _print_grammar("Initial", g)
    left_factor(g)
    _print_grammar("After Left Factoring", g)
    remove_left_recursion(g)
    _print_grammar("After Removing Left Recursion", g)
    ff = _print_first_follow(g)
    _print_ll1_table(g, ff)


def main() -> None:
    try:
        for path in SAMPLES:
            _run_sample(path)
    except SyntaxError as e:
        # 친절한 메시지만 출력(Traceback 숨김)
        print(str(e))


if __name__ == "__main__":
    main()
