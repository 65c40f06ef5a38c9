# lltable/lltc.py
"""lltc – lltable CLI

사용 예)
    $ python -m lltable.lltc check tests/grammar_test/expr.txt -D
    $ python -m lltable.lltc report tests/grammar_test/expr.txt -o output.txt

기능
----
- check  : 문법을 읽어 파이프라인(인수분해→좌재귀 제거→FIRST/FOLLOW→LL(1)) 검증 및 요약 출력
- report : 단계별 문법, FIRST/FOLLOW, LL(1) 테이블, 충돌 목록을 보고서로 출력

종료 코드: 0 = LL(1), 1 = 충돌 있음(테이블은 그대로 출력), 2 = 오류
디버그 모드(-D/--debug)를 켜면 단계별 진행과 충돌 상세를 stderr 로 출력합니다.
"""

from __future__ import annotations
import argparse
import pathlib
import sys
from typing import Optional

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)

# ------------------------------
# 파이프라인 로딩
# ------------------------------

def _load_pipeline(args):
    """
    문법 파일을 읽어 인수분해→좌재귀 제거→FIRST/FOLLOW→LL(1) 테이블까지 생성.
    """
    from .grammar.loader import load_grammar_text
    from .pipeline import PipelineOptions, analyze_text

    opts = PipelineOptions(
        factor=not args.no_factor,
        eliminate_left_recursion=not args.no_left_recursion,
        strict=args.strict,
        max_rounds=args.max_rounds,
    )
    src = load_grammar_text(args.file)
    result = analyze_text(
        src,
        opts,
        log=_eprint if args.debug else None,
        char_terminals=args.char_terminals,
    )
    for bad in result.skipped:
        _eprint(f"[WARN] skipped line {bad.line_no}: {bad.reason}: {bad.line_text!r}")
    return result


def _run(args, action) -> int:
    from .grammar.errors import GrammarError
    try:
        result = _load_pipeline(args)
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2
    except GrammarError as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2
    except OSError as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    if result.table.conflicts:
        _eprint("[WARN] Conflicts present; table keeps the first claim of each cell.")
        if args.debug:
            _eprint(result.table.pretty_conflicts())

    action(args, result)
    return 0 if result.is_ll1 else 1

# ------------------------------
# 커맨드 구현
# ------------------------------

def _do_check(args, result) -> None:
    g = result.grammar
    print(f"[CHECK {'OK' if result.is_ll1 else 'CONFLICT'}] "
          f"nonterms={len(g)} terms={len(g.terminals())} "
          f"prods={g.production_count()} conflicts={len(result.table.conflicts)}")


def _do_report(args, result) -> None:
    from .report import format_report
    text = format_report(result)
    if args.output:
        out_path = pathlib.Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
        print(f"[REPORT] -> {out_path}")
    else:
        sys.stdout.write(text)


def cmd_check(args) -> int:
    return _run(args, _do_check)


def cmd_report(args) -> int:
    return _run(args, _do_report)

# ------------------------------
# 엔트리포인트
# ------------------------------

def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("file", help="문법 텍스트 파일 (Head -> alt | alt), - 이면 stdin")
    p.add_argument("--no-factor", action="store_true", help="좌측 인수분해를 건너뜀")
    p.add_argument("--no-left-recursion", action="store_true", help="직접 좌재귀 제거를 건너뜀")
    p.add_argument("--char-terminals", action="store_true",
                   help="공백 없는 대안에서 소문자 묶음을 한 글자씩 단말로 취급")
    p.add_argument("--strict", action="store_true",
                   help="잘못된 줄과 충돌을 오류로 처리")
    p.add_argument("--max-rounds", type=int, default=None, help="고정점 반복 상한")
    p.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="lltc", description="lltable LL(1) table generator CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="문법을 변환하고 LL(1) 충돌 유무를 확인합니다")
    _add_common(p_check)
    p_check.set_defaults(func=cmd_check)

    p_report = sub.add_parser("report", help="단계별 문법/집합/테이블 보고서를 출력합니다")
    _add_common(p_report)
    p_report.add_argument("-o", "--output", help="출력 파일 경로(미지정시 stdout)")
    p_report.set_defaults(func=cmd_report)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
