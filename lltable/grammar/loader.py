"""문법 텍스트 읽기. 경로가 `-` 이면 표준 입력에서 읽는다."""

from __future__ import annotations
import sys
from pathlib    import Path
from typing     import Union


def load_grammar_text(path: Union[str, Path]) -> str:
    """
    문법 텍스트를 읽어 리더가 바로 쓸 수 있는 형태로 돌려줍니다.
    - UTF-8 BOM 은 떼어낸다 (메모장 등에서 저장한 파일)
    - 개행은 CRLF / CR 모두 '\\n' 으로 맞춘다
    """
    if str(path) == "-":
        text = sys.stdin.read()
    else:
        text = Path(path).read_text(encoding="utf-8")
    if text.startswith("\ufeff"):
        text = text[1:]
    return text.replace("\r\n", "\n").replace("\r", "\n")
