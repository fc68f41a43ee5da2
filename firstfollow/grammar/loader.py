"""간단한 문법 파일 로더"""

from __future__ import annotations
import sys
from pathlib    import Path


def load_grammar_text(path: str) -> str:
    """
    Load Grammar Text
    - path가 '-'이면 표준 입력에서 읽습니다.
    """
    if path == "-":
        text = sys.stdin.read()
    else:
        text = Path(path).read_text(encoding="utf-8")
    return text.replace("\r\n", "\n").replace("\r", "\n")
