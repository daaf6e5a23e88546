"""원문 파일 로더"""

from __future__ import annotations
from pathlib    import Path


def load_source_text(path: str) -> str:
    """
    UTF-8로 읽고 줄바꿈을 '\\n'으로 통일합니다.
    (렉서의 라인 번호는 '\\n'만 셉니다.)
    """
    text = Path(path).read_text(encoding="utf-8")
    return text.replace("\r\n", "\n").replace("\r", "\n")
