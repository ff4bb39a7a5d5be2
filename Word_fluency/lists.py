# Word_fluency/lists.py
"""
lists.py
~~~~~~~~
연습용 단어 리스트. 기본은 Fry sight words 첫 100개,
BASE/data/lists.json 이 있으면 그것을 사용합니다.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from . import core

logger = logging.getLogger(__name__)


def uniq_clean(words: Iterable) -> Tuple[str, ...]:
    """trim + 소문자 + 빈 값 제거 + 순서 유지 중복 제거."""
    seen, out = set(), []
    for w in words or ():
        w = str(w).strip().lower()
        if w and w not in seen:
            seen.add(w)
            out.append(w)
    return tuple(out)


@dataclass(frozen=True)
class WordList:
    id: str
    name: str
    words: Tuple[str, ...]

    @staticmethod
    def make(id: str, name: str, words: Iterable) -> "WordList":
        return WordList(id=str(id), name=str(name or id), words=uniq_clean(words))


_FRY_FIRST_100 = """
the of and a to in is you that it he was for on are as with his they i
at be this have from or one had by words but not what all were we when your can said
there use an each which she do how their if will up other about out many then them these so
some her would make like him into time has look two more write go see number no way could people
my than first water been call who oil its now find long down day did get come made may part
""".split()

FRY_LISTS: Tuple[WordList, ...] = tuple(
    WordList.make(f"fry-{i // 25 + 1}", f"Fry words {i + 1}-{i + 25}", _FRY_FIRST_100[i:i + 25])
    for i in range(0, len(_FRY_FIRST_100), 25)
)


def load_lists(path: Optional[str | Path] = None) -> List[WordList]:
    """
    [{"id": ..., "name": ..., "words": [...]}, ...] 형식의 JSON 을 읽습니다.
    • 파일이 없거나 깨졌으면 기본 FRY_LISTS
    • 단어가 하나도 없는 리스트도 그대로 반환 (연습 시작 시 거부됨)
    """
    if path is None:
        if core.LISTS_FILE is None:
            core.setup_dirs()
        path = core.LISTS_FILE
    path = Path(path)  # type: ignore[arg-type]
    if not path.exists():
        return list(FRY_LISTS)

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Could not read word lists from %s (%s); using built-in lists", path, e)
        return list(FRY_LISTS)

    lists = []
    for item in raw if isinstance(raw, list) else []:
        if not isinstance(item, dict) or "id" not in item:
            continue
        lists.append(WordList.make(item["id"], item.get("name", ""), item.get("words", [])))
    if not lists:
        logger.warning("No usable word lists in %s; using built-in lists", path)
        return list(FRY_LISTS)
    return lists


def find_list(lists: List[WordList], list_id: Optional[str]) -> WordList:
    """id 가 없으면 첫 번째 리스트."""
    if not lists:
        raise ValueError("no word lists available")
    if list_id is None:
        return lists[0]
    for wl in lists:
        if wl.id == list_id:
            return wl
    raise ValueError(f"unknown list id: {list_id!r}")
