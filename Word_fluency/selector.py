# Word_fluency/selector.py
"""
selector.py
~~~~~~~~~~~
다음 단어 선정: due 단어 우선 + 오답률/숙달 부족에 가중치를 준 랜덤 추출.
"""

from __future__ import annotations

from typing import List, Mapping, Sequence

import numpy as np

from .models import WordRecord
from .scheduling import is_mastered, mastery_gap
from .settings import Settings

MIN_WEIGHT = 0.05
UNSEEN_MISS_RATE = 0.5
MASTERED_PENALTY = 0.2


def _record(progress: Mapping[str, WordRecord], word: str) -> WordRecord:
    # 읽기 전용: 없는 단어는 0 레코드로 취급하되 progress 에 넣지 않음
    return progress.get(word) or WordRecord()


def due_pool(progress: Mapping[str, WordRecord], words: Sequence[str], now: int) -> List[str]:
    """due 단어가 하나도 없으면 전체 단어가 후보 (굶는 단어 없음)."""
    due = [w for w in words if _record(progress, w).due <= now]
    return due or list(words)


def word_weight(rec: WordRecord, settings: Settings) -> float:
    miss_rate = rec.incorrect / rec.seen if rec.seen else UNSEEN_MISS_RATE
    penalty = MASTERED_PENALTY if is_mastered(rec, settings) else 1.0
    weight = (1 + miss_rate * 3) * (1 + mastery_gap(rec, settings) * 0.4) * penalty
    return max(MIN_WEIGHT, weight)


def weighted_index(weights: Sequence[float], roll: float) -> int:
    """
    누적 가중치에서 roll 이 처음으로 도달하는 위치.
    부동소수점 오차로 끝을 넘어가면 마지막 후보를 반환.
    """
    cum = np.cumsum(np.asarray(weights, dtype=float))
    idx = int(np.searchsorted(cum, roll, side="left"))
    return min(idx, len(cum) - 1)


def pick(progress: Mapping[str, WordRecord], words: Sequence[str], settings: Settings,
         now: int, rng: np.random.Generator | None = None) -> str:
    """
    words 가 비어 있으면 안 됩니다 (호출 측에서 먼저 거름).
    """
    if not words:
        raise ValueError("cannot pick from an empty word list")
    rng = rng if rng is not None else np.random.default_rng()

    pool = due_pool(progress, words, now)
    weights = [word_weight(_record(progress, w), settings) for w in pool]
    roll = rng.random() * sum(weights)
    return pool[weighted_index(weights, roll)]
