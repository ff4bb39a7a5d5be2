# Word_fluency/stats.py
"""
stats.py
~~~~~~~~
화면 표시용 요약: 현재 단어 정보(WordView), 리스트 성장 요약(ListSummary).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .models import SchedulerState, WordRecord
from .scheduling import is_mastered
from .settings import Settings

WATCH_LIMIT = 12


def round_pct(x: float) -> int:
    """0.5 는 항상 올림 (12.5 → 13)."""
    return int(math.floor(x + 0.5))


@dataclass(frozen=True)
class WordView:
    word: str
    seen: int
    correct: int
    incorrect: int
    miss_rate_pct: int
    mastered: bool

    def meta_line(self) -> str:
        return (f"Seen: {self.seen} • Correct: {self.correct} • Missed: {self.incorrect} "
                f"• Miss%: {self.miss_rate_pct}% • Mastered: {'Yes' if self.mastered else 'No'}")


@dataclass(frozen=True)
class WatchItem:
    word: str
    score: float
    miss_rate: float
    last_rt: Optional[float]
    seen: int

    def chip(self) -> str:
        rt = f"{self.last_rt:.1f}s" if self.last_rt else "—"
        miss = f"{round_pct(self.miss_rate * 100)}% miss" if self.seen else "new"
        return f"{self.word} • {miss} • RT {rt}"


@dataclass(frozen=True)
class ListSummary:
    mastery_pct: int
    session_count: int
    accuracy_pct: int = 0
    attempts: int = 0
    watch: List[WatchItem] = field(default_factory=list)


def word_view(word: str, rec: WordRecord, settings: Settings) -> WordView:
    return WordView(
        word=word,
        seen=rec.seen,
        correct=rec.correct,
        incorrect=rec.incorrect,
        miss_rate_pct=round_pct(rec.miss_rate() * 100),
        mastered=is_mastered(rec, settings),
    )


def watch_score(rec: WordRecord, settings: Settings) -> float:
    """높을수록 주의 필요: 오답률×3 + 기준보다 느린 초."""
    slow = max(0.0, rec.last_rt - settings.speed_threshold) if rec.last_rt else 0.0
    return rec.miss_rate() * 3 + slow


def list_summary(state: SchedulerState, list_id: str, words: Sequence[str]) -> ListSummary:
    settings = state.settings
    progress = state.ensure_list(list_id, words)
    session = state.list_session(list_id)

    attempts = sum(progress[w].seen for w in words)
    correct = sum(progress[w].correct for w in words)
    mastered = sum(1 for w in words if is_mastered(progress[w], settings))

    watch = [
        WatchItem(w, watch_score(progress[w], settings), progress[w].miss_rate(),
                  progress[w].last_rt, progress[w].seen)
        for w in words
    ]
    # 안정 정렬: 점수 같으면 리스트 순서 유지
    watch.sort(key=lambda x: x.score, reverse=True)
    watch = [x for x in watch[:WATCH_LIMIT] if x.seen > 0 or x.score > 0]

    return ListSummary(
        mastery_pct=round_pct(mastered / len(words) * 100) if words else 0,
        session_count=session.session_count,
        accuracy_pct=round_pct(correct / attempts * 100) if attempts else 0,
        attempts=attempts,
        watch=watch,
    )
