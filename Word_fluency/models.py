# Word_fluency/models.py
"""
models.py
~~~~~~~~~
단어별 통계(WordRecord), 리스트별 세션 카운터(SessionState),
그리고 둘을 묶는 전체 상태(SchedulerState).
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from .settings import Settings

logger = logging.getLogger(__name__)

# 20회 시도 = 1 세션
SESSION_SIZE = 20


# --------------------------- 데이터 모델 --------------------------
@dataclass
class WordRecord:
    seen: int = 0
    correct: int = 0
    incorrect: int = 0
    fast_correct: int = 0
    last_rt: Optional[float] = None    # seconds
    interval: int = 0                  # ms
    due: int = 0                       # epoch ms, 0 = 바로 출제 가능

    def miss_rate(self) -> float:
        return self.incorrect / self.seen if self.seen else 0.0

    def to_dict(self): return asdict(self)

    @staticmethod
    def from_dict(d: Any) -> "WordRecord":
        """깨진 필드는 기본값으로, 불변식(correct+incorrect==seen)은 다시 맞춤."""
        if not isinstance(d, dict):
            return WordRecord()
        correct = _non_negative_int(d.get("correct"))
        incorrect = _non_negative_int(d.get("incorrect"))
        last_rt = d.get("last_rt")
        if isinstance(last_rt, bool) or not isinstance(last_rt, (int, float)) \
                or not math.isfinite(last_rt) or last_rt < 0:
            last_rt = None
        rec = WordRecord(
            seen=correct + incorrect,
            correct=correct,
            incorrect=incorrect,
            fast_correct=min(_non_negative_int(d.get("fast_correct")), correct),
            last_rt=float(last_rt) if last_rt is not None else None,
            interval=_non_negative_int(d.get("interval")),
            due=_non_negative_int(d.get("due")),
        )
        if rec.seen != d.get("seen"):
            logger.debug("Repaired seen counter %r -> %d", d.get("seen"), rec.seen)
        return rec


@dataclass
class SessionState:
    session_count: int = 0
    session_attempts: int = 0

    def to_dict(self): return asdict(self)

    @staticmethod
    def from_dict(d: Any) -> "SessionState":
        if not isinstance(d, dict):
            return SessionState()
        # 넘친 시도는 완료된 세션으로 넘김
        extra, attempts = divmod(_non_negative_int(d.get("session_attempts")), SESSION_SIZE)
        return SessionState(
            session_count=_non_negative_int(d.get("session_count")) + extra,
            session_attempts=attempts,
        )


ListProgress = Dict[str, WordRecord]


@dataclass
class SchedulerState:
    settings: Settings = field(default_factory=Settings)
    progress: Dict[str, ListProgress] = field(default_factory=dict)   # list id → word → record
    sessions: Dict[str, SessionState] = field(default_factory=dict)   # list id → counter

    def list_progress(self, list_id: str) -> ListProgress:
        return self.progress.setdefault(list_id, {})

    def list_session(self, list_id: str) -> SessionState:
        return self.sessions.setdefault(list_id, SessionState())

    def ensure_list(self, list_id: str, words) -> ListProgress:
        """리스트의 모든 단어에 레코드를 보장 (없으면 0으로 생성)."""
        self.list_session(list_id)
        progress = self.list_progress(list_id)
        for w in words:
            get_or_create(progress, w)
        return progress

    def reset_list(self, list_id: str) -> None:
        self.progress.pop(list_id, None)
        self.sessions.pop(list_id, None)

    def to_dict(self) -> dict:
        return {
            "settings": self.settings.to_dict(),
            "progress": {
                lid: {w: rec.to_dict() for w, rec in words.items()}
                for lid, words in self.progress.items()
            },
            "sessions": {lid: s.to_dict() for lid, s in self.sessions.items()},
        }

    @staticmethod
    def from_dict(d: Any) -> "SchedulerState":
        """
        모양이 틀린 부분은 필드 단위로 기본값 대체.
        사용자에게 알리지 않고 로그만 남깁니다.
        """
        if not isinstance(d, dict):
            return SchedulerState()

        progress: Dict[str, ListProgress] = {}
        raw_progress = d.get("progress")
        if isinstance(raw_progress, dict):
            for lid, words in raw_progress.items():
                if not isinstance(words, dict):
                    logger.warning("Dropping malformed progress for list %r", lid)
                    continue
                progress[str(lid)] = {
                    str(w): WordRecord.from_dict(rec) for w, rec in words.items()
                }
        elif raw_progress is not None:
            logger.warning("Dropping malformed progress section")

        sessions: Dict[str, SessionState] = {}
        raw_sessions = d.get("sessions")
        if isinstance(raw_sessions, dict):
            sessions = {str(lid): SessionState.from_dict(s) for lid, s in raw_sessions.items()}

        return SchedulerState(
            settings=Settings.from_dict(d.get("settings")),
            progress=progress,
            sessions=sessions,
        )


# ------------------------------------------------------------------
# 헬퍼
# ------------------------------------------------------------------
def get_or_create(progress: ListProgress, word: str) -> WordRecord:
    rec = progress.get(word)
    if rec is None:
        rec = progress[word] = WordRecord()
    return rec


def _non_negative_int(val: Any) -> int:
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        return 0
    if val != val or val in (float("inf"), float("-inf")):
        return 0
    return max(0, int(val))
