# Word_fluency/scheduling.py
"""
scheduling.py
~~~~~~~~~~~~~
숙달 판정 · 간격 계산 · 세션 카운트 · 채점 결과 반영.
전부 SchedulerState 위의 순수/명시적 함수입니다.
"""

from __future__ import annotations

from .models import SESSION_SIZE, SchedulerState, SessionState, WordRecord, get_or_create
from .settings import Settings

# 간격 상수 (ms)
BASE_INTERVAL = 10_000                # 10초 (세션 내)
MIN_INTERVAL = 5_000
MAX_INTERVAL = 4 * 60 * 60 * 1000     # 4시간

FAST_BOOST = 3.0
SLOW_BOOST = 2.0


# -----------------------------------------------------------------
# 숙달 판정
# -----------------------------------------------------------------
def qualifying_correct(rec: WordRecord, settings: Settings) -> int:
    """모드에 따라 숙달에 세는 정답 수."""
    return rec.correct if settings.accuracy_only else rec.fast_correct


def is_mastered(rec: WordRecord, settings: Settings) -> bool:
    return qualifying_correct(rec, settings) >= settings.reps_to_master


def mastery_gap(rec: WordRecord, settings: Settings) -> int:
    return max(0, settings.reps_to_master - qualifying_correct(rec, settings))


# -----------------------------------------------------------------
# 간격 계산
# -----------------------------------------------------------------
def next_interval(rec: WordRecord, was_correct: bool, was_fast: bool) -> int:
    """
    오답 → MIN_INTERVAL 로 즉시 복귀.
    정답 → 이전 간격 × 2 (빠르면 × 3), [BASE_INTERVAL, MAX_INTERVAL] 로 제한.
    """
    if not was_correct:
        return MIN_INTERVAL
    boost = FAST_BOOST if was_fast else SLOW_BOOST
    prev = rec.interval or BASE_INTERVAL
    return int(min(MAX_INTERVAL, max(BASE_INTERVAL, prev * boost)))


# -----------------------------------------------------------------
# 세션 카운트
# -----------------------------------------------------------------
def record_attempt(session: SessionState) -> SessionState:
    session.session_attempts += 1
    if session.session_attempts >= SESSION_SIZE:
        session.session_count += 1
        session.session_attempts = 0
    return session


# -----------------------------------------------------------------
# 채점 반영
# -----------------------------------------------------------------
def apply_outcome(state: SchedulerState, list_id: str, word: str,
                  correct: bool, rt_seconds: float, now: int) -> WordRecord:
    """
    한 번의 시도를 상태에 반영합니다.
    순서: 통계 → 간격/due → 세션. (간격은 방금 기록한 결과를 반영해야 함)
    """
    settings = state.settings
    rec = get_or_create(state.list_progress(list_id), word)
    was_fast = rt_seconds <= settings.speed_threshold

    rec.seen += 1
    rec.last_rt = rt_seconds
    if correct:
        rec.correct += 1
        if settings.accuracy_only or was_fast:
            rec.fast_correct += 1
    else:
        rec.incorrect += 1

    rec.interval = next_interval(rec, correct, was_fast)
    rec.due = now + rec.interval

    record_attempt(state.list_session(list_id))
    return rec
