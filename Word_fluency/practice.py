# Word_fluency/practice.py
"""
practice.py
~~~~~~~~~~~
연습 흐름(facade): 단어 보여주기 → 채점 → 다음 단어.
진행 상태(SchedulerState)를 바꾸는 유일한 곳이며, 바뀔 때마다 즉시 저장합니다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from . import core, speech
from .core import JsonStateStore
from .lists import WordList
from .models import SchedulerState
from .scheduling import apply_outcome
from .selector import pick
from .settings import Settings
from .stats import ListSummary, WordView, list_summary, word_view

logger = logging.getLogger(__name__)

# 음성 자동 채점 전 확인 메시지를 보여주는 시간 (초)
AUTO_ADVANCE_DELAY = 0.8

# SpeechOutcome.status
MATCHED = "matched"
INCONCLUSIVE = "inconclusive"
HEARD_ONLY = "heard_only"
UNAVAILABLE = "unavailable"
STALE = "stale"


class EmptyListError(ValueError):
    """단어가 하나도 없는 리스트로는 연습을 시작할 수 없음."""


@dataclass(frozen=True)
class SpeechOutcome:
    status: str
    token: int
    rt_seconds: float
    transcript: Optional[str] = None
    confidence: Optional[float] = None
    reason: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.status == MATCHED

    @property
    def message(self) -> str:
        heard = self.transcript or ""
        if self.status == MATCHED:
            return f'✅ Correct! "{heard}" - Moving to next word...'
        if self.status == HEARD_ONLY:
            return "Heard you (speech check is off). Use ✅/❌ buttons."
        if self.status == UNAVAILABLE:
            return "Mic not available. Use ✅/❌ buttons (or allow microphone)."
        if self.status == STALE:
            return "(ignored an old answer)"
        conf = f" (conf: {self.confidence * 100:.0f}%)" if self.confidence is not None else ""
        return f'Heard: "{heard}"{conf} — Say the word again, or tap ✅/❌.'


class PracticeSession:
    """
    한 리스트에 대한 연습 세션.
    • clock: epoch ms 를 돌려주는 함수 (테스트에서 교체)
    • speaker(word, voice) / listener() : 음성 collaborator
    """

    def __init__(self, word_list: WordList, store: Optional[JsonStateStore] = None, *,
                 clock: Callable[[], int] = core.now_ms,
                 rng: Optional[np.random.Generator] = None,
                 speaker: Optional[Callable[[str, str], None]] = None,
                 listener: Optional[Callable[[], speech.ListenResult]] = None):
        self.store = store if store is not None else JsonStateStore()
        self.clock = clock
        self.rng = rng if rng is not None else np.random.default_rng()
        self.speaker = speaker or speech.speak
        self.listener = listener or speech.listen_once

        self.state: SchedulerState = self.store.load()
        self.word_list = word_list
        self.current_word: Optional[str] = None
        self.shown_at = 0
        self.generation = 0
        self.last_graded: Optional[WordView] = None
        self._check_list(word_list)

    # ---------- 기본 정보 ----------
    @property
    def settings(self) -> Settings:
        return self.state.settings

    @property
    def list_id(self) -> str:
        return self.word_list.id

    def _check_list(self, word_list: WordList) -> None:
        if not word_list.words:
            raise EmptyListError(f"word list {word_list.id!r} has no words")

    def _save(self) -> None:
        self.store.save(self.state)

    def view(self) -> WordView:
        if self.current_word is None:
            raise ValueError("no word is being shown")
        progress = self.state.ensure_list(self.list_id, self.word_list.words)
        return word_view(self.current_word, progress[self.current_word], self.settings)

    # ---------- 출제 ----------
    def show(self, word: str) -> WordView:
        if word not in self.word_list.words:
            raise ValueError(f"{word!r} is not in list {self.list_id!r}")
        self.current_word = word
        self.shown_at = self.clock()
        self.generation += 1
        if self.settings.auto_speak == "on":
            self.speaker(word, self.settings.voice_uri)
        return self.view()

    def next_word(self, force_new: bool = True) -> WordView:
        if force_new or self.current_word is None:
            progress = self.state.ensure_list(self.list_id, self.word_list.words)
            self.current_word = pick(progress, self.word_list.words, self.settings,
                                     self.clock(), self.rng)
        return self.show(self.current_word)

    start = next_word

    def repeat(self) -> WordView:
        """같은 단어 다시 보여주기 (채점 없음, 반응시간 다시 잼)."""
        return self.next_word(force_new=False)

    def hear(self) -> None:
        if self.current_word is not None:
            self.speaker(self.current_word, self.settings.voice_uri)

    def reaction_time(self) -> float:
        return (self.clock() - self.shown_at) / 1000

    # ---------- 채점 ----------
    def grade(self, correct: bool, rt_seconds: Optional[float] = None) -> WordView:
        """
        현재 단어 채점 → 저장 → 새 단어 출제.
        반환값은 새로 보여주는 단어, 방금 채점한 단어는 self.last_graded.
        """
        if self.current_word is None:
            raise ValueError("no word is being shown")
        now = self.clock()
        rt = rt_seconds if rt_seconds is not None else (now - self.shown_at) / 1000
        rec = apply_outcome(self.state, self.list_id, self.current_word, correct, rt, now)
        logger.debug("Graded %r correct=%s rt=%.2fs → interval=%dms",
                     self.current_word, correct, rt, rec.interval)
        self.last_graded = word_view(self.current_word, rec, self.settings)
        self._save()
        return self.next_word(force_new=True)

    # ---------- 음성 채점 ----------
    def listen(self) -> SpeechOutcome:
        """반응시간은 듣기 시작 전에 잽니다."""
        token, rt = self.generation, self.reaction_time()
        return self.judge_speech(self.listener(), token, rt)

    def judge_speech(self, result: speech.ListenResult, token: int, rt: float) -> SpeechOutcome:
        """
        인식 결과 판정만 하고 상태는 건드리지 않습니다.
        안 맞거나 confidence 가 낮아도 오답 처리하지 않음.
        """
        base = dict(token=token, rt_seconds=rt,
                    transcript=result.transcript, confidence=result.confidence)
        if token != self.generation:
            return SpeechOutcome(STALE, **base)
        if self.settings.speech_check == "off":
            return SpeechOutcome(HEARD_ONLY, **base)
        if not result.ok:
            return SpeechOutcome(UNAVAILABLE, reason=result.reason, **base)
        if (speech.speech_matches_target(result.transcript, self.current_word or "")
                and speech.confident_enough(result.confidence)):
            return SpeechOutcome(MATCHED, **base)
        return SpeechOutcome(INCONCLUSIVE, **base)

    def confirm_speech(self, outcome: SpeechOutcome) -> Optional[WordView]:
        """
        MATCHED 결과를 정답으로 기록. 그 사이 다른 단어가 나왔으면 무시 (None).
        """
        if not outcome.matched:
            return None
        if outcome.token != self.generation:
            logger.info("Ignoring stale speech result for generation %d", outcome.token)
            return None
        return self.grade(True, outcome.rt_seconds)

    # ---------- 리스트/설정 ----------
    def switch_list(self, word_list: WordList) -> WordView:
        self._check_list(word_list)
        self.word_list = word_list
        self.current_word = None
        return self.next_word(force_new=True)

    def reset_list(self) -> WordView:
        """현재 리스트의 기록/세션 삭제 후 새로 출제."""
        self.state.reset_list(self.list_id)
        self._save()
        logger.info("Reset progress for list %r", self.list_id)
        return self.next_word(force_new=True)

    def clear_all(self) -> WordView:
        """설정 포함 저장된 모든 것 삭제."""
        self.store.clear()
        self.state = SchedulerState()
        return self.next_word(force_new=True)

    def reload(self) -> None:
        """외부에서 상태를 바꾼 뒤 다시 읽기."""
        self.state = self.store.load()

    def update_settings(self, **changes) -> Settings:
        self.state.settings = self.settings.updated(**changes)
        self._save()
        return self.state.settings

    # ---------- 요약 ----------
    def summary(self) -> ListSummary:
        return list_summary(self.state, self.list_id, self.word_list.words)

    def export(self) -> str:
        return core.export_state(self.state)
