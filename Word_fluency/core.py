# Word_fluency/core.py
"""
core.py
~~~~~~~
파일·폴더 경로 관리와 상태(load/save), 스키마 보정을 담당합니다.
"""

from __future__ import annotations

import json
import logging
import os
import time
from pathlib import Path
from typing import Any, Dict

from .models import SchedulerState

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------
# 전역 경로
# ------------------------------------------------------------------
BASE: Path = Path(os.environ.get("WORD_FLUENCY_HOME", "."))   # set_base_path()로 덮어씀
DATA_DIR: Path | None = None
STATE_FILE: Path | None = None       # data/fluency_state.json
LISTS_FILE: Path | None = None       # data/lists.json (선택)
AUDIO_WORD_DIR: Path | None = None   # data/audio_cache/words_audio


# ------------------------------------------------------------------
# BASE 설정
# ------------------------------------------------------------------
def set_base_path(base: str | Path) -> Path:
    """
    BASE 경로를 지정하고 폴더를 초기화합니다.
    예: set_base_path('~/fluency')
    """
    global BASE
    BASE = Path(base).expanduser().resolve()
    setup_dirs()
    return BASE


# ------------------------------------------------------------------
# 디렉토리 초기화
# ------------------------------------------------------------------
def setup_dirs() -> None:
    """
    BASE/data 아래 상태 파일 경로와 audio_cache/words_audio/ 를 준비합니다.
    BASE 값이 바뀔 때마다 반드시 호출해야 합니다.
    """
    global DATA_DIR, STATE_FILE, LISTS_FILE, AUDIO_WORD_DIR

    DATA_DIR = BASE / "data"
    STATE_FILE = DATA_DIR / "fluency_state.json"
    LISTS_FILE = DATA_DIR / "lists.json"
    AUDIO_WORD_DIR = DATA_DIR / "audio_cache" / "words_audio"

    DATA_DIR.mkdir(parents=True, exist_ok=True)
    AUDIO_WORD_DIR.mkdir(parents=True, exist_ok=True)


# ------------------------------------------------------------------
# 시간 헬퍼
# ------------------------------------------------------------------
def now_ms() -> int:
    """epoch 기준 밀리초."""
    return int(time.time() * 1000)


# ------------------------------------------------------------------
# 상태 로드/저장
# ------------------------------------------------------------------
class JsonStateStore:
    """
    상태 전체를 JSON 파일 하나에 저장하는 persistence collaborator.
    • path 를 생략하면 core.STATE_FILE 을 사용 (setup_dirs 자동 호출)
    • 깨진 파일은 빈 기본 상태로 대체하고 절대 예외를 올리지 않음
    """

    def __init__(self, path: str | Path | None = None):
        self._path = Path(path) if path is not None else None

    @property
    def path(self) -> Path:
        if self._path is not None:
            return self._path
        if STATE_FILE is None:
            setup_dirs()
        return STATE_FILE  # type: ignore[return-value]

    def read_raw(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Unreadable state file %s (%s); starting fresh", self.path, e)
            return {}
        if not isinstance(raw, dict):
            logger.warning("State file %s is not an object; starting fresh", self.path)
            return {}
        return raw

    def load(self) -> SchedulerState:
        return SchedulerState.from_dict(self.read_raw())

    def save(self, state: SchedulerState) -> None:
        path = self.path
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(
            json.dumps(state.to_dict(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        os.replace(tmp_path, path)

    def clear(self) -> None:
        """저장된 상태 파일 삭제 (clear-all)."""
        self.path.unlink(missing_ok=True)
        logger.info("Cleared state file %s", self.path)


def export_state(state: SchedulerState) -> str:
    """상태 전체를 사람이 읽을 수 있는 JSON 문자열로."""
    return json.dumps(state.to_dict(), ensure_ascii=False, indent=2)
