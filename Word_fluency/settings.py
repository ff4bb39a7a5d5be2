# Word_fluency/settings.py
"""
settings.py
~~~~~~~~~~~
학습자 설정(Settings). 범위 밖 값은 생성 시점에 보정(clamp)합니다.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, replace
from typing import Any

ACCURACY_ONLY = "accuracy_only"
ACCURACY_SPEED = "accuracy_speed"
MASTERY_MODES = (ACCURACY_ONLY, ACCURACY_SPEED)
ON_OFF = ("on", "off")

SPEED_THRESHOLD_BOUNDS = (0.5, 10.0)
REPS_TO_MASTER_BOUNDS = (2, 20)


def clamp_num(val: Any, lo: float, hi: float, fallback: float) -> float:
    """숫자로 못 읽으면 fallback, 읽으면 [lo, hi] 로 보정."""
    try:
        n = float(val)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(n):
        return fallback
    return min(hi, max(lo, n))


def clamp_int(val: Any, lo: int, hi: int, fallback: int) -> int:
    """'7', 7.9, '12abc' 처럼 앞쪽 정수만 취함 (parseInt 와 동일)."""
    if isinstance(val, bool):
        return fallback
    if isinstance(val, (int, float)):
        if not math.isfinite(val):
            return fallback
        n = int(val)
    else:
        s = str(val).strip()
        digits = ""
        for i, ch in enumerate(s):
            if ch.isdigit() or (i == 0 and ch in "+-"):
                digits += ch
            else:
                break
        try:
            n = int(digits)
        except ValueError:
            return fallback
    return min(hi, max(lo, n))


def _choice(val: Any, options: tuple[str, ...], fallback: str) -> str:
    return val if val in options else fallback


@dataclass(frozen=True)
class Settings:
    mastery_mode: str = ACCURACY_SPEED
    speed_threshold: float = 2.5       # seconds
    reps_to_master: int = 5
    auto_speak: str = "on"
    speech_check: str = "on"
    voice_uri: str = ""                # gTTS tld (예: "co.uk"), 빈 값 = 기본 음성

    def __post_init__(self):
        fix = object.__setattr__
        fix(self, "mastery_mode", _choice(self.mastery_mode, MASTERY_MODES, ACCURACY_SPEED))
        fix(self, "speed_threshold", clamp_num(self.speed_threshold, *SPEED_THRESHOLD_BOUNDS, 2.5))
        fix(self, "reps_to_master", clamp_int(self.reps_to_master, *REPS_TO_MASTER_BOUNDS, 5))
        fix(self, "auto_speak", _choice(self.auto_speak, ON_OFF, "on"))
        fix(self, "speech_check", _choice(self.speech_check, ON_OFF, "on"))
        fix(self, "voice_uri", self.voice_uri if isinstance(self.voice_uri, str) else "")

    @property
    def accuracy_only(self) -> bool:
        return self.mastery_mode == ACCURACY_ONLY

    def updated(self, **changes) -> "Settings":
        """모르는 키는 무시하고, 나머지는 다시 검증된 새 Settings 반환."""
        known = {k: v for k, v in changes.items() if k in self.__dataclass_fields__}
        return replace(self, **known)

    def to_dict(self) -> dict:
        return asdict(self)

    @staticmethod
    def from_dict(d: Any) -> "Settings":
        if not isinstance(d, dict):
            return Settings()
        return Settings().updated(**d)
