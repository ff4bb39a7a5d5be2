# Word_fluency/speech.py
"""
speech.py
~~~~~~~~~
• TTS 재생(speak): gTTS → 단어 캐시 mp3 → IPython 오디오 재생
• 음성 인식(listen_once): 마이크 1회 청취 → 전사 + confidence
• 전사 결과와 목표 단어 비교(speech_matches_target)
"""

from __future__ import annotations

import base64
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import speech_recognition as sr
from gtts import gTTS
from IPython import get_ipython
from IPython.display import Javascript, display

from . import core

logger = logging.getLogger(__name__)

# 이 값 미만의 confidence 는 자동 채점하지 않음
MIN_CONFIDENCE = 0.4

NOT_SUPPORTED = "not_supported"
ERROR = "error"
BLOCKED = "blocked"


# --------------------------------------------------------------
# 1. TTS (gTTS → MP3)
# --------------------------------------------------------------
def _require_dirs() -> None:
    """core.setup_dirs() 가 안 돌았으면 자동 호출."""
    if core.AUDIO_WORD_DIR is None:
        core.setup_dirs()


def _slug_word(text: str) -> str:
    """단어 파일명 안전화 (소문자, 영숫자/하이픈/언더스코어만)."""
    slug = re.sub(r"[^a-z0-9_-]+", "_", text.strip().lower())
    return slug or "word"


def _tts_cache_path(text: str, voice: str = "") -> Path:
    _require_dirs()
    suffix = f"@{_slug_word(voice)}" if voice else ""
    return core.AUDIO_WORD_DIR / f"{_slug_word(text)}{suffix}.mp3"  # type: ignore[operator]


def speak(text: str, voice: str = "", *, lang: str = "en") -> None:
    """
    단어를 음성으로 재생(캐시 사용). fire-and-forget.
    - voice: gTTS tld ("com", "co.uk", "com.au" ...), 빈 값이면 기본
    - 노트북이 아니거나 오프라인이면 아무것도 재생하지 않음
    """
    if not text:
        return
    mp3 = _tts_cache_path(text, voice)

    if not mp3.exists():
        try:
            gTTS(text, lang=lang, tld=voice or "com").save(str(mp3))
        except Exception as e:
            logger.warning("TTS failed for %r: %s", text, e)
            return

    if get_ipython() is None:
        logger.debug("No IPython display; audio cached at %s", mp3)
        return

    # mp3 바이트를 data URI로 JS 재생 → 위젯 없음, 레이아웃 이동 없음
    try:
        b64 = base64.b64encode(mp3.read_bytes()).decode("ascii")
        js_lines = [
            "(function(){",
            "  try {",
            f'    var a = new Audio("data:audio/mpeg;base64,{b64}");',
            "    a.play().catch(function(){});",
            "  } catch(e) {}",
            "})();",
        ]
        display(Javascript("\n".join(js_lines)))
    except Exception as e:
        logger.warning("Audio playback failed for %r: %s (cached at %s)", text, e, mp3)


# --------------------------------------------------------------
# 2. 음성 인식 (SpeechRecognition + 마이크)
# --------------------------------------------------------------
@dataclass(frozen=True)
class ListenResult:
    ok: bool
    transcript: Optional[str] = None
    confidence: Optional[float] = None
    reason: Optional[str] = None       # not_supported | error | blocked


def _best_alternative(response) -> tuple[str, Optional[float]]:
    """recognize_google(show_all=True) 응답에서 첫 번째 후보."""
    if not isinstance(response, dict):
        return "", None          # 인식 결과 없음 → 빈 전사
    alts = response.get("alternative") or []
    if not alts:
        return "", None
    first = alts[0]
    conf = first.get("confidence")
    return (first.get("transcript") or "").strip(), (float(conf) if conf is not None else None)


def listen_once(*, lang: str = "en-US", timeout: float = 5.0,
                phrase_time_limit: float = 4.0) -> ListenResult:
    """
    마이크로 한 번 듣고 결과를 정확히 한 번 반환합니다.
    예외를 밖으로 던지지 않고 ListenResult(ok=False, reason=...) 로 변환.
    """
    recognizer = sr.Recognizer()
    try:
        mic = sr.Microphone()
    except AttributeError as e:        # PyAudio 미설치
        logger.info("Speech recognition not supported: %s", e)
        return ListenResult(ok=False, reason=NOT_SUPPORTED)
    except OSError as e:               # 입력 장치 없음
        logger.info("No microphone available: %s", e)
        return ListenResult(ok=False, reason=NOT_SUPPORTED)

    try:
        with mic as source:
            audio = recognizer.listen(source, timeout=timeout, phrase_time_limit=phrase_time_limit)
    except OSError as e:
        logger.warning("Microphone blocked: %s", e)
        return ListenResult(ok=False, reason=BLOCKED)
    except sr.WaitTimeoutError:
        logger.info("No speech before timeout")
        return ListenResult(ok=False, reason=ERROR)

    try:
        logger.info("Sending audio data to Google Speech Recognition (lang=%s)...", lang)
        response = recognizer.recognize_google(audio, language=lang, show_all=True)
    except sr.RequestError as e:
        logger.error("Could not request results from Google Speech Recognition service; %s", e)
        return ListenResult(ok=False, reason=ERROR)

    transcript, confidence = _best_alternative(response)
    logger.info("STT result: %r (confidence=%s)", transcript, confidence)
    return ListenResult(ok=True, transcript=transcript, confidence=confidence)


# --------------------------------------------------------------
# 3. 전사 ↔ 목표 단어 비교
# --------------------------------------------------------------
def normalize_speech_text(text: Optional[str]) -> str:
    """소문자, 둥근 따옴표 → ', 영문자/'/공백 외 제거, 공백 정리."""
    t = (text or "").lower().replace("’", "'")
    t = re.sub(r"[^a-z' ]+", " ", t)
    return re.sub(r"\s+", " ", t).strip()


def speech_matches_target(transcript: Optional[str], target: str) -> bool:
    t = normalize_speech_text(transcript)
    goal = normalize_speech_text(target)
    if not t or not goal:
        return False
    if t == goal:
        return True
    # "the ... the", "it's the" 처럼 앞뒤에 말이 붙는 경우
    tokens = t.split(" ")
    return goal in tokens or tokens[-1] == goal


def confident_enough(confidence: Optional[float]) -> bool:
    """confidence 를 안 주는 엔진도 있음 → 없으면 통과."""
    return confidence is None or confidence >= MIN_CONFIDENCE
