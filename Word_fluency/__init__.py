# Word_fluency/__init__.py
"""
Word-Fluency Scheduler
======================
Package init (v0.1.0)

공개 API를 한눈에 정리하고, BASE 경로 설정을 안전하게 처리합니다.
"""

from .core import JsonStateStore, export_state, set_base_path, setup_dirs
from .lists import FRY_LISTS, WordList, find_list, load_lists, uniq_clean
from .models import SESSION_SIZE, SchedulerState, SessionState, WordRecord, get_or_create
from .practice import EmptyListError, PracticeSession, SpeechOutcome
from .scheduling import is_mastered, next_interval, record_attempt
from .selector import pick
from .settings import ACCURACY_ONLY, ACCURACY_SPEED, Settings
from .speech import ListenResult, listen_once, speak, speech_matches_target

__version__ = "0.1.0"

# 사용자가 import * 할 때 노출되는 심볼
__all__ = [
    "__version__",
    "setup_dirs", "set_base_path", "JsonStateStore", "export_state",
    # lists
    "WordList", "FRY_LISTS", "load_lists", "find_list", "uniq_clean",
    # model
    "Settings", "ACCURACY_ONLY", "ACCURACY_SPEED",
    "WordRecord", "SessionState", "SchedulerState", "SESSION_SIZE", "get_or_create",
    # scheduling
    "is_mastered", "next_interval", "record_attempt", "pick",
    # practice
    "PracticeSession", "SpeechOutcome", "EmptyListError",
    # speech
    "speak", "listen_once", "ListenResult", "speech_matches_target",
]


# ------------------------------------------------------------
# 도움말
# ------------------------------------------------------------
def help():
    """패키지에서 바로 쓸 수 있는 주요 함수 목록을 보여줍니다."""
    print(
        "Word-Fluency Scheduler – API\n"
        "============================\n"
        "🗂  디렉토리 설정\n"
        "  • set_base_path(path) – BASE 경로 변경 + 폴더 생성\n\n"
        "📚  단어 리스트\n"
        "  • load_lists() / find_list(lists, 'fry-1')\n\n"
        "🎮  연습\n"
        "  • s = PracticeSession(find_list(load_lists(), None))\n"
        "  • s.start() / s.grade(True|False) / s.repeat() / s.listen()\n"
        "  • s.summary() / s.reset_list() / s.export()\n\n"
        "🔈  기타\n"
        "  • speak(word) – TTS 재생\n"
        "  • python -m Word_fluency practice – 터미널 연습\n"
    )
