# Word_fluency/cli.py
"""
cli.py
~~~~~~
터미널 연습 루프 + 관리용 서브커맨드 (argparse).
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import List, Optional

from . import core
from .core import JsonStateStore
from .lists import find_list, load_lists
from .practice import AUTO_ADVANCE_DELAY, EmptyListError, PracticeSession
from .settings import MASTERY_MODES, ON_OFF, Settings
from .stats import ListSummary

HELP_LINE = "[Enter/y] correct  [n] missed  [r] repeat  [h] hear  [s] speak  [g] growth  [q] quit"


# ──────────────────────────────────────────────────────────────────────────────
# 출력 헬퍼
# ──────────────────────────────────────────────────────────────────────────────

def _print_growth(s: ListSummary) -> None:
    print(f"Mastered: {s.mastery_pct}% | Accuracy: {s.accuracy_pct}% "
          f"| Attempts: {s.attempts} | Sessions: {s.session_count}")
    if not s.watch:
        print("  No data yet — start practicing!")
        return
    print("Watch list:")
    for item in s.watch:
        print(f"  • {item.chip()}")


def _print_settings(st: Settings) -> None:
    for k, v in st.to_dict().items():
        print(f"  {k:16} {v}")


# ──────────────────────────────────────────────────────────────────────────────
# 연습 루프
# ──────────────────────────────────────────────────────────────────────────────

def run_practice(session: PracticeSession) -> None:
    s = session.summary()
    print(f"📚 {session.word_list.name}  (Mastered: {s.mastery_pct}% | Session: {s.session_count})")
    print(HELP_LINE)

    view = session.start()
    while True:
        print("\n" + "-" * 40)
        print(f"   {view.word.upper()}")
        print(view.meta_line())
        sys.stdout.flush()

        cmd = input("> ").strip().lower()
        if cmd in ("", "y"):
            view = session.grade(True)
            print(f"✔️ {session.last_graded.word}")
        elif cmd == "n":
            view = session.grade(False)
            print(f"❌ {session.last_graded.word}")
            if session.settings.auto_speak == "on":
                session.speaker(session.last_graded.word, session.settings.voice_uri)
        elif cmd == "r":
            view = session.repeat()
        elif cmd == "h":
            session.hear()
        elif cmd == "s":
            outcome = session.listen()
            print(outcome.message)
            if outcome.matched:
                time.sleep(AUTO_ADVANCE_DELAY)
                view = session.confirm_speech(outcome) or view
        elif cmd == "g":
            _print_growth(session.summary())
        elif cmd == "q":
            break
        else:
            print(HELP_LINE)

    s = session.summary()
    print(f"\nMastered: {s.mastery_pct}% | Session: {s.session_count}")


# ──────────────────────────────────────────────────────────────────────────────
# argparse
# ──────────────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="word-fluency", description="Word Fluency Scheduler")
    p.add_argument("--base", help="data folder (default: $WORD_FLUENCY_HOME or .)")
    p.add_argument("-v", "--verbose", action="store_true")
    sub = p.add_subparsers(dest="cmd")

    pr = sub.add_parser("practice")
    pr.add_argument("--list", dest="list_id")

    gr = sub.add_parser("growth")
    gr.add_argument("--list", dest="list_id")

    sub.add_parser("lists")
    sub.add_parser("export")

    rs = sub.add_parser("reset")
    rs.add_argument("--list", dest="list_id", required=True)

    sub.add_parser("clear-all")

    st = sub.add_parser("settings")
    st.add_argument("--mastery-mode", choices=MASTERY_MODES)
    st.add_argument("--speed-threshold")
    st.add_argument("--reps-to-master")
    st.add_argument("--auto-speak", choices=ON_OFF)
    st.add_argument("--speech-check", choices=ON_OFF)
    st.add_argument("--voice-uri")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.base:
        core.set_base_path(args.base)
    else:
        core.setup_dirs()
    store = JsonStateStore()

    if args.cmd == "lists":
        for wl in load_lists():
            print(f"{wl.id:10} | {len(wl.words):3} words | {wl.name}")
        return 0

    if args.cmd == "export":
        print(core.export_state(store.load()))
        return 0

    if args.cmd == "clear-all":
        store.clear()
        print("✅ Cleared all progress and settings")
        return 0

    if args.cmd == "settings":
        state = store.load()
        changes = {
            "mastery_mode": args.mastery_mode,
            "speed_threshold": args.speed_threshold,
            "reps_to_master": args.reps_to_master,
            "auto_speak": args.auto_speak,
            "speech_check": args.speech_check,
            "voice_uri": args.voice_uri,
        }
        changes = {k: v for k, v in changes.items() if v is not None}
        if changes:
            state.settings = state.settings.updated(**changes)
            store.save(state)
        _print_settings(state.settings)
        return 0

    if args.cmd not in ("practice", "growth", "reset"):
        build_parser().print_help()
        return 1

    try:
        word_list = find_list(load_lists(), args.list_id)
        session = PracticeSession(word_list, store)
    except EmptyListError:
        print("Add words to this list first (lists.json).")
        return 1
    except ValueError as e:
        print(e)
        return 1

    if args.cmd == "growth":
        _print_growth(session.summary())
    elif args.cmd == "reset":
        session.state.reset_list(word_list.id)
        store.save(session.state)
        print(f"✅ Reset {word_list.id}")
    else:
        try:
            run_practice(session)
        except (KeyboardInterrupt, EOFError):
            print()
    return 0
