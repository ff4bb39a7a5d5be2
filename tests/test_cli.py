import json

import pytest

from Word_fluency import cli, core, speech
from Word_fluency.cli import main
from Word_fluency.practice import AUTO_ADVANCE_DELAY


@pytest.fixture
def quiet_tts(monkeypatch):
    class FakeTTS:
        def __init__(self, *a, **kw):
            pass

        def save(self, path):
            with open(path, "wb") as fh:
                fh.write(b"ID3")

    monkeypatch.setattr(speech, "gTTS", FakeTTS)


def test_lists_command(base_dir, capsys):
    assert main(["--base", str(base_dir), "lists"]) == 0
    out = capsys.readouterr().out
    assert "fry-1" in out and "fry-4" in out


def test_settings_command_clamps_and_saves(base_dir, capsys):
    assert main(["--base", str(base_dir), "settings", "--reps-to-master", "50",
                 "--mastery-mode", "accuracy_only"]) == 0
    assert "reps_to_master   20" in capsys.readouterr().out
    saved = json.loads(core.STATE_FILE.read_text(encoding="utf-8"))
    assert saved["settings"]["reps_to_master"] == 20
    assert saved["settings"]["mastery_mode"] == "accuracy_only"


def test_practice_loop_then_growth_export_reset(base_dir, capsys, monkeypatch, quiet_tts):
    answers = iter(["y", "n", "r", "g", "zzz", "q"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    assert main(["--base", str(base_dir), "practice", "--list", "fry-2"]) == 0

    state = json.loads(core.STATE_FILE.read_text(encoding="utf-8"))
    records = state["progress"]["fry-2"].values()
    assert sum(r["seen"] for r in records) == 2
    assert state["sessions"]["fry-2"]["session_attempts"] == 2

    capsys.readouterr()
    main(["--base", str(base_dir), "growth", "--list", "fry-2"])
    assert "Attempts: 2" in capsys.readouterr().out

    main(["--base", str(base_dir), "export"])
    assert '"fry-2"' in capsys.readouterr().out

    main(["--base", str(base_dir), "reset", "--list", "fry-2"])
    state = json.loads(core.STATE_FILE.read_text(encoding="utf-8"))
    assert "fry-2" not in state["progress"]


def test_unknown_list(base_dir, capsys):
    assert main(["--base", str(base_dir), "growth", "--list", "nope"]) == 1
    assert "unknown list id" in capsys.readouterr().out


def test_empty_custom_list(base_dir, capsys):
    core.setup_dirs()
    core.LISTS_FILE.write_text(json.dumps([{"id": "blank", "words": []}]), encoding="utf-8")
    assert main(["--base", str(base_dir), "practice"]) == 1
    assert "Add words" in capsys.readouterr().out


def test_clear_all(base_dir, capsys):
    main(["--base", str(base_dir), "settings", "--auto-speak", "off"])
    assert core.STATE_FILE.exists()
    assert main(["--base", str(base_dir), "clear-all"]) == 0
    assert not core.STATE_FILE.exists()


def test_missed_word_is_silent_when_auto_speak_off(base_dir, monkeypatch):
    said = []
    monkeypatch.setattr(speech, "speak", lambda word, voice="": said.append(word))
    main(["--base", str(base_dir), "settings", "--auto-speak", "off"])

    answers = iter(["n", "q"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    assert main(["--base", str(base_dir), "practice"]) == 0
    assert said == []


def test_speak_command_auto_grades_after_delay(base_dir, capsys, monkeypatch):
    core.LISTS_FILE.write_text(json.dumps([{"id": "pets", "words": ["cat"]}]), encoding="utf-8")
    monkeypatch.setattr(speech, "speak", lambda word, voice="": None)
    monkeypatch.setattr(speech, "listen_once",
                        lambda: speech.ListenResult(ok=True, transcript="the cat", confidence=0.9))
    slept = []
    monkeypatch.setattr(cli.time, "sleep", slept.append)

    answers = iter(["s", "q"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    assert main(["--base", str(base_dir), "practice"]) == 0

    assert "✅ Correct!" in capsys.readouterr().out
    assert slept == [AUTO_ADVANCE_DELAY]
    rec = json.loads(core.STATE_FILE.read_text(encoding="utf-8"))["progress"]["pets"]["cat"]
    assert (rec["seen"], rec["correct"]) == (1, 1)


def test_speak_command_unmatched_is_not_graded(base_dir, capsys, monkeypatch):
    core.LISTS_FILE.write_text(json.dumps([{"id": "pets", "words": ["cat"]}]), encoding="utf-8")
    monkeypatch.setattr(speech, "speak", lambda word, voice="": None)
    monkeypatch.setattr(speech, "listen_once",
                        lambda: speech.ListenResult(ok=True, transcript="dog", confidence=0.9))
    monkeypatch.setattr(cli.time, "sleep", lambda s: pytest.fail("no delay expected"))

    answers = iter(["s", "q"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    assert main(["--base", str(base_dir), "practice"]) == 0

    assert 'Heard: "dog"' in capsys.readouterr().out
    assert not core.STATE_FILE.exists()
