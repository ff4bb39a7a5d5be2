import json

from Word_fluency import core
from Word_fluency.core import JsonStateStore, export_state
from Word_fluency.models import SchedulerState, WordRecord, get_or_create
from Word_fluency.settings import ACCURACY_ONLY, Settings


def test_missing_file_gives_default_state(store):
    state = store.load()
    assert state.progress == {}
    assert state.sessions == {}
    assert state.settings == Settings()


def test_corrupt_file_gives_default_state(store):
    store.path.write_text("{not json", encoding="utf-8")
    assert store.load().progress == {}

    store.path.write_text("[1, 2, 3]", encoding="utf-8")
    assert store.load().settings == Settings()


def test_malformed_fields_are_repaired_one_by_one(store):
    store.path.write_text(json.dumps({
        "settings": {"reps_to_master": "abc", "speed_threshold": 99, "mastery_mode": ACCURACY_ONLY},
        "progress": {
            "fry-1": {
                "the": {"seen": 10, "correct": 3, "incorrect": -2, "fast_correct": 7,
                        "last_rt": "slow", "interval": 20000, "due": 123},
                "of": "oops",
                "and": {"correct": 1, "last_rt": float("nan")},
                "a": {"correct": 2, "last_rt": float("inf")},
            },
            "broken": "nope",
        },
        "sessions": {"fry-1": {"session_count": 2, "session_attempts": 25}},
    }), encoding="utf-8")

    state = store.load()
    assert state.settings.reps_to_master == 5
    assert state.settings.speed_threshold == 10.0
    assert state.settings.mastery_mode == ACCURACY_ONLY

    the = state.progress["fry-1"]["the"]
    assert (the.seen, the.correct, the.incorrect, the.fast_correct) == (3, 3, 0, 3)
    assert the.last_rt is None
    assert (the.interval, the.due) == (20000, 123)
    assert state.progress["fry-1"]["of"] == WordRecord()
    assert state.progress["fry-1"]["and"].last_rt is None
    assert state.progress["fry-1"]["a"].last_rt is None
    assert "NaN" not in json.dumps(state.to_dict())
    assert "broken" not in state.progress

    assert state.sessions["fry-1"].session_count == 3
    assert state.sessions["fry-1"].session_attempts == 5


def test_save_then_load(store):
    state = SchedulerState(settings=Settings(reps_to_master=7))
    rec = get_or_create(state.list_progress("fry-2"), "said")
    rec.seen, rec.correct, rec.fast_correct, rec.last_rt = 2, 2, 1, 1.25
    state.list_session("fry-2").session_attempts = 2
    store.save(state)

    loaded = store.load()
    assert loaded.settings.reps_to_master == 7
    assert loaded.progress["fry-2"]["said"] == rec
    assert loaded.sessions["fry-2"].session_attempts == 2
    assert not store.path.with_suffix(".tmp").exists()


def test_default_store_uses_base_dir(base_dir):
    store = JsonStateStore()
    store.save(SchedulerState())
    assert store.path == base_dir.resolve() / "data" / "fluency_state.json"
    assert core.STATE_FILE.exists()


def test_get_or_create_inserts_zero_record_once():
    progress = {}
    rec = get_or_create(progress, "was")
    assert rec == WordRecord(seen=0, correct=0, incorrect=0, fast_correct=0,
                             last_rt=None, interval=0, due=0)
    rec.seen = 1
    assert get_or_create(progress, "was").seen == 1
    assert list(progress) == ["was"]


def test_export_is_plain_json():
    state = SchedulerState()
    state.ensure_list("fry-1", ["the"])
    dumped = json.loads(export_state(state))
    assert dumped["progress"]["fry-1"]["the"]["seen"] == 0
    assert dumped["sessions"]["fry-1"] == {"session_count": 0, "session_attempts": 0}
    assert dumped["settings"]["mastery_mode"] == "accuracy_speed"
