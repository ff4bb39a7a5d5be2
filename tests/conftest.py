import numpy as np
import pytest

from Word_fluency import core
from Word_fluency.core import JsonStateStore
from Word_fluency.lists import WordList
from Word_fluency.practice import PracticeSession
from Word_fluency.speech import ListenResult


class FakeClock:
    def __init__(self, now=1_000_000):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class FixedRoll:
    """rng 대신 항상 같은 값을 돌려줌."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


@pytest.fixture(autouse=True)
def base_dir(tmp_path, monkeypatch):
    # 모든 테스트는 임시 BASE 에서 실행
    monkeypatch.setattr(core, "BASE", tmp_path)
    core.set_base_path(tmp_path)
    yield tmp_path


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(tmp_path):
    return JsonStateStore(tmp_path / "state.json")


@pytest.fixture
def spoken():
    return []


@pytest.fixture
def make_session(store, clock, spoken):
    def _make(words=("said", "the", "cat"), list_id="test", heard=None, **kw):
        replies = list(heard or [])

        def listener():
            return replies.pop(0) if replies else ListenResult(ok=False, reason="error")

        return PracticeSession(
            WordList.make(list_id, list_id.title(), words),
            store,
            clock=clock,
            rng=kw.pop("rng", np.random.default_rng(0)),
            speaker=lambda word, voice: spoken.append((word, voice)),
            listener=kw.pop("listener", listener),
        )
    return _make
