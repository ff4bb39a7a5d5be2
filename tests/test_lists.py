import json

import pytest

from Word_fluency import core
from Word_fluency.lists import FRY_LISTS, WordList, find_list, load_lists, uniq_clean


def test_uniq_clean_keeps_first_occurrence_order():
    assert uniq_clean(["  The", "the", "", "Of ", "OF", "and"]) == ("the", "of", "and")
    assert uniq_clean(None) == ()


def test_builtin_fry_lists():
    assert [wl.id for wl in FRY_LISTS] == ["fry-1", "fry-2", "fry-3", "fry-4"]
    assert all(len(wl.words) == 25 for wl in FRY_LISTS)
    assert FRY_LISTS[0].words[:3] == ("the", "of", "and")
    assert FRY_LISTS[1].name == "Fry words 26-50"


def test_load_lists_defaults_when_file_missing():
    assert load_lists() == list(FRY_LISTS)


def test_load_lists_from_json():
    core.LISTS_FILE.write_text(json.dumps([
        {"id": "farm", "name": "Farm", "words": ["Cow", "cow", " pig "]},
        {"name": "no id"},
        {"id": "blank", "words": []},
    ]), encoding="utf-8")
    lists = load_lists()
    assert lists == [
        WordList("farm", "Farm", ("cow", "pig")),
        WordList("blank", "blank", ()),
    ]


def test_load_lists_corrupt_file_falls_back(tmp_path):
    path = tmp_path / "lists.json"
    path.write_text("[{", encoding="utf-8")
    assert load_lists(path) == list(FRY_LISTS)


def test_find_list():
    lists = list(FRY_LISTS)
    assert find_list(lists, None) is lists[0]
    assert find_list(lists, "fry-3").id == "fry-3"
    with pytest.raises(ValueError):
        find_list(lists, "fry-99")
