import pytest

from edhms.common.events import add_listener, publish, remove_listener
from edhms.common.lists import ListEntryError, add_entry, remove_entry, split_comma_list, unique_list


def test_split_comma_list_trims_and_drops_empty():
    assert split_comma_list(" a, b,,c ,") == ["a", "b", "c"]
    assert split_comma_list(["x ", " ", "y"]) == ["x", "y"]
    assert split_comma_list(None) == []


def test_add_entry_rejects_empty_after_trim():
    with pytest.raises(ListEntryError):
        add_entry(["Penicillin"], "   ")


def test_add_entry_rejects_duplicate():
    with pytest.raises(ListEntryError):
        add_entry(["Penicillin"], " Penicillin ")


def test_add_entry_appends_trimmed():
    assert add_entry(["Penicillin"], " Latex ") == ["Penicillin", "Latex"]


def test_remove_entry_is_idempotent():
    entries = ["Penicillin", "Latex"]
    once = remove_entry(entries, "Latex")
    assert once == ["Penicillin"]
    assert remove_entry(once, "Latex") == ["Penicillin"]
    assert remove_entry(once, "Peanuts") == ["Penicillin"]


def test_publish_skips_failing_handler():
    seen = []

    def broken(payload):
        raise RuntimeError("boom")

    def ok(payload):
        seen.append(payload)

    add_listener("test.event", broken)
    add_listener("test.event", ok)
    try:
        publish("test.event", {"n": 1})
    finally:
        remove_listener("test.event", broken)
        remove_listener("test.event", ok)

    assert seen == [{"n": 1}]


def test_remove_unknown_listener_is_noop():
    remove_listener("never.registered", lambda p: None)


def test_unique_list_keeps_first_occurrence():
    assert unique_list("b, a, b , a") == ["b", "a"]
    assert unique_list(None) == []


def test_remove_entry_trims_value():
    assert remove_entry(["Penicillin", "Latex"], " Penicillin ") == ["Latex"]
