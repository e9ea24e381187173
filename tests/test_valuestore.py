"""Tests for the custom value store."""
from hostfetch.core.valuestore import CustomValue, ValueStore


def test_set_and_get():
    store = ValueStore()
    entry = store.set("Motto", "Stay curious", True)
    assert isinstance(entry, CustomValue)
    assert store.get("Motto") == CustomValue(print_key=True, value="Stay curious")


def test_last_write_wins():
    store = ValueStore()
    store.set("Motto", "first", True)
    store.set("Motto", "second", False)
    assert len(store) == 1
    entry = store.get("Motto")
    assert entry.value == "second"
    assert entry.print_key is False


def test_lookup_is_case_sensitive():
    store = ValueStore()
    store.set("Motto", "x", True)
    assert "Motto" in store
    assert "motto" not in store
    assert store.get("MOTTO") is None


def test_iteration_keeps_insertion_order():
    store = ValueStore()
    for key in ("b", "a", "c"):
        store.set(key, key, True)
    store.set("b", "again", True)
    assert list(store) == ["b", "a", "c"]
