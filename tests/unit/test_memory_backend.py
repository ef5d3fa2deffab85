import threading

import pytest

from registry_lib.content import JsonContent, TextContent
from registry_lib.errors import InvalidArgumentError
from registry_lib.models import RepositoryItem
from registry_lib.storage import StorageProtocol
from registry_lib.storage.memory_backend import MemoryStorage


def _item(name="a", raw="{}"):
    return RepositoryItem(name, JsonContent(raw))


def test_memory_basic_operations():
    m = MemoryStorage()
    m.initialize()

    item = _item("doc")
    assert m.try_add("doc", item) is True
    assert m.contains_key("doc") is True
    assert m.try_get("doc") is item
    assert len(m) == 1

    assert m.try_remove("doc") is True
    assert m.contains_key("doc") is False
    assert m.try_get("doc") is None
    assert m.try_remove("doc") is False


def test_memory_never_overwrites():
    m = MemoryStorage()
    first = _item("k", "{}")
    assert m.try_add("k", first) is True
    assert m.try_add("k", _item("k", "[]")) is False
    assert m.try_add("k", first) is False
    assert m.try_get("k").content.raw_content() == "{}"


def test_memory_keys_are_case_insensitive():
    m = MemoryStorage()
    m.try_add("Report", RepositoryItem("Report", TextContent("x")))
    assert m.contains_key("report") is True
    assert m.try_get("REPORT").name == "Report"
    assert m.try_add("rePort", RepositoryItem("rePort", TextContent("y"))) is False
    assert m.try_remove("report") is True


@pytest.mark.parametrize("key", [None, "", "   "])
def test_memory_blank_keys_raise(key):
    m = MemoryStorage()
    with pytest.raises(InvalidArgumentError):
        m.try_add(key, _item())
    with pytest.raises(InvalidArgumentError):
        m.try_get(key)
    with pytest.raises(InvalidArgumentError):
        m.try_remove(key)
    with pytest.raises(InvalidArgumentError):
        m.contains_key(key)


def test_memory_rejects_none_item():
    with pytest.raises(InvalidArgumentError):
        MemoryStorage().try_add("k", None)


def test_memory_satisfies_protocol():
    assert isinstance(MemoryStorage(), StorageProtocol)


def test_memory_distinct_key_adds_do_not_wait_on_each_other():
    entered = threading.Event()
    release = threading.Event()

    class SlowDict(dict):
        def setdefault(self, key, default=None):
            if key == "a":
                entered.set()
                release.wait(5)
            return super().setdefault(key, default)

    m = MemoryStorage()
    m._store = SlowDict()

    t = threading.Thread(target=m.try_add, args=("a", _item("a")))
    t.start()
    try:
        assert entered.wait(5)
        # "a" is still mid-insert; "b" must go straight through
        assert m.try_add("b", _item("b")) is True
        assert m.contains_key("b") is True
    finally:
        release.set()
        t.join(5)
    assert m.contains_key("a") is True
