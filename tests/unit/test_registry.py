import pytest

from registry_lib.content import JsonContent, TextContent, XmlContent
from registry_lib.errors import (
    AlreadyInitializedError,
    InvalidArgumentError,
    ItemAlreadyExistsError,
    ItemNotFoundError,
    NotInitializedError,
    RegistrationFailedError,
)
from registry_lib.registry import ContentRegistry
from registry_lib.storage.memory_backend import MemoryStorage


class RecordingBackend:
    """Dict-backed stub that records calls and can refuse adds."""

    def __init__(self, refuse_add=False):
        self.store = {}
        self.calls = []
        self.refuse_add = refuse_add

    def initialize(self):
        self.calls.append("initialize")

    def try_add(self, key, item):
        self.calls.append(("try_add", key))
        if self.refuse_add or key in self.store:
            return False
        self.store[key] = item
        return True

    def try_get(self, key):
        return self.store.get(key)

    def try_remove(self, key):
        return self.store.pop(key, None) is not None

    def contains_key(self, key):
        return key in self.store


@pytest.fixture
def registry():
    r = ContentRegistry()
    r.initialize()
    return r


def test_default_backend_is_memory():
    assert isinstance(ContentRegistry().storage, MemoryStorage)


def test_register_and_retrieve(registry):
    registry.register("cfg", JsonContent('{"a":1}'))
    got = registry.retrieve("cfg")
    assert got.kind == JsonContent('{"a":1}').kind
    assert got.raw_content() == '{"a":1}'
    assert registry.contains("cfg") is True


def test_register_collision_does_not_overwrite(registry):
    registry.register("doc", XmlContent("<a/>"))
    with pytest.raises(ItemAlreadyExistsError):
        registry.register("doc", XmlContent("<b/>"))
    assert registry.retrieve("doc").raw_content() == "<a/>"


def test_register_collision_ignores_case(registry):
    registry.register("Doc", TextContent("one"))
    with pytest.raises(ItemAlreadyExistsError):
        registry.register("DOC", TextContent("two"))
    assert registry.retrieve("doc").raw_content() == "one"


def test_retrieve_and_deregister_missing(registry):
    with pytest.raises(ItemNotFoundError):
        registry.retrieve("missing")
    with pytest.raises(ItemNotFoundError):
        registry.deregister("missing")


def test_missing_item_is_a_key_error(registry):
    with pytest.raises(KeyError):
        registry.retrieve("missing")


def test_deregister_then_lookup(registry):
    registry.register("t", TextContent(""))
    registry.deregister("t")
    assert registry.contains("t") is False
    with pytest.raises(ItemNotFoundError):
        registry.retrieve("t")


def test_text_content_may_be_empty(registry):
    registry.register("empty", TextContent(""))
    assert registry.retrieve("empty").raw_content() == ""


@pytest.mark.parametrize("name", [None, "", "   "])
def test_blank_names_are_rejected(registry, name):
    with pytest.raises(InvalidArgumentError):
        registry.register(name, TextContent("x"))
    with pytest.raises(InvalidArgumentError):
        registry.retrieve(name)
    with pytest.raises(InvalidArgumentError):
        registry.deregister(name)
    assert registry.contains(name) is False


def test_register_requires_content(registry):
    with pytest.raises(InvalidArgumentError):
        registry.register("x", None)


def test_register_rechecks_validity(registry):
    class Broken:
        kind = JsonContent("{}").kind

        def is_valid(self):
            return False

    with pytest.raises(InvalidArgumentError):
        registry.register("x", Broken())
    assert registry.contains("x") is False


def test_operations_before_initialize_fail():
    r = ContentRegistry()
    with pytest.raises(NotInitializedError):
        r.register("a", TextContent("x"))
    with pytest.raises(NotInitializedError):
        r.retrieve("a")
    with pytest.raises(NotInitializedError):
        r.deregister("a")
    with pytest.raises(NotInitializedError):
        r.contains("a")
    assert r.initialized is False


def test_second_initialize_fails():
    backend = RecordingBackend()
    r = ContentRegistry(backend)
    r.initialize()
    with pytest.raises(AlreadyInitializedError):
        r.initialize()
    assert backend.calls.count("initialize") == 1
    assert r.initialized is True


def test_backend_refusal_surfaces_as_registration_failed():
    backend = RecordingBackend(refuse_add=True)
    r = ContentRegistry(backend)
    r.initialize()
    with pytest.raises(RegistrationFailedError):
        r.register("a", TextContent("x"))
    assert ("try_add", "a") in backend.calls


def test_registry_delegates_to_custom_backend():
    backend = RecordingBackend()
    r = ContentRegistry(backend)
    r.initialize()
    r.register("k", JsonContent("[]"))
    assert backend.store["k"].name == "k"
    assert backend.store["k"].content.raw_content() == "[]"
