import pytest

from lazydi.core import ClassToken, InstanceCache, NotInstantiatedError


def test_put_get_has():
    cache = InstanceCache()
    token = ClassToken(1, "Service")
    obj = object()

    assert not cache.has(token)
    cache.put(token, obj)
    assert cache.has(token)
    assert cache.get(token) is obj
    assert token in cache
    assert len(cache) == 1


def test_get_missing_raises_not_instantiated():
    cache = InstanceCache()
    with pytest.raises(NotInstantiatedError) as excinfo:
        cache.get(ClassToken(7, "Missing"))
    assert excinfo.value.known is True


def test_all_is_a_read_only_snapshot():
    cache = InstanceCache()
    a, b = ClassToken(1, "A"), ClassToken(2, "B")
    cache.put(a, "a")
    snapshot = cache.all()
    cache.put(b, "b")

    assert dict(snapshot) == {a: "a"}
    with pytest.raises(TypeError):
        snapshot[b] = "b"  # type: ignore[index]


def test_tokens_keep_insertion_order():
    cache = InstanceCache()
    tokens = [ClassToken(i, f"T{i}") for i in (3, 1, 2)]
    for token in tokens:
        cache.put(token, token.name)
    assert cache.tokens() == tokens
    assert list(cache) == tokens
