import pytest

from maybe_fut.unwrap import Unwrap


class Wrapper(Unwrap):
    def __init__(self, inner, is_async):
        self._inner = inner
        self._is_async = is_async


def test_sync_wrapper_unwraps_std():
    inner = object()
    wrapper = Wrapper(inner, False)
    assert Unwrap.is_std(wrapper) is True
    assert Unwrap.is_async(wrapper) is False
    assert Unwrap.unwrap_std(wrapper) is inner
    assert Unwrap.get_std(wrapper) is inner
    assert Unwrap.get_async(wrapper) is None


def test_async_wrapper_unwraps_async():
    inner = object()
    wrapper = Wrapper(inner, True)
    assert Unwrap.is_async(wrapper) is True
    assert Unwrap.is_std(wrapper) is False
    assert Unwrap.unwrap_async(wrapper) is inner
    assert Unwrap.get_async(wrapper) is inner
    assert Unwrap.get_std(wrapper) is None


def test_unwrap_std_on_async_raises():
    wrapper = Wrapper(object(), True)
    with pytest.raises(TypeError):
        Unwrap.unwrap_std(wrapper)


def test_unwrap_async_on_sync_raises():
    wrapper = Wrapper(object(), False)
    with pytest.raises(TypeError):
        Unwrap.unwrap_async(wrapper)


def test_default_is_sync():
    class Plain(Unwrap):
        def __init__(self, inner):
            self._inner = inner

    inner = [1, 2]
    plain = Plain(inner)
    assert Unwrap.is_std(plain) is True
    assert Unwrap.unwrap_std(plain) is inner