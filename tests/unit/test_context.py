# tests/unit/test_context.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

from fluxer.runtime.context import DataContext


def test_empty_context():
    ctx = DataContext()
    assert ctx.current() is None
    assert ctx.resolve() is None
    assert ctx.is_dynamic is False


def test_static_value():
    data = {"customer": "jim"}
    ctx = DataContext(data)
    assert ctx.current() is data
    assert ctx.resolve() is data


def test_explicit_argument_wins():
    ctx = DataContext({"customer": "jim"})
    assert ctx.resolve("joe") == "joe"


def test_falsy_explicit_argument_still_wins():
    ctx = DataContext("default")
    assert ctx.resolve(0) == 0
    assert ctx.resolve("") == ""


def test_resolver_invoked_on_each_use():
    resolver = MagicMock(side_effect=[1, 2])
    ctx = DataContext(resolver)
    assert ctx.is_dynamic is True
    assert ctx.resolve() == 1
    assert ctx.current() == 2
    assert resolver.call_count == 2
    assert ctx.source is resolver


def test_resolver_not_invoked_when_argument_given():
    resolver = MagicMock()
    DataContext(resolver).resolve("explicit")
    resolver.assert_not_called()


def test_set_and_clear():
    ctx = DataContext("a")
    ctx.set("b")
    assert ctx.current() == "b"
    ctx.set(None)
    assert ctx.current() is None
