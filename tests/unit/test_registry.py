# tests/unit/test_registry.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from fluxer.core.errors import ConfigurationError, UnknownStateError
from fluxer.core.transitions import Transition
from fluxer.runtime.registry import StateRegistry


@pytest.fixture
def registry() -> StateRegistry:
    """root <- middle <- leaf, each with a 'go' trigger plus one of their own."""
    r = StateRegistry()
    r.ensure("root").add_transition(Transition("root", "go", "from_root"))
    r.ensure("root").add_transition(Transition("root", "reset", "root"))
    r.set_parent("middle", "root")
    r.ensure("middle").add_transition(Transition("middle", "go", "from_middle"))
    r.ensure("middle").add_transition(Transition("middle", "pause", "paused"))
    r.set_parent("leaf", "middle")
    r.ensure("leaf").add_transition(Transition("leaf", "go", "from_leaf"))
    return r


def test_ensure_is_idempotent():
    r = StateRegistry()
    first = r.ensure("a")
    assert r.ensure("a") is first
    assert len(r) == 1
    assert r.states() == ["a"]


@pytest.mark.parametrize("bad", [None, ""])
def test_ensure_rejects_blank_names(bad):
    with pytest.raises(ConfigurationError):
        StateRegistry().ensure(bad)


def test_get_strict_and_lenient(registry):
    assert registry.get("leaf").name == "leaf"
    assert registry.get("ghost", strict=False) is None
    with pytest.raises(UnknownStateError):
        registry.get("ghost")


def test_parent_of(registry):
    assert registry.parent_of("leaf").name == "middle"
    assert registry.parent_of("root") is None
    assert registry.parent_of("ghost") is None


def test_parent_of_unconfigured_parent():
    r = StateRegistry()
    r.set_parent("child", "nowhere")
    assert r.get("child").parent == "nowhere"
    assert r.parent_of("child") is None
    assert [n.name for n in r.lineage("child")] == ["child"]


def test_lineage_and_ancestors(registry):
    assert [n.name for n in registry.lineage("leaf")] == ["leaf", "middle", "root"]
    assert [n.name for n in registry.ancestors("leaf")] == ["middle", "root"]
    assert list(registry.lineage("ghost")) == []


def test_find_handler_prefers_nearest(registry):
    assert registry.find_handler("leaf", "go").destination == "from_leaf"
    assert registry.find_handler("middle", "go").destination == "from_middle"
    assert registry.find_handler("leaf", "pause").destination == "paused"
    assert registry.find_handler("leaf", "reset").destination == "root"
    assert registry.find_handler("leaf", "missing") is None
    assert registry.find_handler("ghost", "go") is None


def test_collect_transitions_keeps_closest(registry):
    collected = registry.collect_transitions("leaf")
    assert list(collected) == ["go", "pause", "reset"]
    assert collected["go"].source == "leaf"
    assert collected["pause"].source == "middle"
    assert collected["reset"].source == "root"


def test_is_descendant(registry):
    assert registry.is_descendant("leaf", "leaf")
    assert registry.is_descendant("leaf", "middle")
    assert registry.is_descendant("leaf", "root")
    assert not registry.is_descendant("root", "leaf")
    assert registry.is_descendant("ghost", "ghost")
    assert not registry.is_descendant(None, "root")
    assert not registry.is_descendant(None, None)


def test_set_parent_rejects_cycles():
    r = StateRegistry()
    r.set_parent("a", "b")
    with pytest.raises(ConfigurationError, match="cycle"):
        r.set_parent("b", "a")
    with pytest.raises(ConfigurationError, match="cycle"):
        r.set_parent("a", "a")


def test_set_parent_rejects_long_cycles():
    r = StateRegistry()
    r.set_parent("a", "b")
    r.set_parent("b", "c")
    with pytest.raises(ConfigurationError):
        r.set_parent("c", "a")


def test_walk_detects_cycle_introduced_directly():
    r = StateRegistry()
    r.set_parent("a", "b")
    r.ensure("b").parent = "a"
    with pytest.raises(ConfigurationError, match="Cycle detected"):
        r.find_handler("a", "anything")
    with pytest.raises(ConfigurationError):
        r.is_descendant("a", "zzz")


def test_validate_reports_without_raising():
    r = StateRegistry()
    r.set_parent("orphan", "missing")
    r.set_parent("a", "b")
    r.ensure("b").parent = "a"
    problems = r.validate()
    assert any("unconfigured parent 'missing'" in p for p in problems)
    assert any("Cycle detected" in p for p in problems)


def test_validate_clean(registry):
    assert registry.validate() == []
