"""
Declarative construction of state machines from a plain mapping.

Example::

    machine = build_machine(
        {
            "offHook": {"permit": {"callDialed": "ringing"}},
            "ringing": {"permit": {"callConnected": "connected", "hungUp": "offHook"}},
            "connected": {"permit": {"placedOnHold": "onHold", "hungUp": "offHook"}},
            "onHold": {"parent": "connected", "permit": {"takenOffHold": "connected"}},
        },
        initial_state="offHook",
    )
"""

from typing import Any, Iterable, Mapping, Optional

from fluxer.core.errors import ConfigurationError
from fluxer.core.state_machine import StateMachine
from fluxer.core.types import EventHandler, MutationHook, StateID, UnhandledHandler

STATE_KEYS = frozenset({"parent", "permit", "permit_dynamic", "on_entry", "on_exit"})


def _split(value: Any):
    """A table value is either ``target`` or ``(target, guard)``."""
    if isinstance(value, tuple):
        if len(value) != 2:
            raise ConfigurationError(f"Expected (target, guard) pair, got {value!r}")
        return value
    return value, None


def _handlers(state: StateID, key: str, value: Any):
    if callable(value):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    raise ConfigurationError(f"{key!r} for state {state!r} must be a callable or a list of callables", {"state": state})


def build_machine(
    states: Mapping[StateID, Mapping[str, Any]],
    initial_state: Optional[StateID] = None,
    data_context: Optional[Any] = None,
    state_mutation_hook: Optional[MutationHook] = None,
    on_transition: Iterable[EventHandler] = (),
    on_unhandled_trigger: Iterable[UnhandledHandler] = (),
) -> StateMachine:
    """
    Build a StateMachine from a table keyed by state name.

    Each state entry may contain ``parent``, ``permit`` (trigger to
    destination or ``(destination, guard)``), ``permit_dynamic`` (trigger to
    resolver or ``(resolver, guard)``), ``on_entry`` and ``on_exit``.

    :raises ConfigurationError: On unknown keys or malformed entries.
    """
    machine = StateMachine(state_mutation_hook=state_mutation_hook, data_context=data_context)

    for state, entry in states.items():
        entry = entry or {}
        unknown = set(entry) - STATE_KEYS
        if unknown:
            raise ConfigurationError(
                f"Unknown keys for state {state!r}: {', '.join(sorted(map(str, unknown)))}",
                {"state": state},
            )
        config = machine.configure(state)
        if entry.get("parent") is not None:
            config.substate_of(entry["parent"])
        for trigger, value in entry.get("permit", {}).items():
            destination, guard = _split(value)
            config.permit(trigger, destination, guard)
        for trigger, value in entry.get("permit_dynamic", {}).items():
            resolver, guard = _split(value)
            config.permit_dynamic(trigger, resolver, guard)
        for handler in _handlers(state, "on_entry", entry.get("on_entry", [])):
            config.on_entry(handler)
        for handler in _handlers(state, "on_exit", entry.get("on_exit", [])):
            config.on_exit(handler)

    for handler in on_transition:
        machine.on_transition(handler)
    for handler in on_unhandled_trigger:
        machine.on_unhandled_trigger(handler)

    if initial_state is not None:
        machine.init(initial_state)
    return machine
