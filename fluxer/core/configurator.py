# fluxer/core/configurator.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

from fluxer.core.errors import ConfigurationError
from fluxer.core.events import EventKind, EventRegistry
from fluxer.core.transitions import Transition
from fluxer.core.types import (
    PLACEHOLDER_DESTINATION,
    DestinationResolver,
    EventHandler,
    Guard,
    StateID,
    TriggerID,
    is_blank,
)

if TYPE_CHECKING:
    from fluxer.core.states import StateNode
    from fluxer.runtime.registry import StateRegistry


class StateConfigurator:
    """
    Fluent configuration scoped to a single state. Every method returns the
    configurator so calls can be chained.
    """

    def __init__(self, node: "StateNode", registry: "StateRegistry", events: EventRegistry) -> None:
        self._node = node
        self._registry = registry
        self._events = events

    @property
    def state(self) -> StateID:
        return self._node.name

    def substate_of(self, parent: StateID) -> "StateConfigurator":
        """
        Declare this state a child of ``parent``; it inherits the parent's
        transitions for triggers it does not define itself.

        :raises ConfigurationError: If the link would create a hierarchy cycle.
        """
        self._registry.set_parent(self._node.name, parent)
        return self

    def permit(self, trigger: TriggerID, destination: StateID, guard: Optional[Guard] = None) -> "StateConfigurator":
        """
        With ``trigger``, proceed to ``destination``.

        :param guard: Optional bool or predicate ``(info, data)`` gating the transition.
        :raises ConfigurationError: If ``destination`` is blank.
        """
        if is_blank(destination):
            raise ConfigurationError(
                f"Transition {trigger!r} from {self._node.name!r} needs a destination",
                {"state": self._node.name, "trigger": trigger},
            )
        self._node.add_transition(Transition(self._node.name, trigger, destination, guard=guard))
        return self

    def permit_dynamic(
        self, trigger: TriggerID, resolver: DestinationResolver, guard: Optional[Guard] = None
    ) -> "StateConfigurator":
        """
        With ``trigger``, proceed to whatever state ``resolver(info, data)``
        returns at fire time.
        """
        self._node.add_transition(Transition(self._node.name, trigger, guard=guard, resolver=resolver))
        return self

    def on_entry(self, handler: EventHandler) -> "StateConfigurator":
        """Call ``handler(info, data)`` after the machine enters this state."""
        self._events.add(EventKind.ENTRY, handler, self._node.name)
        return self

    def on_exit(self, handler: EventHandler) -> "StateConfigurator":
        """Call ``handler(info, data)`` before the machine leaves this state."""
        self._events.add(EventKind.EXIT, handler, self._node.name)
        return self

    def allowed_triggers(self, args: Any = None, evaluate_dynamic: bool = False) -> Dict[TriggerID, StateID]:
        """
        This state's own guard-passing triggers mapped to their destinations.
        ``args`` is used as the data as-is; inherited transitions are ignored.
        """
        result = {}
        for trigger, transition in self._node.transitions.items():
            if not transition.evaluate_guard(args):
                continue
            destination = transition.resolve_destination(args, evaluate_dynamic)
            result[trigger] = PLACEHOLDER_DESTINATION if is_blank(destination) else destination
        return result
