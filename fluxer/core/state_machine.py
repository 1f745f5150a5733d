# fluxer/core/state_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging
from typing import Any, Dict, List, Optional

from fluxer.core.configurator import StateConfigurator
from fluxer.core.errors import ConfigurationError, NoInitialStateError, TriggerNotFoundError
from fluxer.core.events import EventKind, EventRegistry
from fluxer.core.types import (
    PLACEHOLDER_DESTINATION,
    EventHandler,
    MutationHook,
    StateID,
    TriggerID,
    UnhandledHandler,
    is_blank,
    is_hashable,
)
from fluxer.runtime.context import DataContext
from fluxer.runtime.registry import StateRegistry

logger = logging.getLogger(__name__)


class StateMachine:
    """
    A hierarchical state machine with exactly one current state. States,
    transitions and handlers are declared through ``configure``; ``fire``
    then drives transitions.

    Calls are synchronous and the instance holds no locks: callers sharing a
    machine between threads must serialize ``fire`` and ``init`` themselves.
    """

    def __init__(
        self,
        initial_state: Optional[StateID] = None,
        state_mutation_hook: Optional[MutationHook] = None,
        data_context: Optional[Any] = None,
    ) -> None:
        """
        :param initial_state: Optional state to start in (no events fired).
        :param state_mutation_hook: Called with the new state after every transition.
        :param data_context: Static data or a zero-argument callable producing it.
        """
        self._registry = StateRegistry()
        self._events = EventRegistry()
        self._context = DataContext(data_context)
        self._state: Optional[StateID] = None
        self._mutation_hook = state_mutation_hook
        if not is_blank(initial_state):
            self.init(initial_state)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def init(self, state: StateID) -> "StateMachine":
        """
        Force the current state without firing any event. ``None`` clears it.

        :raises ConfigurationError: If ``state`` cannot be hashed.
        """
        if state is not None and not is_hashable(state):
            raise ConfigurationError(f"Invalid state name {state!r}", {"state": state})
        logger.debug("Initializing state machine in state %r", state)
        self._state = state
        return self

    def configure(self, state: StateID) -> StateConfigurator:
        """Return a configurator for ``state``, creating the state if needed."""
        return StateConfigurator(self._registry.ensure(state), self._registry, self._events)

    for_state = configure

    def set_state_mutation_hook(self, hook: Optional[MutationHook]) -> "StateMachine":
        """Set a function called with the new state whenever the state changes."""
        self._mutation_hook = hook
        return self

    def set_data_context(self, value_or_resolver: Optional[Any]) -> "StateMachine":
        """
        Set the default data for guards, dynamic resolution and handlers. A
        callable is invoked on every use to produce the data.
        """
        self._context.set(value_or_resolver)
        return self

    def get_data_context(self) -> Optional[Any]:
        """The current value of the data context."""
        return self._context.current()

    def on_transition(self, handler: EventHandler) -> "StateMachine":
        """Call ``handler(info, data)`` after every transition."""
        self._events.add(EventKind.TRANSITION, handler)
        return self

    def on_unhandled_trigger(self, handler: UnhandledHandler) -> "StateMachine":
        """Call ``handler(trigger, state)`` instead of raising for unknown triggers."""
        self._events.add(EventKind.UNHANDLED, handler)
        return self

    def on_entry_for(self, state: StateID, handler: EventHandler) -> "StateMachine":
        self.configure(state).on_entry(handler)
        return self

    def on_exit_for(self, state: StateID, handler: EventHandler) -> "StateMachine":
        self.configure(state).on_exit(handler)
        return self

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def state(self) -> Optional[StateID]:
        return self._state

    def get_state(self) -> Optional[StateID]:
        return self._state

    @property
    def registry(self) -> StateRegistry:
        return self._registry

    @property
    def events(self) -> EventRegistry:
        return self._events

    def list_states(self) -> List[StateID]:
        """Configured states, in the order they were first referenced."""
        return self._registry.states()

    def is_in_state(self, state: StateID) -> bool:
        """True if ``state`` is the current state or one of its ancestors."""
        return self._registry.is_descendant(self._state, state)

    def final_states(self) -> List[StateID]:
        """
        States that end a workflow: configured states without transitions and
        static destinations that were never configured.
        """
        finals: Dict[StateID, None] = {}
        for node in self._registry.nodes():
            if node.is_final:
                finals[node.name] = None
                continue
            for transition in node.transitions.values():
                destination = transition.destination
                if not is_blank(destination) and destination not in self._registry:
                    finals[destination] = None
        return list(finals)

    def is_state_final(self) -> bool:
        """True if the current state is unconfigured or has no transitions."""
        node = self._registry.get(self._state, strict=False)
        return node is None or node.is_final

    def validate(self) -> List[str]:
        """Problems in the configured hierarchy; empty when consistent."""
        return self._registry.validate()

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def fire(self, trigger: TriggerID, args: Any = None) -> bool:
        """
        Attempt the transition for ``trigger`` from the current state.

        Events run in the order exit, state change, mutation hook,
        transition, entry.

        :param trigger: Trigger name.
        :param args: Data for this call; defaults to the data context.
        :return: True if a transition happened, False if its guard rejected
            it or the trigger went to unhandled-trigger handlers.
        :raises NoInitialStateError: If no current state is set.
        :raises TriggerNotFoundError: If nothing handles the trigger.
        :raises DynamicResolutionError: If a dynamic destination is invalid.
        """
        if is_blank(self._state):
            raise NoInitialStateError("Initial state not defined")

        source = self._state
        transition = self._registry.find_handler(source, trigger)
        if transition is None:
            if self._events.has_handlers(EventKind.UNHANDLED):
                logger.debug("Unhandled trigger %r in state %r", trigger, source)
                self._events.dispatch(EventKind.UNHANDLED, trigger, source)
                return False
            raise TriggerNotFoundError(trigger, source)

        data = self._context.resolve(args)
        if not transition.evaluate_guard(data):
            logger.debug("Guard rejected trigger %r in state %r", trigger, source)
            return False

        destination = transition.resolve_destination(data)
        info = transition.info(destination)

        self._events.dispatch(EventKind.EXIT, info, data, state=source)
        self._state = destination
        if callable(self._mutation_hook):
            self._mutation_hook(destination)
        self._events.dispatch(EventKind.TRANSITION, info, data)
        self._events.dispatch(EventKind.ENTRY, info, data, state=destination)
        logger.debug("Transition %r -[%r]-> %r", source, trigger, destination)
        return True

    def can_fire(self, trigger: TriggerID, args: Any = None) -> bool:
        """
        True if ``trigger`` is handled from the current state and its guard
        passes. Never changes state or runs handlers.
        """
        transition = self._registry.find_handler(self._state, trigger)
        if transition is None:
            return False
        return transition.evaluate_guard(self._context.resolve(args))

    def allowed_triggers(self, args: Any = None, evaluate_dynamic: bool = False) -> Dict[TriggerID, StateID]:
        """
        Triggers usable from the current state mapped to their destinations,
        including those inherited from ancestor states.

        :param args: Data for guard and resolver evaluation.
        :param evaluate_dynamic: Resolve dynamic destinations instead of
            reporting them as ``"?"``.
        :return: An empty dict if the current state is not configured.
        """
        if self._state not in self._registry:
            return {}
        data = self._context.resolve(args)
        result = {}
        for trigger, transition in self._registry.collect_transitions(self._state).items():
            if not transition.evaluate_guard(data):
                continue
            destination = transition.resolve_destination(data, evaluate_dynamic)
            result[trigger] = PLACEHOLDER_DESTINATION if is_blank(destination) else destination
        return result

    def __repr__(self) -> str:
        return f"StateMachine(state={self._state!r}, states={len(self._registry)})"
