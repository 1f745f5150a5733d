# fluxer/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from fluxer.core.errors import ConfigurationError, DynamicResolutionError
from fluxer.core.types import DestinationResolver, Guard, StateID, TriggerID, is_blank


@dataclass(frozen=True)
class TransitionInfo:
    """
    Read-only description of a transition handed to guards, resolvers and
    event handlers.
    """

    source: StateID
    trigger: TriggerID
    destination: Optional[StateID]

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


class Transition:
    """
    A single ``(source, trigger) -> destination`` edge. The destination is
    either fixed at configuration time or computed by a dynamic resolver when
    the trigger fires. An optional guard gates whether the edge may be taken.
    """

    def __init__(
        self,
        source: StateID,
        trigger: TriggerID,
        destination: Optional[StateID] = None,
        guard: Optional[Guard] = None,
        resolver: Optional[DestinationResolver] = None,
    ) -> None:
        """
        :param source: Name of the owning state.
        :param trigger: Trigger name this transition answers to.
        :param destination: Static destination; may be None for dynamic transitions.
        :param guard: A literal bool or a predicate ``(info, data) -> bool``.
        :param resolver: Callable ``(info, data) -> state`` computing the destination.
        """
        if resolver is not None and not callable(resolver):
            raise ConfigurationError(
                f"Dynamic state function must be callable for trigger {trigger!r}",
                {"trigger": trigger},
            )
        self._source = source
        self._trigger = trigger
        self._destination = destination
        self._guard = guard
        self._resolver = resolver

    @property
    def source(self) -> StateID:
        return self._source

    @property
    def trigger(self) -> TriggerID:
        return self._trigger

    @property
    def destination(self) -> Optional[StateID]:
        """The static destination (None for a purely dynamic transition)."""
        return self._destination

    @property
    def guard(self) -> Optional[Guard]:
        return self._guard

    @property
    def resolver(self) -> Optional[DestinationResolver]:
        return self._resolver

    @property
    def is_dynamic(self) -> bool:
        return self._resolver is not None

    def info(self, destination: Optional[StateID] = None) -> TransitionInfo:
        """
        Build the info record for this transition.

        :param destination: Overrides the static destination (e.g. once resolved).
        """
        if destination is None:
            destination = self._destination
        return TransitionInfo(self._source, self._trigger, destination)

    def evaluate_guard(self, data: Any = None) -> bool:
        """
        Decide whether the transition may be taken.

        :param data: Resolved user data passed through to a predicate guard.
        :return: True when no guard is set, the literal value for a bool guard,
            otherwise the predicate's result coerced to bool.
        """
        if self._guard is None:
            return True
        if isinstance(self._guard, bool):
            return self._guard
        if not callable(self._guard):
            return bool(self._guard)
        return bool(self._guard(self.info(), data))

    def resolve_destination(self, data: Any = None, evaluate_dynamic: bool = True) -> Optional[StateID]:
        """
        Determine where the transition leads.

        :param data: Resolved user data passed to the dynamic resolver.
        :param evaluate_dynamic: When False the static destination is returned
            even for dynamic transitions.
        :raises DynamicResolutionError: If the resolver yields a blank or
            unhashable destination.
        """
        if self._resolver is None or not evaluate_dynamic:
            return self._destination
        destination = self._resolver(self.info(), data)
        if is_blank(destination):
            raise DynamicResolutionError(self._trigger, destination)
        return destination

    def is_reentry(self) -> bool:
        return self._source == self._destination

    def __repr__(self) -> str:
        target = "<dynamic>" if self.is_dynamic else repr(self._destination)
        return f"Transition({self._source!r} -[{self._trigger!r}]-> {target})"
