"""Name-keyed registry of state configurations and hierarchy lookups."""

import logging
from typing import Dict, Iterator, List, Optional

from ..core.errors import ConfigurationError, UnknownStateError
from ..core.states import StateNode
from ..core.transitions import Transition
from ..core.types import StateID, TriggerID, is_blank

logger = logging.getLogger(__name__)


class StateRegistry:
    """
    Owns every StateNode of one machine. States are created lazily on first
    reference and never removed. The parent links form a tree; walks over
    them detect cycles instead of looping.
    """

    def __init__(self) -> None:
        self._nodes: Dict[StateID, StateNode] = {}

    def __contains__(self, state: StateID) -> bool:
        return not is_blank(state) and state in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def ensure(self, state: StateID) -> StateNode:
        """Return the node for ``state``, creating an empty one if needed."""
        if is_blank(state):
            raise ConfigurationError(f"Invalid state name {state!r}", {"state": state})
        node = self._nodes.get(state)
        if node is None:
            node = StateNode(state)
            self._nodes[state] = node
        return node

    def get(self, state: StateID, strict: bool = True) -> Optional[StateNode]:
        """
        Look up a configured state.

        :param strict: Raise instead of returning None for unknown states.
        :raises UnknownStateError: If ``strict`` and the state is not configured.
        """
        if state not in self:
            if strict:
                raise UnknownStateError(state)
            return None
        return self._nodes[state]

    def parent_of(self, state: StateID) -> Optional[StateNode]:
        """The configured parent node of ``state``, or None."""
        node = self.get(state, strict=False)
        if node is None or is_blank(node.parent):
            return None
        return self.get(node.parent, strict=False)

    def set_parent(self, state: StateID, parent: Optional[StateID]) -> None:
        """
        Make ``state`` a substate of ``parent`` (None detaches it).

        :raises ConfigurationError: If the link would close a cycle.
        """
        node = self.ensure(state)
        if parent is not None and self._would_create_cycle(state, parent):
            logger.error("Refusing to make %r a substate of %r: hierarchy cycle", state, parent)
            raise ConfigurationError(
                f"Making {state!r} a substate of {parent!r} would create a cycle",
                {"state": state, "parent": parent},
            )
        node.parent = parent

    def _would_create_cycle(self, state: StateID, new_parent: StateID) -> bool:
        current = new_parent
        seen = set()
        while not is_blank(current) and current not in seen:
            if current == state:
                return True
            seen.add(current)
            node = self._nodes.get(current)
            current = node.parent if node else None
        return False

    def lineage(self, state: StateID) -> Iterator[StateNode]:
        """
        Yield the node for ``state`` followed by its configured ancestors,
        nearest first. Stops at the first unconfigured state.

        :raises ConfigurationError: If the parent chain revisits a state.
        """
        node = self.get(state, strict=False)
        visited = []
        while node is not None:
            if node.name in visited:
                chain = " -> ".join(repr(name) for name in visited + [node.name])
                logger.error("Cycle detected in state hierarchy: %s", chain)
                raise ConfigurationError(f"Cycle detected in state hierarchy: {chain}", {"state": state})
            visited.append(node.name)
            yield node
            node = self.parent_of(node.name)

    def ancestors(self, state: StateID) -> List[StateNode]:
        """Configured ancestors of ``state``, immediate parent first."""
        return list(self.lineage(state))[1:]

    def find_handler(self, state: StateID, trigger: TriggerID) -> Optional[Transition]:
        """
        Find the transition for ``trigger`` starting at ``state`` and walking
        up the hierarchy. The nearest definition wins.
        """
        for node in self.lineage(state):
            transition = node.get_trigger(trigger)
            if transition is not None:
                return transition
        return None

    def collect_transitions(self, state: StateID) -> Dict[TriggerID, Transition]:
        """
        Every transition reachable from ``state``: its own first, then those
        inherited from ancestors for triggers not already present.
        """
        collected: Dict[TriggerID, Transition] = {}
        for node in self.lineage(state):
            for trigger, transition in node.transitions.items():
                collected.setdefault(trigger, transition)
        return collected

    def is_descendant(self, state: StateID, ancestor: StateID) -> bool:
        """True if ``ancestor`` is ``state`` itself or any configured ancestor."""
        if is_blank(state):
            return False
        if state == ancestor:
            return True
        return any(node.name == ancestor for node in self.lineage(state))

    def states(self) -> List[StateID]:
        """Configured state names in configuration order."""
        return list(self._nodes)

    def nodes(self) -> List[StateNode]:
        return list(self._nodes.values())

    def validate(self) -> List[str]:
        """Describe structural problems without raising."""
        errors = []
        for node in self._nodes.values():
            if not is_blank(node.parent) and node.parent not in self._nodes:
                errors.append(f"State {node.name!r} has unconfigured parent {node.parent!r}")
            try:
                for _ in self.lineage(node.name):
                    pass
            except ConfigurationError as e:
                errors.append(e.message)
        return errors
