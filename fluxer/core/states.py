# fluxer/core/states.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from fluxer.core.transitions import Transition
from fluxer.core.types import StateID, TriggerID


@dataclass(eq=False)
class StateNode:
    """
    Configuration for one named state: its optional parent and the
    transitions it declares, keyed by trigger.

    Hierarchy is stored by name only; the registry resolves parents.
    """

    name: StateID
    parent: Optional[StateID] = None
    transitions: Dict[TriggerID, Transition] = field(default_factory=dict)

    def get_trigger(self, trigger: TriggerID) -> Optional[Transition]:
        """Return this state's own transition for ``trigger``, if any."""
        return self.transitions.get(trigger)

    def add_transition(self, transition: Transition) -> None:
        """Register a transition, replacing any earlier one for the same trigger."""
        self.transitions[transition.trigger] = transition

    @property
    def is_final(self) -> bool:
        return not self.transitions
