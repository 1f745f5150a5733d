"""fluxer: hierarchical finite state machine engine

Declare states, the triggers that move between them, guard conditions and
lifecycle callbacks, then drive transitions at runtime with ``fire``.

Substates inherit the transitions of their parent for triggers they do not
define themselves. Destinations can be fixed or resolved dynamically from
the machine's data context when a trigger fires.
"""

from fluxer.core.builder import build_machine
from fluxer.core.configurator import StateConfigurator
from fluxer.core.errors import (
    ConfigurationError,
    DynamicResolutionError,
    FluxerError,
    NoInitialStateError,
    TriggerNotFoundError,
    UnknownStateError,
)
from fluxer.core.events import EventKind, EventRegistry
from fluxer.core.state_machine import StateMachine
from fluxer.core.states import StateNode
from fluxer.core.transitions import Transition, TransitionInfo
from fluxer.runtime.context import DataContext
from fluxer.runtime.registry import StateRegistry

__version__ = "0.1.0"

__all__ = [
    "StateMachine",
    "StateConfigurator",
    "build_machine",
    "StateNode",
    "StateRegistry",
    "Transition",
    "TransitionInfo",
    "EventKind",
    "EventRegistry",
    "DataContext",
    # Errors
    "FluxerError",
    "NoInitialStateError",
    "TriggerNotFoundError",
    "UnknownStateError",
    "DynamicResolutionError",
    "ConfigurationError",
]
