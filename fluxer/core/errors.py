# fluxer/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Dict, Optional


class FluxerError(Exception):
    """
    Base exception class for errors raised by the state machine engine.

    :param message: Human-readable description of the failure.
    :param details: Optional structured context (trigger, state, ...).
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NoInitialStateError(FluxerError):
    """
    Raised when a trigger is fired before the machine has a current state.
    """


class TriggerNotFoundError(FluxerError):
    """
    Raised when no transition for a trigger exists in the current state or any
    of its ancestors, and no unhandled-trigger handler is registered.
    """

    def __init__(self, trigger: Any, state: Any) -> None:
        super().__init__(
            f"Trigger {trigger!r} not found for state {state!r} or parent states",
            {"trigger": trigger, "state": state},
        )
        self.trigger = trigger
        self.state = state


class UnknownStateError(FluxerError):
    """
    Raised by a strict registry lookup on a state that was never configured.
    """

    def __init__(self, state: Any) -> None:
        super().__init__(f"No configuration for state {state!r}", {"state": state})
        self.state = state


class DynamicResolutionError(FluxerError):
    """
    Raised when a dynamic transition resolver yields an unusable destination.
    """

    def __init__(self, trigger: Any, destination: Any = None) -> None:
        super().__init__(
            f"Invalid dynamic state {destination!r} for trigger {trigger!r}",
            {"trigger": trigger, "destination": destination},
        )
        self.trigger = trigger
        self.destination = destination


class ConfigurationError(FluxerError):
    """
    Raised when the machine definition is malformed (hierarchy cycles,
    non-callable handlers, blank destinations, bad declarative tables).
    """
