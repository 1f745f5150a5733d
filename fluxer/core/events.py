# fluxer/core/events.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from fluxer.core.errors import ConfigurationError
from fluxer.core.types import StateID


class EventKind(str, Enum):
    """Lifecycle points at which handlers may be registered."""

    ENTRY = "entry"
    EXIT = "exit"
    UNHANDLED = "unhandled"
    TRANSITION = "transition"

    @property
    def is_state_scoped(self) -> bool:
        return self in (EventKind.ENTRY, EventKind.EXIT)


class EventRegistry:
    """
    Ordered handler lists per event kind. Entry and exit handlers are further
    keyed by the state they belong to. Handlers run in registration order and
    cannot be removed.
    """

    def __init__(self) -> None:
        self._global: Dict[EventKind, List[Callable[..., Any]]] = {
            EventKind.UNHANDLED: [],
            EventKind.TRANSITION: [],
        }
        self._scoped: Dict[EventKind, Dict[StateID, List[Callable[..., Any]]]] = {
            EventKind.ENTRY: {},
            EventKind.EXIT: {},
        }

    def add(self, kind: EventKind, handler: Callable[..., Any], state: Optional[StateID] = None) -> None:
        """
        Register ``handler`` for ``kind``.

        :param state: Required for entry/exit handlers, rejected otherwise.
        :raises ConfigurationError: On a non-callable handler or a bad scope.
        """
        kind = EventKind(kind)
        if not callable(handler):
            raise ConfigurationError(f"Handler for {kind.value!r} events must be callable", {"kind": kind.value})
        if kind.is_state_scoped:
            if state is None:
                raise ConfigurationError(f"{kind.value!r} handlers need a state", {"kind": kind.value})
            self._scoped[kind].setdefault(state, []).append(handler)
        else:
            if state is not None:
                raise ConfigurationError(f"{kind.value!r} handlers are not state scoped", {"kind": kind.value})
            self._global[kind].append(handler)

    def handlers(self, kind: EventKind, state: Optional[StateID] = None) -> Tuple[Callable[..., Any], ...]:
        kind = EventKind(kind)
        if kind.is_state_scoped:
            return tuple(self._scoped[kind].get(state, ()))
        return tuple(self._global[kind])

    def has_handlers(self, kind: EventKind, state: Optional[StateID] = None) -> bool:
        return bool(self.handlers(kind, state))

    def dispatch(self, kind: EventKind, *args: Any, state: Optional[StateID] = None) -> int:
        """
        Call every handler for ``kind`` (and ``state``) with ``args``.

        :return: Number of handlers invoked.
        """
        handlers = self.handlers(kind, state)
        for handler in handlers:
            handler(*args)
        return len(handlers)
