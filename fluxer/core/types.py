# fluxer/core/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from collections.abc import Hashable
from typing import Any, Callable, Union

StateID = Hashable
TriggerID = Hashable

# Callback Types
GuardCheck = Callable[[Any, Any], Any]
Guard = Union[bool, GuardCheck]
DestinationResolver = Callable[[Any, Any], Any]
EventHandler = Callable[[Any, Any], None]
UnhandledHandler = Callable[[Any, Any], None]
MutationHook = Callable[[Any], None]
DataResolver = Callable[[], Any]

PLACEHOLDER_DESTINATION = "?"


def is_blank(state: Any) -> bool:
    """True when ``state`` cannot name a state: ``None``, ``""`` or unhashable."""
    if state is None or state == "":
        return True
    return not is_hashable(state)


def is_hashable(value: Any) -> bool:
    """True when ``value`` can actually be hashed, contents included."""
    try:
        hash(value)
    except TypeError:
        return False
    return True
