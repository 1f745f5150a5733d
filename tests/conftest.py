# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest

from fluxer.core.state_machine import StateMachine


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")


@pytest.fixture
def machine() -> StateMachine:
    """An empty, uninitialized machine."""
    return StateMachine()


@pytest.fixture
def telephone() -> StateMachine:
    """The classic telephone workflow; onHold is a substate of connected."""
    m = StateMachine()
    m.configure("offHook").permit("callDialed", "ringing")
    m.configure("ringing").permit("hungUp", "offHook").permit("callConnected", "connected")
    m.configure("connected").permit("leftMessage", "offHook").permit("hungUp", "offHook").permit(
        "placedOnHold", "onHold"
    )
    m.configure("onHold").substate_of("connected").permit("takenOffHold", "connected").permit(
        "hungUp", "offHook"
    ).permit("hurlPhoneToWall", "DESTROYED")
    return m.init("offHook")


@pytest.fixture
def recorder():
    """A MagicMock used as a shared call log for ordering assertions."""
    return MagicMock()
