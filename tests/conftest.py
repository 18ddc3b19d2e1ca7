"""Pytest fixtures for domevent tests."""

from typing import NamedTuple

import pytest

from domevent.lib.event_target import EventTarget


class Chain(NamedTuple):
    """Root R, its child P and P's child T, which is the usual dispatch target."""

    root: EventTarget
    parent: EventTarget
    target: EventTarget


class CallRecorder:
    """Creates named callbacks that append their name to ``calls`` when invoked."""

    def __init__(self):
        self.calls: list[str] = []
        self.events = []

    def __call__(self, name, action=None):
        def callback(event):
            self.calls.append(name)
            self.events.append(event)
            if action is not None:
                action(event)

        callback.__name__ = name
        return callback


@pytest.fixture
def chain():
    """Create an R -> P -> T chain where every target supports an onclick handler."""
    root = EventTarget(handler_names=["click"])
    parent = EventTarget(root, ["click"])
    target = EventTarget(parent, ["click", "load"])
    return Chain(root, parent, target)


@pytest.fixture
def recorder():
    return CallRecorder()
