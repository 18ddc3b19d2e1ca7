"""Exceptions raised by events and event targets."""

from __future__ import annotations


class EventError(Exception):
    """Base class for all errors raised by domevent."""


class InvalidArgument(EventError, TypeError):
    """An argument has the wrong type or shape."""


class IllegalMutation(EventError, AttributeError):
    """A read-only or write-once value was written, or an event was re-dispatched."""


class UnsupportedHandler(EventError, AttributeError):
    """A handler slot was not declared, or was given a non-callable value."""
